import uuid
from models import Base, JSONType
from models.User import utc_now
from sqlalchemy import (
    UUID,
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import mapped_column, Mapped, relationship

OPPORTUNITY_OPEN = "open"
OPPORTUNITY_FULL = "full"
OPPORTUNITY_COMPLETED = "completed"
OPPORTUNITY_CANCELED = "canceled"
OPPORTUNITY_STATUSES = (
    OPPORTUNITY_OPEN,
    OPPORTUNITY_FULL,
    OPPORTUNITY_COMPLETED,
    OPPORTUNITY_CANCELED,
)


class Opportunity(Base):
    __tablename__ = "opportunity"
    __table_args__ = (
        CheckConstraint("end_date > start_date", name="ck_opportunity_time_window"),
        CheckConstraint(
            "max_volunteers IS NULL OR max_volunteers >= 0",
            name="ck_opportunity_max_volunteers",
        ),
        CheckConstraint(
            "status IN ('open', 'full', 'completed', 'canceled')",
            name="ck_opportunity_status",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        "id", UUID(as_uuid=True), primary_key=True, index=True, default=uuid.uuid4
    )
    title: Mapped[str] = mapped_column("title", String(255), nullable=False)
    description: Mapped[str] = mapped_column("description", Text, nullable=True)
    location: Mapped[str] = mapped_column("location", String(255), nullable=True)
    start_date = mapped_column(
        "start_date", DateTime(timezone=True), nullable=False, index=True
    )
    end_date = mapped_column("end_date", DateTime(timezone=True), nullable=False)
    max_volunteers: Mapped[int] = mapped_column(
        "max_volunteers", Integer, nullable=True
    )
    status: Mapped[str] = mapped_column(
        "status", String(20), nullable=False, default=OPPORTUNITY_OPEN, index=True
    )
    created_by_id: Mapped[uuid.UUID] = mapped_column(
        "created_by_id",
        UUID(as_uuid=True),
        ForeignKey("user.id", ondelete="SET NULL"),
        nullable=True,
    )
    is_recurring: Mapped[bool] = mapped_column(
        "is_recurring", Boolean, nullable=False, default=False
    )
    recurrence_pattern = mapped_column("recurrence_pattern", JSONType, nullable=True)
    created_at = mapped_column("created_at", DateTime(timezone=True), default=utc_now)
    updated_at = mapped_column(
        "updated_at", DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    # Relationships
    created_by = relationship("User", foreign_keys=[created_by_id])
    rsvps = relationship(
        "VolunteerRsvp", back_populates="opportunity", cascade="all, delete-orphan"
    )
    hours = relationship(
        "VolunteerHours", back_populates="opportunity", cascade="all, delete-orphan"
    )
    required_skills = relationship(
        "OpportunityRequiredSkill",
        back_populates="opportunity",
        cascade="all, delete-orphan",
    )
    interests = relationship(
        "OpportunityInterest",
        back_populates="opportunity",
        cascade="all, delete-orphan",
    )
