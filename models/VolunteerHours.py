import uuid
from models import Base
from models.User import utc_now
from sqlalchemy import UUID, CheckConstraint, DateTime, ForeignKey, Numeric, Text
from sqlalchemy.orm import mapped_column, Mapped, relationship


class VolunteerHours(Base):
    __tablename__ = "volunteer_hours"
    __table_args__ = (CheckConstraint("hours > 0", name="ck_volunteer_hours_positive"),)

    id: Mapped[uuid.UUID] = mapped_column(
        "id", UUID(as_uuid=True), primary_key=True, index=True, default=uuid.uuid4
    )
    volunteer_id: Mapped[uuid.UUID] = mapped_column(
        "volunteer_id",
        UUID(as_uuid=True),
        ForeignKey("volunteer.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    opportunity_id: Mapped[uuid.UUID] = mapped_column(
        "opportunity_id",
        UUID(as_uuid=True),
        ForeignKey("opportunity.id", ondelete="CASCADE"),
        nullable=False,
    )
    date = mapped_column("date", DateTime(timezone=True), nullable=False)
    hours = mapped_column(
        "hours", Numeric(6, 2, asdecimal=False), nullable=False
    )
    notes: Mapped[str] = mapped_column("notes", Text, nullable=True)
    verified_by: Mapped[uuid.UUID] = mapped_column(
        "verified_by",
        UUID(as_uuid=True),
        ForeignKey("user.id", ondelete="SET NULL"),
        nullable=True,
    )
    verified_at = mapped_column("verified_at", DateTime(timezone=True), nullable=True)
    created_at = mapped_column("created_at", DateTime(timezone=True), default=utc_now)
    updated_at = mapped_column(
        "updated_at", DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    # Relationships
    volunteer = relationship(
        "Volunteer", back_populates="hours", foreign_keys=[volunteer_id]
    )
    opportunity = relationship(
        "Opportunity", back_populates="hours", foreign_keys=[opportunity_id]
    )
    verifier = relationship("User", foreign_keys=[verified_by])

    @property
    def is_verified(self) -> bool:
        return self.verified_at is not None
