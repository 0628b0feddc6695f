import uuid
from models import Base
from models.User import utc_now
from sqlalchemy import UUID, CheckConstraint, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import mapped_column, Mapped, relationship

RSVP_PENDING = "pending"
RSVP_CONFIRMED = "confirmed"
RSVP_DECLINED = "declined"
RSVP_ATTENDED = "attended"
RSVP_NO_SHOW = "no_show"
RSVP_STATUSES = (
    RSVP_PENDING,
    RSVP_CONFIRMED,
    RSVP_DECLINED,
    RSVP_ATTENDED,
    RSVP_NO_SHOW,
)
# statuses that hold a spot against an opportunity's capacity
ACTIVE_RSVP_STATUSES = (RSVP_PENDING, RSVP_CONFIRMED)


class VolunteerRsvp(Base):
    __tablename__ = "volunteer_rsvp"
    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'confirmed', 'declined', 'attended', 'no_show')",
            name="ck_volunteer_rsvp_status",
        ),
    )

    # composite key, one RSVP per (volunteer, opportunity)
    volunteer_id: Mapped[uuid.UUID] = mapped_column(
        "volunteer_id",
        UUID(as_uuid=True),
        ForeignKey("volunteer.id", ondelete="CASCADE"),
        primary_key=True,
    )
    opportunity_id: Mapped[uuid.UUID] = mapped_column(
        "opportunity_id",
        UUID(as_uuid=True),
        ForeignKey("opportunity.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
    status: Mapped[str] = mapped_column(
        "status", String(20), nullable=False, default=RSVP_PENDING
    )
    rsvp_at = mapped_column("rsvp_at", DateTime(timezone=True), default=utc_now)
    notes: Mapped[str] = mapped_column("notes", Text, nullable=True)

    # Relationships
    volunteer = relationship(
        "Volunteer", back_populates="rsvps", foreign_keys=[volunteer_id]
    )
    opportunity = relationship(
        "Opportunity", back_populates="rsvps", foreign_keys=[opportunity_id]
    )
