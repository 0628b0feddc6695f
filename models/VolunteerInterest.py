import uuid
from models import Base
from models.User import utc_now
from sqlalchemy import UUID, DateTime, ForeignKey
from sqlalchemy.orm import mapped_column, Mapped, relationship


class VolunteerInterest(Base):
    __tablename__ = "volunteer_interest"

    volunteer_id: Mapped[uuid.UUID] = mapped_column(
        "volunteer_id",
        UUID(as_uuid=True),
        ForeignKey("volunteer.id", ondelete="CASCADE"),
        primary_key=True,
    )
    interest_id: Mapped[uuid.UUID] = mapped_column(
        "interest_id",
        UUID(as_uuid=True),
        ForeignKey("interest.id", ondelete="RESTRICT"),
        primary_key=True,
        index=True,
    )
    created_at = mapped_column("created_at", DateTime(timezone=True), default=utc_now)

    # Relationships
    volunteer = relationship(
        "Volunteer", back_populates="interests", foreign_keys=[volunteer_id]
    )
    interest = relationship(
        "Interest", back_populates="volunteers", foreign_keys=[interest_id]
    )
