import uuid
from models import Base
from models.User import utc_now
from sqlalchemy import UUID, DateTime, String, Text
from sqlalchemy.orm import mapped_column, Mapped, relationship


class Skill(Base):
    __tablename__ = "skill"

    id: Mapped[uuid.UUID] = mapped_column(
        "id", UUID(as_uuid=True), primary_key=True, index=True, default=uuid.uuid4
    )
    name: Mapped[str] = mapped_column("name", String(100), nullable=False, unique=True)
    description: Mapped[str] = mapped_column("description", Text, nullable=True)
    category: Mapped[str] = mapped_column("category", String(100), nullable=True)
    created_at = mapped_column("created_at", DateTime(timezone=True), default=utc_now)
    updated_at = mapped_column(
        "updated_at", DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    # Relationships
    volunteers = relationship("VolunteerSkill", back_populates="skill")
    opportunities = relationship("OpportunityRequiredSkill", back_populates="skill")
