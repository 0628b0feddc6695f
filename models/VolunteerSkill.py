import uuid
from models import Base
from models.User import utc_now
from sqlalchemy import UUID, CheckConstraint, DateTime, ForeignKey, String
from sqlalchemy.orm import mapped_column, Mapped, relationship

PROFICIENCY_BEGINNER = "beginner"
PROFICIENCY_INTERMEDIATE = "intermediate"
PROFICIENCY_ADVANCED = "advanced"
PROFICIENCY_LEVELS = (
    PROFICIENCY_BEGINNER,
    PROFICIENCY_INTERMEDIATE,
    PROFICIENCY_ADVANCED,
)


class VolunteerSkill(Base):
    __tablename__ = "volunteer_skill"
    __table_args__ = (
        CheckConstraint(
            "proficiency_level IN ('beginner', 'intermediate', 'advanced')",
            name="ck_volunteer_skill_proficiency_level",
        ),
    )

    volunteer_id: Mapped[uuid.UUID] = mapped_column(
        "volunteer_id",
        UUID(as_uuid=True),
        ForeignKey("volunteer.id", ondelete="CASCADE"),
        primary_key=True,
    )
    skill_id: Mapped[uuid.UUID] = mapped_column(
        "skill_id",
        UUID(as_uuid=True),
        ForeignKey("skill.id", ondelete="RESTRICT"),
        primary_key=True,
        index=True,
    )
    proficiency_level: Mapped[str] = mapped_column(
        "proficiency_level", String(20), nullable=False, default=PROFICIENCY_BEGINNER
    )
    created_at = mapped_column("created_at", DateTime(timezone=True), default=utc_now)

    # Relationships
    volunteer = relationship(
        "Volunteer", back_populates="skills", foreign_keys=[volunteer_id]
    )
    skill = relationship("Skill", back_populates="volunteers", foreign_keys=[skill_id])
