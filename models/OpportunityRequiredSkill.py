import uuid
from models import Base
from sqlalchemy import UUID, ForeignKey
from sqlalchemy.orm import mapped_column, Mapped, relationship


class OpportunityRequiredSkill(Base):
    __tablename__ = "opportunity_required_skill"

    opportunity_id: Mapped[uuid.UUID] = mapped_column(
        "opportunity_id",
        UUID(as_uuid=True),
        ForeignKey("opportunity.id", ondelete="CASCADE"),
        primary_key=True,
    )
    skill_id: Mapped[uuid.UUID] = mapped_column(
        "skill_id",
        UUID(as_uuid=True),
        ForeignKey("skill.id", ondelete="CASCADE"),
        primary_key=True,
    )

    # Relationships
    opportunity = relationship(
        "Opportunity", back_populates="required_skills", foreign_keys=[opportunity_id]
    )
    skill = relationship(
        "Skill", back_populates="opportunities", foreign_keys=[skill_id]
    )
