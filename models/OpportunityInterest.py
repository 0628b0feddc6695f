import uuid
from models import Base
from sqlalchemy import UUID, ForeignKey
from sqlalchemy.orm import mapped_column, Mapped, relationship


class OpportunityInterest(Base):
    __tablename__ = "opportunity_interest"

    opportunity_id: Mapped[uuid.UUID] = mapped_column(
        "opportunity_id",
        UUID(as_uuid=True),
        ForeignKey("opportunity.id", ondelete="CASCADE"),
        primary_key=True,
    )
    interest_id: Mapped[uuid.UUID] = mapped_column(
        "interest_id",
        UUID(as_uuid=True),
        ForeignKey("interest.id", ondelete="CASCADE"),
        primary_key=True,
    )

    # Relationships
    opportunity = relationship(
        "Opportunity", back_populates="interests", foreign_keys=[opportunity_id]
    )
    interest = relationship(
        "Interest", back_populates="opportunities", foreign_keys=[interest_id]
    )
