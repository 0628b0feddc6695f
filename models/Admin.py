import uuid
from models import Base
from models.User import utc_now
from sqlalchemy import UUID, DateTime, ForeignKey
from sqlalchemy.orm import mapped_column, Mapped, relationship


class Admin(Base):
    __tablename__ = "admin"

    id: Mapped[uuid.UUID] = mapped_column(
        "id", UUID(as_uuid=True), primary_key=True, index=True, default=uuid.uuid4
    )
    staff_id: Mapped[uuid.UUID] = mapped_column(
        "staff_id",
        UUID(as_uuid=True),
        ForeignKey("staff.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    created_at = mapped_column("created_at", DateTime(timezone=True), default=utc_now)

    # Relationships
    staff = relationship("Staff", back_populates="admin", foreign_keys=[staff_id])
