import uuid
from models import Base
from models.User import utc_now
from sqlalchemy import UUID, DateTime, ForeignKey, String
from sqlalchemy.orm import mapped_column, Mapped, relationship


class Staff(Base):
    __tablename__ = "staff"

    id: Mapped[uuid.UUID] = mapped_column(
        "id", UUID(as_uuid=True), primary_key=True, index=True, default=uuid.uuid4
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        "user_id",
        UUID(as_uuid=True),
        ForeignKey("user.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    notification_preference: Mapped[str] = mapped_column(
        "notification_preference", String(10), nullable=False, default="email"
    )
    created_at = mapped_column("created_at", DateTime(timezone=True), default=utc_now)
    updated_at = mapped_column(
        "updated_at", DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    # Relationships
    user = relationship("User", back_populates="staff", foreign_keys=[user_id])
    admin = relationship(
        "Admin", back_populates="staff", uselist=False, cascade="all, delete-orphan"
    )
