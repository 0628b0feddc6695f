import uuid
from models import Base
from models.User import utc_now
from sqlalchemy import UUID, CheckConstraint, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import mapped_column, Mapped, relationship

RECIPIENT_VOLUNTEERS = "volunteers"
RECIPIENT_STAFF = "staff"
RECIPIENT_BOTH = "both"
RECIPIENT_TYPES = (RECIPIENT_VOLUNTEERS, RECIPIENT_STAFF, RECIPIENT_BOTH)

COMMUNICATION_SENT = "sent"
COMMUNICATION_FAILED = "failed"


class BulkCommunicationLog(Base):
    __tablename__ = "bulk_communication_log"
    __table_args__ = (
        CheckConstraint(
            "recipient_type IN ('volunteers', 'staff', 'both')",
            name="ck_bulk_communication_log_recipient_type",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        "id", UUID(as_uuid=True), primary_key=True, index=True, default=uuid.uuid4
    )
    sender_id: Mapped[uuid.UUID] = mapped_column(
        "sender_id",
        UUID(as_uuid=True),
        ForeignKey("user.id", ondelete="SET NULL"),
        nullable=True,
    )
    subject: Mapped[str] = mapped_column("subject", String(255), nullable=False)
    body: Mapped[str] = mapped_column("body", Text, nullable=False)
    recipient_type: Mapped[str] = mapped_column(
        "recipient_type", String(20), nullable=False
    )
    recipient_count: Mapped[int] = mapped_column(
        "recipient_count", nullable=False, default=0
    )
    status: Mapped[str] = mapped_column(
        "status", String(20), nullable=False, default=COMMUNICATION_SENT
    )
    sent_at = mapped_column(
        "sent_at", DateTime(timezone=True), default=utc_now, index=True
    )

    # Relationships
    sender = relationship("User", foreign_keys=[sender_id])
