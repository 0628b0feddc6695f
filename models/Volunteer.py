import uuid
from models import Base, JSONType
from models.User import utc_now
from sqlalchemy import UUID, Boolean, CheckConstraint, DateTime, ForeignKey, String
from sqlalchemy.orm import mapped_column, Mapped, relationship

BACKGROUND_CHECK_NOT_REQUIRED = "not_required"
BACKGROUND_CHECK_PENDING = "pending"
BACKGROUND_CHECK_APPROVED = "approved"
BACKGROUND_CHECK_REJECTED = "rejected"
BACKGROUND_CHECK_STATUSES = (
    BACKGROUND_CHECK_NOT_REQUIRED,
    BACKGROUND_CHECK_PENDING,
    BACKGROUND_CHECK_APPROVED,
    BACKGROUND_CHECK_REJECTED,
)

NOTIFICATION_EMAIL = "email"
NOTIFICATION_SMS = "sms"
NOTIFICATION_BOTH = "both"
NOTIFICATION_NONE = "none"
NOTIFICATION_PREFERENCES = (
    NOTIFICATION_EMAIL,
    NOTIFICATION_SMS,
    NOTIFICATION_BOTH,
    NOTIFICATION_NONE,
)


class Volunteer(Base):
    __tablename__ = "volunteer"
    __table_args__ = (
        CheckConstraint(
            "background_check_status IN ('not_required', 'pending', 'approved', 'rejected')",
            name="ck_volunteer_background_check_status",
        ),
        CheckConstraint(
            "notification_preference IN ('email', 'sms', 'both', 'none')",
            name="ck_volunteer_notification_preference",
        ),
    )

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
    volunteer_type: Mapped[str] = mapped_column(
        "volunteer_type", String(50), nullable=True
    )
    is_alumni: Mapped[bool] = mapped_column(
        "is_alumni", Boolean, nullable=False, default=False
    )
    background_check_status: Mapped[str] = mapped_column(
        "background_check_status",
        String(20),
        nullable=False,
        default=BACKGROUND_CHECK_NOT_REQUIRED,
    )
    media_release: Mapped[bool] = mapped_column(
        "media_release", Boolean, nullable=False, default=False
    )
    availability = mapped_column("availability", JSONType, nullable=True)
    notification_preference: Mapped[str] = mapped_column(
        "notification_preference",
        String(10),
        nullable=False,
        default=NOTIFICATION_EMAIL,
    )
    created_at = mapped_column("created_at", DateTime(timezone=True), default=utc_now)
    updated_at = mapped_column(
        "updated_at", DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    # Relationships
    user = relationship("User", back_populates="volunteer", foreign_keys=[user_id])
    rsvps = relationship(
        "VolunteerRsvp", back_populates="volunteer", cascade="all, delete-orphan"
    )
    hours = relationship(
        "VolunteerHours", back_populates="volunteer", cascade="all, delete-orphan"
    )
    skills = relationship(
        "VolunteerSkill", back_populates="volunteer", cascade="all, delete-orphan"
    )
    interests = relationship(
        "VolunteerInterest", back_populates="volunteer", cascade="all, delete-orphan"
    )
