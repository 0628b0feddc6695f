import datetime
import uuid
from models import Base
from sqlalchemy import UUID, DateTime, String, Boolean
from sqlalchemy.orm import mapped_column, Mapped, relationship


def utc_now() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class User(Base):
    __tablename__ = "user"

    id: Mapped[uuid.UUID] = mapped_column(
        "id", UUID(as_uuid=True), primary_key=True, index=True, default=uuid.uuid4
    )
    email: Mapped[str] = mapped_column(
        "email", String(255), nullable=False, unique=True, index=True
    )
    password: Mapped[str] = mapped_column("password", String, nullable=True)
    first_name: Mapped[str] = mapped_column("first_name", String(100), nullable=True)
    last_name: Mapped[str] = mapped_column("last_name", String(100), nullable=True)
    phone: Mapped[str] = mapped_column("phone", String(50), nullable=True)
    bio: Mapped[str] = mapped_column("bio", String, nullable=True)
    profile_picture: Mapped[str] = mapped_column(
        "profile_picture", String, nullable=True
    )
    is_active: Mapped[bool] = mapped_column(
        "is_active", Boolean, nullable=False, default=True
    )
    is_email_verified: Mapped[bool] = mapped_column(
        "is_email_verified", Boolean, nullable=False, default=False
    )
    created_at = mapped_column("created_at", DateTime(timezone=True), default=utc_now)
    updated_at = mapped_column(
        "updated_at", DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    # One to Many
    tokens = relationship("Token", back_populates="user")
    refresh_tokens = relationship("RefreshToken", back_populates="user")

    # One to One
    volunteer = relationship("Volunteer", back_populates="user", uselist=False)
    staff = relationship("Staff", back_populates="user", uselist=False)

    @property
    def full_name(self) -> str:
        return " ".join(part for part in [self.first_name, self.last_name] if part)
