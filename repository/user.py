import uuid
from datetime import datetime
from typing import Optional
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from core.helper import utc_now
from models.User import User


def normalize_email(email: str) -> str:
    return email.strip().lower()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    stmt = select(User).where(func.lower(User.email) == normalize_email(email))
    data = db.execute(stmt).scalar()
    return data


def get_user_by_id(db: Session, id: uuid.UUID) -> Optional[User]:
    stmt = select(User).where(User.id == id)
    return db.execute(stmt).scalar()


def create_user(
    db: Session,
    email: str,
    password: Optional[str] = None,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    phone: Optional[str] = None,
    bio: Optional[str] = None,
    is_active: bool = True,
    is_email_verified: bool = False,
    now: Optional[datetime] = None,
    is_commit: bool = True,
) -> User:
    if now is None:
        now = utc_now()
    user = User(
        email=normalize_email(email),
        password=password,
        first_name=first_name,
        last_name=last_name,
        phone=phone,
        bio=bio,
        is_active=is_active,
        is_email_verified=is_email_verified,
        created_at=now,
        updated_at=now,
    )
    db.add(user)
    if is_commit:
        db.commit()
    return user


def update_user(
    db: Session,
    user: User,
    values: dict,
    now: Optional[datetime] = None,
    is_commit: bool = True,
) -> User:
    """Apply the given column values, keys with a None value are kept as-is"""
    if now is None:
        now = utc_now()
    for key, value in values.items():
        if value is None:
            continue
        if key == "email":
            value = normalize_email(value)
        setattr(user, key, value)
    user.updated_at = now
    if is_commit:
        db.commit()
    return user


def set_user_password(
    db: Session, user: User, password: str, is_commit: bool = True
) -> User:
    user.password = password
    user.updated_at = utc_now()
    if is_commit:
        db.commit()
    return user
