import secrets
from datetime import datetime
from typing import Optional
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from models.ResetPassword import ResetPassword
from models.User import User


def generate_token() -> str:
    return secrets.token_urlsafe(32)


def get_reset_password_by_user(db: Session, user: User) -> Optional[ResetPassword]:
    stmt = select(ResetPassword).where(ResetPassword.user_id == user.id)
    return db.execute(stmt).scalar()


def get_reset_password_by_token(db: Session, token: str) -> Optional[ResetPassword]:
    stmt = select(ResetPassword).where(ResetPassword.token == token)
    return db.execute(stmt).scalar()


def upsert_reset_password(
    db: Session,
    user: User,
    token: str,
    expired_at: datetime,
    is_commit: bool = True,
) -> ResetPassword:
    """One live token per user, a new request replaces the previous one"""
    reset_password = get_reset_password_by_user(db=db, user=user)
    if reset_password is None:
        reset_password = ResetPassword(user=user)
        db.add(reset_password)
    reset_password.token = token
    reset_password.expired_at = expired_at
    if is_commit:
        db.commit()
    return reset_password


def consume_reset_password(db: Session, token: str) -> Optional[ResetPassword]:
    """Delete the token row and return it, None when another request won.

    The DELETE is the redemption, only the caller whose statement removed
    the row may use the token. Read only already loaded columns of the
    returned row.
    """
    reset_password = get_reset_password_by_token(db=db, token=token)
    if reset_password is None:
        return None
    result = db.execute(
        delete(ResetPassword)
        .where(
            ResetPassword.id == reset_password.id,
            ResetPassword.token == token,
        )
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        return None
    return reset_password
