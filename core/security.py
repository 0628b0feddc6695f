import uuid
from datetime import timedelta
from typing import Iterable, Optional, Tuple

import bcrypt
import jwt
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy import delete, or_, select
from sqlalchemy.orm import Session
from sqlalchemy.orm import Session as SQLAlchemySession

from core.helper import as_utc, utc_now
from models import get_db_sync
from models.RefreshToken import RefreshToken
from models.Token import Token
from models.User import User
from schemas.auth import AuthorizationStatusEnum, Role
from settings import (
    ACCESS_TOKEN_EXPIRE_MINUTES,
    ALGORITHM,
    REFRESH_TOKEN_EXPIRE_MINUTES,
    SECRET_KEY,
)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token/", auto_error=False)

VOLUNTEER_ONLY = (Role.VOLUNTEER,)
STAFF_ROLES = (Role.STAFF, Role.ADMIN)
ADMIN_ONLY = (Role.ADMIN,)


def generate_hash_password(password: str) -> str:
    hash = bcrypt.hashpw(str.encode(password), bcrypt.gensalt())
    return hash.decode()


def validated_password(hash: str, password: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode(), hash.encode())
    except Exception:
        return False


async def generate_token_from_user(
    db: SQLAlchemySession, user: User
) -> Tuple[str, str]:
    """
    {
        "id": "aaaa-bbbb-cccc-dddd",
        "email": "someone@example.com",
        "role": "volunteer",
        "jti": "0f1e2d3c...",
        "exp": 1641455971,
    }
    """
    now = utc_now()
    expire = now + timedelta(minutes=float(ACCESS_TOKEN_EXPIRE_MINUTES))
    role = get_user_role(user)
    payload = {
        "id": str(user.id),
        "email": user.email,
        "role": role.value if role else None,
        "jti": uuid.uuid4().hex,
        "exp": expire,
    }
    token = jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)
    new_token = Token(user=user, token=token, expired_at=expire)
    db.add(new_token)

    refresh_expire = now + timedelta(minutes=float(REFRESH_TOKEN_EXPIRE_MINUTES))
    refresh_payload = {
        "id": str(user.id),
        "jti": uuid.uuid4().hex,
        "exp": refresh_expire,
    }
    refresh_token = jwt.encode(refresh_payload, SECRET_KEY, algorithm=ALGORITHM)
    new_refresh_token = RefreshToken(
        user=user,
        refresh_token=refresh_token,
        token=new_token,
        expired_at=refresh_expire,
    )
    db.add(new_refresh_token)
    db.commit()
    return (token, refresh_token)


def get_user_from_token(db: SQLAlchemySession, token: Optional[str]) -> Optional[User]:
    if not token:
        return None
    try:
        payload = jwt.decode(jwt=token, key=SECRET_KEY, algorithms=[ALGORITHM])
        id = uuid.UUID(payload.get("id"))
    except Exception:
        invalidate_token(db=db, token=token)
        return None

    stmt = select(Token).where(Token.token == token, Token.user_id == id)
    session = db.execute(stmt).scalar()
    if session is None:
        return None
    if as_utc(session.expired_at) <= utc_now():
        invalidate_token(db=db, token=token)
        return None
    if not session.user.is_active:
        return None

    return session.user


def get_current_user(
    db: Session = Depends(get_db_sync), token: str = Depends(oauth2_scheme)
) -> Optional[User]:
    return get_user_from_token(db, token)


def invalidate_token(db: SQLAlchemySession, token: str):
    # clear all expired token and selected_token, rows loaded in the session
    # are left alone since sqlite hands back naive datetimes
    stmt = (
        delete(Token)
        .where(or_(Token.expired_at <= utc_now(), Token.token == token))
        .execution_options(synchronize_session=False)
    )
    db.execute(stmt)
    db.commit()


def invalidate_user_tokens(db: SQLAlchemySession, user: User, is_commit: bool = True):
    db.execute(
        delete(Token)
        .where(Token.user_id == user.id)
        .execution_options(synchronize_session=False)
    )
    if is_commit:
        db.commit()


def get_user_role(user: Optional[User]) -> Optional[Role]:
    """Resolve the role of a user from the profile rows attached to it.

    admin wins over staff, staff wins over volunteer.
    """
    if user is None:
        return None
    if user.staff is not None:
        if user.staff.admin is not None:
            return Role.ADMIN
        return Role.STAFF
    if user.volunteer is not None:
        return Role.VOLUNTEER
    return None


def check_permissions(
    current_user: Optional[User], allowed_roles: Iterable[Role]
) -> AuthorizationStatusEnum:
    """Check if the current user has one of the allowed roles.
    Args:
        current_user (User | None): The current authenticated user.
        allowed_roles (Iterable[Role]): Roles that may perform the action.
    Returns:
        AuthorizationStatusEnum: The authorization status.
    """
    if current_user is None:
        return AuthorizationStatusEnum.UNAUTHORIZED
    if get_user_role(current_user) not in tuple(allowed_roles):
        return AuthorizationStatusEnum.FORBIDDEN
    return AuthorizationStatusEnum.PASSED
