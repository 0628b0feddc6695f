import math
import secrets
import string
import uuid
from datetime import datetime, timezone
from typing import Optional

from settings import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Normalize a datetime to aware UTC.

    Naive values are read back from databases without timezone support
    (sqlite) and are stored as UTC, so they are tagged rather than shifted.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_datetime(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return as_utc(value).isoformat()


def parse_uuid(value: Optional[str]) -> Optional[uuid.UUID]:
    """Return the UUID for a path/query id or None when it is malformed"""
    if value is None:
        return None
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


LIKE_ESCAPE = "\\"


def contains_pattern(search: str) -> str:
    """LIKE pattern matching `search` anywhere, with its % and _ taken literally

    use together with `escape=LIKE_ESCAPE`
    """
    escaped = (
        search.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


def generate_password(length: int = 12) -> str:
    alphabet = string.ascii_letters + string.digits
    while True:
        password = "".join(secrets.choice(alphabet) for _ in range(length))
        if (
            any(c.islower() for c in password)
            and any(c.isupper() for c in password)
            and any(c.isdigit() for c in password)
        ):
            return password


def normalize_pagination(
    page: Optional[int] = None, limit: Optional[int] = None
) -> tuple[int, int]:
    """Clamp page/limit into the supported range"""
    page = page if page and page > 0 else DEFAULT_PAGE
    limit = limit if limit and limit > 0 else DEFAULT_PAGE_SIZE
    return page, min(limit, MAX_PAGE_SIZE)


def total_pages(total: int, limit: int) -> int:
    if limit <= 0:
        return 0
    return math.ceil(total / limit)
