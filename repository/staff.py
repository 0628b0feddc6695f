import uuid
from datetime import datetime
from typing import Optional, Sequence
from sqlalchemy import and_, func, select
from sqlalchemy.orm import Session, joinedload

from core.helper import utc_now
from models.Admin import Admin
from models.Staff import Staff
from models.User import User
from repository.volunteer import search_condition


def get_staff_by_id(db: Session, id: uuid.UUID) -> Optional[Staff]:
    stmt = (
        select(Staff)
        .options(joinedload(Staff.user), joinedload(Staff.admin))
        .where(Staff.id == id)
    )
    return db.execute(stmt).scalar()


def create_staff(
    db: Session,
    user: User,
    notification_preference: str = "email",
    is_admin: bool = False,
    now: Optional[datetime] = None,
    is_commit: bool = True,
) -> Staff:
    if now is None:
        now = utc_now()
    staff = Staff(
        user=user,
        notification_preference=notification_preference,
        created_at=now,
        updated_at=now,
    )
    if is_admin:
        staff.admin = Admin(created_at=now)
    db.add(staff)
    if is_commit:
        db.commit()
    return staff


def update_staff_data(
    db: Session,
    staff: Staff,
    values: dict,
    now: Optional[datetime] = None,
    is_commit: bool = True,
) -> Staff:
    if now is None:
        now = utc_now()
    for key, value in values.items():
        if value is None:
            continue
        setattr(staff, key, value)
    staff.updated_at = now
    if is_commit:
        db.commit()
    return staff


def get_all_staff(
    db: Session,
    page: int,
    limit: int,
    search: Optional[str] = None,
    is_active: Optional[bool] = None,
    email_verified: Optional[bool] = None,
    role: Optional[str] = None,
) -> tuple[Sequence, int]:
    """(Staff, User, Admin | None) rows, newest user first"""
    conditions = []
    if search:
        conditions.append(search_condition(search))
    if is_active is not None:
        conditions.append(User.is_active == is_active)
    if email_verified is not None:
        conditions.append(User.is_email_verified == email_verified)
    if role == "admin":
        conditions.append(Admin.id.is_not(None))
    elif role == "staff":
        conditions.append(Admin.id.is_(None))
    where = and_(True, *conditions)

    stmt = (
        select(Staff, User, Admin)
        .join(User, Staff.user_id == User.id)
        .outerjoin(Admin, Admin.staff_id == Staff.id)
        .where(where)
        .order_by(User.created_at.desc(), Staff.id)
        .limit(limit)
        .offset((page - 1) * limit)
    )
    rows = db.execute(stmt).all()

    count_stmt = (
        select(func.count(Staff.id))
        .join(User, Staff.user_id == User.id)
        .outerjoin(Admin, Admin.staff_id == Staff.id)
        .where(where)
    )
    total = db.execute(count_stmt).scalar() or 0
    return rows, int(total)


def get_active_staff_emails(db: Session) -> list[str]:
    stmt = (
        select(User.email)
        .join(Staff, Staff.user_id == User.id)
        .where(User.is_active.is_(True))
    )
    return list(db.execute(stmt).scalars().all())
