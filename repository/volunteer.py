import uuid
from datetime import datetime
from typing import Optional, Sequence
from sqlalchemy import and_, func, select
from sqlalchemy.orm import Session, joinedload

from core.helper import LIKE_ESCAPE, contains_pattern, utc_now
from models.User import User
from models.Volunteer import BACKGROUND_CHECK_NOT_REQUIRED, Volunteer
from models.VolunteerHours import VolunteerHours
from models.VolunteerInterest import VolunteerInterest
from models.VolunteerSkill import VolunteerSkill


def get_volunteer_by_id(db: Session, id: uuid.UUID) -> Optional[Volunteer]:
    stmt = (
        select(Volunteer)
        .options(joinedload(Volunteer.user))
        .where(Volunteer.id == id)
    )
    return db.execute(stmt).scalar()


def get_volunteer_by_user_id(db: Session, user_id: uuid.UUID) -> Optional[Volunteer]:
    stmt = select(Volunteer).where(Volunteer.user_id == user_id)
    return db.execute(stmt).scalar()


def create_volunteer(
    db: Session,
    user: User,
    volunteer_type: Optional[str] = None,
    is_alumni: bool = False,
    background_check_status: str = BACKGROUND_CHECK_NOT_REQUIRED,
    media_release: bool = False,
    availability: Optional[dict] = None,
    notification_preference: str = "email",
    now: Optional[datetime] = None,
    is_commit: bool = True,
) -> Volunteer:
    if now is None:
        now = utc_now()
    new_volunteer = Volunteer(
        user=user,
        volunteer_type=volunteer_type,
        is_alumni=is_alumni,
        background_check_status=background_check_status,
        media_release=media_release,
        availability=availability,
        notification_preference=notification_preference,
        created_at=now,
        updated_at=now,
    )
    db.add(new_volunteer)
    if is_commit:
        db.commit()
    return new_volunteer


def update_volunteer(
    db: Session,
    volunteer: Volunteer,
    values: dict,
    now: Optional[datetime] = None,
    is_commit: bool = True,
) -> Volunteer:
    if now is None:
        now = utc_now()
    for key, value in values.items():
        if value is None:
            continue
        setattr(volunteer, key, value)
    volunteer.updated_at = now
    if is_commit:
        db.commit()
    return volunteer


def total_hours_subquery():
    return (
        select(func.coalesce(func.sum(VolunteerHours.hours), 0))
        .where(VolunteerHours.volunteer_id == Volunteer.id)
        .correlate(Volunteer)
        .scalar_subquery()
    )


def skills_count_subquery():
    return (
        select(func.count())
        .select_from(VolunteerSkill)
        .where(VolunteerSkill.volunteer_id == Volunteer.id)
        .correlate(Volunteer)
        .scalar_subquery()
    )


def interests_count_subquery():
    return (
        select(func.count())
        .select_from(VolunteerInterest)
        .where(VolunteerInterest.volunteer_id == Volunteer.id)
        .correlate(Volunteer)
        .scalar_subquery()
    )


def search_condition(search: str):
    search_pattern = contains_pattern(search)
    return (
        (User.first_name.ilike(search_pattern, escape=LIKE_ESCAPE))
        | (User.last_name.ilike(search_pattern, escape=LIKE_ESCAPE))
        | (User.email.ilike(search_pattern, escape=LIKE_ESCAPE))
    )


def get_all_volunteers(
    db: Session,
    page: int,
    limit: int,
    search: Optional[str] = None,
    volunteer_type: Optional[str] = None,
    is_alumni: Optional[bool] = None,
    email_verified: Optional[bool] = None,
    is_active: Optional[bool] = None,
) -> tuple[Sequence, int]:
    """Newest first, each row is (Volunteer, User, total_hours)"""
    conditions = []
    if search:
        conditions.append(search_condition(search))
    if volunteer_type:
        conditions.append(Volunteer.volunteer_type == volunteer_type)
    if is_alumni is not None:
        conditions.append(Volunteer.is_alumni == is_alumni)
    if email_verified is not None:
        conditions.append(User.is_email_verified == email_verified)
    if is_active is not None:
        conditions.append(User.is_active == is_active)
    where = and_(True, *conditions)

    stmt = (
        select(Volunteer, User, total_hours_subquery().label("total_hours"))
        .join(User, Volunteer.user_id == User.id)
        .where(where)
        .order_by(Volunteer.created_at.desc(), Volunteer.id)
        .limit(limit)
        .offset((page - 1) * limit)
    )
    rows = db.execute(stmt).all()

    count_stmt = (
        select(func.count(Volunteer.id))
        .join(User, Volunteer.user_id == User.id)
        .where(where)
    )
    total = db.execute(count_stmt).scalar() or 0
    return rows, int(total)


def get_total_hours(
    db: Session, volunteer_id: uuid.UUID, verified: Optional[bool] = None
) -> float:
    stmt = select(func.coalesce(func.sum(VolunteerHours.hours), 0)).where(
        VolunteerHours.volunteer_id == volunteer_id
    )
    if verified is True:
        stmt = stmt.where(VolunteerHours.verified_at.is_not(None))
    elif verified is False:
        stmt = stmt.where(VolunteerHours.verified_at.is_(None))
    return float(db.execute(stmt).scalar() or 0)


def get_active_volunteer_emails(db: Session) -> list[str]:
    stmt = (
        select(User.email)
        .join(Volunteer, Volunteer.user_id == User.id)
        .where(User.is_active.is_(True))
    )
    return list(db.execute(stmt).scalars().all())


def count_active_volunteers(db: Session) -> int:
    stmt = (
        select(func.count(Volunteer.id))
        .join(User, Volunteer.user_id == User.id)
        .where(User.is_active.is_(True))
    )
    return int(db.execute(stmt).scalar() or 0)
