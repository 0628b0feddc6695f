import uuid
from datetime import datetime
from typing import Optional, Sequence
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from core.helper import utc_now
from models.Opportunity import Opportunity
from models.VolunteerHours import VolunteerHours


def get_hours_by_id(db: Session, id: uuid.UUID) -> Optional[VolunteerHours]:
    stmt = select(VolunteerHours).where(VolunteerHours.id == id)
    return db.execute(stmt).scalar()


def hours_conditions(
    volunteer_id: uuid.UUID,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    verified: Optional[bool] = None,
) -> list:
    conditions = [VolunteerHours.volunteer_id == volunteer_id]
    if start_date is not None:
        conditions.append(VolunteerHours.date >= start_date)
    if end_date is not None:
        conditions.append(VolunteerHours.date <= end_date)
    if verified is True:
        conditions.append(VolunteerHours.verified_at.is_not(None))
    elif verified is False:
        conditions.append(VolunteerHours.verified_at.is_(None))
    return conditions


def get_hours_by_volunteer(
    db: Session,
    volunteer_id: uuid.UUID,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    verified: Optional[bool] = None,
) -> tuple[Sequence, float]:
    """(VolunteerHours, opportunity title) rows by date, and their sum"""
    conditions = hours_conditions(volunteer_id, start_date, end_date, verified)
    stmt = (
        select(VolunteerHours, Opportunity.title)
        .outerjoin(Opportunity, VolunteerHours.opportunity_id == Opportunity.id)
        .where(*conditions)
        .order_by(VolunteerHours.date.asc())
    )
    rows = db.execute(stmt).all()

    total_stmt = select(func.coalesce(func.sum(VolunteerHours.hours), 0)).where(
        *conditions
    )
    total = db.execute(total_stmt).scalar() or 0
    return rows, float(total)


def insert_hours(
    db: Session,
    volunteer_id: uuid.UUID,
    opportunity_id: uuid.UUID,
    date: datetime,
    hours: float,
    notes: Optional[str] = None,
    now: Optional[datetime] = None,
    is_commit: bool = True,
) -> VolunteerHours:
    if now is None:
        now = utc_now()
    entry = VolunteerHours(
        volunteer_id=volunteer_id,
        opportunity_id=opportunity_id,
        date=date,
        hours=hours,
        notes=notes,
        created_at=now,
        updated_at=now,
    )
    db.add(entry)
    if is_commit:
        db.commit()
    return entry


def verify_hours(
    db: Session,
    entry: VolunteerHours,
    verified_by: Optional[uuid.UUID],
    now: Optional[datetime] = None,
    is_commit: bool = True,
) -> VolunteerHours:
    if now is None:
        now = utc_now()
    entry.verified_by = verified_by
    entry.verified_at = now
    entry.updated_at = now
    if is_commit:
        db.commit()
    return entry


def update_hours_entry(
    db: Session,
    entry: VolunteerHours,
    hours: Optional[float] = None,
    notes: Optional[str] = None,
    now: Optional[datetime] = None,
    is_commit: bool = True,
) -> VolunteerHours:
    if now is None:
        now = utc_now()
    if hours is not None:
        entry.hours = hours
    if notes is not None:
        entry.notes = notes
    entry.updated_at = now
    if is_commit:
        db.commit()
    return entry


def delete_hours_entry(
    db: Session, entry: VolunteerHours, is_commit: bool = True
) -> None:
    db.delete(entry)
    if is_commit:
        db.commit()


def get_total_logged_hours(db: Session) -> float:
    stmt = select(func.coalesce(func.sum(VolunteerHours.hours), 0))
    return float(db.execute(stmt).scalar() or 0)
