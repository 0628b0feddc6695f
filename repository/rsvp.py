import uuid
from datetime import datetime
from typing import Optional, Sequence
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from core.helper import utc_now
from models.Opportunity import Opportunity
from models.User import User
from models.Volunteer import Volunteer
from models.VolunteerRsvp import (
    ACTIVE_RSVP_STATUSES,
    RSVP_PENDING,
    VolunteerRsvp,
)


def get_rsvp(
    db: Session, volunteer_id: uuid.UUID, opportunity_id: uuid.UUID
) -> Optional[VolunteerRsvp]:
    stmt = select(VolunteerRsvp).where(
        VolunteerRsvp.volunteer_id == volunteer_id,
        VolunteerRsvp.opportunity_id == opportunity_id,
    )
    return db.execute(stmt).scalar()


def count_active_rsvps(db: Session, opportunity_id: uuid.UUID) -> int:
    stmt = select(func.count()).where(
        VolunteerRsvp.opportunity_id == opportunity_id,
        VolunteerRsvp.status.in_(ACTIVE_RSVP_STATUSES),
    )
    return int(db.execute(stmt).scalar() or 0)


def insert_rsvp(
    db: Session,
    volunteer_id: uuid.UUID,
    opportunity_id: uuid.UUID,
    status: str = RSVP_PENDING,
    notes: Optional[str] = None,
    now: Optional[datetime] = None,
    is_commit: bool = True,
) -> VolunteerRsvp:
    if now is None:
        now = utc_now()
    rsvp = VolunteerRsvp(
        volunteer_id=volunteer_id,
        opportunity_id=opportunity_id,
        status=status,
        notes=notes,
        rsvp_at=now,
    )
    db.add(rsvp)
    if is_commit:
        db.commit()
    return rsvp


def delete_rsvp(db: Session, rsvp: VolunteerRsvp, is_commit: bool = True) -> None:
    db.delete(rsvp)
    if is_commit:
        db.commit()


def update_rsvp(
    db: Session,
    rsvp: VolunteerRsvp,
    status: str,
    notes: Optional[str] = None,
    is_commit: bool = True,
) -> VolunteerRsvp:
    rsvp.status = status
    if notes is not None:
        rsvp.notes = notes
    if is_commit:
        db.commit()
    return rsvp


def get_rsvps_by_volunteer(db: Session, volunteer_id: uuid.UUID) -> Sequence:
    """(VolunteerRsvp, Opportunity) rows, latest start first"""
    stmt = (
        select(VolunteerRsvp, Opportunity)
        .join(Opportunity, VolunteerRsvp.opportunity_id == Opportunity.id)
        .where(VolunteerRsvp.volunteer_id == volunteer_id)
        .order_by(Opportunity.start_date.desc())
    )
    return db.execute(stmt).all()


def get_upcoming_rsvps_by_volunteer(
    db: Session,
    volunteer_id: uuid.UUID,
    now: Optional[datetime] = None,
    limit: int = 10,
) -> Sequence:
    if now is None:
        now = utc_now()
    stmt = (
        select(VolunteerRsvp, Opportunity)
        .join(Opportunity, VolunteerRsvp.opportunity_id == Opportunity.id)
        .where(
            VolunteerRsvp.volunteer_id == volunteer_id,
            Opportunity.start_date >= now,
        )
        .order_by(Opportunity.start_date.asc())
        .limit(limit)
    )
    return db.execute(stmt).all()


def get_recent_rsvps_by_volunteer(
    db: Session, volunteer_id: uuid.UUID, limit: int = 10
) -> Sequence:
    stmt = (
        select(VolunteerRsvp, Opportunity)
        .join(Opportunity, VolunteerRsvp.opportunity_id == Opportunity.id)
        .where(VolunteerRsvp.volunteer_id == volunteer_id)
        .order_by(VolunteerRsvp.rsvp_at.desc())
        .limit(limit)
    )
    return db.execute(stmt).all()


def get_rsvps_by_opportunity(db: Session, opportunity_id: uuid.UUID) -> Sequence:
    """(VolunteerRsvp, User) rows in RSVP order"""
    stmt = (
        select(VolunteerRsvp, User)
        .join(Volunteer, VolunteerRsvp.volunteer_id == Volunteer.id)
        .join(User, Volunteer.user_id == User.id)
        .where(VolunteerRsvp.opportunity_id == opportunity_id)
        .order_by(VolunteerRsvp.rsvp_at.asc())
    )
    return db.execute(stmt).all()


def get_attendee_first_names(db: Session, opportunity_id: uuid.UUID) -> list[str]:
    stmt = (
        select(User.first_name)
        .join(Volunteer, Volunteer.user_id == User.id)
        .join(VolunteerRsvp, VolunteerRsvp.volunteer_id == Volunteer.id)
        .where(
            VolunteerRsvp.opportunity_id == opportunity_id,
            VolunteerRsvp.status.in_(ACTIVE_RSVP_STATUSES),
        )
        .order_by(VolunteerRsvp.rsvp_at.asc())
    )
    return [name or "" for name in db.execute(stmt).scalars().all()]


def count_rsvps_by_status(db: Session, status: str) -> int:
    stmt = select(func.count()).where(VolunteerRsvp.status == status)
    return int(db.execute(stmt).scalar() or 0)
