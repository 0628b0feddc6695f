import uuid
from datetime import datetime
from typing import Optional, Sequence
from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from core.helper import utc_now
from models.Interest import Interest
from models.OpportunityInterest import OpportunityInterest
from models.VolunteerInterest import VolunteerInterest


def get_all_interests(db: Session) -> Sequence[Interest]:
    stmt = select(Interest).order_by(Interest.name)
    return db.execute(stmt).scalars().all()


def get_interest_by_id(db: Session, id: uuid.UUID) -> Optional[Interest]:
    stmt = select(Interest).where(Interest.id == id)
    return db.execute(stmt).scalar()


def get_interest_by_name(db: Session, name: str) -> Optional[Interest]:
    stmt = select(Interest).where(Interest.name == name)
    return db.execute(stmt).scalar()


def insert_interest(
    db: Session,
    name: str,
    description: Optional[str] = None,
    now: Optional[datetime] = None,
    is_commit: bool = True,
) -> Interest:
    if now is None:
        now = utc_now()
    interest = Interest(
        name=name, description=description, created_at=now, updated_at=now
    )
    db.add(interest)
    if is_commit:
        db.commit()
    return interest


def update_interest_data(
    db: Session,
    interest: Interest,
    values: dict,
    now: Optional[datetime] = None,
    is_commit: bool = True,
) -> Interest:
    if now is None:
        now = utc_now()
    for key, value in values.items():
        if value is None:
            continue
        setattr(interest, key, value)
    interest.updated_at = now
    if is_commit:
        db.commit()
    return interest


def count_interest_assignments(db: Session, interest_id: uuid.UUID) -> int:
    stmt = select(func.count()).where(VolunteerInterest.interest_id == interest_id)
    return int(db.execute(stmt).scalar() or 0)


def delete_interest_data(
    db: Session, interest: Interest, is_commit: bool = True
) -> None:
    db.execute(
        delete(OpportunityInterest).where(
            OpportunityInterest.interest_id == interest.id
        )
    )
    db.execute(delete(Interest).where(Interest.id == interest.id))
    if is_commit:
        db.commit()


def get_volunteer_interests(db: Session, volunteer_id: uuid.UUID) -> Sequence:
    """(VolunteerInterest, Interest) rows ordered by interest name"""
    stmt = (
        select(VolunteerInterest, Interest)
        .join(Interest, VolunteerInterest.interest_id == Interest.id)
        .where(VolunteerInterest.volunteer_id == volunteer_id)
        .order_by(Interest.name)
    )
    return db.execute(stmt).all()


def get_volunteer_interest(
    db: Session, volunteer_id: uuid.UUID, interest_id: uuid.UUID
) -> Optional[VolunteerInterest]:
    stmt = select(VolunteerInterest).where(
        VolunteerInterest.volunteer_id == volunteer_id,
        VolunteerInterest.interest_id == interest_id,
    )
    return db.execute(stmt).scalar()


def insert_volunteer_interest(
    db: Session,
    volunteer_id: uuid.UUID,
    interest_id: uuid.UUID,
    now: Optional[datetime] = None,
    is_commit: bool = True,
) -> VolunteerInterest:
    if now is None:
        now = utc_now()
    volunteer_interest = VolunteerInterest(
        volunteer_id=volunteer_id, interest_id=interest_id, created_at=now
    )
    db.add(volunteer_interest)
    if is_commit:
        db.commit()
    return volunteer_interest


def delete_volunteer_interest(
    db: Session, volunteer_interest: VolunteerInterest, is_commit: bool = True
) -> None:
    db.delete(volunteer_interest)
    if is_commit:
        db.commit()
