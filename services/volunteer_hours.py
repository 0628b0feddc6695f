import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from core.exceptions import ConflictError, InvalidInputError, NotFoundError
from core.log import logger
from models.VolunteerHours import VolunteerHours
from repository.hours import (
    delete_hours_entry,
    get_hours_by_id,
    get_hours_by_volunteer,
    insert_hours,
    update_hours_entry,
    verify_hours,
)
from repository.opportunity import get_opportunity_by_id
from repository.volunteer import get_volunteer_by_id


def validate_hours(hours: Optional[float]) -> None:
    if hours is not None and hours <= 0:
        raise InvalidInputError("Hours must be a positive number")


def list_volunteer_hours(
    db: Session,
    volunteer_id: uuid.UUID,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    verified: Optional[bool] = None,
):
    if get_volunteer_by_id(db=db, id=volunteer_id) is None:
        raise NotFoundError("Volunteer not found")
    return get_hours_by_volunteer(
        db=db,
        volunteer_id=volunteer_id,
        start_date=start_date,
        end_date=end_date,
        verified=verified,
    )


def log_hours(
    db: Session,
    volunteer_id: uuid.UUID,
    opportunity_id: uuid.UUID,
    date: datetime,
    hours: float,
    notes: Optional[str] = None,
) -> VolunteerHours:
    if hours is None:
        raise InvalidInputError("Hours are required")
    validate_hours(hours)
    if get_volunteer_by_id(db=db, id=volunteer_id) is None:
        raise NotFoundError("Volunteer not found")
    if get_opportunity_by_id(db=db, id=opportunity_id) is None:
        raise NotFoundError("Opportunity not found")

    entry = insert_hours(
        db=db,
        volunteer_id=volunteer_id,
        opportunity_id=opportunity_id,
        date=date,
        hours=hours,
        notes=notes,
    )
    logger.info(f"Logged {hours} hours for volunteer {volunteer_id}")
    return entry


def update_hours(
    db: Session,
    hour_id: uuid.UUID,
    verify: bool = False,
    hours: Optional[float] = None,
    notes: Optional[str] = None,
    verified_by: Optional[uuid.UUID] = None,
) -> VolunteerHours:
    """
    Verify an entry, or edit hours/notes of an entry nobody verified yet.

    Raises:
        NotFoundError: no such entry
        ConflictError: editing an already verified entry
        InvalidInputError: non positive hours
    """
    entry = get_hours_by_id(db=db, id=hour_id)
    if entry is None:
        raise NotFoundError("Record not found")

    if verify:
        return verify_hours(db=db, entry=entry, verified_by=verified_by)

    if entry.is_verified:
        raise ConflictError("Cannot edit hours that have already been verified.")
    validate_hours(hours)
    return update_hours_entry(db=db, entry=entry, hours=hours, notes=notes)


def delete_hours(db: Session, hour_id: uuid.UUID) -> None:
    entry = get_hours_by_id(db=db, id=hour_id)
    if entry is None:
        raise NotFoundError("Record not found")
    if entry.is_verified:
        raise ConflictError("Cannot delete hours that have already been verified.")
    delete_hours_entry(db=db, entry=entry)
