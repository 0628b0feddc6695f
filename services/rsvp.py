"""RSVP lifecycle and capacity accounting for opportunities."""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.exceptions import InvalidInputError, NotFoundError, RsvpError, RsvpErrorCode
from core.helper import as_utc, utc_now
from core.log import logger
from models.Opportunity import OPPORTUNITY_OPEN
from models.VolunteerRsvp import RSVP_PENDING, RSVP_STATUSES, VolunteerRsvp
from repository.opportunity import get_opportunity_by_id
from repository.rsvp import (
    count_active_rsvps,
    delete_rsvp,
    get_attendee_first_names,
    get_rsvp,
    get_rsvps_by_opportunity,
    get_rsvps_by_volunteer,
    insert_rsvp,
    update_rsvp,
)
from repository.volunteer import get_volunteer_by_user_id


def require_volunteer_id(db: Session, user_id: uuid.UUID) -> uuid.UUID:
    volunteer = get_volunteer_by_user_id(db=db, user_id=user_id)
    if volunteer is None:
        raise RsvpError(RsvpErrorCode.VOLUNTEER_NOT_FOUND)
    return volunteer.id


def create_rsvp(
    db: Session,
    user_id: uuid.UUID,
    opportunity_id: uuid.UUID,
    now: Optional[datetime] = None,
) -> VolunteerRsvp:
    """
    Enroll the caller's volunteer profile in an opportunity as `pending`.

    The opportunity row is locked for the count-and-insert so two requests
    can't both take the last spot, and the (volunteer, opportunity) primary
    key turns a racing duplicate into ALREADY_RSVPD.

    Raises:
        RsvpError: VOLUNTEER_NOT_FOUND, OPPORTUNITY_NOT_FOUND,
            OPPORTUNITY_NOT_OPEN, OPPORTUNITY_IN_PAST, ALREADY_RSVPD,
            OPPORTUNITY_FULL
    """
    if now is None:
        now = utc_now()
    volunteer_id = require_volunteer_id(db=db, user_id=user_id)

    opportunity = get_opportunity_by_id(db=db, id=opportunity_id, for_update=True)
    if opportunity is None:
        raise RsvpError(RsvpErrorCode.OPPORTUNITY_NOT_FOUND)
    if opportunity.status != OPPORTUNITY_OPEN:
        raise RsvpError(RsvpErrorCode.OPPORTUNITY_NOT_OPEN)
    if as_utc(opportunity.start_date) <= now:
        raise RsvpError(RsvpErrorCode.OPPORTUNITY_IN_PAST)

    if get_rsvp(db=db, volunteer_id=volunteer_id, opportunity_id=opportunity_id):
        raise RsvpError(RsvpErrorCode.ALREADY_RSVPD)

    if opportunity.max_volunteers is not None:
        rsvp_count = count_active_rsvps(db=db, opportunity_id=opportunity_id)
        if rsvp_count >= opportunity.max_volunteers:
            raise RsvpError(RsvpErrorCode.OPPORTUNITY_FULL)

    try:
        rsvp = insert_rsvp(
            db=db,
            volunteer_id=volunteer_id,
            opportunity_id=opportunity_id,
            status=RSVP_PENDING,
            now=now,
        )
    except IntegrityError as e:
        logger.warning(
            f"Duplicate RSVP for volunteer {volunteer_id} on {opportunity_id}: {e}"
        )
        db.rollback()
        raise RsvpError(RsvpErrorCode.ALREADY_RSVPD)
    logger.info(f"Volunteer {volunteer_id} RSVP'd to opportunity {opportunity_id}")
    return rsvp


def cancel_rsvp(
    db: Session, user_id: uuid.UUID, opportunity_id: uuid.UUID
) -> tuple[uuid.UUID, uuid.UUID]:
    volunteer_id = require_volunteer_id(db=db, user_id=user_id)
    rsvp = get_rsvp(db=db, volunteer_id=volunteer_id, opportunity_id=opportunity_id)
    if rsvp is None:
        raise RsvpError(RsvpErrorCode.RSVP_NOT_FOUND)
    delete_rsvp(db=db, rsvp=rsvp)
    logger.info(f"Volunteer {volunteer_id} canceled RSVP to {opportunity_id}")
    return volunteer_id, opportunity_id


def get_volunteer_rsvps(db: Session, user_id: uuid.UUID):
    volunteer_id = require_volunteer_id(db=db, user_id=user_id)
    return get_rsvps_by_volunteer(db=db, volunteer_id=volunteer_id)


def get_event_rsvps(db: Session, event_id: uuid.UUID):
    if get_opportunity_by_id(db=db, id=event_id) is None:
        raise NotFoundError("Event not found")
    return get_rsvps_by_opportunity(db=db, opportunity_id=event_id)


def get_opportunity_attendees(db: Session, opportunity_id: uuid.UUID) -> list[str]:
    if get_opportunity_by_id(db=db, id=opportunity_id) is None:
        raise NotFoundError("Opportunity not found")
    return get_attendee_first_names(db=db, opportunity_id=opportunity_id)


def update_rsvp_status(
    db: Session,
    event_id: uuid.UUID,
    volunteer_id: uuid.UUID,
    status: str,
    notes: Optional[str] = None,
) -> VolunteerRsvp:
    if status not in RSVP_STATUSES:
        raise InvalidInputError(f"Invalid RSVP status: {status}")
    rsvp = get_rsvp(db=db, volunteer_id=volunteer_id, opportunity_id=event_id)
    if rsvp is None:
        raise NotFoundError("RSVP not found")
    return update_rsvp(db=db, rsvp=rsvp, status=status, notes=notes)
