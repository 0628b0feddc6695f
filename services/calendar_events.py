"""Staff calendar: opportunities managed as events, with recurrence expansion."""

import calendar
import uuid
from datetime import datetime, timedelta
from typing import Optional, Sequence

from sqlalchemy.orm import Session

from core.exceptions import ConflictError, InvalidInputError, NotFoundError
from core.helper import as_utc
from core.log import logger
from models.Opportunity import OPPORTUNITY_OPEN, Opportunity
from repository.opportunity import (
    create_opportunity,
    delete_opportunity,
    get_opportunities_between,
    get_opportunity_by_id,
    get_opportunity_by_title_and_start,
    update_opportunity,
)
from schemas.calendar_event import RecurrenceFrequency, RecurrencePattern

MAX_OCCURRENCES = 366
# fields an update may clear with an explicit null
NULLABLE_EVENT_FIELDS = ("description", "location", "max_volunteers")


def add_months(value: datetime, months: int) -> datetime:
    """Same day next month(s), clamped to the month's last day (Jan 31 -> Feb 28)"""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def occurrence_start(
    start: datetime, pattern: RecurrencePattern, index: int
) -> datetime:
    step = pattern.interval * index
    if pattern.frequency == RecurrenceFrequency.DAILY:
        return start + timedelta(days=step)
    if pattern.frequency == RecurrenceFrequency.WEEKLY:
        return start + timedelta(weeks=step)
    # months are counted from the first start so clamped days don't drift
    return add_months(start, step)


def compute_occurrences(
    start: datetime, end: datetime, pattern: RecurrencePattern
) -> list[tuple[datetime, datetime]]:
    """
    Expand a recurring event into (start, end) pairs of the same duration.

    Stops after `count` occurrences or at the first start on or after
    `end_date`, whichever comes first.
    """
    duration = end - start
    end_date = as_utc(pattern.end_date) if pattern.end_date else None

    occurrences = []
    index = 0
    while pattern.count is None or len(occurrences) < pattern.count:
        current = occurrence_start(start, pattern, index)
        if end_date is not None and current >= end_date:
            break
        if len(occurrences) >= MAX_OCCURRENCES:
            raise InvalidInputError(
                f"Recurrence would create more than {MAX_OCCURRENCES} events"
            )
        occurrences.append((current, current + duration))
        index += 1
    return occurrences


def list_calendar_events(
    db: Session, start: Optional[datetime] = None, end: Optional[datetime] = None
) -> Sequence[Opportunity]:
    return get_opportunities_between(db=db, start=start, end=end)


def create_calendar_event(
    db: Session,
    title: str,
    start_date: datetime,
    end_date: datetime,
    created_by_id: Optional[uuid.UUID],
    description: Optional[str] = None,
    location: Optional[str] = None,
    max_volunteers: Optional[int] = None,
    status: str = OPPORTUNITY_OPEN,
    is_recurring: bool = False,
    recurrence_pattern: Optional[RecurrencePattern] = None,
) -> list[Opportunity]:
    """
    Create one event, or one per occurrence when it is recurring.
    All occurrences are written in a single commit.

    Raises:
        InvalidInputError: end not after start
        ConflictError: an event with the same title already starts at one of
            the occurrence times
    """
    start_date = as_utc(start_date)
    end_date = as_utc(end_date)
    if end_date <= start_date:
        raise InvalidInputError("End date must be after start date")

    if is_recurring and recurrence_pattern is not None:
        occurrences = compute_occurrences(start_date, end_date, recurrence_pattern)
    else:
        occurrences = [(start_date, end_date)]

    for occurrence_start_date, _ in occurrences:
        if get_opportunity_by_title_and_start(
            db=db, title=title, start_date=occurrence_start_date
        ):
            raise ConflictError(
                f'An event named "{title}" already exists at that start time'
            )

    pattern_json = (
        recurrence_pattern.model_dump(mode="json", exclude_none=True)
        if recurrence_pattern is not None
        else None
    )
    events = [
        create_opportunity(
            db=db,
            title=title,
            description=description,
            location=location,
            start_date=occurrence_start_date,
            end_date=occurrence_end_date,
            max_volunteers=max_volunteers,
            status=status,
            created_by_id=created_by_id,
            is_recurring=is_recurring,
            recurrence_pattern=pattern_json,
            is_commit=False,
        )
        for occurrence_start_date, occurrence_end_date in occurrences
    ]
    db.commit()
    logger.info(f"Created {len(events)} calendar event(s) titled {title!r}")
    return events


def update_calendar_event(db: Session, id: uuid.UUID, values: dict) -> Opportunity:
    """Apply only the supplied fields, the merged start/end must stay ordered"""
    event = get_opportunity_by_id(db=db, id=id)
    if event is None:
        raise NotFoundError("Event not found")

    values = {
        key: value
        for key, value in values.items()
        if value is not None or key in NULLABLE_EVENT_FIELDS
    }
    if values.get("start_date") is not None:
        values["start_date"] = as_utc(values["start_date"])
    if values.get("end_date") is not None:
        values["end_date"] = as_utc(values["end_date"])
    effective_start = values.get("start_date") or as_utc(event.start_date)
    effective_end = values.get("end_date") or as_utc(event.end_date)
    if effective_end <= effective_start:
        raise InvalidInputError("End date must be after start date")

    return update_opportunity(db=db, opportunity=event, values=values)


def delete_calendar_event(db: Session, id: uuid.UUID) -> None:
    event = get_opportunity_by_id(db=db, id=id)
    if event is None:
        raise NotFoundError("Event not found")
    delete_opportunity(db=db, opportunity=event)
    logger.info(f"Calendar event {id} deleted")
