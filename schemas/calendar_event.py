from datetime import datetime
from enum import Enum
from typing import List, Optional

from fastapi import Query
from pydantic import BaseModel, Field, model_validator

from models.Opportunity import (
    OPPORTUNITY_OPEN,
    OPPORTUNITY_STATUSES,
    Opportunity,
)
from core.helper import format_datetime


class RecurrenceFrequency(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class RecurrencePattern(BaseModel):
    frequency: RecurrenceFrequency
    interval: int = Field(1, ge=1)
    end_date: Optional[datetime] = None
    count: Optional[int] = Field(None, ge=1)

    @model_validator(mode="after")
    def require_bound(self):
        if self.end_date is None and self.count is None:
            raise ValueError("Recurrence pattern needs an end_date or a count")
        return self


class CalendarEventQuery(BaseModel):
    start: Optional[datetime] = Query(None, description="Events starting from")
    end: Optional[datetime] = Query(None, description="Events starting before")


class CreateCalendarEventRequest(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    location: Optional[str] = None
    start_date: datetime
    end_date: datetime
    max_volunteers: Optional[int] = Field(None, ge=1)
    status: str = OPPORTUNITY_OPEN
    is_recurring: bool = False
    recurrence_pattern: Optional[RecurrencePattern] = None

    @model_validator(mode="after")
    def check_event(self):
        if self.status not in OPPORTUNITY_STATUSES:
            raise ValueError(f"Invalid status: {self.status}")
        if self.is_recurring and self.recurrence_pattern is None:
            raise ValueError("Recurring events need a recurrence pattern")
        return self


class UpdateCalendarEventRequest(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    location: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    max_volunteers: Optional[int] = Field(None, ge=1)
    status: Optional[str] = None

    @model_validator(mode="after")
    def check_status(self):
        if self.status is not None and self.status not in OPPORTUNITY_STATUSES:
            raise ValueError(f"Invalid status: {self.status}")
        return self


class CalendarEventResponse(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    location: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    max_volunteers: Optional[int] = None
    status: str
    is_recurring: bool
    recurrence_pattern: Optional[dict] = None
    created_by_id: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class CalendarEventListResponse(BaseModel):
    results: List[CalendarEventResponse]


class CreateCalendarEventResponse(BaseModel):
    count: int
    results: List[CalendarEventResponse]


class EventRsvpResponseItem(BaseModel):
    volunteer_id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: str
    status: str
    rsvp_at: Optional[str] = None
    notes: Optional[str] = None


class EventRsvpResponse(BaseModel):
    results: List[EventRsvpResponseItem]


class UpdateRsvpStatusRequest(BaseModel):
    status: str
    notes: Optional[str] = None


def calendar_event_from_model(event: Opportunity) -> CalendarEventResponse:
    return CalendarEventResponse(
        id=str(event.id),
        title=event.title,
        description=event.description,
        location=event.location,
        start_date=format_datetime(event.start_date),
        end_date=format_datetime(event.end_date),
        max_volunteers=event.max_volunteers,
        status=event.status,
        is_recurring=event.is_recurring,
        recurrence_pattern=event.recurrence_pattern,
        created_by_id=str(event.created_by_id) if event.created_by_id else None,
        created_at=format_datetime(event.created_at),
        updated_at=format_datetime(event.updated_at),
    )
