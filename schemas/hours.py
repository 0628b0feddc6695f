from datetime import datetime
from typing import List, Optional

from fastapi import Query
from pydantic import BaseModel, Field

from core.helper import format_datetime
from models.VolunteerHours import VolunteerHours


class HoursQuery(BaseModel):
    start_date: Optional[datetime] = Query(None, description="Entries from this date")
    end_date: Optional[datetime] = Query(None, description="Entries up to this date")
    verified: Optional[bool] = Query(None, description="Filter by verification")


class LogHoursRequest(BaseModel):
    opportunity_id: str
    date: datetime
    hours: float = Field(gt=0)
    notes: Optional[str] = None


class UpdateHoursRequest(BaseModel):
    verify: bool = False
    hours: Optional[float] = Field(None, gt=0)
    notes: Optional[str] = None


class HoursResponseItem(BaseModel):
    id: str
    volunteer_id: str
    opportunity_id: str
    opportunity_title: Optional[str] = None
    date: Optional[str] = None
    hours: float
    notes: Optional[str] = None
    is_verified: bool
    verified_by: Optional[str] = None
    verified_at: Optional[str] = None


class HoursResponse(BaseModel):
    total_hours: float
    results: List[HoursResponseItem]


def hours_from_model(
    entry: VolunteerHours, opportunity_title: Optional[str] = None
) -> HoursResponseItem:
    return HoursResponseItem(
        id=str(entry.id),
        volunteer_id=str(entry.volunteer_id),
        opportunity_id=str(entry.opportunity_id),
        opportunity_title=opportunity_title,
        date=format_datetime(entry.date),
        hours=float(entry.hours),
        notes=entry.notes,
        is_verified=entry.is_verified,
        verified_by=str(entry.verified_by) if entry.verified_by else None,
        verified_at=format_datetime(entry.verified_at),
    )
