from typing import List, Optional

from pydantic import BaseModel


class StaffDashboardStats(BaseModel):
    active_volunteers: int
    total_volunteer_hours: float
    upcoming_opportunities: int
    pending_rsvps: int


class UpcomingRsvp(BaseModel):
    status: str
    opportunity_id: str
    opportunity_title: str
    start_date: Optional[str] = None


class HoursSummary(BaseModel):
    verified: float
    pending: float
    total: float


class VolunteerDashboard(BaseModel):
    upcoming_rsvps: List[UpcomingRsvp]
    hours: HoursSummary
