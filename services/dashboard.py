import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from core.helper import format_datetime, utc_now
from models.VolunteerRsvp import RSVP_PENDING
from repository.hours import get_total_logged_hours
from repository.opportunity import count_upcoming_opportunities
from repository.rsvp import count_rsvps_by_status, get_upcoming_rsvps_by_volunteer
from repository.volunteer import count_active_volunteers, get_total_hours
from schemas.dashboard import (
    HoursSummary,
    StaffDashboardStats,
    UpcomingRsvp,
    VolunteerDashboard,
)


def get_staff_dashboard_stats(
    db: Session, now: Optional[datetime] = None
) -> StaffDashboardStats:
    if now is None:
        now = utc_now()
    return StaffDashboardStats(
        active_volunteers=count_active_volunteers(db=db),
        total_volunteer_hours=get_total_logged_hours(db=db),
        upcoming_opportunities=count_upcoming_opportunities(db=db, now=now),
        pending_rsvps=count_rsvps_by_status(db=db, status=RSVP_PENDING),
    )


def get_volunteer_dashboard(
    db: Session, volunteer_id: uuid.UUID, now: Optional[datetime] = None
) -> VolunteerDashboard:
    rows = get_upcoming_rsvps_by_volunteer(db=db, volunteer_id=volunteer_id, now=now)
    verified = get_total_hours(db=db, volunteer_id=volunteer_id, verified=True)
    pending = get_total_hours(db=db, volunteer_id=volunteer_id, verified=False)
    return VolunteerDashboard(
        upcoming_rsvps=[
            UpcomingRsvp(
                status=rsvp.status,
                opportunity_id=str(opportunity.id),
                opportunity_title=opportunity.title,
                start_date=format_datetime(opportunity.start_date),
            )
            for rsvp, opportunity in rows
        ],
        hours=HoursSummary(
            verified=verified, pending=pending, total=verified + pending
        ),
    )
