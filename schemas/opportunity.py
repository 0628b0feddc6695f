from typing import List, Optional

from fastapi import Query
from pydantic import BaseModel

from core.helper import format_datetime
from models.Opportunity import Opportunity
from models.VolunteerRsvp import VolunteerRsvp


class OpportunityQuery(BaseModel):
    limit: int = Query(20, ge=1, le=100, description="Page Size")
    offset: int = Query(0, ge=0, description="Rows to skip")
    search: Optional[str] = Query(
        None, description="Search by title, description or location"
    )


class SkillInOpportunityResponse(BaseModel):
    id: str
    name: str
    category: Optional[str] = None


class InterestInOpportunityResponse(BaseModel):
    id: str
    name: str


class OpportunityResponseItem(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    location: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    max_volunteers: Optional[int] = None
    status: str
    rsvp_count: int
    spots_remaining: Optional[int] = None
    required_skills: List[SkillInOpportunityResponse] = []
    interests: List[InterestInOpportunityResponse] = []


class OpportunityResponse(BaseModel):
    limit: int
    offset: int
    count: int
    results: List[OpportunityResponseItem]


class RsvpResponse(BaseModel):
    volunteer_id: str
    opportunity_id: str
    status: str
    rsvp_at: Optional[str] = None
    notes: Optional[str] = None


class MyRsvpResponseItem(BaseModel):
    status: str
    rsvp_at: Optional[str] = None
    notes: Optional[str] = None

    class DetailOpportunity(BaseModel):
        id: str
        title: str
        location: Optional[str] = None
        start_date: Optional[str] = None
        end_date: Optional[str] = None
        status: str

    opportunity: DetailOpportunity


class MyRsvpResponse(BaseModel):
    results: List[MyRsvpResponseItem]


class AttendeesResponse(BaseModel):
    count: int
    results: List[str]


def opportunity_item_from_spots(item) -> OpportunityResponseItem:
    opportunity = item.opportunity
    return OpportunityResponseItem(
        id=str(opportunity.id),
        title=opportunity.title,
        description=opportunity.description,
        location=opportunity.location,
        start_date=format_datetime(opportunity.start_date),
        end_date=format_datetime(opportunity.end_date),
        max_volunteers=opportunity.max_volunteers,
        status=opportunity.status,
        rsvp_count=item.rsvp_count,
        spots_remaining=item.spots_remaining,
        required_skills=[
            SkillInOpportunityResponse(
                id=str(skill.id), name=skill.name, category=skill.category
            )
            for skill in item.required_skills
        ],
        interests=[
            InterestInOpportunityResponse(id=str(interest.id), name=interest.name)
            for interest in item.interests
        ],
    )


def rsvp_from_model(rsvp: VolunteerRsvp) -> RsvpResponse:
    return RsvpResponse(
        volunteer_id=str(rsvp.volunteer_id),
        opportunity_id=str(rsvp.opportunity_id),
        status=rsvp.status,
        rsvp_at=format_datetime(rsvp.rsvp_at),
        notes=rsvp.notes,
    )


def my_rsvp_from_row(rsvp: VolunteerRsvp, opportunity: Opportunity) -> MyRsvpResponseItem:
    return MyRsvpResponseItem(
        status=rsvp.status,
        rsvp_at=format_datetime(rsvp.rsvp_at),
        notes=rsvp.notes,
        opportunity=MyRsvpResponseItem.DetailOpportunity(
            id=str(opportunity.id),
            title=opportunity.title,
            location=opportunity.location,
            start_date=format_datetime(opportunity.start_date),
            end_date=format_datetime(opportunity.end_date),
            status=opportunity.status,
        ),
    )
