"""Volunteer-facing listing of open opportunities with remaining spots."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from core.exceptions import NotFoundError
from models.Interest import Interest
from models.Opportunity import Opportunity
from models.Skill import Skill
from repository.opportunity import (
    get_interests_by_opportunities,
    get_open_opportunities,
    get_open_opportunity_by_id,
    get_required_skills_by_opportunities,
)


@dataclass
class OpportunityWithSpots:
    opportunity: Opportunity
    rsvp_count: int
    spots_remaining: Optional[int]
    required_skills: list[Skill] = field(default_factory=list)
    interests: list[Interest] = field(default_factory=list)


def spots_remaining(max_volunteers: Optional[int], rsvp_count: int) -> Optional[int]:
    """None means unlimited"""
    if max_volunteers is None:
        return None
    return max_volunteers - rsvp_count


def has_capacity(max_volunteers: Optional[int], rsvp_count: int) -> bool:
    return max_volunteers is None or rsvp_count < max_volunteers


def list_open_opportunities(
    db: Session,
    limit: int,
    offset: int,
    search: Optional[str] = None,
    now: Optional[datetime] = None,
) -> tuple[list[OpportunityWithSpots], int]:
    """
    Open future opportunities a volunteer can still join, earliest first.

    Full opportunities are dropped after pagination, so a page may hold fewer
    than `limit` rows. `total` counts open future opportunities before that
    filter and before the search.
    """
    rows, total = get_open_opportunities(
        db=db, limit=limit, offset=offset, search=search, now=now
    )

    available = []
    for opportunity, rsvp_count in rows:
        rsvp_count = int(rsvp_count or 0)
        if has_capacity(opportunity.max_volunteers, rsvp_count):
            available.append((opportunity, rsvp_count))

    ids = [opportunity.id for opportunity, _ in available]
    skills_map = get_required_skills_by_opportunities(db=db, opportunity_ids=ids)
    interests_map = get_interests_by_opportunities(db=db, opportunity_ids=ids)

    data = [
        OpportunityWithSpots(
            opportunity=opportunity,
            rsvp_count=rsvp_count,
            spots_remaining=spots_remaining(opportunity.max_volunteers, rsvp_count),
            required_skills=skills_map.get(opportunity.id, []),
            interests=interests_map.get(opportunity.id, []),
        )
        for opportunity, rsvp_count in available
    ]
    return data, total


def get_open_opportunity(
    db: Session, id: uuid.UUID, now: Optional[datetime] = None
) -> OpportunityWithSpots:
    row = get_open_opportunity_by_id(db=db, id=id, now=now)
    if row is None:
        raise NotFoundError("Opportunity not found")
    opportunity, rsvp_count = row
    rsvp_count = int(rsvp_count or 0)
    skills_map = get_required_skills_by_opportunities(db=db, opportunity_ids=[id])
    interests_map = get_interests_by_opportunities(db=db, opportunity_ids=[id])
    return OpportunityWithSpots(
        opportunity=opportunity,
        rsvp_count=rsvp_count,
        spots_remaining=spots_remaining(opportunity.max_volunteers, rsvp_count),
        required_skills=skills_map.get(id, []),
        interests=interests_map.get(id, []),
    )
