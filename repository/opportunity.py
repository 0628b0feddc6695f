import uuid
from collections import defaultdict
from datetime import datetime
from typing import Optional, Sequence
from sqlalchemy import and_, delete, func, select
from sqlalchemy.orm import Session

from core.helper import LIKE_ESCAPE, contains_pattern, utc_now
from models.Interest import Interest
from models.Opportunity import OPPORTUNITY_OPEN, Opportunity
from models.OpportunityInterest import OpportunityInterest
from models.OpportunityRequiredSkill import OpportunityRequiredSkill
from models.Skill import Skill
from models.VolunteerRsvp import ACTIVE_RSVP_STATUSES, VolunteerRsvp


def get_opportunity_by_id(
    db: Session, id: uuid.UUID, for_update: bool = False
) -> Optional[Opportunity]:
    stmt = select(Opportunity).where(Opportunity.id == id)
    if for_update:
        # row lock on postgres, ignored by sqlite
        stmt = stmt.with_for_update()
    return db.execute(stmt).scalar()


def get_opportunity_by_title_and_start(
    db: Session, title: str, start_date: datetime
) -> Optional[Opportunity]:
    stmt = select(Opportunity).where(
        Opportunity.title == title, Opportunity.start_date == start_date
    )
    return db.execute(stmt).scalar()


def rsvp_count_subquery():
    """Active RSVPs per opportunity, opportunities without any are absent"""
    return (
        select(
            VolunteerRsvp.opportunity_id.label("opportunity_id"),
            func.count(VolunteerRsvp.volunteer_id).label("rsvp_count"),
        )
        .where(VolunteerRsvp.status.in_(ACTIVE_RSVP_STATUSES))
        .group_by(VolunteerRsvp.opportunity_id)
        .subquery("rsvp_counts")
    )


def open_opportunity_condition(now: datetime):
    return and_(Opportunity.status == OPPORTUNITY_OPEN, Opportunity.start_date > now)


def opportunity_search_condition(search: str):
    search_pattern = contains_pattern(search)
    return (
        (Opportunity.title.ilike(search_pattern, escape=LIKE_ESCAPE))
        | (Opportunity.description.ilike(search_pattern, escape=LIKE_ESCAPE))
        | (Opportunity.location.ilike(search_pattern, escape=LIKE_ESCAPE))
    )


def get_open_opportunities(
    db: Session,
    limit: int,
    offset: int,
    search: Optional[str] = None,
    now: Optional[datetime] = None,
) -> tuple[Sequence, int]:
    """
    Open opportunities starting after `now`, earliest first.
    Rows are (Opportunity, rsvp_count). The total counts every open future
    opportunity and ignores the search filter.
    """
    if now is None:
        now = utc_now()
    rsvp_counts = rsvp_count_subquery()
    base_condition = open_opportunity_condition(now)

    stmt = (
        select(Opportunity, func.coalesce(rsvp_counts.c.rsvp_count, 0))
        .outerjoin(rsvp_counts, Opportunity.id == rsvp_counts.c.opportunity_id)
        .where(base_condition)
    )
    if search:
        stmt = stmt.where(opportunity_search_condition(search))
    stmt = (
        stmt.order_by(Opportunity.start_date.asc(), Opportunity.id)
        .limit(limit)
        .offset(offset)
    )
    rows = db.execute(stmt).all()

    count_stmt = select(func.count(Opportunity.id)).where(base_condition)
    total = db.execute(count_stmt).scalar() or 0
    return rows, int(total)


def get_open_opportunity_by_id(
    db: Session, id: uuid.UUID, now: Optional[datetime] = None
):
    """(Opportunity, rsvp_count) or None when it is not open or already started"""
    if now is None:
        now = utc_now()
    rsvp_counts = rsvp_count_subquery()
    stmt = (
        select(Opportunity, func.coalesce(rsvp_counts.c.rsvp_count, 0))
        .outerjoin(rsvp_counts, Opportunity.id == rsvp_counts.c.opportunity_id)
        .where(Opportunity.id == id, open_opportunity_condition(now))
    )
    return db.execute(stmt).first()


def get_required_skills_by_opportunities(
    db: Session, opportunity_ids: Sequence[uuid.UUID]
) -> dict[uuid.UUID, list[Skill]]:
    result: dict[uuid.UUID, list[Skill]] = defaultdict(list)
    if not opportunity_ids:
        return result
    stmt = (
        select(OpportunityRequiredSkill.opportunity_id, Skill)
        .join(Skill, OpportunityRequiredSkill.skill_id == Skill.id)
        .where(OpportunityRequiredSkill.opportunity_id.in_(opportunity_ids))
        .order_by(Skill.name)
    )
    for opportunity_id, skill in db.execute(stmt).all():
        result[opportunity_id].append(skill)
    return result


def get_interests_by_opportunities(
    db: Session, opportunity_ids: Sequence[uuid.UUID]
) -> dict[uuid.UUID, list[Interest]]:
    result: dict[uuid.UUID, list[Interest]] = defaultdict(list)
    if not opportunity_ids:
        return result
    stmt = (
        select(OpportunityInterest.opportunity_id, Interest)
        .join(Interest, OpportunityInterest.interest_id == Interest.id)
        .where(OpportunityInterest.opportunity_id.in_(opportunity_ids))
        .order_by(Interest.name)
    )
    for opportunity_id, interest in db.execute(stmt).all():
        result[opportunity_id].append(interest)
    return result


def get_opportunities_between(
    db: Session,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> Sequence[Opportunity]:
    stmt = select(Opportunity)
    if start is not None:
        stmt = stmt.where(Opportunity.start_date >= start)
    if end is not None:
        stmt = stmt.where(Opportunity.start_date <= end)
    stmt = stmt.order_by(Opportunity.start_date.asc(), Opportunity.id)
    return db.execute(stmt).scalars().all()


def create_opportunity(
    db: Session,
    title: str,
    start_date: datetime,
    end_date: datetime,
    description: Optional[str] = None,
    location: Optional[str] = None,
    max_volunteers: Optional[int] = None,
    status: str = OPPORTUNITY_OPEN,
    created_by_id: Optional[uuid.UUID] = None,
    is_recurring: bool = False,
    recurrence_pattern: Optional[dict] = None,
    now: Optional[datetime] = None,
    is_commit: bool = True,
) -> Opportunity:
    if now is None:
        now = utc_now()
    opportunity = Opportunity(
        title=title,
        description=description,
        location=location,
        start_date=start_date,
        end_date=end_date,
        max_volunteers=max_volunteers,
        status=status,
        created_by_id=created_by_id,
        is_recurring=is_recurring,
        recurrence_pattern=recurrence_pattern,
        created_at=now,
        updated_at=now,
    )
    db.add(opportunity)
    if is_commit:
        db.commit()
    return opportunity


def update_opportunity(
    db: Session,
    opportunity: Opportunity,
    values: dict,
    now: Optional[datetime] = None,
    is_commit: bool = True,
) -> Opportunity:
    if now is None:
        now = utc_now()
    for key, value in values.items():
        setattr(opportunity, key, value)
    opportunity.updated_at = now
    if is_commit:
        db.commit()
    return opportunity


def delete_opportunity(
    db: Session, opportunity: Opportunity, is_commit: bool = True
) -> None:
    db.delete(opportunity)
    if is_commit:
        db.commit()


def count_upcoming_opportunities(db: Session, now: Optional[datetime] = None) -> int:
    if now is None:
        now = utc_now()
    stmt = select(func.count(Opportunity.id)).where(Opportunity.start_date >= now)
    return int(db.execute(stmt).scalar() or 0)


def get_required_skill(
    db: Session, opportunity_id: uuid.UUID, skill_id: uuid.UUID
) -> Optional[OpportunityRequiredSkill]:
    stmt = select(OpportunityRequiredSkill).where(
        OpportunityRequiredSkill.opportunity_id == opportunity_id,
        OpportunityRequiredSkill.skill_id == skill_id,
    )
    return db.execute(stmt).scalar()


def add_required_skill(
    db: Session,
    opportunity_id: uuid.UUID,
    skill_id: uuid.UUID,
    is_commit: bool = True,
) -> OpportunityRequiredSkill:
    required_skill = OpportunityRequiredSkill(
        opportunity_id=opportunity_id, skill_id=skill_id
    )
    db.add(required_skill)
    if is_commit:
        db.commit()
    return required_skill


def remove_required_skill(
    db: Session,
    opportunity_id: uuid.UUID,
    skill_id: uuid.UUID,
    is_commit: bool = True,
) -> int:
    result = db.execute(
        delete(OpportunityRequiredSkill).where(
            OpportunityRequiredSkill.opportunity_id == opportunity_id,
            OpportunityRequiredSkill.skill_id == skill_id,
        )
    )
    if is_commit:
        db.commit()
    return result.rowcount


def get_opportunity_interest(
    db: Session, opportunity_id: uuid.UUID, interest_id: uuid.UUID
) -> Optional[OpportunityInterest]:
    stmt = select(OpportunityInterest).where(
        OpportunityInterest.opportunity_id == opportunity_id,
        OpportunityInterest.interest_id == interest_id,
    )
    return db.execute(stmt).scalar()


def add_opportunity_interest(
    db: Session,
    opportunity_id: uuid.UUID,
    interest_id: uuid.UUID,
    is_commit: bool = True,
) -> OpportunityInterest:
    opportunity_interest = OpportunityInterest(
        opportunity_id=opportunity_id, interest_id=interest_id
    )
    db.add(opportunity_interest)
    if is_commit:
        db.commit()
    return opportunity_interest


def remove_opportunity_interest(
    db: Session,
    opportunity_id: uuid.UUID,
    interest_id: uuid.UUID,
    is_commit: bool = True,
) -> int:
    result = db.execute(
        delete(OpportunityInterest).where(
            OpportunityInterest.opportunity_id == opportunity_id,
            OpportunityInterest.interest_id == interest_id,
        )
    )
    if is_commit:
        db.commit()
    return result.rowcount
