"""Onboarding completion derived from a volunteer's profile.

Nothing here is persisted, the checklist is recomputed from the volunteer,
user and assignment rows on every call.
"""

import uuid
from typing import Any, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from models.User import User
from models.Volunteer import Volunteer
from repository.volunteer import (
    interests_count_subquery,
    search_condition,
    skills_count_subquery,
)
from schemas.onboarding import (
    OnboardingChecklist,
    OnboardingStatus,
    VolunteerOnboardingSummary,
)
from validators.availability import is_availability_set

CHECKLIST_ITEMS = 5


def is_filled(value: Optional[str]) -> bool:
    return bool(value and value.strip())


def build_checklist(
    phone: Optional[str],
    bio: Optional[str],
    availability: Any,
    skills_count: int,
    interests_count: int,
    media_release: bool,
) -> OnboardingChecklist:
    return OnboardingChecklist(
        profile_filled=is_filled(phone) and is_filled(bio),
        availability_set=is_availability_set(availability),
        skills_added=int(skills_count) > 0,
        interests_added=int(interests_count) > 0,
        media_release_signed=bool(media_release),
    )


def completion_from_checklist(checklist: OnboardingChecklist) -> int:
    completed = sum(1 for done in checklist.model_dump().values() if done)
    return round(completed / CHECKLIST_ITEMS * 100)


def onboarding_columns():
    return (
        Volunteer.id,
        User.first_name,
        User.last_name,
        User.email,
        User.phone,
        User.bio,
        Volunteer.availability,
        Volunteer.media_release,
        skills_count_subquery().label("skills_count"),
        interests_count_subquery().label("interests_count"),
    )


def checklist_from_row(row) -> OnboardingChecklist:
    return build_checklist(
        phone=row.phone,
        bio=row.bio,
        availability=row.availability,
        skills_count=int(row.skills_count or 0),
        interests_count=int(row.interests_count or 0),
        media_release=row.media_release,
    )


def get_onboarding_status(
    db: Session, volunteer_id: uuid.UUID
) -> Optional[OnboardingStatus]:
    """None when the volunteer doesn't exist"""
    stmt = (
        select(*onboarding_columns())
        .join(User, Volunteer.user_id == User.id)
        .where(Volunteer.id == volunteer_id)
        .limit(1)
    )
    row = db.execute(stmt).first()
    if row is None:
        return None

    checklist = checklist_from_row(row)
    completion_percentage = completion_from_checklist(checklist)
    return OnboardingStatus(
        **checklist.model_dump(),
        completion_percentage=completion_percentage,
        onboarding_complete=completion_percentage == 100,
    )


def list_volunteer_onboarding(
    db: Session, page: int, limit: int, search: Optional[str] = None
) -> tuple[list[VolunteerOnboardingSummary], int]:
    conditions = []
    if search and search.strip():
        conditions.append(search_condition(search.strip()))

    count_stmt = (
        select(func.count(Volunteer.id))
        .join(User, Volunteer.user_id == User.id)
        .where(*conditions)
    )
    total = int(db.execute(count_stmt).scalar() or 0)

    stmt = (
        select(*onboarding_columns())
        .join(User, Volunteer.user_id == User.id)
        .where(*conditions)
        .order_by(Volunteer.created_at.asc(), Volunteer.id)
        .limit(limit)
        .offset((page - 1) * limit)
    )

    data = []
    for row in db.execute(stmt).all():
        checklist = checklist_from_row(row)
        completion_percentage = completion_from_checklist(checklist)
        data.append(
            VolunteerOnboardingSummary(
                volunteer_id=str(row.id),
                first_name=row.first_name,
                last_name=row.last_name,
                email=row.email,
                completion_percentage=completion_percentage,
                onboarding_complete=completion_percentage == 100,
                checklist=checklist,
            )
        )
    return data, total
