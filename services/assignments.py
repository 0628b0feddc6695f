"""Skill and interest assignments for volunteers and opportunity requirements."""

import uuid

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.exceptions import ConflictError, InvalidInputError, NotFoundError
from core.log import logger
from models.VolunteerSkill import PROFICIENCY_BEGINNER, PROFICIENCY_LEVELS
from repository.interest import (
    delete_volunteer_interest,
    get_interest_by_id,
    get_volunteer_interest,
    get_volunteer_interests,
    insert_volunteer_interest,
)
from repository.opportunity import (
    add_opportunity_interest,
    add_required_skill,
    get_opportunity_by_id,
    get_opportunity_interest,
    get_required_skill,
    remove_opportunity_interest,
    remove_required_skill,
)
from repository.skill import (
    delete_volunteer_skill,
    get_skill_by_id,
    get_volunteer_skill,
    get_volunteer_skills,
    insert_volunteer_skill,
)
from repository.volunteer import get_volunteer_by_id

ASSIGNMENT_CREATED = "created"
ASSIGNMENT_UPDATED = "updated"


def require_volunteer(db: Session, volunteer_id: uuid.UUID) -> None:
    if get_volunteer_by_id(db=db, id=volunteer_id) is None:
        raise NotFoundError("Volunteer not found")


def require_event(db: Session, event_id: uuid.UUID) -> None:
    if get_opportunity_by_id(db=db, id=event_id) is None:
        raise NotFoundError("Calendar event not found")


def list_volunteer_skills(db: Session, volunteer_id: uuid.UUID):
    require_volunteer(db=db, volunteer_id=volunteer_id)
    return get_volunteer_skills(db=db, volunteer_id=volunteer_id)


def assign_skill(
    db: Session,
    volunteer_id: uuid.UUID,
    skill_id: uuid.UUID,
    level: str = PROFICIENCY_BEGINNER,
) -> str:
    """Assign a skill or change its level, returns `created` or `updated`"""
    if level not in PROFICIENCY_LEVELS:
        raise InvalidInputError(f"Invalid proficiency level: {level}")
    require_volunteer(db=db, volunteer_id=volunteer_id)
    if get_skill_by_id(db=db, id=skill_id) is None:
        raise NotFoundError("Skill not found")

    existing = get_volunteer_skill(db=db, volunteer_id=volunteer_id, skill_id=skill_id)
    if existing is not None:
        existing.proficiency_level = level
        db.commit()
        return ASSIGNMENT_UPDATED

    try:
        insert_volunteer_skill(
            db=db, volunteer_id=volunteer_id, skill_id=skill_id, proficiency_level=level
        )
    except IntegrityError as e:
        logger.error(f"Integrity constraint violation: {e}")
        db.rollback()
        raise ConflictError("Skill is already assigned to this volunteer")
    return ASSIGNMENT_CREATED


def remove_skill(db: Session, volunteer_id: uuid.UUID, skill_id: uuid.UUID) -> None:
    require_volunteer(db=db, volunteer_id=volunteer_id)
    existing = get_volunteer_skill(db=db, volunteer_id=volunteer_id, skill_id=skill_id)
    if existing is None:
        raise NotFoundError("Skill assignment not found")
    delete_volunteer_skill(db=db, volunteer_skill=existing)


def list_volunteer_interests(db: Session, volunteer_id: uuid.UUID):
    require_volunteer(db=db, volunteer_id=volunteer_id)
    return get_volunteer_interests(db=db, volunteer_id=volunteer_id)


def assign_interest(
    db: Session, volunteer_id: uuid.UUID, interest_id: uuid.UUID
) -> None:
    require_volunteer(db=db, volunteer_id=volunteer_id)
    if get_interest_by_id(db=db, id=interest_id) is None:
        raise NotFoundError("Interest not found")
    if get_volunteer_interest(
        db=db, volunteer_id=volunteer_id, interest_id=interest_id
    ):
        raise ConflictError("Interest is already assigned to this volunteer")
    try:
        insert_volunteer_interest(
            db=db, volunteer_id=volunteer_id, interest_id=interest_id
        )
    except IntegrityError as e:
        logger.error(f"Integrity constraint violation: {e}")
        db.rollback()
        raise ConflictError("Interest is already assigned to this volunteer")


def remove_interest(
    db: Session, volunteer_id: uuid.UUID, interest_id: uuid.UUID
) -> None:
    require_volunteer(db=db, volunteer_id=volunteer_id)
    existing = get_volunteer_interest(
        db=db, volunteer_id=volunteer_id, interest_id=interest_id
    )
    if existing is None:
        raise NotFoundError("Interest assignment not found")
    delete_volunteer_interest(db=db, volunteer_interest=existing)


def add_event_skill(db: Session, event_id: uuid.UUID, skill_id: uuid.UUID) -> None:
    """Idempotent, adding a skill the event already requires is a no-op"""
    require_event(db=db, event_id=event_id)
    if get_skill_by_id(db=db, id=skill_id) is None:
        raise NotFoundError("Skill not found")
    if get_required_skill(db=db, opportunity_id=event_id, skill_id=skill_id):
        return
    try:
        add_required_skill(db=db, opportunity_id=event_id, skill_id=skill_id)
    except IntegrityError:
        # added concurrently, same end state
        db.rollback()


def remove_event_skill(db: Session, event_id: uuid.UUID, skill_id: uuid.UUID) -> None:
    require_event(db=db, event_id=event_id)
    if remove_required_skill(db=db, opportunity_id=event_id, skill_id=skill_id) == 0:
        raise NotFoundError("Skill assignment not found")


def add_event_interest(
    db: Session, event_id: uuid.UUID, interest_id: uuid.UUID
) -> None:
    require_event(db=db, event_id=event_id)
    if get_interest_by_id(db=db, id=interest_id) is None:
        raise NotFoundError("Interest not found")
    if get_opportunity_interest(db=db, opportunity_id=event_id, interest_id=interest_id):
        return
    try:
        add_opportunity_interest(db=db, opportunity_id=event_id, interest_id=interest_id)
    except IntegrityError:
        db.rollback()


def remove_event_interest(
    db: Session, event_id: uuid.UUID, interest_id: uuid.UUID
) -> None:
    require_event(db=db, event_id=event_id)
    removed = remove_opportunity_interest(
        db=db, opportunity_id=event_id, interest_id=interest_id
    )
    if removed == 0:
        raise NotFoundError("Interest assignment not found")
