"""Skills and interests catalogs.

Names are unique. The pre-insert lookup gives a friendly error and the
unique constraint catches whatever races past it.
"""

import uuid
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.exceptions import ConflictError, InvalidInputError, NotFoundError
from core.log import logger
from models.Interest import Interest
from models.Skill import Skill
from repository.interest import (
    count_interest_assignments,
    delete_interest_data,
    get_all_interests,
    get_interest_by_id,
    get_interest_by_name,
    insert_interest,
    update_interest_data,
)
from repository.skill import (
    count_skill_assignments,
    delete_skill_data,
    get_all_skills,
    get_skill_by_id,
    get_skill_by_name,
    insert_skill,
    update_skill_data,
)

SKILL_EXISTS = "A skill with this name already exists"
INTEREST_EXISTS = "An interest with this name already exists"


def clean_name(name: Optional[str], required: bool = True) -> Optional[str]:
    if name is None:
        if required:
            raise InvalidInputError("Name is required")
        return None
    name = name.strip()
    if not name:
        raise InvalidInputError("Name is required")
    return name


def list_skills(db: Session):
    return get_all_skills(db=db)


def get_skill(db: Session, id: uuid.UUID) -> Skill:
    skill = get_skill_by_id(db=db, id=id)
    if skill is None:
        raise NotFoundError("Skill not found")
    return skill


def create_skill(
    db: Session,
    name: str,
    description: Optional[str] = None,
    category: Optional[str] = None,
) -> Skill:
    name = clean_name(name)
    if get_skill_by_name(db=db, name=name):
        raise ConflictError(SKILL_EXISTS)
    try:
        return insert_skill(db=db, name=name, description=description, category=category)
    except IntegrityError as e:
        logger.error(f"Integrity constraint violation: {e}")
        db.rollback()
        raise ConflictError(SKILL_EXISTS)


def update_skill(
    db: Session,
    id: uuid.UUID,
    name: Optional[str] = None,
    description: Optional[str] = None,
    category: Optional[str] = None,
) -> Skill:
    skill = get_skill(db=db, id=id)
    name = clean_name(name, required=False)
    if name is not None and name != skill.name and get_skill_by_name(db=db, name=name):
        raise ConflictError(SKILL_EXISTS)
    try:
        return update_skill_data(
            db=db,
            skill=skill,
            values={"name": name, "description": description, "category": category},
        )
    except IntegrityError as e:
        logger.error(f"Integrity constraint violation: {e}")
        db.rollback()
        raise ConflictError(SKILL_EXISTS)


def delete_skill(db: Session, id: uuid.UUID) -> None:
    skill = get_skill(db=db, id=id)
    usage_count = count_skill_assignments(db=db, skill_id=skill.id)
    if usage_count > 0:
        raise ConflictError(
            f"Cannot delete skill: it is assigned to {usage_count} volunteer(s)"
        )
    try:
        delete_skill_data(db=db, skill=skill)
    except IntegrityError as e:
        # assigned between the count and the delete
        logger.error(f"Integrity constraint violation: {e}")
        db.rollback()
        raise ConflictError("Cannot delete skill: it is assigned to volunteers")
    logger.info(f"Skill {id} deleted")


def list_interests(db: Session):
    return get_all_interests(db=db)


def get_interest(db: Session, id: uuid.UUID) -> Interest:
    interest = get_interest_by_id(db=db, id=id)
    if interest is None:
        raise NotFoundError("Interest not found")
    return interest


def create_interest(
    db: Session, name: str, description: Optional[str] = None
) -> Interest:
    name = clean_name(name)
    if get_interest_by_name(db=db, name=name):
        raise ConflictError(INTEREST_EXISTS)
    try:
        return insert_interest(db=db, name=name, description=description)
    except IntegrityError as e:
        logger.error(f"Integrity constraint violation: {e}")
        db.rollback()
        raise ConflictError(INTEREST_EXISTS)


def update_interest(
    db: Session,
    id: uuid.UUID,
    name: Optional[str] = None,
    description: Optional[str] = None,
) -> Interest:
    interest = get_interest(db=db, id=id)
    name = clean_name(name, required=False)
    if (
        name is not None
        and name != interest.name
        and get_interest_by_name(db=db, name=name)
    ):
        raise ConflictError(INTEREST_EXISTS)
    try:
        return update_interest_data(
            db=db,
            interest=interest,
            values={"name": name, "description": description},
        )
    except IntegrityError as e:
        logger.error(f"Integrity constraint violation: {e}")
        db.rollback()
        raise ConflictError(INTEREST_EXISTS)


def delete_interest(db: Session, id: uuid.UUID) -> None:
    interest = get_interest(db=db, id=id)
    usage_count = count_interest_assignments(db=db, interest_id=interest.id)
    if usage_count > 0:
        raise ConflictError(
            f"Cannot delete interest: it is assigned to {usage_count} volunteer(s)"
        )
    try:
        delete_interest_data(db=db, interest=interest)
    except IntegrityError as e:
        logger.error(f"Integrity constraint violation: {e}")
        db.rollback()
        raise ConflictError("Cannot delete interest: it is assigned to volunteers")
    logger.info(f"Interest {id} deleted")
