import uuid
from datetime import datetime
from typing import Optional, Sequence
from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from core.helper import utc_now
from models.OpportunityRequiredSkill import OpportunityRequiredSkill
from models.Skill import Skill
from models.VolunteerSkill import PROFICIENCY_BEGINNER, VolunteerSkill


def get_all_skills(db: Session) -> Sequence[Skill]:
    stmt = select(Skill).order_by(Skill.name)
    return db.execute(stmt).scalars().all()


def get_skill_by_id(db: Session, id: uuid.UUID) -> Optional[Skill]:
    stmt = select(Skill).where(Skill.id == id)
    return db.execute(stmt).scalar()


def get_skill_by_name(db: Session, name: str) -> Optional[Skill]:
    stmt = select(Skill).where(Skill.name == name)
    return db.execute(stmt).scalar()


def insert_skill(
    db: Session,
    name: str,
    description: Optional[str] = None,
    category: Optional[str] = None,
    now: Optional[datetime] = None,
    is_commit: bool = True,
) -> Skill:
    if now is None:
        now = utc_now()
    skill = Skill(
        name=name,
        description=description,
        category=category,
        created_at=now,
        updated_at=now,
    )
    db.add(skill)
    if is_commit:
        db.commit()
    return skill


def update_skill_data(
    db: Session,
    skill: Skill,
    values: dict,
    now: Optional[datetime] = None,
    is_commit: bool = True,
) -> Skill:
    if now is None:
        now = utc_now()
    for key, value in values.items():
        if value is None:
            continue
        setattr(skill, key, value)
    skill.updated_at = now
    if is_commit:
        db.commit()
    return skill


def count_skill_assignments(db: Session, skill_id: uuid.UUID) -> int:
    stmt = select(func.count()).where(VolunteerSkill.skill_id == skill_id)
    return int(db.execute(stmt).scalar() or 0)


def delete_skill_data(db: Session, skill: Skill, is_commit: bool = True) -> None:
    # opportunity requirements go with the skill, volunteer assignments block it
    db.execute(
        delete(OpportunityRequiredSkill).where(
            OpportunityRequiredSkill.skill_id == skill.id
        )
    )
    db.execute(delete(Skill).where(Skill.id == skill.id))
    if is_commit:
        db.commit()


def get_volunteer_skills(db: Session, volunteer_id: uuid.UUID) -> Sequence:
    """(VolunteerSkill, Skill) rows ordered by skill name"""
    stmt = (
        select(VolunteerSkill, Skill)
        .join(Skill, VolunteerSkill.skill_id == Skill.id)
        .where(VolunteerSkill.volunteer_id == volunteer_id)
        .order_by(Skill.name)
    )
    return db.execute(stmt).all()


def get_volunteer_skill(
    db: Session, volunteer_id: uuid.UUID, skill_id: uuid.UUID
) -> Optional[VolunteerSkill]:
    stmt = select(VolunteerSkill).where(
        VolunteerSkill.volunteer_id == volunteer_id,
        VolunteerSkill.skill_id == skill_id,
    )
    return db.execute(stmt).scalar()


def insert_volunteer_skill(
    db: Session,
    volunteer_id: uuid.UUID,
    skill_id: uuid.UUID,
    proficiency_level: str = PROFICIENCY_BEGINNER,
    now: Optional[datetime] = None,
    is_commit: bool = True,
) -> VolunteerSkill:
    if now is None:
        now = utc_now()
    volunteer_skill = VolunteerSkill(
        volunteer_id=volunteer_id,
        skill_id=skill_id,
        proficiency_level=proficiency_level,
        created_at=now,
    )
    db.add(volunteer_skill)
    if is_commit:
        db.commit()
    return volunteer_skill


def delete_volunteer_skill(
    db: Session, volunteer_skill: VolunteerSkill, is_commit: bool = True
) -> None:
    db.delete(volunteer_skill)
    if is_commit:
        db.commit()
