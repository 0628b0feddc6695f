import uuid
from sqlalchemy import select
from models.Skill import Skill
from sqlalchemy.orm import Session


def initial_skills(db: Session, is_commit: bool = True):
    skills = [
        Skill(
            id=uuid.UUID("3b0f7c52-1d5e-4f0a-9a51-6c1f3f0e2a01"),
            name="Mentoring",
            category="Teaching",
        ),
        Skill(
            id=uuid.UUID("3b0f7c52-1d5e-4f0a-9a51-6c1f3f0e2a02"),
            name="Public Speaking",
            category="Teaching",
        ),
        Skill(
            id=uuid.UUID("3b0f7c52-1d5e-4f0a-9a51-6c1f3f0e2a03"),
            name="Event Logistics",
            category="Operations",
        ),
        Skill(
            id=uuid.UUID("3b0f7c52-1d5e-4f0a-9a51-6c1f3f0e2a04"),
            name="Registration Desk",
            category="Operations",
        ),
        Skill(
            id=uuid.UUID("3b0f7c52-1d5e-4f0a-9a51-6c1f3f0e2a05"),
            name="Photography",
            category="Media",
        ),
        Skill(
            id=uuid.UUID("3b0f7c52-1d5e-4f0a-9a51-6c1f3f0e2a06"),
            name="Social Media",
            category="Media",
        ),
    ]

    for skill in skills:
        stmt = select(Skill).where(Skill.name == skill.name)
        existing = db.execute(stmt).scalar()
        if not existing:
            db.add(skill)
        else:
            existing.category = skill.category

    if is_commit:
        db.commit()
