import uuid
from sqlalchemy import select
from models.Interest import Interest
from sqlalchemy.orm import Session


def initial_interests(db: Session, is_commit: bool = True):
    interests = [
        Interest(id=uuid.UUID("8e2d41a6-5b7c-4c39-b0d4-2f9a7e6c1b01"), name="Youth Programs"),
        Interest(id=uuid.UUID("8e2d41a6-5b7c-4c39-b0d4-2f9a7e6c1b02"), name="Workshops"),
        Interest(id=uuid.UUID("8e2d41a6-5b7c-4c39-b0d4-2f9a7e6c1b03"), name="Community Events"),
        Interest(id=uuid.UUID("8e2d41a6-5b7c-4c39-b0d4-2f9a7e6c1b04"), name="Fundraising"),
        Interest(id=uuid.UUID("8e2d41a6-5b7c-4c39-b0d4-2f9a7e6c1b05"), name="Alumni Network"),
    ]

    for interest in interests:
        stmt = select(Interest).where(Interest.name == interest.name)
        existing = db.execute(stmt).scalar()
        if not existing:
            db.add(interest)

    if is_commit:
        db.commit()
