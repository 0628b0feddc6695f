from datetime import timedelta

from sqlalchemy import select
from sqlalchemy.orm import Session

from core.helper import utc_now
from core.security import generate_hash_password
from models.Opportunity import Opportunity
from repository.opportunity import create_opportunity
from repository.staff import create_staff
from repository.user import create_user, get_user_by_email

DEMO_STAFF_EMAIL = "staff@example.com"
DEMO_STAFF_PASSWORD = "ChangeMe123"

DEMO_OPPORTUNITIES = [
    {
        "title": "Beginner Python Workshop",
        "description": "Help attendees set up Python and write their first script",
        "location": "Classroom #1",
        "days_ahead": 7,
        "hours": 3,
        "max_volunteers": 5,
    },
    {
        "title": "Community Meetup Registration",
        "description": "Welcome guests and hand out badges",
        "location": "Main Lobby",
        "days_ahead": 14,
        "hours": 2,
        "max_volunteers": 3,
    },
    {
        "title": "Open Mentoring Session",
        "description": "Drop-in mentoring, no capacity limit",
        "location": "Online",
        "days_ahead": 21,
        "hours": 2,
        "max_volunteers": None,
    },
]


def initial_demo_data(db: Session, is_commit: bool = True):
    staff_user = get_user_by_email(db=db, email=DEMO_STAFF_EMAIL)
    if staff_user is None:
        staff_user = create_user(
            db=db,
            email=DEMO_STAFF_EMAIL,
            password=generate_hash_password(DEMO_STAFF_PASSWORD),
            first_name="Demo",
            last_name="Staff",
            is_active=True,
            is_email_verified=True,
            is_commit=False,
        )
        create_staff(db=db, user=staff_user, is_commit=False)
        db.flush()

    now = utc_now().replace(minute=0, second=0, microsecond=0)
    for item in DEMO_OPPORTUNITIES:
        stmt = select(Opportunity).where(Opportunity.title == item["title"])
        if db.execute(stmt).scalar():
            continue
        start_date = now + timedelta(days=item["days_ahead"])
        create_opportunity(
            db=db,
            title=item["title"],
            description=item["description"],
            location=item["location"],
            start_date=start_date,
            end_date=start_date + timedelta(hours=item["hours"]),
            max_volunteers=item["max_volunteers"],
            created_by_id=staff_user.id,
            is_commit=False,
        )

    if is_commit:
        db.commit()
