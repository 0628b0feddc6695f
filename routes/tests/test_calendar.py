from datetime import datetime, timedelta, timezone
import alembic.config
from unittest import IsolatedAsyncioTestCase

from fastapi.testclient import TestClient
from sqlalchemy import select
from core.helper import as_utc, utc_now
from core.security import generate_token_from_user
from models import engine, db, get_db_sync, get_db_sync_for_test
from models.Interest import Interest
from models.Opportunity import Opportunity
from models.OpportunityRequiredSkill import OpportunityRequiredSkill
from models.Skill import Skill
from models.Staff import Staff
from models.User import User
from models.Volunteer import Volunteer
from models.VolunteerRsvp import VolunteerRsvp
from main import app


class TestCalendar(IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        alembic_args = ["upgrade", "head"]
        alembic.config.main(argv=alembic_args)
        # connect to the database
        self.connection = engine.connect()

        # begin a non-ORM transaction
        self.trans = self.connection.begin()

        # bind an individual Session to the connection, selecting
        # "create_savepoint" join_transaction_mode
        self.db = db(bind=self.connection, join_transaction_mode="create_savepoint")

        self.staff_user = User(email="staff@example.com", is_active=True)
        self.db.add_all([self.staff_user, Staff(user=self.staff_user)])
        self.db.commit()

    async def staff_headers(self) -> dict:
        (token, _) = await generate_token_from_user(db=self.db, user=self.staff_user)
        return {"Authorization": f"Bearer {token}"}

    async def test_create_single_event(self):
        # Given
        headers = await self.staff_headers()
        app.dependency_overrides[get_db_sync] = get_db_sync_for_test(db=self.db)
        client = TestClient(app)

        # When 1
        response = client.post(
            "/staff/calendar/events/",
            headers=headers,
            json={
                "title": "Orientation",
                "location": "Hall A",
                "start_date": "2030-03-01T09:00:00Z",
                "end_date": "2030-03-01T11:00:00Z",
                "max_volunteers": 10,
            },
        )

        # Expect 1
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["count"], 1)
        event = response.json()["results"][0]
        self.assertEqual(event["status"], "open")
        self.assertEqual(event["created_by_id"], str(self.staff_user.id))
        self.assertFalse(event["is_recurring"])

        # When 2 - same title at the same start
        response = client.post(
            "/staff/calendar/events/",
            headers=headers,
            json={
                "title": "Orientation",
                "start_date": "2030-03-01T09:00:00Z",
                "end_date": "2030-03-01T10:00:00Z",
            },
        )

        # Expect 2
        self.assertEqual(response.status_code, 409)

        # When 3 - end before start
        response = client.post(
            "/staff/calendar/events/",
            headers=headers,
            json={
                "title": "Backwards",
                "start_date": "2030-03-01T09:00:00Z",
                "end_date": "2030-03-01T08:00:00Z",
            },
        )

        # Expect 3
        self.assertEqual(response.status_code, 400)

    async def test_create_recurring_event(self):
        # Given
        headers = await self.staff_headers()
        app.dependency_overrides[get_db_sync] = get_db_sync_for_test(db=self.db)
        client = TestClient(app)

        # When 1
        response = client.post(
            "/staff/calendar/events/",
            headers=headers,
            json={
                "title": "Weekly sort",
                "start_date": "2030-01-07T09:00:00Z",
                "end_date": "2030-01-07T12:00:00Z",
                "is_recurring": True,
                "recurrence_pattern": {"frequency": "weekly", "count": 4},
            },
        )

        # Expect 1 - one row per occurrence, same duration
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["count"], 4)
        stmt = (
            select(Opportunity)
            .where(Opportunity.title == "Weekly sort")
            .order_by(Opportunity.start_date)
        )
        events = self.db.execute(stmt).scalars().all()
        self.assertEqual(len(events), 4)
        self.assertEqual(
            as_utc(events[3].start_date),
            datetime(2030, 1, 28, 9, tzinfo=timezone.utc),
        )
        self.assertTrue(all(event.is_recurring for event in events))
        self.assertEqual(events[0].recurrence_pattern["frequency"], "weekly")

        # When 2 - recurring without a pattern
        response = client.post(
            "/staff/calendar/events/",
            headers=headers,
            json={
                "title": "No pattern",
                "start_date": "2030-01-07T09:00:00Z",
                "end_date": "2030-01-07T12:00:00Z",
                "is_recurring": True,
            },
        )

        # Expect 2
        self.assertEqual(response.status_code, 422)

        # When 3 - pattern without a bound
        response = client.post(
            "/staff/calendar/events/",
            headers=headers,
            json={
                "title": "Forever",
                "start_date": "2030-01-07T09:00:00Z",
                "end_date": "2030-01-07T12:00:00Z",
                "is_recurring": True,
                "recurrence_pattern": {"frequency": "daily"},
            },
        )

        # Expect 3
        self.assertEqual(response.status_code, 422)

    async def test_list_update_delete_event(self):
        # Given
        start = utc_now() + timedelta(days=3)
        event = Opportunity(
            title="Cleanup",
            start_date=start,
            end_date=start + timedelta(hours=2),
            location="Beach",
            max_volunteers=5,
        )
        far = Opportunity(
            title="Far away",
            start_date=start + timedelta(days=60),
            end_date=start + timedelta(days=60, hours=2),
        )
        self.db.add_all([event, far])
        self.db.commit()
        headers = await self.staff_headers()
        app.dependency_overrides[get_db_sync] = get_db_sync_for_test(db=self.db)
        client = TestClient(app)

        # When 1 - window filter
        response = client.get(
            "/staff/calendar/events/",
            headers=headers,
            params={
                "start": utc_now().isoformat(),
                "end": (utc_now() + timedelta(days=30)).isoformat(),
            },
        )

        # Expect 1
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            [item["id"] for item in response.json()["results"]], [str(event.id)]
        )

        # When 2 - partial update, explicit null clears the location
        response = client.put(
            f"/staff/calendar/events/{event.id}",
            headers=headers,
            json={"title": "Beach cleanup", "location": None},
        )

        # Expect 2
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["title"], "Beach cleanup")
        self.assertIsNone(response.json()["location"])
        self.assertEqual(response.json()["max_volunteers"], 5)

        # When 3 - end moved before the stored start
        response = client.put(
            f"/staff/calendar/events/{event.id}",
            headers=headers,
            json={"end_date": (start - timedelta(hours=1)).isoformat()},
        )

        # Expect 3
        self.assertEqual(response.status_code, 400)

        # When 4
        response = client.delete(f"/staff/calendar/events/{event.id}", headers=headers)

        # Expect 4
        self.assertEqual(response.status_code, 204)
        self.assertIsNone(
            self.db.execute(
                select(Opportunity).where(Opportunity.id == event.id)
            ).scalar()
        )

        # When 5
        response = client.delete(f"/staff/calendar/events/{event.id}", headers=headers)

        # Expect 5
        self.assertEqual(response.status_code, 404)

    async def test_event_rsvps(self):
        # Given
        start = utc_now() + timedelta(days=3)
        event = Opportunity(
            title="Cleanup", start_date=start, end_date=start + timedelta(hours=2)
        )
        user = User(email="vol@example.com", first_name="Ana", is_active=True)
        volunteer = Volunteer(user=user)
        self.db.add_all([event, user, volunteer])
        self.db.add(VolunteerRsvp(volunteer=volunteer, opportunity=event))
        self.db.commit()
        headers = await self.staff_headers()
        app.dependency_overrides[get_db_sync] = get_db_sync_for_test(db=self.db)
        client = TestClient(app)

        # When 1
        response = client.get(
            f"/staff/calendar/events/{event.id}/rsvps", headers=headers
        )

        # Expect 1
        self.assertEqual(response.status_code, 200)
        results = response.json()["results"]
        self.assertEqual(len(results), 1)
        self.assertEqual(results[0]["first_name"], "Ana")
        self.assertEqual(results[0]["status"], "pending")

        # When 2
        response = client.put(
            f"/staff/calendar/events/{event.id}/rsvps/{volunteer.id}",
            headers=headers,
            json={"status": "attended", "notes": "On time"},
        )

        # Expect 2
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "attended")
        self.assertEqual(response.json()["notes"], "On time")

        # When 3 - unknown status
        response = client.put(
            f"/staff/calendar/events/{event.id}/rsvps/{volunteer.id}",
            headers=headers,
            json={"status": "maybe"},
        )

        # Expect 3
        self.assertEqual(response.status_code, 400)

    async def test_event_skills_and_interests(self):
        # Given
        start = utc_now() + timedelta(days=3)
        event = Opportunity(
            title="Cleanup", start_date=start, end_date=start + timedelta(hours=2)
        )
        skill = Skill(name="Lifting")
        interest = Interest(name="Environment")
        self.db.add_all([event, skill, interest])
        self.db.commit()
        headers = await self.staff_headers()
        app.dependency_overrides[get_db_sync] = get_db_sync_for_test(db=self.db)
        client = TestClient(app)

        # When 1 - added twice
        client.post(f"/staff/calendar/events/{event.id}/skills/{skill.id}", headers=headers)
        response = client.post(
            f"/staff/calendar/events/{event.id}/skills/{skill.id}", headers=headers
        )

        # Expect 1 - still one row
        self.assertEqual(response.status_code, 200)
        stmt = select(OpportunityRequiredSkill).where(
            OpportunityRequiredSkill.opportunity_id == event.id
        )
        self.assertEqual(len(self.db.execute(stmt).scalars().all()), 1)

        # When 2
        response = client.delete(
            f"/staff/calendar/events/{event.id}/skills/{skill.id}", headers=headers
        )
        second = client.delete(
            f"/staff/calendar/events/{event.id}/skills/{skill.id}", headers=headers
        )

        # Expect 2
        self.assertEqual(response.status_code, 204)
        self.assertEqual(second.status_code, 404)

        # When 3
        response = client.post(
            f"/staff/calendar/events/{event.id}/interests/{interest.id}",
            headers=headers,
        )

        # Expect 3
        self.assertEqual(response.status_code, 200)

        # When 4 - unknown skill
        response = client.post(
            f"/staff/calendar/events/{event.id}/skills/6f0c3a57-2b4e-4c57-9a0e-0b7a1c1d2e3f",
            headers=headers,
        )

        # Expect 4
        self.assertEqual(response.status_code, 404)

    async def test_volunteer_cannot_use_calendar(self):
        # Given
        user = User(email="vol@example.com", is_active=True)
        self.db.add_all([user, Volunteer(user=user)])
        self.db.commit()
        (token, _) = await generate_token_from_user(db=self.db, user=user)
        app.dependency_overrides[get_db_sync] = get_db_sync_for_test(db=self.db)
        client = TestClient(app)

        # When
        response = client.get(
            "/staff/calendar/events/", headers={"Authorization": f"Bearer {token}"}
        )

        # Expect
        self.assertEqual(response.status_code, 403)

    def tearDown(self):
        self.db.close()

        # rollback - everything that happened with the
        # Session above (including calls to commit())
        # is rolled back.
        self.trans.rollback()

        # return connection to the Engine
        self.connection.close()
