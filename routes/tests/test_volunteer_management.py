from datetime import timedelta
from unittest.mock import AsyncMock, patch
import alembic.config
from unittest import IsolatedAsyncioTestCase

from fastapi.testclient import TestClient
from sqlalchemy import select
from core.helper import utc_now
from core.security import generate_hash_password, generate_token_from_user
from models import engine, db, get_db_sync, get_db_sync_for_test
from models.Interest import Interest
from models.Opportunity import Opportunity
from models.Skill import Skill
from models.Staff import Staff
from models.Token import Token
from models.User import User
from models.Volunteer import Volunteer
from models.VolunteerHours import VolunteerHours
from models.VolunteerSkill import VolunteerSkill
from main import app


class TestVolunteerManagement(IsolatedAsyncioTestCase):
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

    def add_volunteer(self, email: str, first_name: str, **kwargs) -> Volunteer:
        user = User(
            email=email,
            first_name=first_name,
            last_name="Doe",
            is_active=True,
            password=generate_hash_password("password"),
        )
        volunteer = Volunteer(user=user, **kwargs)
        self.db.add_all([user, volunteer])
        return volunteer

    @patch("services.people.send_welcome_email", new_callable=AsyncMock)
    async def test_create_volunteer(self, mock_send_welcome_email):
        # Given
        headers = await self.staff_headers()
        app.dependency_overrides[get_db_sync] = get_db_sync_for_test(db=self.db)
        client = TestClient(app)

        # When 1
        response = client.post(
            "/staff/volunteers/",
            headers=headers,
            json={
                "email": "New.Volunteer@Example.com",
                "first_name": "New",
                "last_name": "Volunteer",
                "availability": {"friday": ["evening"]},
            },
        )

        # Expect 1
        self.assertEqual(response.status_code, 201)
        self.assertTrue(response.json()["email_sent"])
        volunteer = response.json()["volunteer"]
        self.assertEqual(volunteer["user"]["email"], "new.volunteer@example.com")
        self.assertEqual(volunteer["availability"], {"friday": ["evening"]})
        mock_send_welcome_email.assert_awaited_once()
        self.assertEqual(
            mock_send_welcome_email.await_args.kwargs["role"], "volunteer"
        )

        # When 2 - same email, different case
        response = client.post(
            "/staff/volunteers/",
            headers=headers,
            json={
                "email": "new.volunteer@example.com",
                "first_name": "Again",
                "last_name": "Volunteer",
            },
        )

        # Expect 2
        self.assertEqual(response.status_code, 409)

        # When 3 - background check pending, no credentials yet
        response = client.post(
            "/staff/volunteers/",
            headers=headers,
            json={
                "email": "pending@example.com",
                "first_name": "Pending",
                "last_name": "Check",
                "background_check_status": "pending",
            },
        )

        # Expect 3
        self.assertEqual(response.status_code, 201)
        self.assertFalse(response.json()["email_sent"])
        self.assertEqual(mock_send_welcome_email.await_count, 1)

    @patch("services.people.send_welcome_email", new_callable=AsyncMock)
    async def test_create_volunteer_when_email_fails(self, mock_send_welcome_email):
        # Given
        mock_send_welcome_email.side_effect = Exception("smtp down")
        headers = await self.staff_headers()
        app.dependency_overrides[get_db_sync] = get_db_sync_for_test(db=self.db)
        client = TestClient(app)

        # When
        response = client.post(
            "/staff/volunteers/",
            headers=headers,
            json={"email": "vol@example.com", "first_name": "Vol", "last_name": "Doe"},
        )

        # Expect - the account stays
        self.assertEqual(response.status_code, 201)
        self.assertFalse(response.json()["email_sent"])
        self.assertEqual(response.json()["email_error"], "smtp down")
        stmt = select(User).where(User.email == "vol@example.com")
        self.assertIsNotNone(self.db.execute(stmt).scalar())

    async def test_list_and_update_volunteers(self):
        # Given
        ana = self.add_volunteer("ana@example.com", "Ana", is_alumni=True)
        self.add_volunteer("budi@example.com", "Budi")
        self.db.commit()
        headers = await self.staff_headers()
        app.dependency_overrides[get_db_sync] = get_db_sync_for_test(db=self.db)
        client = TestClient(app)

        # When 1
        response = client.get("/staff/volunteers/", headers=headers)

        # Expect 1
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["count"], 2)
        self.assertEqual(response.json()["page"], 1)

        # When 2 - search and filter
        response = client.get(
            "/staff/volunteers/",
            headers=headers,
            params={"search": "ana", "is_alumni": True},
        )

        # Expect 2
        self.assertEqual(response.json()["count"], 1)
        self.assertEqual(response.json()["results"][0]["id"], str(ana.id))

        # When 3
        response = client.put(
            f"/staff/volunteers/{ana.id}",
            headers=headers,
            json={"phone": "555-0000", "background_check_status": "approved"},
        )

        # Expect 3
        self.assertEqual(response.status_code, 200)
        self.db.refresh(ana)
        self.assertEqual(ana.user.phone, "555-0000")
        self.assertEqual(ana.background_check_status, "approved")

        # When 4 - taking another volunteer's email
        response = client.put(
            f"/staff/volunteers/{ana.id}",
            headers=headers,
            json={"email": "budi@example.com"},
        )

        # Expect 4
        self.assertEqual(response.status_code, 409)

        # When 5 - unknown background check status
        response = client.put(
            f"/staff/volunteers/{ana.id}",
            headers=headers,
            json={"background_check_status": "lost"},
        )

        # Expect 5
        self.assertEqual(response.status_code, 400)

    async def test_get_volunteer(self):
        # Given
        volunteer = self.add_volunteer("ana@example.com", "Ana")
        self.db.commit()
        headers = await self.staff_headers()
        app.dependency_overrides[get_db_sync] = get_db_sync_for_test(db=self.db)
        client = TestClient(app)

        # When 1
        response = client.get(f"/staff/volunteers/{volunteer.id}", headers=headers)

        # Expect 1
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["user"]["first_name"], "Ana")

        # When 2
        response = client.get(
            "/staff/volunteers/6f0c3a57-2b4e-4c57-9a0e-0b7a1c1d2e3f", headers=headers
        )

        # Expect 2
        self.assertEqual(response.status_code, 404)

    @patch("services.people.send_welcome_email", new_callable=AsyncMock)
    async def test_resend_credentials(self, mock_send_welcome_email):
        # Given
        volunteer = self.add_volunteer("ana@example.com", "Ana")
        self.db.commit()
        (volunteer_token, _) = await generate_token_from_user(
            db=self.db, user=volunteer.user
        )
        old_password = volunteer.user.password
        headers = await self.staff_headers()
        app.dependency_overrides[get_db_sync] = get_db_sync_for_test(db=self.db)
        client = TestClient(app)

        # When
        response = client.post(
            f"/staff/volunteers/{volunteer.id}/resend-credentials", headers=headers
        )

        # Expect - new password, old sessions gone
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["email_sent"])
        self.db.refresh(volunteer.user)
        self.assertNotEqual(volunteer.user.password, old_password)
        stmt = select(Token).where(Token.token == volunteer_token)
        self.assertIsNone(self.db.execute(stmt).scalar())

    async def test_volunteer_hours(self):
        # Given
        volunteer = self.add_volunteer("ana@example.com", "Ana")
        start = utc_now() - timedelta(days=2)
        opportunity = Opportunity(
            title="Food drive", start_date=start, end_date=start + timedelta(hours=4)
        )
        self.db.add(opportunity)
        self.db.flush()
        self.db.add(
            VolunteerHours(
                volunteer_id=volunteer.id,
                opportunity_id=opportunity.id,
                date=start,
                hours=2,
                verified_at=utc_now(),
            )
        )
        self.db.commit()
        headers = await self.staff_headers()
        app.dependency_overrides[get_db_sync] = get_db_sync_for_test(db=self.db)
        client = TestClient(app)

        # When 1
        response = client.post(
            f"/staff/volunteers/{volunteer.id}/hours",
            headers=headers,
            json={
                "opportunity_id": str(opportunity.id),
                "date": start.isoformat(),
                "hours": 3.5,
                "notes": "Sorting",
            },
        )

        # Expect 1 - new entries are unverified
        self.assertEqual(response.status_code, 201)
        self.assertFalse(response.json()["is_verified"])

        # When 2
        response = client.get(f"/staff/volunteers/{volunteer.id}/hours", headers=headers)

        # Expect 2
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["total_hours"], 5.5)
        self.assertEqual(len(response.json()["results"]), 2)
        self.assertEqual(response.json()["results"][0]["opportunity_title"], "Food drive")

        # When 3 - only verified
        response = client.get(
            f"/staff/volunteers/{volunteer.id}/hours",
            headers=headers,
            params={"verified": True},
        )

        # Expect 3
        self.assertEqual(response.json()["total_hours"], 2)

        # When 4 - zero hours
        response = client.post(
            f"/staff/volunteers/{volunteer.id}/hours",
            headers=headers,
            json={
                "opportunity_id": str(opportunity.id),
                "date": start.isoformat(),
                "hours": 0,
            },
        )

        # Expect 4
        self.assertEqual(response.status_code, 422)

    async def test_volunteer_skills_and_interests(self):
        # Given
        volunteer = self.add_volunteer("ana@example.com", "Ana")
        skill = Skill(name="Driving")
        interest = Interest(name="Elderly care")
        self.db.add_all([skill, interest])
        self.db.commit()
        headers = await self.staff_headers()
        app.dependency_overrides[get_db_sync] = get_db_sync_for_test(db=self.db)
        client = TestClient(app)

        # When 1
        response = client.post(
            f"/staff/volunteers/{volunteer.id}/skills",
            headers=headers,
            json={"skill_id": str(skill.id), "proficiency_level": "intermediate"},
        )

        # Expect 1
        self.assertEqual(response.status_code, 201)

        # When 2 - assigning again changes the level
        response = client.post(
            f"/staff/volunteers/{volunteer.id}/skills",
            headers=headers,
            json={"skill_id": str(skill.id), "proficiency_level": "advanced"},
        )

        # Expect 2
        self.assertEqual(response.status_code, 200)
        response = client.get(f"/staff/volunteers/{volunteer.id}/skills", headers=headers)
        self.assertEqual(len(response.json()["results"]), 1)
        self.assertEqual(response.json()["results"][0]["proficiency_level"], "advanced")

        # When 3 - unknown level
        response = client.post(
            f"/staff/volunteers/{volunteer.id}/skills",
            headers=headers,
            json={"skill_id": str(skill.id), "proficiency_level": "guru"},
        )

        # Expect 3
        self.assertEqual(response.status_code, 400)

        # When 4
        response = client.delete(
            f"/staff/volunteers/{volunteer.id}/skills/{skill.id}", headers=headers
        )

        # Expect 4
        self.assertEqual(response.status_code, 204)
        stmt = select(VolunteerSkill).where(VolunteerSkill.volunteer_id == volunteer.id)
        self.assertIsNone(self.db.execute(stmt).scalar())

        # When 5
        response = client.post(
            f"/staff/volunteers/{volunteer.id}/interests",
            headers=headers,
            json={"interest_id": str(interest.id)},
        )
        duplicate = client.post(
            f"/staff/volunteers/{volunteer.id}/interests",
            headers=headers,
            json={"interest_id": str(interest.id)},
        )

        # Expect 5
        self.assertEqual(response.status_code, 201)
        self.assertEqual(duplicate.status_code, 409)
        response = client.get(
            f"/staff/volunteers/{volunteer.id}/interests", headers=headers
        )
        self.assertEqual(response.json()["results"][0]["name"], "Elderly care")

        # When 6
        response = client.delete(
            f"/staff/volunteers/{volunteer.id}/interests/{interest.id}", headers=headers
        )

        # Expect 6
        self.assertEqual(response.status_code, 204)

    def tearDown(self):
        self.db.close()

        # rollback - everything that happened with the
        # Session above (including calls to commit())
        # is rolled back.
        self.trans.rollback()

        # return connection to the Engine
        self.connection.close()
