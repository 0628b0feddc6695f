from datetime import timedelta
import alembic.config
from unittest import IsolatedAsyncioTestCase

from fastapi.testclient import TestClient
from core.helper import utc_now
from core.security import generate_token_from_user
from models import engine, db, get_db_sync, get_db_sync_for_test
from models.Interest import Interest
from models.Skill import Skill
from models.Staff import Staff
from models.User import User
from models.Volunteer import Volunteer
from models.VolunteerInterest import VolunteerInterest
from models.VolunteerSkill import VolunteerSkill
from main import app


class TestOnboarding(IsolatedAsyncioTestCase):
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

    async def test_list_onboarding(self):
        # Given
        joined = utc_now() - timedelta(days=10)
        complete_user = User(
            email="done@example.com",
            first_name="Dewi",
            phone="+62812",
            bio="Nurse",
            is_active=True,
        )
        complete = Volunteer(
            user=complete_user,
            availability={"monday": ["morning"]},
            media_release=True,
            created_at=joined,
        )
        partial_user = User(
            email="new@example.com", first_name="Budi", phone="+62813", is_active=True
        )
        partial = Volunteer(
            user=partial_user, media_release=True, created_at=joined + timedelta(days=1)
        )
        skill = Skill(name="First aid")
        interest = Interest(name="Health")
        self.db.add_all([complete_user, complete, partial_user, partial, skill, interest])
        self.db.flush()
        self.db.add_all(
            [
                VolunteerSkill(volunteer_id=complete.id, skill_id=skill.id),
                VolunteerInterest(volunteer_id=complete.id, interest_id=interest.id),
            ]
        )
        self.db.commit()
        (token, _) = await generate_token_from_user(db=self.db, user=self.staff_user)
        headers = {"Authorization": f"Bearer {token}"}
        app.dependency_overrides[get_db_sync] = get_db_sync_for_test(db=self.db)
        client = TestClient(app)

        # When 1
        response = client.get("/staff/onboarding/", headers=headers)

        # Expect 1 - oldest volunteer first
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["count"], 2)
        results = response.json()["results"]
        self.assertEqual(results[0]["email"], "done@example.com")
        self.assertEqual(results[0]["completion_percentage"], 100)
        self.assertTrue(results[0]["onboarding_complete"])
        self.assertEqual(results[1]["completion_percentage"], 20)
        self.assertFalse(results[1]["checklist"]["profile_filled"])
        self.assertTrue(results[1]["checklist"]["media_release_signed"])

        # When 2
        response = client.get(
            "/staff/onboarding/", headers=headers, params={"search": "budi"}
        )

        # Expect 2
        self.assertEqual(response.json()["count"], 1)
        self.assertEqual(response.json()["results"][0]["first_name"], "Budi")

    async def test_onboarding_requires_staff(self):
        # Given
        user = User(email="vol@example.com", is_active=True)
        self.db.add_all([user, Volunteer(user=user)])
        self.db.commit()
        (token, _) = await generate_token_from_user(db=self.db, user=user)
        app.dependency_overrides[get_db_sync] = get_db_sync_for_test(db=self.db)
        client = TestClient(app)

        # When
        response = client.get(
            "/staff/onboarding/", headers={"Authorization": f"Bearer {token}"}
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
