from datetime import timedelta
import alembic.config
from unittest import IsolatedAsyncioTestCase

from fastapi.testclient import TestClient
from core.helper import utc_now
from core.security import generate_token_from_user
from models import engine, db, get_db_sync, get_db_sync_for_test
from models.Opportunity import Opportunity
from models.Staff import Staff
from models.User import User
from models.Volunteer import Volunteer
from models.VolunteerHours import VolunteerHours
from models.VolunteerRsvp import VolunteerRsvp
from main import app


class TestDashboard(IsolatedAsyncioTestCase):
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

    async def test_staff_dashboard_stats(self):
        # Given
        now = utc_now()
        active_user = User(email="ana@example.com", is_active=True)
        inactive_user = User(email="gone@example.com", is_active=False)
        active = Volunteer(user=active_user)
        inactive = Volunteer(user=inactive_user)
        past_start = now - timedelta(days=2)
        past = Opportunity(
            title="Done", start_date=past_start, end_date=past_start + timedelta(hours=3)
        )
        upcoming_start = now + timedelta(days=2)
        upcoming = Opportunity(
            title="Soon",
            start_date=upcoming_start,
            end_date=upcoming_start + timedelta(hours=3),
        )
        self.db.add_all([active_user, inactive_user, active, inactive, past, upcoming])
        self.db.flush()
        self.db.add_all(
            [
                VolunteerRsvp(volunteer_id=active.id, opportunity_id=upcoming.id),
                VolunteerRsvp(
                    volunteer_id=inactive.id,
                    opportunity_id=upcoming.id,
                    status="confirmed",
                ),
                VolunteerHours(
                    volunteer_id=active.id,
                    opportunity_id=past.id,
                    date=past.start_date,
                    hours=2.5,
                ),
                VolunteerHours(
                    volunteer_id=inactive.id,
                    opportunity_id=past.id,
                    date=past.start_date,
                    hours=1,
                ),
            ]
        )
        self.db.commit()
        (token, _) = await generate_token_from_user(db=self.db, user=self.staff_user)
        app.dependency_overrides[get_db_sync] = get_db_sync_for_test(db=self.db)
        client = TestClient(app)

        # When
        response = client.get(
            "/staff/dashboard/stats/", headers={"Authorization": f"Bearer {token}"}
        )

        # Expect
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json(),
            {
                "active_volunteers": 1,
                "total_volunteer_hours": 3.5,
                "upcoming_opportunities": 1,
                "pending_rsvps": 1,
            },
        )

    async def test_dashboard_requires_login(self):
        # Given
        app.dependency_overrides[get_db_sync] = get_db_sync_for_test(db=self.db)
        client = TestClient(app)

        # When
        response = client.get("/staff/dashboard/stats/")

        # Expect
        self.assertEqual(response.status_code, 401)

    def tearDown(self):
        self.db.close()

        # rollback - everything that happened with the
        # Session above (including calls to commit())
        # is rolled back.
        self.trans.rollback()

        # return connection to the Engine
        self.connection.close()
