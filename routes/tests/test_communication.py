import alembic.config
from unittest import IsolatedAsyncioTestCase
from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient
from sqlalchemy import select
from core.security import generate_token_from_user
from models import engine, db, get_db_sync, get_db_sync_for_test
from models.Admin import Admin
from models.BulkCommunicationLog import BulkCommunicationLog
from models.Staff import Staff
from models.User import User
from models.Volunteer import Volunteer
from main import app


class TestCommunication(IsolatedAsyncioTestCase):
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

        self.staff_user = User(email="staff@example.com", first_name="Sam", is_active=True)
        self.admin_user = User(email="admin@example.com", is_active=True)
        admin_staff = Staff(user=self.admin_user)
        self.db.add_all(
            [
                self.staff_user,
                Staff(user=self.staff_user),
                self.admin_user,
                admin_staff,
                Admin(staff=admin_staff),
            ]
        )
        for email, active in [
            ("ana@example.com", True),
            ("budi@example.com", True),
            ("gone@example.com", False),
        ]:
            user = User(email=email, is_active=active)
            self.db.add_all([user, Volunteer(user=user)])
        self.db.commit()

    async def headers_for(self, user: User) -> dict:
        (token, _) = await generate_token_from_user(db=self.db, user=user)
        return {"Authorization": f"Bearer {token}"}

    @patch("services.communications.send_bulk_email", new_callable=AsyncMock)
    async def test_staff_messages_volunteers(self, mock_send: AsyncMock):
        # Given
        headers = await self.headers_for(self.staff_user)
        app.dependency_overrides[get_db_sync] = get_db_sync_for_test(db=self.db)
        client = TestClient(app)

        # When
        response = client.post(
            "/staff/communications/",
            headers=headers,
            json={"subject": "Saturday shift", "body": "See you at 9"},
        )

        # Expect - only active volunteers receive it
        self.assertEqual(response.status_code, 201)
        self.assertTrue(response.json()["email_sent"])
        communication = response.json()["communication"]
        self.assertEqual(communication["recipient_type"], "volunteers")
        self.assertEqual(communication["recipient_count"], 2)
        self.assertEqual(communication["status"], "sent")
        self.assertEqual(communication["sender"]["first_name"], "Sam")
        mock_send.assert_awaited_once()
        self.assertEqual(
            sorted(mock_send.call_args.kwargs["recipients"]),
            ["ana@example.com", "budi@example.com"],
        )

    @patch("services.communications.send_bulk_email", new_callable=AsyncMock)
    async def test_recipient_rules(self, mock_send: AsyncMock):
        # Given
        staff_headers = await self.headers_for(self.staff_user)
        admin_headers = await self.headers_for(self.admin_user)
        app.dependency_overrides[get_db_sync] = get_db_sync_for_test(db=self.db)
        client = TestClient(app)

        # When 1 - staff writing to staff
        response = client.post(
            "/staff/communications/",
            headers=staff_headers,
            json={"subject": "Meeting", "body": "Room 2", "recipient_type": "staff"},
        )

        # Expect 1
        self.assertEqual(response.status_code, 400)
        mock_send.assert_not_awaited()

        # When 2 - admin writing to everyone
        response = client.post(
            "/staff/communications/",
            headers=admin_headers,
            json={"subject": "Holiday", "body": "Closed Monday", "recipient_type": "both"},
        )

        # Expect 2
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["communication"]["recipient_count"], 4)

        # When 3 - unknown group
        response = client.post(
            "/staff/communications/",
            headers=admin_headers,
            json={"subject": "Hi", "body": "Hello", "recipient_type": "donors"},
        )

        # Expect 3
        self.assertEqual(response.status_code, 422)

        # When 4 - empty subject
        response = client.post(
            "/staff/communications/",
            headers=admin_headers,
            json={"subject": "", "body": "Hello"},
        )

        # Expect 4
        self.assertEqual(response.status_code, 422)

    @patch("services.communications.send_bulk_email", new_callable=AsyncMock)
    async def test_failed_delivery_is_logged(self, mock_send: AsyncMock):
        # Given
        mock_send.side_effect = Exception("SMTP down")
        headers = await self.headers_for(self.staff_user)
        app.dependency_overrides[get_db_sync] = get_db_sync_for_test(db=self.db)
        client = TestClient(app)

        # When
        response = client.post(
            "/staff/communications/",
            headers=headers,
            json={"subject": "Saturday shift", "body": "See you at 9"},
        )

        # Expect - the log row is kept with a failed status
        self.assertEqual(response.status_code, 201)
        self.assertFalse(response.json()["email_sent"])
        self.assertEqual(response.json()["email_error"], "SMTP down")
        self.assertEqual(response.json()["communication"]["status"], "failed")
        row = self.db.execute(select(BulkCommunicationLog)).scalar()
        self.assertEqual(row.status, "failed")

    @patch("services.communications.send_bulk_email", new_callable=AsyncMock)
    async def test_list_and_detail(self, mock_send: AsyncMock):
        # Given
        headers = await self.headers_for(self.staff_user)
        app.dependency_overrides[get_db_sync] = get_db_sync_for_test(db=self.db)
        client = TestClient(app)
        created = client.post(
            "/staff/communications/",
            headers=headers,
            json={"subject": "Saturday shift", "body": "See you at 9"},
        )
        communication_id = created.json()["communication"]["id"]

        # When 1
        response = client.get("/staff/communications/", headers=headers)

        # Expect 1
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["count"], 1)
        self.assertEqual(response.json()["results"][0]["id"], communication_id)
        self.assertEqual(
            response.json()["results"][0]["sender"]["email"], "staff@example.com"
        )

        # When 2
        response = client.get(
            f"/staff/communications/{communication_id}", headers=headers
        )

        # Expect 2
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["subject"], "Saturday shift")

        # When 3
        response = client.get(
            "/staff/communications/6f0c3a57-2b4e-4c57-9a0e-0b7a1c1d2e3f",
            headers=headers,
        )

        # Expect 3
        self.assertEqual(response.status_code, 404)

    def tearDown(self):
        self.db.close()

        # rollback - everything that happened with the
        # Session above (including calls to commit())
        # is rolled back.
        self.trans.rollback()

        # return connection to the Engine
        self.connection.close()
