from datetime import timedelta
import alembic.config
from unittest import IsolatedAsyncioTestCase

from fastapi.testclient import TestClient
from sqlalchemy import select
from core.helper import utc_now
from core.security import generate_hash_password, generate_token_from_user
from models import engine, db, get_db_sync, get_db_sync_for_test
from models.Admin import Admin
from models.Staff import Staff
from models.Token import Token
from models.User import User
from models.Volunteer import Volunteer
from main import app


class TestAuth(IsolatedAsyncioTestCase):
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

    async def test_login_then_logout(self):
        # Given
        new_user = User(
            email="testuser@example.com",
            first_name="Test",
            password=generate_hash_password("password"),
            is_active=True,
        )
        self.db.add(new_user)
        self.db.add(Volunteer(user=new_user))
        self.db.commit()
        app.dependency_overrides[get_db_sync] = get_db_sync_for_test(db=self.db)
        client = TestClient(app)

        # When 1
        response = client.post(
            "/auth/email/signin/",
            json={"email": "testuser@example.com", "password": "password"},
        )

        # Expect 1
        self.assertEqual(response.status_code, 200)
        user_id = response.json().get("id", None)
        self.assertEqual(user_id, str(new_user.id))
        self.assertEqual(response.json()["role"], "volunteer")
        token = response.json().get("token", None)
        self.assertIsNotNone(token)
        session = self.db.query(Token).where(Token.user_id == new_user.id).scalar()
        self.assertIsNotNone(session)

        # When 2
        response = client.post(
            "/auth/email/signin/",
            json={"email": "unregistered@example.com", "password": "wrongpassword"},
        )

        # Expect 2
        self.assertEqual(response.status_code, 400)

        # When 3
        response = client.get(
            "/auth/me/",
            headers={"Authorization": f"Bearer {token}"},
        )

        # Expect 3
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["email"], "testuser@example.com")
        self.assertEqual(response.json()["role"], "volunteer")

        # When 4
        response = client.post(
            "/auth/logout/",
            headers={"Authorization": f"Bearer {token}"},
        )

        # Expect 4
        self.assertEqual(response.status_code, 200)
        stmt = select(Token).where(Token.user_id == new_user.id)
        self.assertIsNone(self.db.execute(stmt).scalar())

        # When 5
        response = client.get(
            "/auth/me/",
            headers={"Authorization": f"Bearer {token}"},
        )

        # Expect 5
        self.assertEqual(response.status_code, 401)

    async def test_expired_token_is_unauthorized(self):
        # Given
        new_user = User(email="expired@example.com", is_active=True)
        self.db.add_all([new_user, Volunteer(user=new_user)])
        self.db.commit()
        token, _ = await generate_token_from_user(db=self.db, user=new_user)
        session = self.db.execute(select(Token).where(Token.token == token)).scalar()
        session.expired_at = utc_now() - timedelta(minutes=1)
        self.db.commit()
        app.dependency_overrides[get_db_sync] = get_db_sync_for_test(db=self.db)
        client = TestClient(app)

        # When
        response = client.get(
            "/volunteer/opportunities/",
            headers={"Authorization": f"Bearer {token}"},
        )

        # Expect - the stale row is cleared out
        self.assertEqual(response.status_code, 401)
        stmt = select(Token).where(Token.user_id == new_user.id)
        self.assertIsNone(self.db.execute(stmt).scalar())

    async def test_login_is_case_insensitive_on_email(self):
        # Given
        new_user = User(
            email="mixed@example.com",
            password=generate_hash_password("password"),
            is_active=True,
        )
        self.db.add(new_user)
        self.db.commit()
        app.dependency_overrides[get_db_sync] = get_db_sync_for_test(db=self.db)
        client = TestClient(app)

        # When
        response = client.post(
            "/auth/email/signin/",
            json={"email": "  MIXED@Example.com ", "password": "password"},
        )

        # Expect
        self.assertEqual(response.status_code, 200)
        self.assertIsNone(response.json()["role"])

    async def test_login_rejects_inactive_user_and_wrong_password(self):
        # Given
        inactive = User(
            email="inactive@example.com",
            password=generate_hash_password("password"),
            is_active=False,
        )
        active = User(
            email="active@example.com",
            password=generate_hash_password("password"),
            is_active=True,
        )
        self.db.add_all([inactive, active])
        self.db.commit()
        app.dependency_overrides[get_db_sync] = get_db_sync_for_test(db=self.db)
        client = TestClient(app)

        # When 1
        response = client.post(
            "/auth/email/signin/",
            json={"email": "inactive@example.com", "password": "password"},
        )

        # Expect 1
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Invalid Credentials")

        # When 2
        response = client.post(
            "/auth/email/signin/",
            json={"email": "active@example.com", "password": "not-the-password"},
        )

        # Expect 2
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Invalid Credentials")

    async def test_role_resolution(self):
        # Given
        admin_user = User(
            email="admin@example.com",
            password=generate_hash_password("password"),
            is_active=True,
        )
        admin_staff = Staff(user=admin_user)
        self.db.add_all([admin_user, admin_staff, Admin(staff=admin_staff)])
        staff_user = User(
            email="staff@example.com",
            password=generate_hash_password("password"),
            is_active=True,
        )
        self.db.add_all([staff_user, Staff(user=staff_user)])
        self.db.commit()
        app.dependency_overrides[get_db_sync] = get_db_sync_for_test(db=self.db)
        client = TestClient(app)

        # When
        admin_response = client.post(
            "/auth/email/signin/",
            json={"email": "admin@example.com", "password": "password"},
        )
        staff_response = client.post(
            "/auth/email/signin/",
            json={"email": "staff@example.com", "password": "password"},
        )

        # Expect
        self.assertEqual(admin_response.json()["role"], "admin")
        self.assertEqual(staff_response.json()["role"], "staff")

    async def test_swagger_token(self):
        # Given
        new_user = User(
            email="swagger@example.com",
            password=generate_hash_password("password"),
            is_active=True,
        )
        self.db.add(new_user)
        self.db.commit()
        app.dependency_overrides[get_db_sync] = get_db_sync_for_test(db=self.db)
        client = TestClient(app)

        # When
        response = client.post(
            "/auth/token/",
            data={"username": "swagger@example.com", "password": "password"},
        )

        # Expect
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["token_type"], "bearer")
        self.assertIsNotNone(response.json()["access_token"])

    def tearDown(self):
        self.db.close()

        # rollback - everything that happened with the
        # Session above (including calls to commit())
        # is rolled back.
        self.trans.rollback()

        # return connection to the Engine
        self.connection.close()
