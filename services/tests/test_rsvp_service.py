from datetime import timedelta
import alembic.config
from unittest import IsolatedAsyncioTestCase
from unittest.mock import patch

from sqlalchemy import func, select

from core.exceptions import InvalidInputError, NotFoundError, RsvpError, RsvpErrorCode
from core.helper import utc_now
from models import engine, db
from models.Opportunity import Opportunity
from models.User import User
from models.Volunteer import Volunteer
from models.VolunteerRsvp import VolunteerRsvp
from services import rsvp as rsvpService


class TestRsvpService(IsolatedAsyncioTestCase):
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

        self.now = utc_now()
        self.start = start = self.now + timedelta(days=5)
        self.opportunity = Opportunity(
            title="Food drive",
            start_date=start,
            end_date=start + timedelta(hours=4),
            max_volunteers=1,
        )
        self.users = []
        for email in ["ana@example.com", "budi@example.com"]:
            user = User(email=email, is_active=True)
            self.db.add_all([user, Volunteer(user=user)])
            self.users.append(user)
        self.db.add(self.opportunity)
        self.db.commit()

    async def test_declined_rsvp_frees_the_spot(self):
        # Given
        first = rsvpService.create_rsvp(
            db=self.db,
            user_id=self.users[0].id,
            opportunity_id=self.opportunity.id,
            now=self.now,
        )
        self.assertEqual(first.status, "pending")

        # When 1 - the only spot is taken
        with self.assertRaises(RsvpError) as context:
            rsvpService.create_rsvp(
                db=self.db,
                user_id=self.users[1].id,
                opportunity_id=self.opportunity.id,
                now=self.now,
            )

        # Expect 1
        self.assertEqual(context.exception.code, RsvpErrorCode.OPPORTUNITY_FULL)
        self.assertTrue(context.exception.is_conflict)

        # When 2 - staff declines the first one
        rsvpService.update_rsvp_status(
            db=self.db,
            event_id=self.opportunity.id,
            volunteer_id=first.volunteer_id,
            status="declined",
        )
        second = rsvpService.create_rsvp(
            db=self.db,
            user_id=self.users[1].id,
            opportunity_id=self.opportunity.id,
            now=self.now,
        )

        # Expect 2
        self.assertEqual(second.opportunity_id, self.opportunity.id)

    async def test_duplicate_insert_maps_to_already_rsvpd(self):
        # Given - a row written by a request the lookups did not see
        user_id = self.users[0].id
        opportunity_id = self.opportunity.id
        rsvpService.create_rsvp(
            db=self.db, user_id=user_id, opportunity_id=opportunity_id, now=self.now
        )
        self.db.expunge_all()

        # When
        with patch("services.rsvp.get_rsvp", return_value=None), patch(
            "services.rsvp.count_active_rsvps", return_value=0
        ):
            with self.assertRaises(RsvpError) as context:
                rsvpService.create_rsvp(
                    db=self.db,
                    user_id=user_id,
                    opportunity_id=opportunity_id,
                    now=self.now,
                )

        # Expect
        self.assertEqual(context.exception.code, RsvpErrorCode.ALREADY_RSVPD)
        stmt = (
            select(func.count())
            .select_from(VolunteerRsvp)
            .where(VolunteerRsvp.opportunity_id == opportunity_id)
        )
        self.assertEqual(self.db.execute(stmt).scalar(), 1)

    async def test_rsvp_at_start_time_is_in_the_past(self):
        # When
        with self.assertRaises(RsvpError) as context:
            rsvpService.create_rsvp(
                db=self.db,
                user_id=self.users[0].id,
                opportunity_id=self.opportunity.id,
                now=self.start,
            )

        # Expect
        self.assertEqual(context.exception.code, RsvpErrorCode.OPPORTUNITY_IN_PAST)
        self.assertFalse(context.exception.is_not_found)

    async def test_user_without_volunteer_profile(self):
        # Given
        staff_user = User(email="staff@example.com", is_active=True)
        self.db.add(staff_user)
        self.db.commit()

        # When
        with self.assertRaises(RsvpError) as context:
            rsvpService.get_volunteer_rsvps(db=self.db, user_id=staff_user.id)

        # Expect
        self.assertEqual(context.exception.code, RsvpErrorCode.VOLUNTEER_NOT_FOUND)
        self.assertTrue(context.exception.is_not_found)

    async def test_update_rsvp_status(self):
        # Given
        volunteer = self.users[0].volunteer
        self.db.add(
            VolunteerRsvp(volunteer_id=volunteer.id, opportunity_id=self.opportunity.id)
        )
        self.db.commit()

        # When 1
        rsvp = rsvpService.update_rsvp_status(
            db=self.db,
            event_id=self.opportunity.id,
            volunteer_id=volunteer.id,
            status="no_show",
            notes="Did not call",
        )

        # Expect 1
        self.assertEqual(rsvp.status, "no_show")
        self.assertEqual(rsvp.notes, "Did not call")

        # When 2 / Expect 2
        with self.assertRaises(InvalidInputError):
            rsvpService.update_rsvp_status(
                db=self.db,
                event_id=self.opportunity.id,
                volunteer_id=volunteer.id,
                status="maybe",
            )

        # When 3 / Expect 3
        with self.assertRaises(NotFoundError):
            rsvpService.update_rsvp_status(
                db=self.db,
                event_id=self.opportunity.id,
                volunteer_id=self.users[1].volunteer.id,
                status="attended",
            )

    def tearDown(self):
        self.db.close()

        # rollback - everything that happened with the
        # Session above (including calls to commit())
        # is rolled back.
        self.trans.rollback()

        # return connection to the Engine
        self.connection.close()
