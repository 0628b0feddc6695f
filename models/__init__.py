from sqlalchemy import JSON, create_engine, event
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import (
    sessionmaker,
    DeclarativeBase,
    scoped_session,
    Session as SqlalchemySession,
)


from settings import DATABASE_URL


if DATABASE_URL.startswith("sqlite"):
    engine = create_engine(
        DATABASE_URL, connect_args={"check_same_thread": False}
    )

    # pysqlite issues its own BEGIN, which breaks SAVEPOINT handling
    @event.listens_for(engine, "connect")
    def _sqlite_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _sqlite_begin(conn):
        conn.exec_driver_sql("BEGIN")

else:
    engine = create_engine(
        DATABASE_URL,
        pool_size=20,
        max_overflow=0,
        pool_timeout=300,
    )
db = sessionmaker(engine, future=True)
factory_session = scoped_session(db)


def get_db_sync():
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_db_sync_for_test(db: SqlalchemySession):
    def inner():
        yield db

    return inner


# JSONB on postgres, plain JSON elsewhere
JSONType = JSON().with_variant(JSONB(), "postgresql")


class Base(DeclarativeBase):
    pass


# define all model for alembic migration
from models.User import User  # NOQA
from models.Token import Token  # NOQA
from models.RefreshToken import RefreshToken  # NOQA
from models.ResetPassword import ResetPassword  # NOQA
from models.Volunteer import Volunteer  # NOQA
from models.Staff import Staff  # NOQA
from models.Admin import Admin  # NOQA
from models.Opportunity import Opportunity  # NOQA
from models.VolunteerRsvp import VolunteerRsvp  # NOQA
from models.VolunteerHours import VolunteerHours  # NOQA
from models.Skill import Skill  # NOQA
from models.Interest import Interest  # NOQA
from models.VolunteerSkill import VolunteerSkill  # NOQA
from models.VolunteerInterest import VolunteerInterest  # NOQA
from models.OpportunityRequiredSkill import OpportunityRequiredSkill  # NOQA
from models.OpportunityInterest import OpportunityInterest  # NOQA
from models.BulkCommunicationLog import BulkCommunicationLog  # NOQA
