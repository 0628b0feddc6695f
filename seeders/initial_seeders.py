from models import factory_session

from seeders.initial_interests import initial_interests
from seeders.initial_skills import initial_skills


def initial_seeders():
    with factory_session() as session:
        initial_skills(db=session, is_commit=True)
        initial_interests(db=session, is_commit=True)
