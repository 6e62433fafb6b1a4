import sys
from datetime import date, timedelta
from pathlib import Path

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine, select

# Make the flat top-level modules (db, api, models, managers, utils) importable
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

import models  # noqa: E402,F401
from models.progress import Progress  # noqa: E402
from models.user import User, ROLE_ADMIN, ROLE_MEMBER  # noqa: E402
from utils.auth import Actor  # noqa: E402


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as s:
        yield s


def make_user(session, email, role=ROLE_MEMBER, name=None) -> User:
    user = User(email=email, name=name, role=role)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture
def admin_user(session):
    return make_user(session, "admin@example.com", ROLE_ADMIN, "Ada Admin")


@pytest.fixture
def member_user(session):
    return make_user(session, "mia@example.com", ROLE_MEMBER, "Mia Member")


@pytest.fixture
def other_user(session):
    return make_user(session, "otto@example.com", ROLE_MEMBER, "Otto Other")


@pytest.fixture
def admin(admin_user):
    return Actor.from_user(admin_user)


@pytest.fixture
def member(member_user):
    return Actor.from_user(member_user)


@pytest.fixture
def other(other_user):
    return Actor.from_user(other_user)


@pytest.fixture
def dates():
    """A valid (start, end) pair: tomorrow through a month out."""
    today = date.today()
    return today + timedelta(days=1), today + timedelta(days=30)


@pytest.fixture
def progress_rows(session):
    """Progress records matching the given column filters."""
    def _rows(**filters):
        q = select(Progress)
        for key, value in filters.items():
            q = q.where(getattr(Progress, key) == value)
        return session.exec(q).all()
    return _rows
