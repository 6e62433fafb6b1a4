# db.py

#============================================================#
#                        Scoreboard-PM                       #
#============================================================#
# Version     : V2.0.0                                       #
#------------------------------------------------------------#
# Purpose     : Scoreboard-PM tracks projects, assigned      #
#               users, scored tasks and per-user progress    #
#               (SQLite/Postgres through SQLModel)           #
#                                                            #
# Change Log  :                                              #
#  - V2.0.0 : Assignments with date ranges, task scores,     #
#             progress records and per-user score rollup.    #
#============================================================#


from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from typing import Iterator, List, Optional

from sqlalchemy import create_engine
from sqlmodel import SQLModel, Session, select

import models  # noqa: F401  (registers every table on SQLModel.metadata)
from models.project import Project
from models.task import Task
from models.user import User, ROLE_ADMIN, ROLE_MEMBER

logger = logging.getLogger(__name__)

# ---- Config ----
try:
    import streamlit as st
    _secrets = getattr(st, "secrets", {})
except Exception:
    _secrets = {}


def _setting(name: str, default: Optional[str] = None) -> Optional[str]:
    """Streamlit secrets first, then the environment."""
    try:
        value = _secrets.get(name)
    except Exception:
        # st.secrets raises when no secrets.toml exists
        value = None
    return value or os.getenv(name) or default


DATABASE_URL = _setting("DATABASE_URL", "sqlite:///scoreboard.db")
ADMIN_EMAILS = {e.strip().lower() for e in (_setting("ADMIN_EMAILS", "") or "").split(",") if e.strip()}

# ---- Engine / Session ----
_connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, pool_pre_ping=True, future=True, connect_args=_connect_args)


def init_db(bind=None) -> None:
    SQLModel.metadata.create_all(bind or engine)


def get_session() -> Iterator[Session]:
    """Yield a session bound to the configured engine (FastAPI dependency)."""
    with Session(engine) as s:
        yield s


@contextmanager
def session_scope() -> Iterator[Session]:
    with Session(engine) as s:
        yield s


@contextmanager
def unit_of_work(session: Session) -> Iterator[Session]:
    """Commit everything written inside the block, or nothing.

    Multi-row operations (assignment fan-out, task fan-out, cascades) run
    inside one of these so a failure halfway leaves no partial state.
    """
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise


# ---- Identity helpers ----
def _role_for(email: str) -> str:
    return ROLE_ADMIN if email in ADMIN_EMAILS else ROLE_MEMBER


def _get_or_create_user(session: Session, email: str, name: Optional[str] = None) -> User:
    email = email.strip().lower()
    user = session.exec(select(User).where(User.email == email)).one_or_none()
    if not user:
        user = User(email=email, name=name, role=_role_for(email))
        session.add(user)
        session.commit()
        session.refresh(user)
        logger.info("Created user %s (%s)", user.id, user.role)
    elif _role_for(email) == ROLE_ADMIN and user.role != ROLE_ADMIN:
        user.role = ROLE_ADMIN
        session.add(user)
        session.commit()
    return user


def login(email: str, name: Optional[str] = None) -> dict:
    with session_scope() as s:
        user = _get_or_create_user(s, email, name)
        return {"id": user.id, "email": user.email, "name": user.name, "role": user.role}


def get_user(session: Session, user_id: int) -> Optional[User]:
    return session.get(User, user_id)


def list_users(session: Session) -> List[User]:
    return list(session.exec(select(User).order_by(User.email)).all())


def get_project(session: Session, project_id: int) -> Optional[Project]:
    return session.get(Project, project_id)


def get_task(session: Session, task_id: int) -> Optional[Task]:
    return session.get(Task, task_id)
