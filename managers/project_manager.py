# managers/project_manager.py
import logging
from datetime import date, datetime
from typing import List, Optional

from sqlmodel import select

import db
from errors import (
    ValidationError, ConflictError, ForbiddenError,
    ProjectNotFoundError, UserNotFoundError,
)
from managers.task_manager import purge_task
from models.assignment import ProjectAssignment
from models.project import Project
from models.user import User
from utils.auth import Actor, require_admin
from utils.projections import project_view
from utils.scoring import ensure_progress, track_user, parse_assignment_dates

logger = logging.getLogger(__name__)


def _get_project(session, project_id: int) -> Project:
    project = db.get_project(session, project_id)
    if not project:
        raise ProjectNotFoundError(project_id=project_id)
    return project


def list_projects(session, actor: Actor) -> List[dict]:
    """Every project for admins; only the ones they are assigned to for others."""
    q = select(Project).order_by(Project.created_at.desc(), Project.id.desc())
    if not actor.is_admin:
        q = (
            q.join(ProjectAssignment, ProjectAssignment.project_id == Project.id)
             .where(ProjectAssignment.user_id == actor.id)
        )
    return [project_view(p, with_tasks=True) for p in session.exec(q).all()]


@require_admin("You are not authorised to perform this task as you are not an Admin")
def create_project(session, actor: Actor, name: str, description: Optional[str] = None) -> dict:
    if not name or not name.strip():
        raise ValidationError("Name of project is required", field="name")
    with db.unit_of_work(session):
        p = Project(name=name.strip(), description=description)
        session.add(p)
    session.refresh(p)
    logger.info("Created project %s (%s)", p.id, p.name)
    return project_view(p)


@require_admin("You are not authorized to perform this task as you are not an Admin")
def assign_user(session, actor: Actor, project_id: int, user_id: int,
                start_date, end_date, today: Optional[date] = None) -> dict:
    """Assign a user for a date range and open their progress on every task.

    Dates are compared by day; both must be today or later and start must
    come before end.
    """
    user = session.get(User, user_id) if user_id else None
    if not user:
        raise UserNotFoundError(user_id=user_id)
    start, end = parse_assignment_dates(start_date, end_date, today)
    project = _get_project(session, project_id)
    if project.is_assigned(user.id):
        raise ConflictError("User is already assigned to this project")

    with db.unit_of_work(session):
        track_user(project, user.id)
        project.assignments.append(
            ProjectAssignment(user_id=user.id, start_date=start, end_date=end)
        )
        project.updated_at = datetime.utcnow()
        session.add(project)
        created = sum(ensure_progress(session, user.id, t)[1] for t in project.tasks)

    logger.info("Assigned user %s to project %s from %s to %s (%s progress records)",
                user.id, project.id, start, end, created)
    return project_view(project)


def remove_user(session, project_id: int, user_id: int) -> Optional[dict]:
    """Drop a user's assignment. Returns None when they were not assigned.

    The user's score entry and progress records stay.
    """
    if not user_id:
        raise UserNotFoundError()
    project = _get_project(session, project_id)
    assignment = project.assignment_for(user_id)
    if assignment is None:
        logger.info("User %s is not assigned to project %s", user_id, project_id)
        return None

    with db.unit_of_work(session):
        project.assignments.remove(assignment)
        project.updated_at = datetime.utcnow()
        session.add(project)

    logger.info("Removed user %s from project %s", user_id, project_id)
    return project_view(project)


def get_project(session, actor: Actor, project_id: int) -> dict:
    project = _get_project(session, project_id)
    if not actor.is_admin and not project.is_assigned(actor.id):
        raise ForbiddenError(
            "You are not an admin and also not assigned to this project to see its details"
        )
    return project_view(project, actor=actor, with_tasks=True)


@require_admin("You are not authorised to perform this action")
def update_project(session, actor: Actor, project_id: int, name: Optional[str] = None,
                   description: Optional[str] = None) -> dict:
    project = _get_project(session, project_id)
    with db.unit_of_work(session):
        if name and name.strip():
            project.name = name.strip()
        if description is not None:
            project.description = description
        project.updated_at = datetime.utcnow()
        session.add(project)
    logger.info("Updated project %s", project.id)
    return project_view(project)


@require_admin("You are not authorised to delete this Project")
def delete_project(session, actor: Actor, project_id: int) -> int:
    project = _get_project(session, project_id)
    with db.unit_of_work(session):
        removed = sum(purge_task(session, t) for t in list(project.tasks))
        session.delete(project)
    logger.info("Deleted project %s (%s progress records)", project_id, removed)
    return project_id
