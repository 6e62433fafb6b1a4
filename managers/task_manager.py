# managers/task_manager.py
"""Task lifecycle within a project, and per-user progress on each task.

Creating a task adds its score to the project's total and opens a Pending
progress record for every user already assigned to the project. Deleting
it undoes both. Completing a task is the only place a user earns score.
"""
import logging
from datetime import datetime
from typing import Optional

from sqlmodel import select

import db
from errors import (
    ValidationError, ProjectNotFoundError, TaskNotFoundError,
    ProgressNotFoundError, ForbiddenError,
)
from models.progress import Progress, ProgressStatus
from models.task import Task, DEFAULT_TASK_SCORE
from utils.auth import Actor, require_admin
from utils.projections import task_view, task_detail_view, progress_view
from utils.scoring import (
    ensure_progress, find_progress, parse_status, check_transition,
    award_score, adjust_total_score,
)

logger = logging.getLogger(__name__)


def _get_task(session, task_id: int) -> Task:
    task = db.get_task(session, task_id)
    if not task:
        raise TaskNotFoundError(task_id=task_id)
    return task


def _coerce_score(score) -> int:
    if not score:
        return DEFAULT_TASK_SCORE
    try:
        return int(score)
    except (TypeError, ValueError):
        raise ValidationError("Task score must be a whole number", field="score", value=score)


def purge_task(session, task: Task) -> int:
    """Delete a task and its progress records. Returns how many records went."""
    records = session.exec(select(Progress).where(Progress.task_id == task.id)).all()
    for p in records:
        session.delete(p)
    session.delete(task)
    return len(records)


def create_task(session, actor: Actor, project_id: int, name: str, description: str,
                score: Optional[int] = None) -> dict:
    if not name or not description:
        raise ValidationError("Both name and description are required")
    project = db.get_project(session, project_id)
    if not project:
        raise ProjectNotFoundError(project_id=project_id)
    points = _coerce_score(score)

    with db.unit_of_work(session):
        task = Task(project_id=project.id, name=name, description=description, score=points)
        project.tasks.append(task)
        adjust_total_score(project, task.score)
        project.updated_at = datetime.utcnow()
        session.add(project)
        session.flush()
        created = sum(ensure_progress(session, a.user_id, task)[1] for a in project.assignments)

    session.refresh(task)
    logger.info("Created task %s in project %s (score=%s, %s progress records)",
                task.id, project.id, task.score, created)
    return task_view(task)


@require_admin("You are not authorized to delete tasks")
def delete_task(session, actor: Actor, task_id: int) -> None:
    task = _get_task(session, task_id)
    points = task.score
    project = db.get_project(session, task.project_id)

    with db.unit_of_work(session):
        removed = purge_task(session, task)
        if project:
            adjust_total_score(project, -points)
            project.updated_at = datetime.utcnow()
            session.add(project)

    logger.info("Deleted task %s (%s progress records)", task_id, removed)


@require_admin("You are not authorized to update tasks")
def update_task(session, actor: Actor, task_id: int, name: Optional[str] = None,
                description: Optional[str] = None) -> dict:
    # score is deliberately not editable here
    task = _get_task(session, task_id)
    with db.unit_of_work(session):
        if name:
            task.name = name
        if description:
            task.description = description
        task.updated_at = datetime.utcnow()
        session.add(task)
    session.refresh(task)
    logger.info("Updated task %s", task.id)
    return task_view(task)


def get_task(session, actor: Actor, task_id: int) -> dict:
    task = _get_task(session, task_id)
    progress = None if actor.is_admin else find_progress(session, actor.id, task.id)
    return task_detail_view(task, actor, progress)


def update_progress(session, actor: Actor, task_id: int, status) -> dict:
    """Move the caller's progress on a task to ``status``.

    Completed is terminal. Reaching it adds the task's score to the caller's
    entry on the owning project.
    """
    task = _get_task(session, task_id)
    new_status = parse_status(status)

    progress = find_progress(session, actor.id, task.id)
    if not progress:
        raise ProgressNotFoundError("Progress record for the user not found for this task")
    if progress.user_id != actor.id:
        raise ForbiddenError("You are not authorized to update this progress")
    check_transition(progress.status, new_status)

    project = None
    if new_status == ProgressStatus.COMPLETED:
        project = db.get_project(session, task.project_id)
        if not project:
            raise ProjectNotFoundError(project_id=task.project_id)

    with db.unit_of_work(session):
        progress.status = new_status
        progress.updated_at = datetime.utcnow()
        session.add(progress)
        if project is not None:
            award_score(project, actor.id, task.score)
            session.add(project)

    session.refresh(progress)
    if project is not None:
        logger.info("User %s completed task %s (+%s on project %s)",
                    actor.id, task.id, task.score, project.id)
    else:
        logger.info("User %s moved task %s to %s", actor.id, task.id, new_status.value)
    return progress_view(progress)
