# utils/projections.py
"""Read projections: model objects (plus the caller) to response dicts.

These only read attributes that are already loaded or lazily loadable, so
they work the same on rows fresh from a session and on hand-built objects.
"""
from typing import Optional

from models.assignment import ProjectAssignment
from models.progress import Progress
from models.project import Project
from models.score import ProjectScore
from models.task import Task
from models.user import User


def user_summary(user: Optional[User]) -> Optional[dict]:
    if user is None:
        return None
    return {"id": user.id, "name": user.name, "email": user.email}


def assignment_view(a: ProjectAssignment) -> dict:
    return {
        "userId": a.user_id,
        "user": user_summary(a.user),
        "startDate": a.start_date,
        "endDate": a.end_date,
    }


def score_view(s: ProjectScore) -> dict:
    return {"userId": s.user_id, "score": s.score}


def task_summary(t: Task) -> dict:
    return {"id": t.id, "name": t.name, "description": t.description, "score": t.score}


def task_view(t: Task) -> dict:
    return {
        **task_summary(t),
        "projectId": t.project_id,
        "createdAt": t.created_at,
        "updatedAt": t.updated_at,
    }


def progress_view(p: Progress, user_name: Optional[str] = None) -> dict:
    data = {
        "id": p.id,
        "userId": p.user_id,
        "projectId": p.project_id,
        "taskId": p.task_id,
        "status": p.status.value if hasattr(p.status, "value") else p.status,
        "createdAt": p.created_at,
        "updatedAt": p.updated_at,
    }
    if user_name is not None:
        data["userName"] = user_name
    return data


def project_view(project: Project, actor=None, with_tasks: bool = False) -> dict:
    """Project document as the given actor may see it.

    Admins (or ``actor=None``) get everything. Anyone else gets no
    ``assignedTo`` and only their own ``scoreByUser`` entry.
    """
    data = {
        "id": project.id,
        "name": project.name,
        "description": project.description,
        "totalScore": project.total_score,
        "tasks": [t.id for t in project.tasks],
        "assignedTo": [assignment_view(a) for a in project.assignments],
        "scoreByUser": [score_view(s) for s in project.scores],
        "createdAt": project.created_at,
        "updatedAt": project.updated_at,
    }
    if with_tasks:
        data["taskDetails"] = [task_view(t) for t in project.tasks]
    if actor is not None and not actor.is_admin:
        del data["assignedTo"]
        data["scoreByUser"] = [s for s in data["scoreByUser"] if s["userId"] == actor.id]
    return data


def task_detail_view(task: Task, actor, progress: Optional[Progress] = None) -> dict:
    if actor.is_admin:
        return {"task": task_summary(task)}
    user_progress = None
    if progress is not None:
        name = progress.user.display_name if progress.user is not None else None
        user_progress = progress_view(progress, user_name=name)
    return {"task": task_summary(task), "userProgress": user_progress}
