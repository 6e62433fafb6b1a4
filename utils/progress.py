# utils/progress.py
from typing import List

from sqlmodel import select

from models.progress import Progress, ProgressStatus
from models.project import Project

def compute_user_progress(project: Project, user_id: int, session) -> float:
    """Percent of the project's tasks the user has completed."""
    if not project.tasks:
        return 0.0
    done = session.exec(
        select(Progress).where(
            Progress.project_id == project.id,
            Progress.user_id == user_id,
            Progress.status == ProgressStatus.COMPLETED,
        )
    ).all()
    return float(len(done) * 100 / len(project.tasks))

def completion_by_user(project: Project, session) -> List[dict]:
    rows = []
    for a in project.assignments:
        entry = project.score_for(a.user_id)
        rows.append({
            "user_id": a.user_id,
            "name": a.user.display_name if a.user else f"User #{a.user_id}",
            "start_date": a.start_date,
            "end_date": a.end_date,
            "score": entry.score if entry else 0,
            "progress": compute_user_progress(project, a.user_id, session),
        })
    return rows
