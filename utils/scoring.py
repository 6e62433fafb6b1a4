# utils/scoring.py
"""Progress and score rules shared by the project and task managers.

The helpers here mutate model objects in the caller's session and never
commit; the calling manager owns the unit of work.
"""
from datetime import date, datetime
from typing import Optional, Tuple

from dateutil import parser
from sqlmodel import select

from errors import ValidationError, InvalidTransitionError
from models.progress import Progress, ProgressStatus, PROGRESS_STATUSES
from models.project import Project
from models.score import ProjectScore
from models.task import Task


# ---- progress records ----
def ensure_progress(session, user_id: int, task: Task) -> Tuple[Progress, bool]:
    """Return the (user, task) progress record, creating a Pending one if missing.

    The second item tells whether a record was created. Task must be flushed.
    """
    existing = session.exec(
        select(Progress).where(Progress.task_id == task.id, Progress.user_id == user_id)
    ).first()
    if existing:
        return existing, False
    p = Progress(user_id=user_id, project_id=task.project_id, task_id=task.id,
                 status=ProgressStatus.PENDING)
    session.add(p)
    return p, True


def find_progress(session, user_id: int, task_id: int) -> Optional[Progress]:
    return session.exec(
        select(Progress).where(Progress.task_id == task_id, Progress.user_id == user_id)
    ).first()


def parse_status(value) -> ProgressStatus:
    if isinstance(value, ProgressStatus):
        return value
    if value not in PROGRESS_STATUSES:
        raise ValidationError("Invalid progress status", field="status", value=value)
    return ProgressStatus(value)


def check_transition(current: ProgressStatus, new: ProgressStatus) -> None:
    # Completed is terminal; everything else may move anywhere
    if current == ProgressStatus.COMPLETED:
        raise InvalidTransitionError("This task has already been completed",
                                     from_state=current.value, to_state=new.value)


# ---- scores ----
def track_user(project: Project, user_id: int) -> ProjectScore:
    entry = project.score_for(user_id)
    if entry is None:
        entry = ProjectScore(user_id=user_id, score=0)
        project.scores.append(entry)
    return entry


def award_score(project: Project, user_id: int, points: int) -> ProjectScore:
    entry = track_user(project, user_id)
    entry.score += points
    return entry


def adjust_total_score(project: Project, delta: int) -> int:
    # no floor at zero
    project.total_score = (project.total_score or 0) + delta
    return project.total_score


# ---- dates ----
def parse_datetime(x) -> Optional[datetime]:
    """Parse to a naive local datetime; aware values are shifted to local time first."""
    if not x:
        return None
    if isinstance(x, datetime):
        dt = x
    elif isinstance(x, date):
        return datetime(x.year, x.month, x.day)
    else:
        try:
            dt = parser.parse(str(x))
        except (ValueError, OverflowError):
            raise ValidationError("Invalid date format for start or end date", value=x)
    if dt.tzinfo is not None:
        dt = dt.astimezone().replace(tzinfo=None)
    return dt


def parse_date(x) -> Optional[date]:
    dt = parse_datetime(x)
    return dt.date() if dt else None


def parse_assignment_dates(start, end, today: Optional[date] = None) -> Tuple[date, date]:
    """Validate an assignment's date range.

    Ordering compares full timestamps; the checks against today compare days.
    """
    if not start or not end:
        raise ValidationError("Start and end dates are required")
    start_dt, end_dt = parse_datetime(start), parse_datetime(end)
    today = today or date.today()
    if start_dt >= end_dt:
        raise ValidationError("Start date must be earlier than end date", field="startDate", value=start)
    if start_dt.date() < today:
        raise ValidationError("Start date cannot be earlier than today", field="startDate", value=start)
    if end_dt.date() < today:
        raise ValidationError("End date cannot be earlier than today", field="endDate", value=end)
    return start_dt.date(), end_dt.date()
