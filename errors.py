# errors.py
"""Exception classes for the project/task tracker.

Every error raised by the managers is a ``TrackerError`` carrying a
human-readable message and the HTTP-like status code the API reports.
"""

from typing import Optional, Any


class TrackerError(Exception):
    """Base exception for tracker errors."""

    status_code = 500

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class ValidationError(TrackerError):
    """Missing or malformed input: dates, required fields, enum membership."""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None, value: Optional[Any] = None):
        self.field = field
        self.value = value
        super().__init__(message)


class AuthenticationError(TrackerError):
    """No authenticated caller could be resolved for the request."""

    status_code = 401


class PermissionDeniedError(TrackerError):
    """The actor's role does not allow the operation."""

    status_code = 403

    def __init__(self, message: str, required_role: Optional[str] = None):
        self.required_role = required_role
        super().__init__(message)


class ForbiddenError(PermissionDeniedError):
    """The actor does not own, or is not a member of, the resource."""
    pass


class NotFoundError(TrackerError):
    status_code = 404


class ProjectNotFoundError(NotFoundError):
    def __init__(self, message: str = "Project not found", project_id: Optional[int] = None):
        self.project_id = project_id
        super().__init__(message)


class TaskNotFoundError(NotFoundError):
    def __init__(self, message: str = "Task not found", task_id: Optional[int] = None):
        self.task_id = task_id
        super().__init__(message)


class UserNotFoundError(NotFoundError):
    def __init__(self, message: str = "User not found", user_id: Optional[int] = None):
        self.user_id = user_id
        super().__init__(message)


class ProgressNotFoundError(NotFoundError):
    pass


class ConflictError(TrackerError):
    """The request clashes with the current state (e.g. duplicate assignment)."""

    status_code = 409


class InvalidTransitionError(ConflictError):
    """Exception for progress status changes out of a terminal state."""

    def __init__(self, message: str, from_state: str, to_state: str):
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(message)
