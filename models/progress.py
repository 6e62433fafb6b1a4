from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, TYPE_CHECKING
from datetime import datetime
from enum import Enum

if TYPE_CHECKING:
    from models.task import Task
    from models.user import User

class ProgressStatus(str, Enum):
    PENDING = "Pending"
    IN_PROGRESS = "InProgress"
    COMPLETED = "Completed"

PROGRESS_STATUSES = tuple(s.value for s in ProgressStatus)

class Progress(SQLModel, table=True):
    """Completion state of one task for one user."""
    __tablename__ = "progress"
    __table_args__ = {"extend_existing": True}

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    project_id: int = Field(foreign_key="projects.id", index=True)
    task_id: int = Field(foreign_key="tasks.id", index=True)
    status: ProgressStatus = Field(default=ProgressStatus.PENDING)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    task: "Task" = Relationship(back_populates="progress")
    user: "User" = Relationship(back_populates="progress")
