from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime

if TYPE_CHECKING:
    from models.assignment import ProjectAssignment
    from models.score import ProjectScore
    from models.task import Task

class Project(SQLModel, table=True):
    __tablename__ = "projects"
    __table_args__ = {"extend_existing": True}

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    description: Optional[str] = None
    # sum of the scores of the tasks currently under this project
    total_score: int = Field(default=0)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    assignments: List["ProjectAssignment"] = Relationship(
        back_populates="project",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "order_by": "ProjectAssignment.id"},
    )
    scores: List["ProjectScore"] = Relationship(
        back_populates="project",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "order_by": "ProjectScore.id"},
    )
    tasks: List["Task"] = Relationship(
        back_populates="project",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "order_by": "Task.id"},
    )

    def assignment_for(self, user_id: int) -> Optional["ProjectAssignment"]:
        return next((a for a in self.assignments if a.user_id == user_id), None)

    def score_for(self, user_id: int) -> Optional["ProjectScore"]:
        return next((s for s in self.scores if s.user_id == user_id), None)

    def is_assigned(self, user_id: int) -> bool:
        return self.assignment_for(user_id) is not None
