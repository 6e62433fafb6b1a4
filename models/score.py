from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import UniqueConstraint
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from models.project import Project

class ProjectScore(SQLModel, table=True):
    """Points a user has earned on one project by completing its tasks."""
    __tablename__ = "project_scores"
    __table_args__ = (
        UniqueConstraint("project_id", "user_id", name="uq_score_project_user"),
        {"extend_existing": True},
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    project_id: int = Field(foreign_key="projects.id", index=True)
    # no FK: score history outlives the assignment and the account
    user_id: int
    score: int = Field(default=0)

    project: "Project" = Relationship(back_populates="scores")
