from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import UniqueConstraint
from typing import Optional, TYPE_CHECKING
from datetime import date

if TYPE_CHECKING:
    from models.project import Project
    from models.user import User

class ProjectAssignment(SQLModel, table=True):
    __tablename__ = "project_assignments"
    __table_args__ = (
        UniqueConstraint("project_id", "user_id", name="uq_assignment_project_user"),
        {"extend_existing": True},
    )

    id: Optional[int] = Field(default=None, primary_key=True)

    project_id: int = Field(foreign_key="projects.id", index=True)
    user_id: int = Field(foreign_key="users.id")
    start_date: date
    end_date: date

    project: "Project" = Relationship(back_populates="assignments")
    user: "User" = Relationship(back_populates="assignments")
