from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime

if TYPE_CHECKING:
    from models.assignment import ProjectAssignment
    from models.progress import Progress

ROLE_ADMIN = "admin"
ROLE_MEMBER = "member"
USER_ROLES = (ROLE_ADMIN, ROLE_MEMBER)

class User(SQLModel, table=True):
    __tablename__ = "users"
    __table_args__ = {"extend_existing": True}

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(index=True, unique=True)
    name: Optional[str] = None
    role: str = Field(default=ROLE_MEMBER)
    created_at: datetime = Field(default_factory=datetime.utcnow)

    assignments: List["ProjectAssignment"] = Relationship(back_populates="user")
    progress: List["Progress"] = Relationship(back_populates="user")

    @property
    def display_name(self) -> str:
        return self.name or self.email
