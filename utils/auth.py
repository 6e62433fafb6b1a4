# utils/auth.py
import functools
import logging
from dataclasses import dataclass
from typing import Optional

from errors import PermissionDeniedError
from models.user import User, ROLE_ADMIN

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Actor:
    """The authenticated caller of an operation."""
    id: int
    role: str
    name: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    @classmethod
    def from_user(cls, user: User) -> "Actor":
        return cls(id=user.id, role=user.role, name=user.display_name)


def has_role(actor: Actor, role: str) -> bool:
    return actor is not None and actor.role == role


def require_role(role: str, message: Optional[str] = None):
    """Guard a manager operation ``fn(session, actor, ...)`` on the actor's role."""
    def decorator(fn):
        @functools.wraps(fn)
        def wrapper(session, actor, *args, **kwargs):
            if not has_role(actor, role):
                logger.warning("%s denied for user %s (role=%s)",
                               fn.__name__, getattr(actor, "id", None), getattr(actor, "role", None))
                raise PermissionDeniedError(
                    message or f"You are not authorised to perform this action as you are not an {role}",
                    required_role=role,
                )
            return fn(session, actor, *args, **kwargs)
        return wrapper
    return decorator


require_admin = functools.partial(require_role, ROLE_ADMIN)
