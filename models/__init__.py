from .project import Project
from .assignment import ProjectAssignment
from .score import ProjectScore
from .user import User
from .task import Task
from .progress import Progress, ProgressStatus
