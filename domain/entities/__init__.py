"""
Entités du domaine
"""

from domain.entities.user import User, UserIdInvalidError
from domain.entities.task import Task, TaskStateInconsistentError

__all__ = [
    "User",
    "UserIdInvalidError",
    "Task",
    "TaskStateInconsistentError"
]
