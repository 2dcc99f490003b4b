"""
Services applicatifs
"""

from application.services.user_service import UserService, TokenProvider, TokenProviderError
from application.services.task_service import TaskService

__all__ = [
    "UserService",
    "TokenProvider",
    "TokenProviderError",
    "TaskService"
]
