"""
Repositories - Interfaces pour l'accès aux données
"""

from domain.repositories.errors import (
    RepositoryError,
    UserRecordExistsError,
    UserRecordNotFoundError,
    TaskRecordExistsError,
    TaskRecordNotFoundError,
    TaskOwnerRecordNotFoundError
)
from domain.repositories.user_repository import UserRepository
from domain.repositories.task_repository import TaskRepository

__all__ = [
    "RepositoryError",
    "UserRecordExistsError",
    "UserRecordNotFoundError",
    "TaskRecordExistsError",
    "TaskRecordNotFoundError",
    "TaskOwnerRecordNotFoundError",
    "UserRepository",
    "TaskRepository"
]
