"""
Mappers - Conversion entre modèles SQLAlchemy et entités de domaine
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from infrastructure.database.models import TaskModel, UserModel
from domain.entities import Task, User


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite ne conserve pas le fuseau horaire : tout est stocké en UTC
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class UserMapper:
    """Mapper entre UserModel et User"""

    @staticmethod
    def to_domain(model: UserModel) -> User:
        """Convertit un UserModel en entité User"""
        return User.from_persisted(
            id=model.id,
            username=model.username,
            email=model.email,
            password_hash=model.password_hash
        )

    @staticmethod
    def to_model(user: User, model: Optional[UserModel] = None) -> UserModel:
        """Convertit une entité User en UserModel"""
        if model is None:
            model = UserModel()

        model.id = str(user.id)
        model.username = str(user.username)
        model.email = str(user.email)
        model.password_hash = str(user.password)

        return model


class TaskMapper:
    """Mapper entre TaskModel et Task"""

    @staticmethod
    def to_domain(model: TaskModel) -> Task:
        """Convertit un TaskModel en entité Task"""
        return Task.from_persisted(
            id=uuid.UUID(model.id),
            owner_id=uuid.UUID(model.owner_id),
            title=model.title,
            description=model.description,
            deadline=_as_utc(model.deadline),
            is_completed=bool(model.is_completed),
            completed_at=_as_utc(model.completed_at)
        )

    @staticmethod
    def to_model(task: Task, model: Optional[TaskModel] = None) -> TaskModel:
        """Convertit une entité Task en TaskModel"""
        if model is None:
            model = TaskModel()

        model.id = str(task.id)
        model.owner_id = str(task.owner_id)
        model.title = str(task.title)
        model.description = str(task.description)
        model.deadline = _as_utc(task.deadline.value) if task.deadline else None
        model.is_completed = task.is_completed
        model.completed_at = _as_utc(task.completed_at)

        return model
