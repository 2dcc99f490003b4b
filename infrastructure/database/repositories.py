"""
Implémentations des repositories SQLAlchemy
"""

import logging
from typing import List

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from domain.entities import Task, User
from domain.errors import DomainError
from domain.repositories import (
    RepositoryError,
    TaskOwnerRecordNotFoundError,
    TaskRecordExistsError,
    TaskRecordNotFoundError,
    TaskRepository,
    UserRecordExistsError,
    UserRecordNotFoundError,
    UserRepository,
)
from infrastructure.database.models import TaskModel, UserModel
from infrastructure.database.mappers import TaskMapper, UserMapper

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "unique"
FOREIGN_KEY_VIOLATION = "foreign_key"

_PG_CODES = {
    "23505": UNIQUE_VIOLATION,
    "23503": FOREIGN_KEY_VIOLATION,
}


def classify_integrity_error(error: IntegrityError):
    """Retourne le type de contrainte violée (PostgreSQL ou SQLite), ou None"""
    orig = getattr(error, "orig", None)
    pgcode = getattr(orig, "pgcode", None)
    if pgcode in _PG_CODES:
        return _PG_CODES[pgcode]

    message = str(orig or error)
    if "UNIQUE constraint failed" in message:
        return UNIQUE_VIOLATION
    if "FOREIGN KEY constraint failed" in message:
        return FOREIGN_KEY_VIOLATION
    return None


class SQLAlchemyUserRepository(UserRepository):
    """Implémentation SQLAlchemy du UserRepository"""

    def __init__(self, session: Session):
        self.session = session

    def create(self, user: User) -> None:
        """Enregistre un nouvel utilisateur"""
        self.session.add(UserMapper.to_model(user))
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            if classify_integrity_error(e) == UNIQUE_VIOLATION:
                raise UserRecordExistsError(f"user {user.id} already exists") from e
            logger.error(f"Error creating user {user.id}: {e}")
            raise RepositoryError(f"failed to create user: {e}") from e
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Error creating user {user.id}: {e}")
            raise RepositoryError(f"failed to create user: {e}") from e

    def find_by_id(self, user_id: str) -> User:
        """Trouve un utilisateur par son ID"""
        return self._find_one(UserModel.id == str(user_id), f"user {user_id} not found")

    def find_by_email(self, email: str) -> User:
        """Trouve un utilisateur par son email"""
        return self._find_one(UserModel.email == email, f"user with email '{email}' not found")

    def update(self, user: User) -> None:
        """Met à jour un utilisateur existant"""
        try:
            model = self.session.query(UserModel).filter(UserModel.id == str(user.id)).first()
            if model is None:
                raise UserRecordNotFoundError(f"user {user.id} not found")
            UserMapper.to_model(user, model)
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            if classify_integrity_error(e) == UNIQUE_VIOLATION:
                raise UserRecordExistsError(f"email '{user.email}' already in use") from e
            logger.error(f"Error updating user {user.id}: {e}")
            raise RepositoryError(f"failed to update user: {e}") from e
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Error updating user {user.id}: {e}")
            raise RepositoryError(f"failed to update user: {e}") from e

    def delete(self, user_id: str) -> None:
        """Supprime un utilisateur (ses tâches sont supprimées en cascade)"""
        try:
            deleted = (
                self.session.query(UserModel)
                .filter(UserModel.id == str(user_id))
                .delete(synchronize_session=False)
            )
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Error deleting user {user_id}: {e}")
            raise RepositoryError(f"failed to delete user: {e}") from e

        if deleted == 0:
            raise UserRecordNotFoundError(f"user {user_id} not found")

    def _find_one(self, criterion, not_found_message: str) -> User:
        try:
            model = self.session.query(UserModel).filter(criterion).first()
        except SQLAlchemyError as e:
            logger.error(f"Error reading user: {e}")
            raise RepositoryError(f"failed to read user: {e}") from e

        if model is None:
            raise UserRecordNotFoundError(not_found_message)

        try:
            return UserMapper.to_domain(model)
        except DomainError as e:
            logger.error(f"Corrupted user row {model.id}: {e}")
            raise RepositoryError(f"failed to restore user {model.id}: {e}") from e


class SQLAlchemyTaskRepository(TaskRepository):
    """Implémentation SQLAlchemy du TaskRepository"""

    def __init__(self, session: Session):
        self.session = session

    def create(self, task: Task) -> None:
        """Enregistre une nouvelle tâche"""
        self.session.add(TaskMapper.to_model(task))
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            violation = classify_integrity_error(e)
            if violation == UNIQUE_VIOLATION:
                raise TaskRecordExistsError(f"task {task.id} already exists") from e
            if violation == FOREIGN_KEY_VIOLATION:
                raise TaskOwnerRecordNotFoundError(f"owner {task.owner_id} not found") from e
            logger.error(f"Error creating task {task.id}: {e}")
            raise RepositoryError(f"failed to create task: {e}") from e
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Error creating task {task.id}: {e}")
            raise RepositoryError(f"failed to create task: {e}") from e

    def find_by_id(self, task_id: str) -> Task:
        """Trouve une tâche par son ID"""
        try:
            model = self.session.query(TaskModel).filter(TaskModel.id == str(task_id)).first()
        except SQLAlchemyError as e:
            logger.error(f"Error reading task {task_id}: {e}")
            raise RepositoryError(f"failed to read task: {e}") from e

        if model is None:
            raise TaskRecordNotFoundError(f"task {task_id} not found")

        return self._restore(model)

    def find_by_owner(self, owner_id: str) -> List[Task]:
        """Retourne les tâches d'un propriétaire"""
        try:
            models = (
                self.session.query(TaskModel)
                .filter(TaskModel.owner_id == str(owner_id))
                .order_by(TaskModel.id)
                .all()
            )
        except SQLAlchemyError as e:
            logger.error(f"Error listing tasks for owner {owner_id}: {e}")
            raise RepositoryError(f"failed to list tasks: {e}") from e

        return [self._restore(model) for model in models]

    def update(self, task: Task) -> None:
        """Met à jour une tâche existante"""
        try:
            model = self.session.query(TaskModel).filter(TaskModel.id == str(task.id)).first()
            if model is None:
                raise TaskRecordNotFoundError(f"task {task.id} not found")
            TaskMapper.to_model(task, model)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Error updating task {task.id}: {e}")
            raise RepositoryError(f"failed to update task: {e}") from e

    def delete(self, task_id: str) -> None:
        """Supprime une tâche"""
        try:
            deleted = (
                self.session.query(TaskModel)
                .filter(TaskModel.id == str(task_id))
                .delete(synchronize_session=False)
            )
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Error deleting task {task_id}: {e}")
            raise RepositoryError(f"failed to delete task: {e}") from e

        if deleted == 0:
            raise TaskRecordNotFoundError(f"task {task_id} not found")

    def _restore(self, model: TaskModel) -> Task:
        try:
            return TaskMapper.to_domain(model)
        except (DomainError, ValueError) as e:
            logger.error(f"Corrupted task row {model.id}: {e}")
            raise RepositoryError(f"failed to restore task {model.id}: {e}") from e
