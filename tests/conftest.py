"""Fixtures partagées : repositories en mémoire et fournisseur de token factice."""

import copy
from datetime import datetime, timezone
from typing import Dict, List, Optional

import pytest

from domain import clock
from domain.entities.task import Task
from domain.entities.user import User
from domain.repositories.errors import (
    TaskOwnerRecordNotFoundError,
    TaskRecordExistsError,
    TaskRecordNotFoundError,
    UserRecordExistsError,
    UserRecordNotFoundError,
)
from domain.repositories.task_repository import TaskRepository
from domain.repositories.user_repository import UserRepository
from application.services.task_service import TaskService
from application.services.user_service import TokenProvider, UserService

PASSWORD = "s3cret-pass"


class FailingRepositoryMixin:
    """Permet de forcer une erreur sur une méthode donnée (`fail("update", RepositoryError())`)."""

    def _init_failures(self) -> None:
        self._failures: Dict[str, Exception] = {}
        self.calls: List[str] = []

    def fail(self, method: str, error: Exception) -> None:
        self._failures[method] = error

    def _enter(self, method: str) -> None:
        self.calls.append(method)
        if method in self._failures:
            raise self._failures[method]


class InMemoryUserRepository(FailingRepositoryMixin, UserRepository):
    """Implémentation en mémoire de UserRepository pour les tests."""

    def __init__(self) -> None:
        self._users: Dict[str, User] = {}
        self._init_failures()

    def create(self, user: User) -> None:
        self._enter("create")
        if str(user.id) in self._users or self._email_owner(str(user.email)) is not None:
            raise UserRecordExistsError(f"user {user.id} already exists")
        self._users[str(user.id)] = copy.deepcopy(user)

    def find_by_id(self, user_id: str) -> User:
        self._enter("find_by_id")
        if user_id not in self._users:
            raise UserRecordNotFoundError(f"user {user_id} not found")
        return copy.deepcopy(self._users[user_id])

    def find_by_email(self, email: str) -> User:
        self._enter("find_by_email")
        user = self._email_owner(email)
        if user is None:
            raise UserRecordNotFoundError(f"user with email '{email}' not found")
        return copy.deepcopy(user)

    def update(self, user: User) -> None:
        self._enter("update")
        if str(user.id) not in self._users:
            raise UserRecordNotFoundError(f"user {user.id} not found")
        owner = self._email_owner(str(user.email))
        if owner is not None and owner.id != user.id:
            raise UserRecordExistsError(f"email '{user.email}' already in use")
        self._users[str(user.id)] = copy.deepcopy(user)

    def delete(self, user_id: str) -> None:
        self._enter("delete")
        if user_id not in self._users:
            raise UserRecordNotFoundError(f"user {user_id} not found")
        del self._users[user_id]

    def stored(self, user_id) -> Optional[User]:
        return self._users.get(str(user_id))

    def _email_owner(self, email: str) -> Optional[User]:
        return next((u for u in self._users.values() if str(u.email) == email), None)


class InMemoryTaskRepository(FailingRepositoryMixin, TaskRepository):
    """Implémentation en mémoire de TaskRepository pour les tests.

    Si `users` est fourni, le propriétaire doit y exister (comme une clé étrangère).
    """

    def __init__(self, users: Optional[InMemoryUserRepository] = None) -> None:
        self._tasks: Dict[str, Task] = {}
        self._users = users
        self._init_failures()

    def create(self, task: Task) -> None:
        self._enter("create")
        if str(task.id) in self._tasks:
            raise TaskRecordExistsError(f"task {task.id} already exists")
        if self._users is not None and self._users.stored(task.owner_id) is None:
            raise TaskOwnerRecordNotFoundError(f"owner {task.owner_id} not found")
        self._tasks[str(task.id)] = copy.deepcopy(task)

    def find_by_id(self, task_id: str) -> Task:
        self._enter("find_by_id")
        if task_id not in self._tasks:
            raise TaskRecordNotFoundError(f"task {task_id} not found")
        return copy.deepcopy(self._tasks[task_id])

    def find_by_owner(self, owner_id: str) -> List[Task]:
        self._enter("find_by_owner")
        return [copy.deepcopy(t) for t in self._tasks.values() if str(t.owner_id) == owner_id]

    def update(self, task: Task) -> None:
        self._enter("update")
        if str(task.id) not in self._tasks:
            raise TaskRecordNotFoundError(f"task {task.id} not found")
        self._tasks[str(task.id)] = copy.deepcopy(task)

    def delete(self, task_id: str) -> None:
        self._enter("delete")
        if task_id not in self._tasks:
            raise TaskRecordNotFoundError(f"task {task_id} not found")
        del self._tasks[task_id]

    def stored(self, task_id) -> Optional[Task]:
        return self._tasks.get(str(task_id))


class FakeTokenProvider(TokenProvider):
    """Retourne un token prévisible (`token-<user_id>`), ou lève `error` s'il est défini."""

    def __init__(self) -> None:
        self.error: Optional[Exception] = None

    def generate(self, user_id: str) -> str:
        if self.error is not None:
            raise self.error
        return f"token-{user_id}"


@pytest.fixture
def user_repo() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def task_repo() -> InMemoryTaskRepository:
    return InMemoryTaskRepository()


@pytest.fixture
def token_provider() -> FakeTokenProvider:
    return FakeTokenProvider()


@pytest.fixture
def user_service(user_repo, token_provider) -> UserService:
    return UserService(user_repo, token_provider)


@pytest.fixture
def task_service(task_repo) -> TaskService:
    return TaskService(task_repo)


@pytest.fixture
def alice(user_service) -> User:
    return user_service.register("alice", "alice@example.com", PASSWORD)


@pytest.fixture
def frozen_now(monkeypatch) -> datetime:
    """Fige l'horloge du domaine."""
    now = datetime(2030, 1, 1, 12, 0, tzinfo=timezone.utc)
    monkeypatch.setattr(clock, "utc_now", lambda: now)
    return now


@pytest.fixture
def linked_task_repo(user_repo) -> InMemoryTaskRepository:
    """Repository de tâches qui vérifie l'existence du propriétaire."""
    return InMemoryTaskRepository(users=user_repo)
