"""
TaskService - Service applicatif pour la gestion des tâches
"""

import logging
import uuid
from datetime import datetime
from typing import Callable, List, Optional, Type, Union

from domain.entities.task import Task
from domain.repositories.errors import (
    RepositoryError,
    TaskOwnerRecordNotFoundError,
    TaskRecordExistsError,
    TaskRecordNotFoundError,
)
from domain.repositories.task_repository import TaskRepository
from application.errors import (
    OperationFailedError,
    TaskAccessDeniedError,
    TaskChangeDescriptionFailedError,
    TaskChangeTitleFailedError,
    TaskCompleteFailedError,
    TaskCreateFailedError,
    TaskDeleteFailedError,
    TaskExistsError,
    TaskFindByOwnerFailedError,
    TaskGetFailedError,
    TaskNotFoundError,
    TaskOwnerNotFoundError,
    TaskRemoveDeadlineFailedError,
    TaskReopenFailedError,
    TaskSetDeadlineFailedError,
)

logger = logging.getLogger(__name__)

OwnerId = Union[uuid.UUID, str]


class TaskService:
    """Service pour la gestion des tâches.

    Toutes les opérations sur une tâche existante suivent le même schéma :
    lecture (TaskNotFoundError), contrôle du propriétaire (TaskAccessDeniedError),
    mutation de l'entité (erreurs de validation levées telles quelles), puis
    persistance (erreur `...FailedError` propre à l'opération).
    """

    def __init__(self, task_repository: TaskRepository):
        if task_repository is None:
            raise ValueError("task repository is required")
        self.task_repository = task_repository

    def create(
        self,
        title: str,
        description: str,
        owner_id: OwnerId,
        deadline: Optional[datetime] = None
    ) -> Task:
        """Crée une nouvelle tâche, avec une échéance si `deadline` est fourni.

        Lève TaskExistsError si la tâche existe déjà, TaskOwnerNotFoundError si
        le propriétaire n'existe pas et TaskCreateFailedError sinon.
        """
        owner_uuid = _as_uuid(owner_id)
        if owner_uuid is None:
            logger.warning(f"Task creation rejected: malformed owner ID {owner_id!r}")
            raise TaskOwnerNotFoundError()

        if deadline is None:
            task = Task.create(title, description, owner_uuid)
        else:
            task = Task.create_with_deadline(title, description, owner_uuid, deadline)

        try:
            self.task_repository.create(task)
        except TaskRecordExistsError as e:
            raise TaskExistsError() from e
        except TaskOwnerRecordNotFoundError as e:
            logger.warning(f"Task creation rejected: owner {owner_id} not found")
            raise TaskOwnerNotFoundError() from e
        except RepositoryError as e:
            logger.error(f"Task creation failed for owner {owner_id}: {e}")
            raise TaskCreateFailedError() from e

        logger.info(f"[{task.id}] Task created for owner {owner_id}")
        return task

    def get(self, task_id: str, owner_id: OwnerId) -> Task:
        """Récupère une tâche appartenant à `owner_id`"""
        return self._load_owned(task_id, owner_id, TaskGetFailedError)

    def change_title(self, task_id: str, owner_id: OwnerId, new_title: str) -> Task:
        """Change le titre d'une tâche"""
        return self._mutate(
            task_id, owner_id, lambda task: task.change_title(new_title), TaskChangeTitleFailedError
        )

    def change_description(self, task_id: str, owner_id: OwnerId, new_description: str) -> Task:
        """Change la description d'une tâche"""
        return self._mutate(
            task_id, owner_id, lambda task: task.change_description(new_description),
            TaskChangeDescriptionFailedError
        )

    def set_deadline(self, task_id: str, owner_id: OwnerId, deadline: datetime) -> Task:
        """Ajoute ou remplace l'échéance d'une tâche"""
        return self._mutate(
            task_id, owner_id, lambda task: task.set_deadline(deadline), TaskSetDeadlineFailedError
        )

    def remove_deadline(self, task_id: str, owner_id: OwnerId) -> Task:
        """Supprime l'échéance d'une tâche"""
        return self._mutate(
            task_id, owner_id, lambda task: task.remove_deadline(), TaskRemoveDeadlineFailedError
        )

    def complete(self, task_id: str, owner_id: OwnerId) -> Task:
        """Marque une tâche comme terminée (sans écriture si elle l'est déjà)"""
        return self._mutate(
            task_id, owner_id, lambda task: task.complete(), TaskCompleteFailedError
        )

    def reopen(self, task_id: str, owner_id: OwnerId) -> Task:
        """Rouvre une tâche terminée (sans écriture si elle est déjà ouverte)"""
        return self._mutate(
            task_id, owner_id, lambda task: task.reopen(), TaskReopenFailedError
        )

    def delete(self, task_id: str, owner_id: OwnerId) -> None:
        """Supprime une tâche appartenant à `owner_id`"""
        task = self._load_owned(task_id, owner_id, TaskDeleteFailedError)

        try:
            self.task_repository.delete(str(task.id))
        except TaskRecordNotFoundError as e:
            raise TaskNotFoundError() from e
        except RepositoryError as e:
            logger.error(f"[{task.id}] Task deletion failed: {e}")
            raise TaskDeleteFailedError() from e

        logger.info(f"[{task.id}] Task deleted")

    def find_by_owner(self, owner_id: OwnerId) -> List[Task]:
        """Retourne toutes les tâches d'un propriétaire (liste vide s'il n'en a aucune)"""
        try:
            return self.task_repository.find_by_owner(str(owner_id))
        except RepositoryError as e:
            logger.error(f"Task lookup failed for owner {owner_id}: {e}")
            raise TaskFindByOwnerFailedError() from e

    def _load_owned(self, task_id: str, owner_id: OwnerId, failed_error: Type[OperationFailedError]) -> Task:
        try:
            task = self.task_repository.find_by_id(str(task_id))
        except TaskRecordNotFoundError as e:
            raise TaskNotFoundError() from e
        except RepositoryError as e:
            logger.error(f"[{task_id}] Task lookup failed: {e}")
            raise failed_error() from e

        if not _is_owner(task, owner_id):
            logger.warning(f"[{task_id}] Access denied for {owner_id}")
            raise TaskAccessDeniedError()

        return task

    def _mutate(
        self,
        task_id: str,
        owner_id: OwnerId,
        mutation: Callable[[Task], Optional[bool]],
        failed_error: Type[OperationFailedError]
    ) -> Task:
        task = self._load_owned(task_id, owner_id, failed_error)

        # complete()/reopen() retournent False lorsqu'il n'y a rien à écrire
        if mutation(task) is False:
            return task

        try:
            self.task_repository.update(task)
        except TaskRecordNotFoundError as e:
            raise TaskNotFoundError() from e
        except RepositoryError as e:
            logger.error(f"[{task.id}] Task update failed: {e}")
            raise failed_error() from e

        return task


def _as_uuid(value: OwnerId) -> Optional[uuid.UUID]:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


def _is_owner(task: Task, owner_id: OwnerId) -> bool:
    requester = _as_uuid(owner_id)
    return requester is not None and task.owner_id == requester
