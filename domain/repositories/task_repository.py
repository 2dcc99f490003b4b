"""
Interface TaskRepository - Définit les opérations d'accès aux données pour Task
"""

from abc import ABC, abstractmethod
from typing import List
from domain.entities.task import Task


class TaskRepository(ABC):
    """Interface pour le repository des tâches.

    Toute autre défaillance du stockage est levée comme RepositoryError.
    """

    @abstractmethod
    def create(self, task: Task) -> None:
        """Enregistre une nouvelle tâche.

        Lève TaskRecordExistsError si l'ID existe déjà et
        TaskOwnerRecordNotFoundError si le propriétaire n'existe pas.
        """
        pass

    @abstractmethod
    def find_by_id(self, task_id: str) -> Task:
        """Trouve une tâche par son ID (TaskRecordNotFoundError sinon)"""
        pass

    @abstractmethod
    def find_by_owner(self, owner_id: str) -> List[Task]:
        """Retourne les tâches d'un propriétaire (liste vide s'il n'en a aucune)"""
        pass

    @abstractmethod
    def update(self, task: Task) -> None:
        """Met à jour une tâche existante.

        Lève TaskRecordNotFoundError si aucune ligne n'a été modifiée.
        """
        pass

    @abstractmethod
    def delete(self, task_id: str) -> None:
        """Supprime une tâche (TaskRecordNotFoundError si absente)"""
        pass
