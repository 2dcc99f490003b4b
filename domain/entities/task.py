"""
Entité Task - Modèle métier pour les tâches
"""

import uuid
from datetime import datetime
from dataclasses import dataclass
from typing import Optional

from domain import clock
from domain.errors import DomainError
from domain.value_objects.task import Deadline, Description, Title


class TaskStateInconsistentError(DomainError):
    message = "task state is inconsistent: is_completed and completed_at contradict"


@dataclass
class Task:
    """Entité Task du domaine.

    Une tâche appartient à un seul propriétaire, fixé à la création. Elle est
    terminée si et seulement si `completed_at` est renseigné.
    """
    id: uuid.UUID
    owner_id: uuid.UUID
    title: Title
    description: Description
    deadline: Optional[Deadline] = None
    is_completed: bool = False
    completed_at: Optional[datetime] = None

    def __post_init__(self):
        """Validation de l'entité"""
        if self.is_completed != (self.completed_at is not None):
            raise TaskStateInconsistentError()

    def __setattr__(self, name, value):
        if name in ("id", "owner_id") and name in self.__dict__:
            raise AttributeError(f"task {name} is immutable")
        super().__setattr__(name, value)

    @classmethod
    def create(cls, title: str, description: str, owner_id: uuid.UUID) -> "Task":
        """Crée une nouvelle tâche ouverte, sans échéance"""
        title_vo = Title(title)
        description_vo = Description(description)

        return cls(
            id=uuid.uuid4(),
            owner_id=owner_id,
            title=title_vo,
            description=description_vo,
        )

    @classmethod
    def create_with_deadline(
        cls,
        title: str,
        description: str,
        owner_id: uuid.UUID,
        deadline: datetime
    ) -> "Task":
        """Crée une nouvelle tâche ouverte avec une échéance dans le futur"""
        task = cls.create(title, description, owner_id)
        task.deadline = Deadline(deadline)
        return task

    @classmethod
    def from_persisted(
        cls,
        id: uuid.UUID,
        owner_id: uuid.UUID,
        title: str,
        description: str,
        deadline: Optional[datetime],
        is_completed: bool,
        completed_at: Optional[datetime]
    ) -> "Task":
        """Reconstruit une tâche relue depuis le stockage.

        Lève TaskStateInconsistentError si `is_completed` et `completed_at`
        se contredisent ; c'est ici que la corruption du stockage est détectée.
        """
        if is_completed != (completed_at is not None):
            raise TaskStateInconsistentError()

        return cls(
            id=id,
            owner_id=owner_id,
            title=Title(title),
            description=Description(description),
            deadline=Deadline.restore(deadline) if deadline is not None else None,
            is_completed=is_completed,
            completed_at=completed_at,
        )

    def change_title(self, new_title: str) -> None:
        """Change le titre de la tâche"""
        self.title = Title(new_title)

    def change_description(self, new_description: str) -> None:
        """Change la description de la tâche"""
        self.description = Description(new_description)

    def set_deadline(self, deadline: datetime) -> None:
        """Ajoute ou remplace l'échéance"""
        self.deadline = Deadline(deadline)

    def remove_deadline(self) -> None:
        self.deadline = None

    def has_deadline(self) -> bool:
        return self.deadline is not None

    def is_overdue(self, now: Optional[datetime] = None) -> bool:
        """Une tâche est en retard si son échéance est passée et qu'elle n'est pas terminée"""
        if self.deadline is None or self.is_completed:
            return False
        return self.deadline.is_overdue(now)

    def complete(self) -> bool:
        """Marque la tâche comme terminée.

        Retourne False si la tâche l'était déjà (la date de fin n'est pas modifiée).
        """
        if self.is_completed:
            return False
        self.completed_at = clock.utc_now()
        self.is_completed = True
        return True

    def reopen(self) -> bool:
        """Rouvre une tâche terminée. Retourne False si elle était déjà ouverte."""
        if not self.is_completed:
            return False
        self.is_completed = False
        self.completed_at = None
        return True
