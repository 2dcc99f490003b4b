"""
Value objects de la tâche - Title, Description, Deadline
"""

from datetime import datetime, timezone
from dataclasses import dataclass
from typing import Optional

from domain import clock
from domain.errors import ValidationError

TITLE_MAX_LENGTH = 50
DESCRIPTION_MAX_LENGTH = 1000


class TitleError(ValidationError):
    field = "title"
    message = "title is invalid"


class TitleEmptyError(TitleError):
    message = "title is empty"


class TitleTooLongError(TitleError):
    message = "title is too long"


class DescriptionTooLongError(ValidationError):
    field = "description"
    message = "description is too long"


class DeadlineInPastError(ValidationError):
    field = "deadline"
    message = "deadline is in the past"


@dataclass(frozen=True)
class Title:
    """Titre d'une tâche, sans espaces superflus (50 caractères max)"""
    value: str

    def __post_init__(self):
        value = (self.value or "").strip()
        if not value:
            raise TitleEmptyError()
        if len(value) > TITLE_MAX_LENGTH:
            raise TitleTooLongError()
        object.__setattr__(self, "value", value)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Description:
    """Description d'une tâche (peut être vide)"""
    value: str = ""

    def __post_init__(self):
        if self.value is None:
            object.__setattr__(self, "value", "")
        if len(self.value) > DESCRIPTION_MAX_LENGTH:
            raise DescriptionTooLongError()

    def __str__(self) -> str:
        return self.value


def _as_utc(value: datetime) -> datetime:
    # Les dates naïves sont interprétées comme UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


@dataclass(frozen=True)
class Deadline:
    """Échéance d'une tâche, strictement dans le futur à la création"""
    value: datetime

    def __post_init__(self):
        value = _as_utc(self.value)
        if value <= clock.utc_now():
            raise DeadlineInPastError()
        object.__setattr__(self, "value", value)

    @classmethod
    def restore(cls, value: datetime) -> "Deadline":
        """Reconstruit une échéance persistée, éventuellement déjà passée"""
        deadline = object.__new__(cls)
        object.__setattr__(deadline, "value", _as_utc(value))
        return deadline

    def is_before(self, t: datetime) -> bool:
        return self.value < _as_utc(t)

    def is_after(self, t: datetime) -> bool:
        return self.value > _as_utc(t)

    def is_overdue(self, now: Optional[datetime] = None) -> bool:
        """Vérifie si l'échéance est dépassée"""
        return self.is_before(now or clock.utc_now())
