"""Tests unitaires pour l'entité Task."""

import uuid
from datetime import timedelta

import pytest

from domain.entities.task import Task, TaskStateInconsistentError
from domain.value_objects.task import DeadlineInPastError, TitleEmptyError


def _task(title: str = "Write report") -> Task:
    return Task.create(title, "", uuid.uuid4())


def test_create_task_is_open_without_deadline():
    owner_id = uuid.uuid4()
    task = Task.create("  Write report ", "quarterly", owner_id)

    assert isinstance(task.id, uuid.UUID)
    assert task.owner_id == owner_id
    assert str(task.title) == "Write report"
    assert str(task.description) == "quarterly"
    assert not task.is_completed
    assert task.completed_at is None
    assert not task.has_deadline()


def test_create_with_deadline(frozen_now):
    task = Task.create_with_deadline("Report", "", uuid.uuid4(), frozen_now + timedelta(days=2))
    assert task.has_deadline()
    assert task.deadline.value == frozen_now + timedelta(days=2)

    with pytest.raises(DeadlineInPastError):
        Task.create_with_deadline("Report", "", uuid.uuid4(), frozen_now - timedelta(days=1))


def test_create_rejects_invalid_title():
    with pytest.raises(TitleEmptyError):
        Task.create("   ", "", uuid.uuid4())


def test_identity_and_owner_are_immutable():
    task = _task()
    with pytest.raises(AttributeError):
        task.id = uuid.uuid4()
    with pytest.raises(AttributeError):
        task.owner_id = uuid.uuid4()


def test_complete_and_reopen(frozen_now):
    task = _task()

    assert task.complete() is True
    assert task.is_completed
    assert task.completed_at == frozen_now

    # Déjà terminée : la date de fin ne change pas
    assert task.complete() is False
    assert task.completed_at == frozen_now

    assert task.reopen() is True
    assert not task.is_completed
    assert task.completed_at is None
    assert task.reopen() is False


def test_deadline_lifecycle(frozen_now):
    task = _task()
    task.set_deadline(frozen_now + timedelta(hours=3))
    assert task.has_deadline()

    with pytest.raises(DeadlineInPastError):
        task.set_deadline(frozen_now - timedelta(hours=3))
    assert task.deadline.value == frozen_now + timedelta(hours=3)

    task.remove_deadline()
    assert not task.has_deadline()


def test_is_overdue(frozen_now):
    task = _task()
    assert not task.is_overdue()

    task.set_deadline(frozen_now + timedelta(hours=1))
    later = frozen_now + timedelta(hours=2)
    assert task.is_overdue(later)

    task.complete()
    assert not task.is_overdue(later)


def test_from_persisted_restores_past_deadline(frozen_now):
    task = Task.from_persisted(
        id=uuid.uuid4(),
        owner_id=uuid.uuid4(),
        title="Old task",
        description="",
        deadline=frozen_now - timedelta(days=10),
        is_completed=True,
        completed_at=frozen_now - timedelta(days=11),
    )

    assert task.deadline.value == frozen_now - timedelta(days=10)
    assert not task.is_overdue()


@pytest.mark.parametrize("is_completed, has_completed_at", [(True, False), (False, True)])
def test_from_persisted_rejects_inconsistent_state(frozen_now, is_completed, has_completed_at):
    with pytest.raises(TaskStateInconsistentError):
        Task.from_persisted(
            id=uuid.uuid4(),
            owner_id=uuid.uuid4(),
            title="Broken",
            description="",
            deadline=None,
            is_completed=is_completed,
            completed_at=frozen_now if has_completed_at else None,
        )
