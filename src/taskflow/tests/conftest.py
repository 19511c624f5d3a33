"""Shared fixtures."""

import pytest

from taskflow.core.manager import TaskManager
from taskflow.core.preferences import PreferenceManager
from taskflow.models.session import Session
from taskflow.services.notifications import NotificationCenter
from taskflow.services.preference_repository import PreferenceRepository
from taskflow.services.task_repository import TaskRepository

from .fakes import InMemoryRecordStore, ScriptedConfirmation

TASKS = "task"
PREFERENCES = "user_preference"


@pytest.fixture
def store():
    return InMemoryRecordStore()


@pytest.fixture
def notifications():
    """Long TTL so nothing expires mid-test."""
    return NotificationCenter(ttl_seconds=600)


@pytest.fixture
def confirmation():
    return ScriptedConfirmation()


@pytest.fixture
def session():
    return Session(user_id="user-1", is_authenticated=True, first_name="Ada")


@pytest.fixture
def task_repository(store):
    return TaskRepository(store, TASKS)


@pytest.fixture
def preference_repository(store):
    return PreferenceRepository(store, PREFERENCES)


@pytest.fixture
def manager(task_repository, notifications, confirmation, session):
    """An authenticated manager that has not fetched anything yet."""
    return TaskManager(task_repository, notifications, confirmation, session=session)


@pytest.fixture
def preferences(preference_repository, notifications):
    return PreferenceManager(preference_repository, notifications, system_prefers_dark=True)
