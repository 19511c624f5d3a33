"""End-to-end wiring through create_app with in-memory collaborators."""

import pytest

from taskflow.app import create_app
from taskflow.config import Settings
from taskflow.core.manager import ManagerState
from taskflow.services.gateway import RecordStoreClient

from .fakes import FakeIdentityProvider, InMemoryRecordStore, ScriptedConfirmation, task_record

SETTINGS = Settings(tasks_collection="tasks_v2", preferences_collection="prefs_v2", tags_collection="tags_v2")


@pytest.mark.asyncio
async def test_sign_in_loads_preferences_then_tasks():
    store = InMemoryRecordStore()
    store.seed("tasks_v2", task_record(title="Mine"))
    store.seed("prefs_v2", {"Name": "Preferences for Ada", "Owner": "u-1", "userName": "Ada", "darkMode": True})

    app = create_app(
        FakeIdentityProvider(user={"userId": "u-1"}),
        ScriptedConfirmation(),
        settings=SETTINGS,
        store=store,
    )
    await app.start()

    assert [call[1] for call in store.calls_to("fetch")] == ["prefs_v2", "tasks_v2"]
    assert app.preferences.dark_mode is True
    assert app.preferences.heading == "Ada's Tasks"
    assert [t.title for t in app.tasks.tasks] == ["Mine"]
    assert app.tasks.state == ManagerState.READY
    await app.aclose()


@pytest.mark.asyncio
async def test_anonymous_start_fetches_nothing():
    store = InMemoryRecordStore()
    app = create_app(FakeIdentityProvider(user=None), ScriptedConfirmation(), settings=SETTINGS, store=store)

    await app.start()

    assert store.calls == []
    assert app.tasks.state == ManagerState.INIT
    assert app.preferences.dark_mode is False


@pytest.mark.asyncio
async def test_logout_clears_tasks():
    store = InMemoryRecordStore()
    store.seed("tasks_v2", task_record())
    app = create_app(FakeIdentityProvider(user={"userId": "u-1"}), ScriptedConfirmation(), settings=SETTINGS, store=store)
    await app.start()

    await app.session.logout()

    assert app.tasks.tasks == []
    assert app.tasks.state == ManagerState.INIT


@pytest.mark.asyncio
async def test_default_store_is_http_client():
    app = create_app(FakeIdentityProvider(), ScriptedConfirmation(), settings=SETTINGS)

    assert isinstance(app.store, RecordStoreClient)
    assert app.notifications.ttl.total_seconds() == SETTINGS.notification_ttl
    await app.aclose()


@pytest.mark.asyncio
async def test_saved_tags_are_linked_in_tag_collection():
    store = InMemoryRecordStore()
    app = create_app(FakeIdentityProvider(user={"userId": "u-1"}), ScriptedConfirmation(), settings=SETTINGS, store=store)
    await app.start()

    app.tasks.open_create_form()
    app.tasks.draft.title = "Pack"
    app.tasks.draft.add_tag("travel")
    assert await app.tasks.submit() is True

    [task] = app.tasks.tasks
    assert [(r["task"], r["tag"]) for r in store.records("tags_v2")] == [(task.id, "travel")]
