"""Tests for the PreferenceManager (theme and display name)."""

import pytest

from taskflow.errors import ValidationError
from taskflow.models import NotificationLevel, PreferenceUpdate, Session

from .conftest import PREFERENCES

USER = Session(user_id="user-1", is_authenticated=True)


@pytest.mark.asyncio
async def test_stored_preference_wins_over_system_theme(preference_repository, preferences):
    await preference_repository.upsert("user-1", PreferenceUpdate(user_name="Ada", dark_mode=False))

    await preferences.set_session(USER)

    assert preferences.dark_mode is False
    assert preferences.user_name == "Ada"
    assert preferences.heading == "Ada's Tasks"
    assert preferences.loading is False


@pytest.mark.asyncio
async def test_no_preference_falls_back_to_system_theme(preferences):
    await preferences.set_session(USER)

    assert preferences.dark_mode is True
    assert preferences.heading == "My Tasks"


@pytest.mark.asyncio
async def test_load_failure_falls_back_silently(store, preferences, notifications):
    store.fail_next("fetch")

    await preferences.set_session(USER)

    assert preferences.dark_mode is True
    assert preferences.loading is False
    assert notifications.history() == []


@pytest.mark.asyncio
async def test_toggle_persists_for_signed_in_user(store, preference_repository, preferences):
    await preferences.set_session(USER)

    assert await preferences.toggle_dark_mode() is False

    stored = await preference_repository.get("user-1")
    assert stored.dark_mode is False
    assert len(store.records(PREFERENCES)) == 1


@pytest.mark.asyncio
async def test_toggle_without_session_is_local_only(store, preferences):
    assert await preferences.toggle_dark_mode() is False
    assert store.calls == []


@pytest.mark.asyncio
async def test_toggle_failure_keeps_local_value(store, preferences, notifications):
    await preferences.set_session(USER)
    store.fail_next("fetch")

    assert await preferences.toggle_dark_mode() is False

    assert preferences.dark_mode is False
    assert [n.message for n in notifications.history(NotificationLevel.ERROR)] == [
        "Failed to save theme preference",
    ]


@pytest.mark.asyncio
async def test_set_and_clear_user_name(preference_repository, preferences, notifications):
    await preferences.set_session(USER)

    assert await preferences.set_user_name("  Grace ") is True
    assert preferences.heading == "Grace's Tasks"
    assert (await preference_repository.get("user-1")).user_name == "Grace"

    assert await preferences.clear_user_name() is True
    assert preferences.heading == "My Tasks"
    assert (await preference_repository.get("user-1")).user_name == ""
    assert notifications.messages() == ["Name updated successfully!", "Name cleared"]


@pytest.mark.asyncio
async def test_empty_user_name_is_rejected(store, preferences):
    await preferences.set_session(USER)

    with pytest.raises(ValidationError):
        await preferences.set_user_name("   ")

    assert store.calls_to("create") == []


@pytest.mark.asyncio
async def test_sign_out_resets_to_system_theme(preferences):
    await preferences.set_session(USER)
    await preferences.toggle_dark_mode()
    await preferences.set_user_name("Ada")

    await preferences.set_session(Session.anonymous())

    assert preferences.dark_mode is True
    assert preferences.user_name == ""
