"""Tests for the SessionController."""

import pytest

from taskflow.core.session import SessionController
from taskflow.errors import RemoteError
from taskflow.models import NotificationLevel

from .fakes import FakeIdentityProvider


@pytest.mark.asyncio
async def test_successful_sign_in_is_published(notifications):
    seen = []

    async def listener(session):
        seen.append(session)

    controller = SessionController(FakeIdentityProvider(user={"userId": "u-1", "firstName": "Ada"}), notifications)
    controller.subscribe(listener)

    await controller.start()

    assert controller.initialized is True
    assert controller.session.is_authenticated is True
    assert [s.user_id for s in seen] == ["u-1"]


@pytest.mark.asyncio
async def test_no_user_gives_anonymous_session(notifications):
    controller = SessionController(FakeIdentityProvider(user=None), notifications)

    await controller.start()

    assert controller.initialized is True
    assert controller.session.is_authenticated is False


@pytest.mark.asyncio
async def test_authentication_failure_notifies(notifications):
    controller = SessionController(FakeIdentityProvider(error=RuntimeError("boom")), notifications)

    await controller.start()

    assert controller.initialized is False
    assert [n.message for n in notifications.history(NotificationLevel.ERROR)] == [
        "Authentication failed. Please try again.",
    ]


@pytest.mark.asyncio
async def test_logout(notifications):
    identity = FakeIdentityProvider(user={"userId": "u-1"})
    controller = SessionController(identity, notifications)
    await controller.start()

    assert await controller.logout() is True

    assert identity.logout_calls == 1
    assert controller.session.is_authenticated is False
    assert "Logged out successfully" in notifications.messages()


@pytest.mark.asyncio
async def test_failed_logout_keeps_session(notifications):
    identity = FakeIdentityProvider(user={"userId": "u-1"}, logout_error=RemoteError("offline"))
    controller = SessionController(identity, notifications)
    await controller.start()

    assert await controller.logout() is False

    assert controller.session.is_authenticated is True
    assert "Logout failed. Please try again." in notifications.messages()
