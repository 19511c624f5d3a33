"""Session bootstrap: consumes the identity provider and fans sessions out."""

import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional

from ..errors import RemoteError
from ..models.notification import NotificationLevel
from ..models.session import Session
from .ports import IdentityProvider, Notifier

logger = logging.getLogger(__name__)

SessionListener = Callable[[Session], Awaitable[None]]


class SessionController:
    """Turns identity provider callbacks into a Session for the managers."""

    def __init__(self, identity: IdentityProvider, notifier: Notifier):
        self.identity = identity
        self.notifier = notifier
        self.session = Session.anonymous()
        self.initialized = False
        self._listeners: List[SessionListener] = []

    def subscribe(self, listener: SessionListener) -> None:
        self._listeners.append(listener)

    async def _publish(self) -> None:
        for listener in self._listeners:
            await listener(self.session)

    async def start(self) -> None:
        """Ask the identity provider to initialize the session."""
        await self.identity.initialize(on_success=self.on_success, on_error=self.on_error)

    async def on_success(self, user: Optional[Dict[str, Any]]) -> None:
        self.initialized = True
        self.session = Session.from_user(user)
        if self.session.is_authenticated:
            logger.info(f"User {self.session.user_id} signed in")
        await self._publish()

    async def on_error(self, error: Exception) -> None:
        logger.error(f"Authentication failed: {error}")
        self.notifier.notify(NotificationLevel.ERROR, "Authentication failed. Please try again.")

    async def logout(self) -> bool:
        try:
            await self.identity.logout()
        except RemoteError as e:
            logger.error(f"Logout failed: {e}")
            self.notifier.notify(NotificationLevel.ERROR, "Logout failed. Please try again.")
            return False
        self.session = Session.anonymous()
        await self._publish()
        self.notifier.notify(NotificationLevel.INFO, "Logged out successfully")
        return True
