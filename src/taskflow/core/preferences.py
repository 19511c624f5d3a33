"""Theme and display-name preferences of the signed-in user."""

import logging
from typing import Optional

from ..errors import RemoteError, ValidationError
from ..models.notification import NotificationLevel
from ..models.preference import PreferenceUpdate
from ..models.session import Session
from ..services.preference_repository import PreferenceRepository
from .ports import Notifier

logger = logging.getLogger(__name__)


class PreferenceManager:
    """Holds ``dark_mode`` and ``user_name`` for the session and persists
    changes through the preference repository.

    Without a stored preference (or when loading it fails) the theme
    follows the system preference given at construction.
    """

    def __init__(
        self,
        repository: PreferenceRepository,
        notifier: Notifier,
        system_prefers_dark: bool = False,
        session: Optional[Session] = None,
    ):
        self.repository = repository
        self.notifier = notifier
        self.system_prefers_dark = system_prefers_dark
        self.session = session or Session.anonymous()

        self.dark_mode = system_prefers_dark
        self.user_name = ""
        self.loading = False

    @property
    def _can_persist(self) -> bool:
        return self.session.is_authenticated and self.session.user_id is not None

    @property
    def heading(self) -> str:
        return f"{self.user_name}'s Tasks" if self.user_name else "My Tasks"

    async def set_session(self, session: Session) -> None:
        self.session = session
        if self._can_persist:
            await self.load()
        else:
            self.dark_mode = self.system_prefers_dark
            self.user_name = ""

    async def load(self) -> None:
        """Load the stored preference; fall back to the system theme."""
        if not self._can_persist:
            return
        self.loading = True
        try:
            preference = await self.repository.get(self.session.user_id)
        except RemoteError as e:
            logger.error(f"Error fetching user preference: {e}")
            self.dark_mode = self.system_prefers_dark
            return
        finally:
            self.loading = False

        if preference is None:
            self.dark_mode = self.system_prefers_dark
            return
        self.dark_mode = preference.dark_mode
        self.user_name = preference.user_name

    async def toggle_dark_mode(self) -> bool:
        """Flip the theme at once, then persist it if signed in.

        A failed save is reported but the local theme is kept.
        """
        self.dark_mode = not self.dark_mode
        if self._can_persist:
            try:
                await self.repository.upsert(self.session.user_id, PreferenceUpdate(dark_mode=self.dark_mode))
            except RemoteError as e:
                logger.error(f"Error updating theme preference: {e}")
                self.notifier.notify(NotificationLevel.ERROR, "Failed to save theme preference")
        return self.dark_mode

    async def set_user_name(self, name: str) -> bool:
        """Set and persist the display name.

        Raises:
            ValidationError: If the name is empty after trimming
        """
        name = name.strip()
        if not name:
            raise ValidationError("Name must not be empty", field="user_name")
        self.user_name = name
        return await self._save_user_name("Name updated successfully!")

    async def clear_user_name(self) -> bool:
        self.user_name = ""
        return await self._save_user_name("Name cleared", level=NotificationLevel.INFO)

    async def _save_user_name(self, message: str, level: NotificationLevel = NotificationLevel.SUCCESS) -> bool:
        if self._can_persist:
            try:
                await self.repository.upsert(self.session.user_id, PreferenceUpdate(user_name=self.user_name))
            except RemoteError as e:
                logger.error(f"Error saving user name: {e}")
                self.notifier.notify(NotificationLevel.ERROR, "Failed to save name")
                return False
        self.notifier.notify(level, message)
        return True
