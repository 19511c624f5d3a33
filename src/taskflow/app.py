"""Composition root: one record store client injected into every repository."""

import logging
from typing import Optional

from .config import Settings, get_settings
from .core.manager import TaskManager
from .core.ports import ConfirmationPort, IdentityProvider, RecordStore
from .core.preferences import PreferenceManager
from .core.session import SessionController
from .logging_setup import setup_logging
from .services.gateway import RecordStoreClient, get_record_store_client
from .services.notifications import NotificationCenter
from .services.preference_repository import PreferenceRepository
from .services.tag_repository import TaskTagRepository
from .services.task_repository import TaskRepository

logger = logging.getLogger(__name__)


class TaskFlowApp:
    """Wires repositories, managers and the session together.

    Session changes reach the preference manager first, then the task
    manager, so the theme is settled before the list loads.
    """

    def __init__(
        self,
        settings: Settings,
        store: RecordStore,
        identity: IdentityProvider,
        confirmation: ConfirmationPort,
        system_prefers_dark: bool = False,
    ):
        self.settings = settings
        self.store = store
        self.notifications = NotificationCenter(ttl_seconds=settings.notification_ttl)

        self.task_repository = TaskRepository(store, settings.tasks_collection)
        self.preference_repository = PreferenceRepository(store, settings.preferences_collection)
        self.tag_repository = TaskTagRepository(store, settings.tags_collection)

        self.tasks = TaskManager(
            self.task_repository,
            self.notifications,
            confirmation,
            tag_repository=self.tag_repository,
        )
        self.preferences = PreferenceManager(
            self.preference_repository,
            self.notifications,
            system_prefers_dark=system_prefers_dark,
        )
        self.session = SessionController(identity, self.notifications)
        self.session.subscribe(self.preferences.set_session)
        self.session.subscribe(self.tasks.set_session)

    async def start(self) -> None:
        await self.session.start()

    async def aclose(self) -> None:
        close = getattr(self.store, "close", None)
        if close is not None:
            await close()


def create_app(
    identity: IdentityProvider,
    confirmation: ConfirmationPort,
    *,
    settings: Optional[Settings] = None,
    store: Optional[RecordStore] = None,
    system_prefers_dark: bool = False,
    configure_logging: bool = False,
) -> TaskFlowApp:
    """Build the application from settings.

    Args:
        identity: Identity provider of the host UI
        confirmation: Confirmation dialog of the host UI
        settings: Defaults to ``get_settings()``
        store: Defaults to a RecordStoreClient built from ``settings``, or
            the process-wide client when no settings are given
        system_prefers_dark: Theme used when no preference is stored
        configure_logging: Call ``setup_logging`` with the configured level
    """
    if store is None:
        store = RecordStoreClient(settings) if settings is not None else get_record_store_client()
    settings = settings or get_settings()
    if configure_logging:
        setup_logging(settings.log_level)
    if isinstance(store, RecordStoreClient):
        logger.info(f"Using record store at {settings.store_url}")
    return TaskFlowApp(
        settings,
        store,
        identity,
        confirmation,
        system_prefers_dark=system_prefers_dark,
    )
