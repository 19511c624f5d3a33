"""
Ports (interfaces) used by the core.

Repositories and managers depend on these Protocols instead of concrete
clients, so the record store, the UI toolkit and the identity SDK stay
swappable.
"""

from typing import Any, Awaitable, Callable, Dict, Optional, Protocol

from ..models.notification import NotificationLevel
from ..models.task import RecordId

Record = Dict[str, Any]


class RecordStore(Protocol):
    """Generic CRUD over named collections of an external record database."""

    async def fetch(self, collection: str, params: Dict[str, Any]) -> Dict[str, Any]: ...
    async def get_by_id(self, collection: str, record_id: RecordId) -> Dict[str, Any]: ...
    async def create(self, collection: str, params: Dict[str, Any]) -> Dict[str, Any]: ...
    async def update(self, collection: str, params: Dict[str, Any]) -> Dict[str, Any]: ...
    async def delete(self, collection: str, params: Dict[str, Any]) -> Dict[str, Any]: ...


class Notifier(Protocol):
    """Where transient user-facing messages go (toasts, status bar, ...)."""

    def notify(self, level: NotificationLevel, message: str) -> Any: ...


class ConfirmationPort(Protocol):
    """
    Asks the user to confirm a destructive action.

    Resolves True only on an affirmative answer.
    """

    def confirm(self, message: str) -> Awaitable[bool]: ...


class IdentityProvider(Protocol):
    """
    Identity SDK side of the session.

    ``initialize`` reports the outcome through the callbacks: ``on_success``
    receives the user object (or None when nobody is signed in),
    ``on_error`` receives the failure.
    """

    async def initialize(
            self,
            *,
            on_success: Callable[[Optional[Dict[str, Any]]], Awaitable[None]],
            on_error: Callable[[Exception], Awaitable[None]],
    ) -> None: ...

    async def logout(self) -> None: ...
