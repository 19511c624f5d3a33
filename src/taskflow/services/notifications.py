"""In-memory notification center backing the UI's transient toasts."""

import logging
from datetime import datetime, timedelta
from typing import List, Optional

from ..models.notification import Notification, NotificationLevel

_LOG_LEVELS = {
    NotificationLevel.SUCCESS: logging.INFO,
    NotificationLevel.INFO: logging.INFO,
    NotificationLevel.WARNING: logging.WARNING,
    NotificationLevel.ERROR: logging.ERROR,
}


class NotificationCenter:
    """Collects notifications raised by the managers.

    A notification is active until it is dismissed or older than
    ``ttl_seconds``. Only the newest ``max_items`` are kept.
    """

    def __init__(self, ttl_seconds: float = 3.0, max_items: int = 50):
        self.ttl = timedelta(seconds=ttl_seconds)
        self.max_items = max_items
        self.logger = logging.getLogger("taskflow.notifications")
        self._items: List[Notification] = []
        self._next_id = 1

    def notify(self, level: NotificationLevel, message: str) -> Notification:
        """Register a notification and log it at a matching level."""
        level = NotificationLevel(level)
        notification = Notification(level, message)
        notification.id = self._next_id
        self._next_id += 1

        self._items.append(notification)
        if len(self._items) > self.max_items:
            self._items = self._items[-self.max_items:]

        self.logger.log(_LOG_LEVELS[level], f"[{level.value}] {message}")
        return notification

    def dismiss(self, notification_id: int) -> bool:
        """Dismiss a notification. Returns False if it is unknown."""
        for notification in self._items:
            if notification.id == notification_id:
                notification.dismissed = True
                return True
        return False

    def active(self, now: Optional[datetime] = None) -> List[Notification]:
        """Undismissed notifications younger than the TTL, newest first."""
        now = now or datetime.now()
        return [
            n for n in reversed(self._items)
            if not n.dismissed and now - n.timestamp < self.ttl
        ]

    def history(self, level: Optional[NotificationLevel] = None) -> List[Notification]:
        """All retained notifications, oldest first, optionally by level."""
        if level is None:
            return list(self._items)
        return [n for n in self._items if n.level == level]

    def messages(self) -> List[str]:
        return [n.message for n in self._items]

    def clear(self) -> None:
        self._items = []
