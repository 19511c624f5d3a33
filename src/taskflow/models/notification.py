"""Transient user-facing notifications."""

from datetime import datetime
from enum import Enum
from typing import Optional


class NotificationLevel(str, Enum):
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class Notification:
    """A single notification shown to the user."""

    def __init__(self, level: NotificationLevel, message: str, timestamp: Optional[datetime] = None):
        self.id: Optional[int] = None  # Set when registered
        self.level = level
        self.message = message
        self.timestamp = timestamp or datetime.now()
        self.dismissed = False

    def __repr__(self) -> str:
        return f"Notification({self.level.value!r}, {self.message!r})"
