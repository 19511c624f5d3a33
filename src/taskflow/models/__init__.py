"""Models package."""
from .task import Task, TaskInput, TaskStatus, TaskPriority, RecordId
from .preference import Preference, PreferenceUpdate, DEFAULT_USER_NAME
from .tag import TaskTag
from .session import Session
from .notification import Notification, NotificationLevel

__all__ = [
    "Task",
    "TaskInput",
    "TaskStatus",
    "TaskPriority",
    "RecordId",
    "Preference",
    "PreferenceUpdate",
    "DEFAULT_USER_NAME",
    "TaskTag",
    "Session",
    "Notification",
    "NotificationLevel",
]
