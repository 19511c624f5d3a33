"""Filter state for the task list. Ephemeral, never persisted."""

from pydantic import BaseModel, field_validator

from ..models.task import TaskPriority, TaskStatus

ALL = "all"

STATUS_CHOICES = [ALL] + [s.value for s in TaskStatus]
PRIORITY_CHOICES = [ALL] + [p.value for p in TaskPriority]


class TaskFilters(BaseModel):
    """Status, priority and free-text search, all defaulting to "match everything"."""
    status: str = ALL
    priority: str = ALL
    search: str = ""

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, v):
        if v is None or v == "":
            return ALL
        v = v.value if isinstance(v, TaskStatus) else v
        if v not in STATUS_CHOICES:
            raise ValueError(f"status must be one of {', '.join(STATUS_CHOICES)}")
        return v

    @field_validator("priority", mode="before")
    @classmethod
    def check_priority(cls, v):
        if v is None or v == "":
            return ALL
        v = v.value if isinstance(v, TaskPriority) else v
        if v not in PRIORITY_CHOICES:
            raise ValueError(f"priority must be one of {', '.join(PRIORITY_CHOICES)}")
        return v

    @field_validator("search", mode="before")
    @classmethod
    def check_search(cls, v):
        return "" if v is None else v

    @property
    def is_default(self) -> bool:
        return self.status == ALL and self.priority == ALL and not self.search
