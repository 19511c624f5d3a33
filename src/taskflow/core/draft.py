"""Form/edit state for a task being created or edited."""

from datetime import date
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from ..models.task import TAG_SEPARATOR, RecordId, Task, TaskInput, TaskPriority, TaskStatus, parse_due_date


class FormMode(str, Enum):
    CREATE = "create"
    EDIT = "edit"


class TaskDraft(BaseModel):
    """An unsaved task plus the pending tag input and the form mode.

    Created empty for a new task, or copied from an existing task when
    editing. Discarded on submit or cancel.
    """
    mode: FormMode = FormMode.CREATE
    task_id: Optional[RecordId] = None
    title: str = ""
    description: str = ""
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: Optional[date] = None
    tags: List[str] = Field(default_factory=list)
    tag_input: str = ""
    error: Optional[str] = None

    @field_validator("due_date", mode="before")
    @classmethod
    def parse_due(cls, v):
        return parse_due_date(v)

    @classmethod
    def from_task(cls, task: Task) -> "TaskDraft":
        return cls(
            mode=FormMode.EDIT,
            task_id=task.id,
            title=task.title,
            description=task.description,
            status=task.status,
            priority=task.priority,
            due_date=task.due_date,
            tags=list(task.tags),
        )

    @property
    def is_edit(self) -> bool:
        return self.mode == FormMode.EDIT

    def add_tag(self, tag: Optional[str] = None) -> bool:
        """Add ``tag`` (default: the pending tag input) to the draft.

        The value is trimmed. Empty values and exact duplicates are
        rejected. A value containing the tag separator is rejected with
        ``error`` set. On success the tag input is cleared.

        Returns:
            True if the tag was added
        """
        value = (self.tag_input if tag is None else tag).strip()
        if not value or value in self.tags:
            return False
        if TAG_SEPARATOR in value:
            self.error = f"Tags cannot contain '{TAG_SEPARATOR}'"
            return False
        self.tags.append(value)
        self.tag_input = ""
        return True

    def remove_tag(self, tag: str) -> bool:
        """Remove the first exact match of ``tag``."""
        if tag not in self.tags:
            return False
        self.tags.remove(tag)
        return True

    def to_input(self) -> TaskInput:
        return TaskInput(
            title=self.title,
            description=self.description,
            status=self.status,
            priority=self.priority,
            due_date=self.due_date,
            tags=list(self.tags),
        )
