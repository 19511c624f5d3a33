"""Task schema for the task collection of the record store."""

from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..errors import ValidationError

RecordId = Union[int, str]

# Tags are stored as one joined string, so a tag may not contain this.
TAG_SEPARATOR = ","


class TaskStatus(str, Enum):
    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


def normalize_tags(value: Any) -> List[str]:
    """Turn a comma-joined string or a list into a clean tag list.

    Entries are trimmed; empty entries and duplicates are dropped,
    first occurrence wins.
    """
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(TAG_SEPARATOR)
    tags: List[str] = []
    for item in value:
        tag = str(item).strip()
        if tag and tag not in tags:
            tags.append(tag)
    return tags


def parse_due_date(value: Any) -> Any:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and "T" in value:
        return value.split("T", 1)[0]
    return value


def _coerce_status(value: Any) -> TaskStatus:
    if isinstance(value, str):
        try:
            return TaskStatus(value.lower())
        except ValueError:
            return TaskStatus.TODO
    if isinstance(value, TaskStatus):
        return value
    return TaskStatus.TODO


def _coerce_priority(value: Any) -> TaskPriority:
    if isinstance(value, str):
        try:
            return TaskPriority(value.lower())
        except ValueError:
            return TaskPriority.MEDIUM
    if isinstance(value, TaskPriority):
        return value
    return TaskPriority.MEDIUM


class Task(BaseModel):
    """A task as stored in the task collection.

    Field aliases are the store's field names, so a raw record can be
    validated directly with ``Task.model_validate(record)``.

    Attributes:
        id: Store-assigned identifier, immutable
        title: Task title (required)
        description: Free text
        status: todo, in-progress or done
        priority: low, medium, high or urgent
        due_date: Optional due date
        tags: Ordered, duplicate-free labels
        created_at: Set once at creation
        owner: Owning user as reported by the store
    """
    model_config = ConfigDict(populate_by_name=True)

    id: RecordId = Field(alias="Id")
    name: Optional[str] = Field(default=None, alias="Name")
    title: str
    description: str = ""
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: Optional[date] = Field(default=None, alias="dueDate")
    tags: List[str] = Field(default_factory=list, alias="Tags")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    owner: Optional[Any] = Field(default=None, alias="Owner")

    @field_validator("description", mode="before")
    @classmethod
    def parse_description(cls, v):
        return "" if v is None else v

    @field_validator("status", mode="before")
    @classmethod
    def parse_status(cls, v):
        return _coerce_status(v)

    @field_validator("priority", mode="before")
    @classmethod
    def parse_priority(cls, v):
        return _coerce_priority(v)

    @field_validator("due_date", mode="before")
    @classmethod
    def parse_due(cls, v):
        return parse_due_date(v)

    @field_validator("tags", mode="before")
    @classmethod
    def parse_tags(cls, v):
        return normalize_tags(v)


class TaskInput(BaseModel):
    """The updatable fields of a task, as submitted from the form."""
    title: str = ""
    description: str = ""
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: Optional[date] = None
    tags: List[str] = Field(default_factory=list)

    @field_validator("description", mode="before")
    @classmethod
    def parse_description(cls, v):
        return "" if v is None else v

    @field_validator("due_date", mode="before")
    @classmethod
    def parse_due(cls, v):
        return parse_due_date(v)

    @field_validator("tags", mode="before")
    @classmethod
    def parse_tags(cls, v):
        return normalize_tags(v)

    def ensure_valid(self) -> None:
        """Raise ValidationError unless the input can be submitted."""
        if not self.title.strip():
            raise ValidationError("Task title is required", field="title")
        for tag in self.tags:
            if TAG_SEPARATOR in tag:
                raise ValidationError(f"Tag {tag!r} must not contain '{TAG_SEPARATOR}'", field="tags")

    def to_record(self) -> Dict[str, Any]:
        """Map onto the store's field names."""
        return {
            "Name": self.title,
            "Tags": TAG_SEPARATOR.join(self.tags),
            "title": self.title,
            "description": self.description,
            "status": self.status.value,
            "priority": self.priority.value,
            "dueDate": self.due_date.isoformat() if self.due_date else None,
        }


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
