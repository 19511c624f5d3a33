"""Task-tag link records."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .task import RecordId


class TaskTag(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: RecordId = Field(alias="Id")
    name: Optional[str] = Field(default=None, alias="Name")
    tag: str
    task: Optional[RecordId] = None
