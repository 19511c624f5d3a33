"""User preference schema for the preference collection."""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .task import RecordId

DEFAULT_USER_NAME = "User"


class Preference(BaseModel):
    """One preference record per user.

    Attributes:
        id: Store-assigned identifier
        user_name: Display name override
        dark_mode: Whether the dark theme is on
        last_login: Refreshed on every update
        owner: Owning user id
    """
    model_config = ConfigDict(populate_by_name=True)

    id: RecordId = Field(alias="Id")
    name: Optional[str] = Field(default=None, alias="Name")
    user_name: str = Field(default="", alias="userName")
    dark_mode: bool = Field(default=False, alias="darkMode")
    last_login: Optional[datetime] = Field(default=None, alias="lastLogin")
    owner: Optional[Any] = Field(default=None, alias="Owner")

    @field_validator("user_name", mode="before")
    @classmethod
    def parse_user_name(cls, v):
        return "" if v is None else v

    @field_validator("dark_mode", mode="before")
    @classmethod
    def parse_dark_mode(cls, v):
        return False if v is None else v


class PreferenceUpdate(BaseModel):
    """Partial preference change; unset fields are left alone."""
    user_name: Optional[str] = None
    dark_mode: Optional[bool] = None

    def to_record(self) -> Dict[str, Any]:
        record: Dict[str, Any] = {}
        if self.user_name is not None:
            record["userName"] = self.user_name
        if self.dark_mode is not None:
            record["darkMode"] = self.dark_mode
        return record
