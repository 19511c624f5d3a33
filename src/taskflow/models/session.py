"""Authenticated session as handed over by the identity provider."""

from typing import Any, Dict, Optional

from pydantic import BaseModel

from .task import RecordId


class Session(BaseModel):
    """Who is signed in. Managers only read ``user_id`` and ``is_authenticated``."""
    user_id: Optional[RecordId] = None
    is_authenticated: bool = False
    first_name: Optional[str] = None
    email: Optional[str] = None

    @classmethod
    def anonymous(cls) -> "Session":
        return cls()

    @classmethod
    def from_user(cls, user: Optional[Dict[str, Any]]) -> "Session":
        """Build a session from the identity provider's user object."""
        if not user or user.get("userId") is None:
            return cls.anonymous()
        return cls(
            user_id=user["userId"],
            is_authenticated=True,
            first_name=user.get("firstName"),
            email=user.get("emailAddress"),
        )
