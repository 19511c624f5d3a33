"""Preference repository: one preference record per user, upserted."""

import logging
from typing import Any, Dict, Optional

import pydantic

from ..core.ports import RecordStore
from ..errors import RemoteError
from ..models.preference import DEFAULT_USER_NAME, Preference, PreferenceUpdate
from ..models.task import RecordId, utc_now_iso

logger = logging.getLogger(__name__)

PREFERENCE_FIELDS = ["Id", "Name", "Owner", "userName", "darkMode", "lastLogin"]


def _parse_preference(record: Any) -> Preference:
    try:
        return Preference.model_validate(record)
    except pydantic.ValidationError as e:
        logger.error(f"Malformed preference record {record!r}: {e}")
        raise RemoteError(f"Malformed preference record: {e.error_count()} invalid field(s)") from e


def _first_result(response: Dict[str, Any]) -> Any:
    results = response.get("results") or []
    if not results:
        raise RemoteError("Record store returned no result")
    return results[0].get("data")


class PreferenceRepository:
    """Stateless access to the preference collection, keyed by owner."""

    def __init__(self, store: RecordStore, collection: str = "user_preference"):
        self.store = store
        self.collection = collection

    async def get(self, user_id: RecordId) -> Optional[Preference]:
        """Get the preference of a user, or None if never created."""
        params = {
            "fields": list(PREFERENCE_FIELDS),
            "where": [{
                "fieldName": "Owner",
                "operator": "ExactMatch",
                "values": [user_id],
            }],
        }
        try:
            response = await self.store.fetch(self.collection, params)
        except RemoteError as e:
            logger.error(f"Error fetching user preference for {user_id}: {e}")
            raise
        records = response.get("data") or []
        if not records:
            return None
        if len(records) > 1:
            logger.warning(f"User {user_id} has {len(records)} preference records; using the first")
        return _parse_preference(records[0])

    async def upsert(self, user_id: RecordId, changes: PreferenceUpdate) -> Preference:
        """Merge ``changes`` onto the user's preference, creating it if absent.

        A new record defaults ``userName`` to "User" and ``darkMode`` to
        False. ``lastLogin`` is stamped either way.
        """
        existing = await self.get(user_id)
        now = utc_now_iso()

        if existing is None:
            user_name = changes.user_name or DEFAULT_USER_NAME
            record = {
                "Name": f"Preferences for {user_name}",
                "Owner": user_id,
                "userName": user_name,
                "darkMode": bool(changes.dark_mode),
                "lastLogin": now,
            }
            try:
                response = await self.store.create(self.collection, {"records": [record]})
            except RemoteError as e:
                logger.error(f"Error creating user preference for {user_id}: {e}")
                raise
            logger.info(f"Created preference record for user {user_id}")
            return _parse_preference(_first_result(response))

        record = {"Id": existing.id, **changes.to_record(), "lastLogin": now}
        try:
            response = await self.store.update(self.collection, {"records": [record]})
        except RemoteError as e:
            logger.error(f"Error updating user preference for {user_id}: {e}")
            raise
        return _parse_preference(_first_result(response))
