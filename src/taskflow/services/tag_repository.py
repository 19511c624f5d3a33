"""Task-tag links stored in their own collection."""

import logging
from typing import List

import pydantic

from ..core.ports import RecordStore
from ..errors import RemoteError, ValidationError
from ..models.tag import TaskTag
from ..models.task import TAG_SEPARATOR, RecordId

logger = logging.getLogger(__name__)


def _parse_tag(record) -> TaskTag:
    try:
        return TaskTag.model_validate(record)
    except pydantic.ValidationError as e:
        raise RemoteError(f"Malformed task tag record: {e.error_count()} invalid field(s)") from e


class TaskTagRepository:

    def __init__(self, store: RecordStore, collection: str = "task_tag"):
        self.store = store
        self.collection = collection

    async def list_for_task(self, task_id: RecordId) -> List[TaskTag]:
        params = {
            "fields": ["Id", "Name", "tag", "task"],
            "where": [{
                "fieldName": "task",
                "operator": "ExactMatch",
                "values": [task_id],
            }],
        }
        try:
            response = await self.store.fetch(self.collection, params)
        except RemoteError as e:
            logger.error(f"Error fetching tags for task {task_id}: {e}")
            raise
        return [_parse_tag(record) for record in response.get("data") or []]

    async def create(self, task_id: RecordId, tag: str) -> TaskTag:
        tag = tag.strip()
        if not tag:
            raise ValidationError("Tag must not be empty", field="tag")
        if TAG_SEPARATOR in tag:
            raise ValidationError(f"Tag must not contain '{TAG_SEPARATOR}'", field="tag")
        record = {"Name": f"{tag} for task {task_id}", "tag": tag, "task": task_id}
        try:
            response = await self.store.create(self.collection, {"records": [record]})
        except RemoteError as e:
            logger.error(f"Error creating tag {tag!r} for task {task_id}: {e}")
            raise
        results = response.get("results") or []
        if not results:
            raise RemoteError("Record store returned no result")
        return _parse_tag(results[0].get("data"))

    async def remove(self, tag_id: RecordId) -> bool:
        try:
            response = await self.store.delete(self.collection, {"RecordIds": [tag_id]})
        except RemoteError as e:
            logger.error(f"Error deleting task tag with ID {tag_id}: {e}")
            raise
        return bool(response.get("success"))

    async def sync(self, task_id: RecordId, tags: List[str]) -> List[TaskTag]:
        """Make the task's tag links match ``tags``.

        Links for new tags are created and links for tags no longer on
        the task are removed. Returns the links in ``tags`` order.
        """
        existing = await self.list_for_task(task_id)
        by_tag = {}
        for link in existing:
            if link.tag in tags and link.tag not in by_tag:
                by_tag[link.tag] = link
            elif not await self.remove(link.id):
                logger.warning(f"Tag link {link.id} of task {task_id} was already gone")

        for tag in tags:
            if tag not in by_tag:
                by_tag[tag] = await self.create(task_id, tag)
        return [by_tag[tag] for tag in tags]
