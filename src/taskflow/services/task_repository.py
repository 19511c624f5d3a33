"""Task repository: task operations mapped onto the record store."""

import logging
from typing import Any, Dict, List, Optional

import pydantic

from ..core.ports import RecordStore
from ..errors import RemoteError, ValidationError
from ..models.task import RecordId, Task, TaskInput, TaskStatus, utc_now_iso
from ..schemas.filters import ALL, TaskFilters

logger = logging.getLogger(__name__)

TASK_FIELDS = [
    "Id", "Name", "Tags", "Owner", "title", "description",
    "status", "priority", "dueDate", "createdAt",
]

SEARCH_FIELDS = ["title", "description", "Tags"]


def build_list_params(filters: Optional[TaskFilters] = None) -> Dict[str, Any]:
    """Translate filter state into a record store query.

    Status and priority become exact-match conditions unless "all"; a
    non-empty search becomes an OR group of substring matches over title,
    description and tags. Newest tasks first.
    """
    filters = filters or TaskFilters()
    params: Dict[str, Any] = {
        "fields": list(TASK_FIELDS),
        "orderBy": [{"fieldName": "createdAt", "SortType": "DESC"}],
        "where": [],
    }

    if filters.status != ALL:
        params["where"].append({
            "fieldName": "status",
            "operator": "ExactMatch",
            "values": [filters.status],
        })

    if filters.priority != ALL:
        params["where"].append({
            "fieldName": "priority",
            "operator": "ExactMatch",
            "values": [filters.priority],
        })

    if filters.search:
        params["whereGroups"] = [{
            "operator": "OR",
            "subGroups": [
                {
                    "conditions": [{
                        "fieldName": field,
                        "operator": "Contains",
                        "values": [filters.search],
                    }],
                    "operator": "",
                }
                for field in SEARCH_FIELDS
            ],
        }]

    return params


def _parse_task(record: Any) -> Task:
    try:
        return Task.model_validate(record)
    except pydantic.ValidationError as e:
        logger.error(f"Malformed task record {record!r}: {e}")
        raise RemoteError(f"Malformed task record: {e.error_count()} invalid field(s)") from e


def _first_result(response: Dict[str, Any]) -> Any:
    results = response.get("results") or []
    if not results:
        raise RemoteError("Record store returned no result")
    return results[0].get("data")


class TaskRepository:
    """Stateless mapping of task operations onto one record store collection.

    Attributes:
        store: The record store client
        collection: Name of the task collection
    """

    def __init__(self, store: RecordStore, collection: str = "task"):
        self.store = store
        self.collection = collection

    async def list(self, filters: Optional[TaskFilters] = None) -> List[Task]:
        """List tasks matching the filters, newest first.

        Raises:
            RemoteError: On transport or store failure
        """
        try:
            response = await self.store.fetch(self.collection, build_list_params(filters))
        except RemoteError as e:
            logger.error(f"Error fetching tasks: {e}")
            raise
        return [_parse_task(record) for record in response.get("data") or []]

    async def get(self, task_id: RecordId) -> Task:
        """Fetch a single task by id."""
        try:
            response = await self.store.get_by_id(self.collection, task_id)
        except RemoteError as e:
            logger.error(f"Error fetching task with ID {task_id}: {e}")
            raise
        if response.get("data") is None:
            raise RemoteError(f"Task {task_id} not found")
        return _parse_task(response["data"])

    async def create(self, draft: TaskInput) -> Task:
        """Create a task, stamping ``createdAt`` with the submission time.

        Raises:
            ValidationError: If the title is empty (no store call is made)
            RemoteError: On store failure
        """
        draft.ensure_valid()
        record = draft.to_record()
        record["createdAt"] = utc_now_iso()

        try:
            response = await self.store.create(self.collection, {"records": [record]})
        except RemoteError as e:
            logger.error(f"Error creating task: {e}")
            raise
        task = _parse_task(_first_result(response))
        logger.info(f"Created task {task.id}")
        return task

    async def update(self, task_id: RecordId, draft: TaskInput) -> Task:
        """Replace all updatable fields of a task; id and createdAt stay."""
        draft.ensure_valid()
        record = {"Id": task_id, **draft.to_record()}

        try:
            response = await self.store.update(self.collection, {"records": [record]})
        except RemoteError as e:
            logger.error(f"Error updating task with ID {task_id}: {e}")
            raise
        task = _parse_task(_first_result(response))
        logger.info(f"Updated task {task_id}")
        return task

    async def remove(self, task_id: RecordId) -> bool:
        """Delete a task by id.

        Returns:
            True if the store reports the deletion succeeded
        """
        try:
            response = await self.store.delete(self.collection, {"RecordIds": [task_id]})
        except RemoteError as e:
            logger.error(f"Error deleting task with ID {task_id}: {e}")
            raise
        success = bool(response.get("success"))
        if success:
            logger.info(f"Deleted task {task_id}")
        return success

    async def set_status(self, task_id: RecordId, status: TaskStatus) -> Task:
        """Change only the status of a task."""
        try:
            status = TaskStatus(status)
        except ValueError:
            raise ValidationError(f"Unknown status: {status!r}", field="status")
        try:
            response = await self.store.update(
                self.collection,
                {"records": [{"Id": task_id, "status": status.value}]},
            )
        except RemoteError as e:
            logger.error(f"Error updating task status for ID {task_id}: {e}")
            raise
        task = _parse_task(_first_result(response))
        logger.info(f"Task {task_id} moved to {status.value}")
        return task
