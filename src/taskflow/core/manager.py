"""Task manager: session-scoped owner of the task list, filters and form state.

Repositories are stateless. The manager is the only state owner and
reconciles by re-reading the full list after every successful write.
Remote failures never escape an operation: each one ends in a stable
state with the last good list kept, a logged error and a notification.
"""

import logging
from enum import Enum
from typing import Dict, List, Optional, Set

import pydantic

from ..errors import RemoteError, ValidationError
from ..models.notification import NotificationLevel
from ..models.session import Session
from ..models.task import RecordId, Task, TaskStatus
from ..schemas.filters import TaskFilters
from ..services.tag_repository import TaskTagRepository
from ..services.task_repository import TaskRepository
from .draft import TaskDraft
from .filtering import count_by_status, filter_tasks
from .ports import ConfirmationPort, Notifier

logger = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = "Failed to load tasks. Please try again."
DELETE_CONFIRMATION = "Are you sure you want to delete this task?"


def _as_validation_error(error: pydantic.ValidationError, prefix: str) -> ValidationError:
    details = error.errors()
    if not details:
        return ValidationError(f"{prefix}: {error}")
    loc = details[0].get("loc") or ()
    field = str(loc[0]) if loc else None
    return ValidationError(f"{prefix}: {details[0]['msg']}", field=field)


class ManagerState(str, Enum):
    INIT = "init"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class TaskManager:
    """Mediates between UI intents and the task repository.

    Attributes:
        tasks: Last successfully fetched list (unfiltered by the client)
        filters: Current filter state
        state: INIT, LOADING, READY or ERROR
        loading: True while the latest list fetch is in flight
        error: Message of the last failed fetch, None otherwise
        draft: Open form state, None when the form is closed
        submitting: True while a create/update is in flight
    """

    def __init__(
        self,
        repository: TaskRepository,
        notifier: Notifier,
        confirmation: ConfirmationPort,
        session: Optional[Session] = None,
        tag_repository: Optional[TaskTagRepository] = None,
    ):
        self.repository = repository
        self.tag_repository = tag_repository
        self.notifier = notifier
        self.confirmation = confirmation
        self.session = session or Session.anonymous()

        self.tasks: List[Task] = []
        self.filters = TaskFilters()
        self.state = ManagerState.INIT
        self.loading = False
        self.error: Optional[str] = None

        self.draft: Optional[TaskDraft] = None
        self.submitting = False
        self._deleting: Set[RecordId] = set()
        self._status_updating: Set[RecordId] = set()

        self._fetch_seq = 0

    # --- Derived views ---

    @property
    def filtered_tasks(self) -> List[Task]:
        return filter_tasks(self.tasks, self.filters)

    @property
    def counts_by_status(self) -> Dict[TaskStatus, int]:
        """Counts over the unfiltered list, so summary tiles stay stable."""
        return count_by_status(self.tasks)

    @property
    def has_active_filters(self) -> bool:
        return not self.filters.is_default

    @property
    def form_open(self) -> bool:
        return self.draft is not None

    def is_deleting(self, task_id: RecordId) -> bool:
        return task_id in self._deleting

    def is_updating_status(self, task_id: RecordId) -> bool:
        return task_id in self._status_updating

    def _notify(self, level: NotificationLevel, message: str) -> None:
        self.notifier.notify(level, message)

    # --- Session ---

    async def set_session(self, session: Session) -> None:
        """Adopt a new session; fetch when authenticated, reset otherwise."""
        self.session = session
        if session.is_authenticated:
            await self.refresh()
            return
        self._fetch_seq += 1
        self.tasks = []
        self.draft = None
        self.loading = False
        self.error = None
        self.state = ManagerState.INIT

    # --- Loading ---

    async def refresh(self) -> bool:
        """Fetch the task list for the current filters.

        Only the most recently issued fetch may update the list; a
        response that arrives after a newer fetch was started is dropped.
        A failure keeps the previous list.

        Returns:
            True if this fetch updated the list
        """
        if not self.session.is_authenticated:
            return False

        self._fetch_seq += 1
        seq = self._fetch_seq
        filters = self.filters
        self.loading = True
        self.error = None
        self.state = ManagerState.LOADING

        try:
            tasks = await self.repository.list(filters)
        except RemoteError as e:
            if seq != self._fetch_seq:
                logger.debug(f"Discarding failure of superseded fetch #{seq}: {e}")
                return False
            logger.error(f"Error fetching tasks: {e}")
            self.error = LOAD_ERROR_MESSAGE
            self.state = ManagerState.ERROR
            self._notify(NotificationLevel.ERROR, "Failed to load tasks")
            return False
        finally:
            if seq == self._fetch_seq:
                self.loading = False

        if seq != self._fetch_seq:
            logger.debug(f"Discarding stale response of fetch #{seq}")
            return False

        self.tasks = tasks
        self.state = ManagerState.READY
        return True

    async def retry(self) -> bool:
        return await self.refresh()

    # --- Filters ---

    async def set_filters(
        self,
        *,
        status: Optional[str] = None,
        priority: Optional[str] = None,
        search: Optional[str] = None,
    ) -> bool:
        """Change any of the filters and re-fetch.

        An unknown status or priority is reported and leaves the filters
        and the list unchanged.

        Returns:
            True if the list was re-fetched with the new filters
        """
        changes = {
            key: value
            for key, value in (("status", status), ("priority", priority), ("search", search))
            if value is not None
        }
        try:
            self.filters = TaskFilters(**{**self.filters.model_dump(), **changes})
        except pydantic.ValidationError as e:
            error = _as_validation_error(e, "Invalid filter")
            logger.warning(f"Rejected filter change {changes}: {error}")
            self._notify(NotificationLevel.ERROR, str(error))
            return False
        return await self.refresh()

    async def reset_filters(self) -> bool:
        self.filters = TaskFilters()
        self._notify(NotificationLevel.INFO, "Filters reset")
        return await self.refresh()

    # --- Form ---

    def open_create_form(self) -> bool:
        if not self.session.is_authenticated:
            self._notify(NotificationLevel.ERROR, "Please login to create tasks")
            return False
        self.draft = TaskDraft()
        return True

    def open_edit_form(self, task: Task) -> TaskDraft:
        self.draft = TaskDraft.from_task(task)
        return self.draft

    def cancel_form(self) -> None:
        self.draft = None

    async def submit(self) -> bool:
        """Create or update the task in the open form.

        The title is validated before any repository call. On success the
        form closes and the list is re-fetched; on failure the form stays
        open and the list is untouched.

        Returns:
            True if the task was saved
        """
        draft = self.draft
        if draft is None or self.submitting:
            return False

        self.submitting = True
        editing = draft.is_edit
        try:
            task_input = draft.to_input()
            task_input.ensure_valid()
            draft.error = None
            if editing:
                task = await self.repository.update(draft.task_id, task_input)
            else:
                task = await self.repository.create(task_input)
        except (ValidationError, pydantic.ValidationError) as e:
            error = _as_validation_error(e, "Invalid task") if isinstance(e, pydantic.ValidationError) else e
            draft.error = str(error)
            self._notify(NotificationLevel.ERROR, str(error))
            return False
        except RemoteError as e:
            logger.error(f"Error {'updating' if editing else 'creating'} task: {e}")
            self._notify(NotificationLevel.ERROR, "Failed to update task" if editing else "Failed to create task")
            return False
        finally:
            self.submitting = False

        self._notify(
            NotificationLevel.SUCCESS,
            "Task updated successfully" if editing else "New task created successfully",
        )
        self.draft = None
        await self._sync_tags(task)
        await self.refresh()
        return True

    async def _sync_tags(self, task: Task) -> None:
        """Mirror the saved task's tags into the tag collection, if one is wired.

        The task itself is already saved, so a failure here is only reported.
        """
        if self.tag_repository is None:
            return
        try:
            await self.tag_repository.sync(task.id, task.tags)
        except (RemoteError, ValidationError) as e:
            logger.error(f"Error syncing tags of task {task.id}: {e}")
            self._notify(NotificationLevel.WARNING, "Task saved, but its tags could not be updated")

    # --- Row actions ---

    async def delete(self, task_id: RecordId) -> bool:
        """Delete a task after the user confirms.

        Returns:
            True if the task was deleted
        """
        if task_id in self._deleting:
            return False
        if not await self.confirmation.confirm(DELETE_CONFIRMATION):
            return False

        self._deleting.add(task_id)
        try:
            deleted = await self.repository.remove(task_id)
        except RemoteError as e:
            logger.error(f"Error deleting task {task_id}: {e}")
            self._notify(NotificationLevel.ERROR, "Failed to delete task")
            return False
        finally:
            self._deleting.discard(task_id)

        if not deleted:
            logger.warning(f"Store did not delete task {task_id}")
            self._notify(NotificationLevel.ERROR, "Failed to delete task")
            return False

        self._notify(NotificationLevel.SUCCESS, "Task deleted successfully")
        await self.refresh()
        return True

    async def change_status(self, task_id: RecordId, status: TaskStatus) -> bool:
        """Quick status change. Independent per task; refused while one is
        already pending for the same task.

        Returns:
            True if the status was changed
        """
        if task_id in self._status_updating:
            return False

        self._status_updating.add(task_id)
        try:
            await self.repository.set_status(task_id, status)
        except (RemoteError, ValidationError) as e:
            logger.error(f"Error updating task status for {task_id}: {e}")
            self._notify(NotificationLevel.ERROR, "Failed to update task status")
            return False
        finally:
            self._status_updating.discard(task_id)

        self._notify(NotificationLevel.INFO, "Task status updated")
        await self.refresh()
        return True
