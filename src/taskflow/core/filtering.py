"""Derived views over the fetched task list. Pure functions, no store calls."""

from typing import Dict, Iterable, List

from ..models.task import Task, TaskStatus
from ..schemas.filters import ALL, TaskFilters


def matches_search(task: Task, search: str) -> bool:
    """Case-insensitive substring match against title, description or any tag."""
    if not search:
        return True
    term = search.lower()
    if term in task.title.lower() or term in task.description.lower():
        return True
    return any(term in tag.lower() for tag in task.tags)


def matches_filters(task: Task, filters: TaskFilters) -> bool:
    if filters.status != ALL and task.status.value != filters.status:
        return False
    if filters.priority != ALL and task.priority.value != filters.priority:
        return False
    return matches_search(task, filters.search)


def filter_tasks(tasks: Iterable[Task], filters: TaskFilters) -> List[Task]:
    """Tasks satisfying all three filters, in their original order."""
    return [task for task in tasks if matches_filters(task, filters)]


def count_by_status(tasks: Iterable[Task]) -> Dict[TaskStatus, int]:
    """Number of tasks per status. Every status is present, even at zero."""
    counts = {status: 0 for status in TaskStatus}
    for task in tasks:
        counts[task.status] += 1
    return counts
