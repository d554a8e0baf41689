"""Task filtering helpers."""

import logging
from collections.abc import Mapping
from typing import Any, TypeVar

from reclaim_mcp.enums import TaskStatus

logger = logging.getLogger(__name__)

T = TypeVar("T")

_INACTIVE_STATUSES = {TaskStatus.ARCHIVED.value, TaskStatus.CANCELLED.value}


def _field(task: Any, name: str) -> Any:
    if isinstance(task, Mapping):
        return task.get(name)
    return getattr(task, name, None)


def is_active_task(task: Any) -> bool:
    """
    Return True if a task is "active".

    A task is active when it is not deleted and its status is neither
    ARCHIVED nor CANCELLED. COMPLETE tasks are active: in Reclaim that status
    only means the scheduled time block is over.
    """
    if task is None:
        return False
    status = _field(task, "status")
    if isinstance(status, TaskStatus):
        status = status.value
    return _field(task, "deleted") is not True and status not in _INACTIVE_STATUSES


def filter_active_tasks(tasks: list[T] | tuple[T, ...] | None) -> list[T]:
    """
    Keep only active tasks, preserving order.

    Args:
        tasks: TaskModel instances or task dictionaries

    Returns:
        New list with the active tasks; an empty list for non-list input
    """
    if not isinstance(tasks, (list, tuple)):
        logger.warning("filter_active_tasks received non-list input (%s), returning empty list", type(tasks).__name__)
        return []
    return [task for task in tasks if is_active_task(task)]
