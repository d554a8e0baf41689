"""MCP tool definitions for Reclaim."""

from reclaim_mcp.tools.actions import GET_TASK_STATUS_NOTE, STATUS_NOTE, TaskActionTools
from reclaim_mcp.tools.crud import TaskCrudTools

__all__ = [
    "TaskActionTools",
    "TaskCrudTools",
    "STATUS_NOTE",
    "GET_TASK_STATUS_NOTE",
]
