"""
MCP Server for Reclaim.ai.

This server exposes the Reclaim.ai task API as MCP tools and resources,
enabling task management operations including listing, creating, updating,
completing, and tracking time on tasks.
"""

from reclaim_mcp.client import ReclaimClient
from reclaim_mcp.config import ConfigError, ReclaimConfig

# Re-export enums
from reclaim_mcp.enums import MINUTES_PER_CHUNK, EventCategory, EventColor, Priority, TaskFilter, TaskStatus
from reclaim_mcp.errors import ReclaimError, normalize_error

# Re-export models
from reclaim_mcp.models import (
    ActionResult,
    AddTimeInput,
    CreateTaskInput,
    EmptySuccess,
    ListTasksInput,
    LogWorkInput,
    OpaqueResponse,
    TaskModel,
    UpdateTaskInput,
    decode_response,
)
from reclaim_mcp.resources import ACTIVE_TASKS_URI, TaskResources
from reclaim_mcp.server import create_server, run
from reclaim_mcp.tools import TaskActionTools, TaskCrudTools

# Re-export utilities
from reclaim_mcp.utils import filter_active_tasks, parse_deadline, wrap_api_call

__all__ = [
    # Enums
    "TaskStatus",
    "Priority",
    "EventCategory",
    "EventColor",
    "TaskFilter",
    "MINUTES_PER_CHUNK",
    # Configuration and errors
    "ReclaimConfig",
    "ConfigError",
    "ReclaimError",
    "normalize_error",
    # Models
    "TaskModel",
    "ActionResult",
    "EmptySuccess",
    "OpaqueResponse",
    "decode_response",
    "CreateTaskInput",
    "UpdateTaskInput",
    "ListTasksInput",
    "AddTimeInput",
    "LogWorkInput",
    # Client
    "ReclaimClient",
    # Utility functions
    "parse_deadline",
    "filter_active_tasks",
    "wrap_api_call",
    # Tools and resources
    "TaskActionTools",
    "TaskCrudTools",
    "TaskResources",
    "ACTIVE_TASKS_URI",
    # Server
    "create_server",
    "run",
]
