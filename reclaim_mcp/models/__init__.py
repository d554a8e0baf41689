"""Pydantic models for Reclaim MCP."""

from reclaim_mcp.models.inputs import (
    AddTimeInput,
    ClearExceptionsInput,
    CreateTaskInput,
    DeleteTaskInput,
    GetTaskInput,
    ListTasksInput,
    LogWorkInput,
    MarkCompleteInput,
    MarkIncompleteInput,
    PrioritizeInput,
    StartTimerInput,
    StopTimerInput,
    UpdateTaskInput,
)
from reclaim_mcp.models.task import (
    ActionResult,
    EmptySuccess,
    OpaqueResponse,
    ReclaimResponse,
    TaskModel,
    decode_response,
)

__all__ = [
    # Response models
    "TaskModel",
    "ActionResult",
    "EmptySuccess",
    "OpaqueResponse",
    "ReclaimResponse",
    "decode_response",
    # CRUD input models
    "CreateTaskInput",
    "UpdateTaskInput",
    # Action input models
    "ListTasksInput",
    "GetTaskInput",
    "MarkCompleteInput",
    "MarkIncompleteInput",
    "DeleteTaskInput",
    "AddTimeInput",
    "StartTimerInput",
    "StopTimerInput",
    "LogWorkInput",
    "ClearExceptionsInput",
    "PrioritizeInput",
]
