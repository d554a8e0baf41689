"""Input models for Reclaim MCP tools."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator, model_validator

from reclaim_mcp.enums import EventCategory, EventColor, Priority, TaskFilter, TaskStatus
from reclaim_mcp.utils.dates import is_date_only, parse_iso_datetime

# ============================================================================
# Shared validators
# ============================================================================


def _validate_date_string(value: str, label: str) -> str:
    if is_date_only(value):
        return value
    if "T" in value.upper() and parse_iso_datetime(value) is not None:
        return value
    raise ValueError(f"{label} must be a valid ISO 8601 date/time string or a YYYY-MM-DD date")


def _validate_day_count_or_date(value: int | str | None, label: str) -> int | str | None:
    if value is None:
        return None
    if isinstance(value, int):
        if value <= 0:
            raise ValueError(f"{label} days must be a positive integer")
        return value
    return _validate_date_string(value, label)


class StrictInput(BaseModel):
    """Base model with common configuration."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid", use_enum_values=True)


class TaskIdInput(StrictInput):
    """Input model for tools that only take a task ID."""

    taskId: StrictInt = Field(..., description="The unique ID of the task", gt=0)


# ============================================================================
# CRUD Tool Input Models
# ============================================================================


class TaskFieldsInput(StrictInput):
    """Optional task fields shared by create and update."""

    notes: str | None = Field(default=None, description="Notes about the task (replaces existing notes)")
    eventCategory: EventCategory | None = Field(default=None, description="Category: WORK or PERSONAL")
    eventSubType: str | None = Field(default=None, description="Subcategory of the task")
    priority: Priority | None = Field(default=None, description="Priority level: P1 (highest) to P4")
    timeChunksRequired: StrictInt | None = Field(
        default=None, description="Number of 15-minute chunks required", gt=0
    )
    onDeck: bool | None = Field(default=None, description="Whether to put the task on deck")
    status: TaskStatus | None = Field(default=None, description="Status of the task")
    deadline: StrictInt | str | None = Field(
        default=None, description="Deadline: days from now, ISO 8601 date/time, or YYYY-MM-DD"
    )
    snoozeUntil: StrictInt | str | None = Field(
        default=None, description="Snooze until: days from now, ISO 8601 date/time, or YYYY-MM-DD"
    )
    eventColor: EventColor | None = Field(default=None, description="Calendar color for the task")

    @field_validator("deadline")
    @classmethod
    def validate_deadline(cls, v: int | str | None) -> int | str | None:
        return _validate_day_count_or_date(v, "Deadline")

    @field_validator("snoozeUntil")
    @classmethod
    def validate_snooze_until(cls, v: int | str | None) -> int | str | None:
        return _validate_day_count_or_date(v, "Snooze")

    def to_task_data(self) -> dict[str, Any]:
        """Return the fields that were provided, keyed by their API names."""
        return self.model_dump(exclude_none=True, exclude={"taskId"})


class CreateTaskInput(TaskFieldsInput):
    """Input model for creating a task."""

    title: str = Field(..., description="The title of the task", min_length=1)


class UpdateTaskInput(TaskFieldsInput):
    """Input model for updating a task."""

    taskId: StrictInt = Field(..., description="The unique ID of the task to update", gt=0)
    title: str | None = Field(default=None, description="New title for the task", min_length=1)

    @model_validator(mode="after")
    def require_update_field(self) -> "UpdateTaskInput":
        if not self.to_task_data():
            raise ValueError("Update requires at least one field to change besides taskId.")
        return self


# ============================================================================
# Action Tool Input Models
# ============================================================================


class ListTasksInput(StrictInput):
    """Input model for listing tasks."""

    filter: TaskFilter = Field(
        default=TaskFilter.ACTIVE,
        description="'active' (default) excludes ARCHIVED/CANCELLED/deleted tasks; 'all' includes everything",
    )


class GetTaskInput(TaskIdInput):
    """Input model for fetching a single task."""


class MarkCompleteInput(TaskIdInput):
    """Input model for marking a task complete."""


class MarkIncompleteInput(TaskIdInput):
    """Input model for marking a task incomplete (unarchive)."""


class DeleteTaskInput(TaskIdInput):
    """Input model for deleting a task."""


class StartTimerInput(TaskIdInput):
    """Input model for starting a task timer."""


class StopTimerInput(TaskIdInput):
    """Input model for stopping a task timer."""


class ClearExceptionsInput(TaskIdInput):
    """Input model for clearing a task's scheduling exceptions."""


class PrioritizeInput(TaskIdInput):
    """Input model for prioritizing a task."""


class AddTimeInput(TaskIdInput):
    """Input model for adding time to a task."""

    minutes: StrictInt = Field(..., description="Number of minutes to add to the task schedule", gt=0)


class LogWorkInput(TaskIdInput):
    """Input model for logging work against a task."""

    minutes: StrictInt = Field(..., description="Number of minutes worked", gt=0)
    end: str | None = Field(
        default=None,
        description="End time of the work session (ISO 8601 or YYYY-MM-DD). Defaults to now.",
    )

    @field_validator("end")
    @classmethod
    def validate_end(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return _validate_date_string(v, "End time")
