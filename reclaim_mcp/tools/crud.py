"""MCP tools for creating and updating Reclaim tasks."""

from typing import Any

from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult, ToolAnnotations
from pydantic import ValidationError

from reclaim_mcp.client import ReclaimClient
from reclaim_mcp.models.inputs import CreateTaskInput, UpdateTaskInput
from reclaim_mcp.utils.results import validation_error_result, wrap_api_call


def _provided(**fields: Any) -> dict[str, Any]:
    """Keep only the arguments the caller actually supplied."""
    return {key: value for key, value in fields.items() if value is not None}


class TaskCrudTools:
    """Registers the create and update tools."""

    def __init__(self, mcp: FastMCP, client: ReclaimClient) -> None:
        self.mcp = mcp
        self.client = client

        mcp.tool(
            name="reclaim_create_task",
            annotations=ToolAnnotations(
                title="Create Task",
                readOnlyHint=False,
                destructiveHint=False,
                idempotentHint=False,
                openWorldHint=True,
            ),
            structured_output=False,
        )(self.reclaim_create_task)
        mcp.tool(
            name="reclaim_update_task",
            annotations=ToolAnnotations(
                title="Update Task",
                readOnlyHint=False,
                destructiveHint=False,
                idempotentHint=True,
                openWorldHint=True,
            ),
            structured_output=False,
        )(self.reclaim_update_task)

    async def reclaim_create_task(
        self,
        title: str,
        notes: str | None = None,
        eventCategory: str | None = None,
        eventSubType: str | None = None,
        priority: str | None = None,
        timeChunksRequired: int | None = None,
        onDeck: bool | None = None,
        status: str | None = None,
        deadline: int | str | None = None,
        snoozeUntil: int | str | None = None,
        eventColor: str | None = None,
    ) -> CallToolResult:
        """
        Create a new task in Reclaim.ai.

        Requires at least a 'title'. Other fields like 'timeChunksRequired',
        'priority', 'deadline', 'notes' and 'eventCategory' are optional but
        recommended. Without a deadline the task is due 24 hours from now.

        USE THIS WHEN:
        - Adding a new task to be scheduled

        DO NOT USE WHEN:
        - Changing an existing task → use reclaim_update_task instead
        - Adding time to an existing task → use reclaim_add_time instead

        Args:
            title: The title of the task
            notes: Notes about the task
            eventCategory: WORK or PERSONAL
            eventSubType: Subcategory of the task
            priority: P1 (highest), P2, P3 or P4
            timeChunksRequired: Number of 15-minute chunks required
            onDeck: Whether to put the task on deck
            status: NEW, SCHEDULED, IN_PROGRESS, COMPLETE, CANCELLED or ARCHIVED
            deadline: Days from now (positive integer), ISO 8601 date/time, or YYYY-MM-DD
            snoozeUntil: Days from now (positive integer), ISO 8601 date/time, or YYYY-MM-DD
            eventColor: LAVENDER, SAGE, GRAPE, FLAMINGO, BANANA, TANGERINE, PEACOCK,
                GRAPHITE, BLUEBERRY, BASIL or TOMATO

        Returns:
            The created task as JSON

        Examples:
            - Simple task: title="Write report"
            - Two hours, due Friday: title="Review PR", timeChunksRequired=8, deadline="2025-06-06"
        """
        arguments = _provided(
            title=title,
            notes=notes,
            eventCategory=eventCategory,
            eventSubType=eventSubType,
            priority=priority,
            timeChunksRequired=timeChunksRequired,
            onDeck=onDeck,
            status=status,
            deadline=deadline,
            snoozeUntil=snoozeUntil,
            eventColor=eventColor,
        )
        try:
            params = CreateTaskInput.model_validate(arguments)
        except ValidationError as e:
            return validation_error_result("reclaim_create_task", e)

        return await wrap_api_call(self.client.create_task(params.to_task_data()))

    async def reclaim_update_task(
        self,
        taskId: int,
        title: str | None = None,
        notes: str | None = None,
        eventCategory: str | None = None,
        eventSubType: str | None = None,
        priority: str | None = None,
        timeChunksRequired: int | None = None,
        onDeck: bool | None = None,
        status: str | None = None,
        deadline: int | str | None = None,
        snoozeUntil: int | str | None = None,
        eventColor: str | None = None,
    ) -> CallToolResult:
        """
        Update an existing Reclaim.ai task. Only the fields given are changed.

        At least one field besides 'taskId' is required. 'notes' replaces the
        existing notes entirely.

        DO NOT USE WHEN:
        - Marking a task done → use reclaim_mark_complete instead
        - Adding time → use reclaim_add_time instead

        Args:
            taskId: The unique ID of the task to update
            title: New title
            notes: New notes (replaces existing notes)
            eventCategory: WORK or PERSONAL
            eventSubType: Subcategory of the task
            priority: P1 (highest), P2, P3 or P4
            timeChunksRequired: Number of 15-minute chunks required
            onDeck: Whether to put the task on deck
            status: NEW, SCHEDULED, IN_PROGRESS, COMPLETE, CANCELLED or ARCHIVED
            deadline: Days from now (positive integer), ISO 8601 date/time, or YYYY-MM-DD
            snoozeUntil: Days from now (positive integer), ISO 8601 date/time, or YYYY-MM-DD
            eventColor: Calendar color name

        Returns:
            The updated task as JSON

        Examples:
            - Rename: taskId=12345, title="New title"
            - Push the deadline out a week: taskId=12345, deadline=7
        """
        arguments = _provided(
            taskId=taskId,
            title=title,
            notes=notes,
            eventCategory=eventCategory,
            eventSubType=eventSubType,
            priority=priority,
            timeChunksRequired=timeChunksRequired,
            onDeck=onDeck,
            status=status,
            deadline=deadline,
            snoozeUntil=snoozeUntil,
            eventColor=eventColor,
        )
        try:
            params = UpdateTaskInput.model_validate(arguments)
        except ValidationError as e:
            return validation_error_result("reclaim_update_task", e)

        return await wrap_api_call(self.client.update_task(params.taskId, params.to_task_data()))
