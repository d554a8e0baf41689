"""MCP tools for listing tasks and acting on them in the Reclaim planner."""

from typing import Any

from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult, TextContent, ToolAnnotations
from pydantic import BaseModel, ValidationError

from reclaim_mcp.client import ReclaimClient
from reclaim_mcp.enums import TaskFilter
from reclaim_mcp.models.inputs import (
    AddTimeInput,
    ClearExceptionsInput,
    DeleteTaskInput,
    GetTaskInput,
    ListTasksInput,
    LogWorkInput,
    MarkCompleteInput,
    MarkIncompleteInput,
    PrioritizeInput,
    StartTimerInput,
    StopTimerInput,
)
from reclaim_mcp.utils.filters import filter_active_tasks
from reclaim_mcp.utils.results import validation_error_result, wrap_api_call

STATUS_NOTE = (
    "IMPORTANT NOTE ON 'COMPLETE' STATUS: In Reclaim.ai, tasks marked 'COMPLETE' mean their "
    "*scheduled time block* finished, but the user did NOT necessarily finish the work or mark it done. "
    "Treat 'COMPLETE' tasks as ACTIVE and PENDING unless they are also ARCHIVED or CANCELLED. "
    "If asked for 'active' or 'open' tasks, YOU MUST INCLUDE tasks with status 'COMPLETE'."
)

GET_TASK_STATUS_NOTE = (
    "Note on 'status': If 'COMPLETE', the scheduled time block ended, but the user has NOT marked "
    "the task done. It is still considered active/pending."
)


def _with_note(result: CallToolResult, note: str) -> CallToolResult:
    if not result.isError:
        result.content.append(TextContent(type="text", text=note))
    return result


def _annotations(title: str, read_only: bool, idempotent: bool, destructive: bool = False) -> ToolAnnotations:
    return ToolAnnotations(
        title=title,
        readOnlyHint=read_only,
        destructiveHint=destructive,
        idempotentHint=idempotent,
        openWorldHint=True,
    )


class TaskActionTools:
    """Registers the listing, lookup, delete and planner action tools."""

    def __init__(self, mcp: FastMCP, client: ReclaimClient) -> None:
        self.mcp = mcp
        self.client = client

        registrations = [
            ("reclaim_list_tasks", self.reclaim_list_tasks, _annotations("List Tasks", True, True)),
            ("reclaim_get_task", self.reclaim_get_task, _annotations("Get Task Details", True, True)),
            ("reclaim_mark_complete", self.reclaim_mark_complete, _annotations("Mark Task Complete", False, True)),
            (
                "reclaim_mark_incomplete",
                self.reclaim_mark_incomplete,
                _annotations("Mark Task Incomplete", False, True),
            ),
            ("reclaim_delete_task", self.reclaim_delete_task, _annotations("Delete Task", False, True, True)),
            ("reclaim_add_time", self.reclaim_add_time, _annotations("Add Time to Task", False, False)),
            ("reclaim_start_timer", self.reclaim_start_timer, _annotations("Start Task Timer", False, False)),
            ("reclaim_stop_timer", self.reclaim_stop_timer, _annotations("Stop Task Timer", False, False)),
            ("reclaim_log_work", self.reclaim_log_work, _annotations("Log Work", False, False)),
            (
                "reclaim_clear_exceptions",
                self.reclaim_clear_exceptions,
                _annotations("Clear Scheduling Exceptions", False, True),
            ),
            ("reclaim_prioritize", self.reclaim_prioritize, _annotations("Prioritize Task", False, True)),
        ]
        for name, fn, annotations in registrations:
            mcp.tool(name=name, annotations=annotations, structured_output=False)(fn)

    @staticmethod
    def _validate(tool_name: str, model: type[BaseModel], arguments: dict[str, Any]) -> BaseModel | CallToolResult:
        try:
            return model.model_validate(arguments)
        except ValidationError as e:
            return validation_error_result(tool_name, e)

    async def reclaim_list_tasks(self, filter: str = TaskFilter.ACTIVE.value) -> CallToolResult:
        """
        List Reclaim.ai tasks. The default filter is 'active'.

        USE THIS WHEN:
        - Looking for tasks you don't know the IDs of
        - Reviewing what is open, scheduled or in progress

        DO NOT USE WHEN:
        - You have a specific task ID → use reclaim_get_task instead

        IMPORTANT NOTE ON 'COMPLETE' STATUS: In Reclaim.ai, tasks marked 'COMPLETE'
        mean their scheduled time block finished, but the user did NOT necessarily
        finish the work or mark it done. Treat 'COMPLETE' tasks as ACTIVE and PENDING
        unless they are also ARCHIVED or CANCELLED. If asked for 'active' or 'open'
        tasks, YOU MUST INCLUDE tasks with status 'COMPLETE'.

        Args:
            filter: "active" (default) excludes ARCHIVED/CANCELLED/deleted tasks; "all" includes everything

        Returns:
            JSON list of tasks followed by a note on the COMPLETE status
        """
        params = self._validate("reclaim_list_tasks", ListTasksInput, {"filter": filter})
        if isinstance(params, CallToolResult):
            return params

        async def fetch():
            tasks = await self.client.list_tasks()
            if params.filter == TaskFilter.ACTIVE.value:
                return filter_active_tasks(tasks)
            return tasks

        return _with_note(await wrap_api_call(fetch()), STATUS_NOTE)

    async def reclaim_get_task(self, taskId: int) -> CallToolResult:
        """
        Retrieve details for a specific Reclaim.ai task by its ID.

        Note on 'status': If 'COMPLETE', the scheduled time block ended, but the user
        has NOT marked the task done. It is still considered active/pending.

        Args:
            taskId: The unique ID of the task to fetch

        Returns:
            JSON task details followed by a note on the COMPLETE status

        Examples:
            - Get task 12345: taskId=12345
        """
        params = self._validate("reclaim_get_task", GetTaskInput, {"taskId": taskId})
        if isinstance(params, CallToolResult):
            return params
        return _with_note(await wrap_api_call(self.client.get_task(params.taskId)), GET_TASK_STATUS_NOTE)

    async def reclaim_mark_complete(self, taskId: int) -> CallToolResult:
        """
        Mark a task as done in Reclaim. This archives the task (status ARCHIVED).

        Use this when the user has actually finished the work. A task whose status
        is already 'COMPLETE' is NOT done; only its scheduled time ran out.

        Args:
            taskId: The unique ID of the task to mark as complete
        """
        params = self._validate("reclaim_mark_complete", MarkCompleteInput, {"taskId": taskId})
        if isinstance(params, CallToolResult):
            return params
        return await wrap_api_call(self.client.mark_task_complete(params.taskId))

    async def reclaim_mark_incomplete(self, taskId: int) -> CallToolResult:
        """
        Mark a task as incomplete, unarchiving it so it is scheduled again.

        Args:
            taskId: The unique ID of the task to mark as incomplete (unarchive)
        """
        params = self._validate("reclaim_mark_incomplete", MarkIncompleteInput, {"taskId": taskId})
        if isinstance(params, CallToolResult):
            return params
        return await wrap_api_call(self.client.mark_task_incomplete(params.taskId))

    async def reclaim_delete_task(self, taskId: int) -> CallToolResult:
        """
        Delete a task from Reclaim.

        Args:
            taskId: The unique ID of the task to delete

        Returns:
            {"success": true} on success
        """
        params = self._validate("reclaim_delete_task", DeleteTaskInput, {"taskId": taskId})
        if isinstance(params, CallToolResult):
            return params
        return await wrap_api_call(self.client.delete_task(params.taskId))

    async def reclaim_add_time(self, taskId: int, minutes: int) -> CallToolResult:
        """
        Add time to a task's schedule in Reclaim.

        Args:
            taskId: The unique ID of the task to add time to
            minutes: Number of minutes to add (positive integer)

        Examples:
            - Add an hour to task 12345: taskId=12345, minutes=60
        """
        params = self._validate("reclaim_add_time", AddTimeInput, {"taskId": taskId, "minutes": minutes})
        if isinstance(params, CallToolResult):
            return params
        return await wrap_api_call(self.client.add_time_to_task(params.taskId, params.minutes))

    async def reclaim_start_timer(self, taskId: int) -> CallToolResult:
        """
        Start the timer for a task (the task moves to IN_PROGRESS).

        Args:
            taskId: The unique ID of the task to start the timer for
        """
        params = self._validate("reclaim_start_timer", StartTimerInput, {"taskId": taskId})
        if isinstance(params, CallToolResult):
            return params
        return await wrap_api_call(self.client.start_task_timer(params.taskId))

    async def reclaim_stop_timer(self, taskId: int) -> CallToolResult:
        """
        Stop the timer for a task.

        Args:
            taskId: The unique ID of the task to stop the timer for
        """
        params = self._validate("reclaim_stop_timer", StopTimerInput, {"taskId": taskId})
        if isinstance(params, CallToolResult):
            return params
        return await wrap_api_call(self.client.stop_task_timer(params.taskId))

    async def reclaim_log_work(self, taskId: int, minutes: int, end: str | None = None) -> CallToolResult:
        """
        Log time spent working on a task.

        Args:
            taskId: The unique ID of the task to log work against
            minutes: Number of minutes worked (positive integer)
            end: Optional end time/date of the work session (ISO 8601 or YYYY-MM-DD). Defaults to now.

        Examples:
            - Log 30 minutes ending now: taskId=12345, minutes=30
            - Log 45 minutes ending at a time: taskId=12345, minutes=45, end="2025-06-01T17:00:00Z"
        """
        arguments: dict[str, Any] = {"taskId": taskId, "minutes": minutes}
        if end is not None:
            arguments["end"] = end
        params = self._validate("reclaim_log_work", LogWorkInput, arguments)
        if isinstance(params, CallToolResult):
            return params
        return await wrap_api_call(self.client.log_work_for_task(params.taskId, params.minutes, params.end))

    async def reclaim_clear_exceptions(self, taskId: int) -> CallToolResult:
        """
        Clear any scheduling exceptions for a task.

        Args:
            taskId: The unique ID of the task whose scheduling exceptions should be cleared
        """
        params = self._validate("reclaim_clear_exceptions", ClearExceptionsInput, {"taskId": taskId})
        if isinstance(params, CallToolResult):
            return params
        return await wrap_api_call(self.client.clear_task_exceptions(params.taskId))

    async def reclaim_prioritize(self, taskId: int) -> CallToolResult:
        """
        Prioritize a task in the Reclaim planner so it is scheduled sooner.

        Args:
            taskId: The unique ID of the task to prioritize
        """
        params = self._validate("reclaim_prioritize", PrioritizeInput, {"taskId": taskId})
        if isinstance(params, CallToolResult):
            return params
        return await wrap_api_call(self.client.prioritize_task(params.taskId))
