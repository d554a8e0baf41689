"""Async client for the Reclaim.ai REST API."""

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from reclaim_mcp.config import ReclaimConfig
from reclaim_mcp.errors import normalize_error
from reclaim_mcp.models.task import ReclaimResponse, TaskModel, decode_response, parse_task, parse_tasks
from reclaim_mcp.utils.dates import is_date_only, parse_deadline, to_day_boundary

logger = logging.getLogger(__name__)


def _strip_none(data: Mapping[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None}


def _require_positive_minutes(minutes: int, action: str) -> None:
    if minutes <= 0:
        raise ValueError(f"Minutes must be positive to {action}.")


def build_task_payload(task_data: Mapping[str, Any], default_due: bool) -> dict[str, Any]:
    """
    Map tool-facing task fields onto the API payload.

    `deadline` becomes `due` (normalized to ISO 8601) and `snoozeUntil` is
    normalized the same way. Keys with None values are dropped.

    Args:
        task_data: Task fields keyed by API name, may include `deadline`
        default_due: Supply a default `due` (24 hours from now) when none is given

    Returns:
        Payload dictionary ready to send
    """
    payload = _strip_none(task_data)

    if "deadline" in payload:
        payload["due"] = parse_deadline(payload.pop("deadline"))
    elif default_due and not payload.get("due"):
        payload["due"] = parse_deadline(None)

    if "snoozeUntil" in payload:
        payload["snoozeUntil"] = parse_deadline(payload["snoozeUntil"])

    return payload


class ReclaimClient:
    """
    Thin binding of Reclaim task operations onto HTTP calls.

    Every method either returns the decoded response or raises a ReclaimError.
    """

    def __init__(self, config: ReclaimConfig, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.config = config
        self._client = httpx.AsyncClient(
            base_url=config.base_url,
            headers={
                "Authorization": f"Bearer {config.api_key}",
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
            timeout=config.timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "ReclaimClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        context: str,
        *,
        json_data: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """
        Perform one request and return the decoded JSON body.

        Returns None for an empty body. Any failure is raised as a ReclaimError.
        """
        logger.debug("Reclaim request: %s %s params=%s", method, path, params)
        try:
            response = await self._client.request(method, path.lstrip("/"), json=json_data, params=params)
            response.raise_for_status()
            if response.status_code == 204 or not response.content.strip():
                return None
            return response.json()
        except Exception as e:
            raise normalize_error(e, context) from e

    # ------------------------------------------------------------------
    # Task CRUD
    # ------------------------------------------------------------------

    async def list_tasks(self) -> list[TaskModel]:
        """
        Fetch all tasks.

        A status of COMPLETE only means the scheduled time finished; see
        filter_active_tasks for what counts as active.
        """
        context = "listTasks"
        data = await self._request("GET", "/tasks", context)
        try:
            return parse_tasks(data)
        except Exception as e:
            raise normalize_error(e, context) from e

    async def get_task(self, task_id: int) -> TaskModel:
        """Fetch a single task; a missing task raises ReclaimError with status 404."""
        context = f"getTask(taskId={task_id})"
        data = await self._request("GET", f"/tasks/{task_id}", context)
        try:
            return parse_task(data)
        except Exception as e:
            raise normalize_error(e, context) from e

    async def create_task(self, task_data: Mapping[str, Any]) -> TaskModel:
        """
        Create a task.

        Args:
            task_data: Task fields keyed by API name. `deadline` is converted to
                `due`; a due date 24 hours out is used when neither is given.

        Returns:
            The created task as returned by the API
        """
        context = "createTask"
        payload = build_task_payload(task_data, default_due=True)
        data = await self._request("POST", "/tasks", context, json_data=payload)
        try:
            return parse_task(data)
        except Exception as e:
            raise normalize_error(e, context) from e

    async def update_task(self, task_id: int, task_data: Mapping[str, Any]) -> TaskModel:
        """
        Update a task with PATCH semantics.

        Only provided fields change; `due` is not defaulted. With nothing left
        to send, no request is made and the current task is returned.
        """
        context = f"updateTask(taskId={task_id})"
        payload = build_task_payload(task_data, default_due=False)
        if not payload:
            logger.warning("update_task called for task %s with no fields to update, skipping API call", task_id)
            return await self.get_task(task_id)

        data = await self._request("PATCH", f"/tasks/{task_id}", context, json_data=payload)
        try:
            return parse_task(data)
        except Exception as e:
            raise normalize_error(e, context) from e

    async def delete_task(self, task_id: int) -> None:
        """Delete a task (a soft delete upstream)."""
        await self._request("DELETE", f"/tasks/{task_id}", f"deleteTask(taskId={task_id})")

    # ------------------------------------------------------------------
    # Planner actions
    # ------------------------------------------------------------------

    async def _planner_action(
        self, action: str, task_id: int, context: str, params: dict[str, Any] | None = None
    ) -> ReclaimResponse:
        data = await self._request("POST", f"/planner/{action}/task/{task_id}", context, params=params)
        try:
            return decode_response(data)
        except Exception as e:
            raise normalize_error(e, context) from e

    async def mark_task_complete(self, task_id: int) -> ReclaimResponse:
        """Mark a task done (archives it)."""
        return await self._planner_action("done", task_id, f"markTaskComplete(taskId={task_id})")

    async def mark_task_incomplete(self, task_id: int) -> ReclaimResponse:
        """Mark a task incomplete (unarchives it)."""
        return await self._planner_action("unarchive", task_id, f"markTaskIncomplete(taskId={task_id})")

    async def add_time_to_task(self, task_id: int, minutes: int) -> ReclaimResponse:
        """Add time to a task's schedule; minutes must be positive."""
        _require_positive_minutes(minutes, "add time")
        context = f"addTimeToTask(taskId={task_id}, minutes={minutes})"
        return await self._planner_action("add-time", task_id, context, params={"minutes": minutes})

    async def start_task_timer(self, task_id: int) -> ReclaimResponse:
        return await self._planner_action("start", task_id, f"startTaskTimer(taskId={task_id})")

    async def stop_task_timer(self, task_id: int) -> ReclaimResponse:
        return await self._planner_action("stop", task_id, f"stopTaskTimer(taskId={task_id})")

    async def log_work_for_task(self, task_id: int, minutes: int, end: str | None = None) -> ReclaimResponse:
        """
        Log time spent on a task.

        Args:
            task_id: Task to log against
            minutes: Minutes worked (must be positive)
            end: Optional end of the work session (ISO 8601 or YYYY-MM-DD);
                Reclaim assumes now when omitted

        Returns:
            Decoded planner response
        """
        _require_positive_minutes(minutes, "log work")
        params: dict[str, Any] = {"minutes": minutes}
        if end:
            normalized = parse_deadline(end)
            params["end"] = to_day_boundary(normalized) if is_date_only(normalized) else normalized

        context = f"logWorkForTask(taskId={task_id}, minutes={minutes}, end={end or 'now'})"
        return await self._planner_action("log-work", task_id, context, params=params)

    async def clear_task_exceptions(self, task_id: int) -> ReclaimResponse:
        return await self._planner_action("clear-exceptions", task_id, f"clearTaskExceptions(taskId={task_id})")

    async def prioritize_task(self, task_id: int) -> ReclaimResponse:
        return await self._planner_action("prioritize", task_id, f"prioritizeTask(taskId={task_id})")
