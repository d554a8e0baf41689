"""Response models for Reclaim tasks and planner actions."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)


class TaskModel(BaseModel):
    """Model representing a Reclaim task.

    Only the fields this server reasons about are declared; every other
    upstream field is kept as-is.
    """

    model_config = ConfigDict(extra="allow")

    id: int
    title: str = ""
    notes: str | None = None
    status: str | None = None
    deleted: bool | None = False
    priority: str | None = None
    eventCategory: str | None = None
    eventSubType: str | None = None
    eventColor: str | None = None
    timeChunksRequired: int | None = None
    timeChunksSpent: int | None = None
    timeChunksRemaining: int | None = None
    onDeck: bool | None = None
    due: str | None = None
    snoozeUntil: str | None = None
    finished: str | None = None


class ActionResult(BaseModel):
    """Response of a planner action endpoint (add-time, start, stop, ...)."""

    model_config = ConfigDict(extra="allow")

    events: list[Any] = Field(default_factory=list)
    taskOrHabit: TaskModel | dict[str, Any] | None = None


class EmptySuccess(BaseModel):
    """A successful call that returned no body."""

    success: bool = True


class OpaqueResponse(BaseModel):
    """Any response shape not recognized above, kept verbatim."""

    data: Any = None


ReclaimResponse = TaskModel | ActionResult | EmptySuccess | OpaqueResponse


def _looks_like_task(payload: Any) -> bool:
    return (
        isinstance(payload, dict)
        and isinstance(payload.get("id"), int)
        and not isinstance(payload.get("id"), bool)
        and "title" in payload
    )


def parse_task(payload: dict[str, Any]) -> TaskModel:
    """Parse a task dictionary from the Reclaim API into a TaskModel."""
    return TaskModel.model_validate(payload)


def parse_tasks(payload: Any) -> list[TaskModel]:
    """
    Parse a task list.

    Anything that is not a list yields an empty list. Records that do not
    validate are logged and skipped so one bad task cannot hide the rest.
    """
    if not isinstance(payload, list):
        return []

    tasks = []
    for item in payload:
        if not isinstance(item, dict):
            continue
        try:
            tasks.append(parse_task(item))
        except ValidationError as e:
            logger.warning("Skipping task %r that failed validation: %s", item.get("id"), e)
    return tasks


def decode_response(payload: Any) -> ReclaimResponse:
    """
    Decode a JSON response body by probing its shape.

    Never raises: a body that looks like a known shape but does not validate
    is returned as an OpaqueResponse, or as an ActionResult holding the raw
    task dictionary.

    Args:
        payload: Decoded JSON body, or None for an empty body

    Returns:
        TaskModel, ActionResult, EmptySuccess or OpaqueResponse
    """
    if payload is None or payload == "":
        return EmptySuccess()

    if _looks_like_task(payload):
        try:
            return parse_task(payload)
        except ValidationError as e:
            logger.warning("Task response failed validation, returning it unparsed: %s", e)
            return OpaqueResponse(data=payload)

    if isinstance(payload, dict) and ("taskOrHabit" in payload or "events" in payload):
        inner = payload.get("taskOrHabit")
        data = dict(payload)
        if _looks_like_task(inner):
            try:
                data["taskOrHabit"] = parse_task(inner)
            except ValidationError as e:
                logger.warning("taskOrHabit failed validation, keeping the raw dictionary: %s", e)
        try:
            return ActionResult.model_validate(data)
        except ValidationError as e:
            logger.warning("Action response failed validation, returning it unparsed: %s", e)
            return OpaqueResponse(data=payload)

    return OpaqueResponse(data=payload)
