"""Pytest configuration and fixtures for reclaim-mcp tests."""

import copy
import json
import math
import re
from datetime import datetime, timezone

import httpx
import pytest
from mcp.server.fastmcp import FastMCP

from reclaim_mcp import MINUTES_PER_CHUNK, ReclaimClient, ReclaimConfig
from reclaim_mcp.resources import TaskResources
from reclaim_mcp.tools import TaskActionTools, TaskCrudTools

BASE_URL = "https://api.test.reclaim.ai/api/"

SAMPLE_TASKS = [
    {
        "id": 12345,
        "title": "Sample Task 1",
        "notes": "This is a sample task for testing",
        "status": "NEW",
        "eventCategory": "WORK",
        "priority": "P2",
        "timeChunksRequired": 4,
        "timeChunksSpent": 0,
        "timeChunksRemaining": 4,
        "deleted": False,
    },
    {
        "id": 67890,
        "title": "Sample Task 2",
        "notes": "This is another sample task",
        "status": "IN_PROGRESS",
        "eventCategory": "PERSONAL",
        "priority": "P1",
        "timeChunksRequired": 8,
        "timeChunksSpent": 2,
        "timeChunksRemaining": 6,
        "deleted": False,
    },
    {
        "id": 54321,
        "title": "Sample Task 3",
        "notes": "This is a deleted task",
        "status": "NEW",
        "eventCategory": "WORK",
        "priority": "P3",
        "timeChunksRequired": 2,
        "timeChunksSpent": 0,
        "timeChunksRemaining": 2,
        "deleted": True,
    },
    {
        "id": 98765,
        "title": "Sample Task 4",
        "notes": "This is a finished task",
        "status": "ARCHIVED",
        "eventCategory": "WORK",
        "priority": "P3",
        "timeChunksRequired": 2,
        "timeChunksSpent": 2,
        "timeChunksRemaining": 0,
        "deleted": False,
        "finished": "2025-01-10T12:00:00.000Z",
    },
    {
        "id": 24680,
        "title": "Sample Task 5",
        "notes": "Scheduled time finished, work not done",
        "status": "COMPLETE",
        "eventCategory": "PERSONAL",
        "priority": "P4",
        "timeChunksRequired": 6,
        "timeChunksSpent": 6,
        "timeChunksRemaining": 0,
        "deleted": False,
    },
    {
        "id": 13579,
        "title": "Sample Task 6",
        "status": "CANCELLED",
        "priority": "P4",
        "timeChunksRequired": 1,
        "timeChunksSpent": 0,
        "timeChunksRemaining": 1,
        "deleted": False,
    },
]

_TASK_PATH = re.compile(r"^/tasks/(\d+)$")
_PLANNER_PATH = re.compile(r"^/planner/([a-z-]+)/task/(\d+)$")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _chunks(minutes: int) -> int:
    return math.ceil(minutes / MINUTES_PER_CHUNK)


class FakeReclaimAPI:
    """In-memory stand-in for the Reclaim REST API, served through httpx.MockTransport."""

    def __init__(self, tasks: list[dict] | None = None) -> None:
        self.tasks = {t["id"]: copy.deepcopy(t) for t in (tasks or [])}
        self.next_id = 100000
        self.requests: list[httpx.Request] = []
        self.forced_error: tuple[int, dict] | None = None

    # Helpers ------------------------------------------------------------

    def fail_with(self, status: int, body: dict | None = None) -> None:
        """Answer every following request with the given status."""
        self.forced_error = (status, body or {"status": status, "title": "Forced failure"})

    def writes(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.method != "GET"]

    @staticmethod
    def _not_found(task_id: int) -> httpx.Response:
        return httpx.Response(
            404,
            json={"status": 404, "title": "Not Found", "detail": f"Task with ID {task_id} not found"},
        )

    def _task(self, task_id: int) -> dict | None:
        task = self.tasks.get(task_id)
        if task is None or task.get("deleted"):
            return None
        return task

    # Transport handler --------------------------------------------------

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.forced_error:
            status, body = self.forced_error
            return httpx.Response(status, json=body)

        path = request.url.path.removeprefix("/api")

        if path == "/tasks":
            if request.method == "GET":
                return httpx.Response(200, json=list(self.tasks.values()))
            if request.method == "POST":
                return self._create(json.loads(request.content))

        if match := _TASK_PATH.match(path):
            task_id = int(match.group(1))
            task = self._task(task_id)
            if task is None:
                return self._not_found(task_id)
            if request.method == "GET":
                return httpx.Response(200, json=task)
            if request.method == "PATCH":
                return self._update(task, json.loads(request.content))
            if request.method == "DELETE":
                task["deleted"] = True
                return httpx.Response(204)

        if (match := _PLANNER_PATH.match(path)) and request.method == "POST":
            task_id = int(match.group(2))
            task = self._task(task_id)
            if task is None:
                return self._not_found(task_id)
            return self._planner(match.group(1), task, request.url.params)

        return httpx.Response(404, json={"status": 404, "title": "Not Found", "detail": f"No route {path}"})

    def _create(self, body: dict) -> httpx.Response:
        task_id = self.next_id
        self.next_id += 1
        required = body.get("timeChunksRequired", 0)
        task = {
            "id": task_id,
            "status": "NEW",
            "deleted": False,
            "timeChunksSpent": 0,
            "timeChunksRemaining": required,
            "created": _now(),
            **body,
        }
        self.tasks[task_id] = task
        return httpx.Response(200, json=task)

    def _update(self, task: dict, body: dict) -> httpx.Response:
        task.update(body)
        if "timeChunksRequired" in body:
            task["timeChunksRemaining"] = max(0, body["timeChunksRequired"] - task.get("timeChunksSpent", 0))
        task["updated"] = _now()
        return httpx.Response(200, json=task)

    def _planner(self, action: str, task: dict, params: httpx.QueryParams) -> httpx.Response:
        if action == "done":
            task["status"] = "ARCHIVED"
            task["finished"] = _now()
        elif action == "unarchive":
            task["status"] = "SCHEDULED"
            task.pop("finished", None)
        elif action == "add-time":
            chunks = _chunks(int(params["minutes"]))
            task["timeChunksRequired"] = task.get("timeChunksRequired", 0) + chunks
            task["timeChunksRemaining"] = task.get("timeChunksRemaining", 0) + chunks
        elif action == "prioritize":
            task["status"] = "SCHEDULED"
            task["onDeck"] = True
        elif action == "start":
            task["status"] = "IN_PROGRESS"
        elif action == "stop":
            task["status"] = "SCHEDULED"
        elif action == "log-work":
            chunks = _chunks(int(params["minutes"]))
            task["timeChunksSpent"] = task.get("timeChunksSpent", 0) + chunks
            task["timeChunksRemaining"] = max(0, task.get("timeChunksRemaining", 0) - chunks)
        elif action == "clear-exceptions":
            return httpx.Response(200)
        else:
            return httpx.Response(404, json={"status": 404, "title": "Not Found"})
        return httpx.Response(200, json={"events": [], "taskOrHabit": task})


@pytest.fixture
def config():
    """Configuration pointing at the fake API."""
    return ReclaimConfig(api_key="test-token", base_url=BASE_URL)


@pytest.fixture
def sample_tasks():
    """Sample task dictionaries as returned by the API."""
    return copy.deepcopy(SAMPLE_TASKS)


@pytest.fixture
def fake_api(sample_tasks):
    """Fake Reclaim API seeded with the sample tasks."""
    return FakeReclaimAPI(sample_tasks)


@pytest.fixture
def client(config, fake_api):
    """ReclaimClient talking to the fake API."""
    return ReclaimClient(config, transport=httpx.MockTransport(fake_api.handler))


@pytest.fixture
def mcp():
    return FastMCP("test-server")


@pytest.fixture
def action_tools(mcp, client):
    return TaskActionTools(mcp, client)


@pytest.fixture
def crud_tools(mcp, client):
    return TaskCrudTools(mcp, client)


@pytest.fixture
def resources(mcp, client):
    return TaskResources(mcp, client)
