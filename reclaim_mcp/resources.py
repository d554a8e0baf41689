"""MCP resources exposing Reclaim task data."""

import json
import logging

from mcp.server.fastmcp import FastMCP

from reclaim_mcp.client import ReclaimClient
from reclaim_mcp.errors import describe_detail, normalize_error
from reclaim_mcp.utils.filters import filter_active_tasks

logger = logging.getLogger(__name__)

ACTIVE_TASKS_URI = "tasks://active"


class TaskResources:
    """Registers the task resources."""

    def __init__(self, mcp: FastMCP, client: ReclaimClient) -> None:
        self.mcp = mcp
        self.client = client

        mcp.resource(
            ACTIVE_TASKS_URI,
            name="reclaim_active_tasks",
            description=(
                "List of all active tasks from Reclaim.ai. Active means tasks that are not deleted and "
                "whose status is not ARCHIVED or CANCELLED. Tasks with status 'COMPLETE' (meaning "
                "scheduled time is finished) are included here."
            ),
            mime_type="application/json",
        )(self.active_tasks)

    async def active_tasks(self) -> str:
        """Return the active tasks as pretty-printed JSON."""
        try:
            tasks = filter_active_tasks(await self.client.list_tasks())
        except Exception as e:
            error = normalize_error(e)
            logger.error("MCP resource error (URI: %s): %s", ACTIVE_TASKS_URI, error.message)
            if error.detail is not None:
                logger.debug("Resource error detail: %s", describe_detail(error.detail))
            raise RuntimeError(f"Failed to fetch resource {ACTIVE_TASKS_URI}: {error.message}") from e

        return json.dumps([t.model_dump(mode="json", exclude_unset=True) for t in tasks], indent=2)
