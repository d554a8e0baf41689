"""Utility functions for Reclaim MCP."""

from reclaim_mcp.utils.dates import parse_deadline
from reclaim_mcp.utils.filters import filter_active_tasks
from reclaim_mcp.utils.results import validation_error_result, wrap_api_call

__all__ = [
    "parse_deadline",
    "filter_active_tasks",
    "wrap_api_call",
    "validation_error_result",
]
