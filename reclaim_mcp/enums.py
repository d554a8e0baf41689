"""Enums for Reclaim MCP."""

from enum import Enum

# One upstream time chunk, in minutes.
MINUTES_PER_CHUNK = 15


class TaskStatus(str, Enum):
    """Task status as reported by Reclaim.

    COMPLETE means the scheduled time block has elapsed, not that the user
    finished the work.
    """

    NEW = "NEW"
    SCHEDULED = "SCHEDULED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETE = "COMPLETE"
    CANCELLED = "CANCELLED"
    ARCHIVED = "ARCHIVED"


class Priority(str, Enum):
    """Task priority levels (P1 is highest)."""

    P1 = "P1"
    P2 = "P2"
    P3 = "P3"
    P4 = "P4"


class EventCategory(str, Enum):
    """Calendar category a task is scheduled under."""

    WORK = "WORK"
    PERSONAL = "PERSONAL"


class EventColor(str, Enum):
    """Calendar color names accepted by Reclaim."""

    LAVENDER = "LAVENDER"
    SAGE = "SAGE"
    GRAPE = "GRAPE"
    FLAMINGO = "FLAMINGO"
    BANANA = "BANANA"
    TANGERINE = "TANGERINE"
    PEACOCK = "PEACOCK"
    GRAPHITE = "GRAPHITE"
    BLUEBERRY = "BLUEBERRY"
    BASIL = "BASIL"
    TOMATO = "TOMATO"


class TaskFilter(str, Enum):
    """Task list filter options."""

    ACTIVE = "active"  # Excludes ARCHIVED, CANCELLED and deleted tasks
    ALL = "all"
