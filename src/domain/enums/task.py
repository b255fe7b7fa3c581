"""Task-related enumerations.

These enums are used by the Task entity for status and priority tracking,
and by the date window calculator for the named filter periods.
"""

from enum import Enum


class TaskStatus(str, Enum):
    """Status values for Task entity."""

    BACKLOG = "BACKLOG"
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"


class TaskPriority(str, Enum):
    """Priority levels for Task entity."""

    HIGH = "HIGH"
    MODERATE = "MODERATE"
    LOW = "LOW"


class DatePeriod(str, Enum):
    """Named due-date windows accepted by the task listing filters."""

    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
