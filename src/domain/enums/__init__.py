"""Domain enumerations package.

This package contains all enumerations used across the domain layer,
organized into logical modules for maintainability.
"""

from .task import DatePeriod, TaskPriority, TaskStatus

__all__ = [
    "TaskStatus",
    "TaskPriority",
    "DatePeriod",
]
