"""Domain entities package.

Contains the Task entity and its checklist items.
"""

from .task import ChecklistItem, Task

__all__ = [
    "Task",
    "ChecklistItem",
]
