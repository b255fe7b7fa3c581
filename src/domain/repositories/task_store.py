"""Abstract task store for the task board.

The store is the only shared resource of the service. Every mutation is a
single filter-scoped atomic update on one document: the predicate decides
which task may be touched (visibility or ownership), the store applies the
change and returns the task as it is after the write, or None when no task
matched.
"""

from abc import ABC, abstractmethod
from typing import Any

from domain.entities import Task
from domain.models import TaskPredicate


class TaskStore(ABC):
    """Abstract document store for Task entities.

    Implementations maintain ``created_at`` on insert and ``updated_at`` on
    every write.
    """

    @abstractmethod
    async def insert_async(self, task: Task) -> Task:
        """Persist a new task and return it with timestamps set.

        Raises:
            DuplicateTaskError: When the task id already exists
        """
        ...

    @abstractmethod
    async def find_async(self, predicate: TaskPredicate, newest_first: bool = True) -> list[Task]:
        """Return all matching tasks ordered by ``created_at``."""
        ...

    @abstractmethod
    async def find_one_async(self, predicate: TaskPredicate) -> Task | None:
        """Return the first matching task, or None."""
        ...

    @abstractmethod
    async def set_fields_async(self, predicate: TaskPredicate, fields: dict[str, Any]) -> Task | None:
        """Overwrite scalar fields (e.g. ``status``, ``collapsed``) on the matching task."""
        ...

    @abstractmethod
    async def toggle_checklist_item_async(self, predicate: TaskPredicate, item_id: str) -> Task | None:
        """Flip ``is_completed`` of one checklist item in a single atomic write.

        Returns None when no matching task holds an item with ``item_id``.
        """
        ...

    @abstractmethod
    async def add_to_set_async(self, predicate: TaskPredicate, field: str, values: list[str]) -> Task | None:
        """Union ``values`` into an array field; existing members are not duplicated."""
        ...

    @abstractmethod
    async def pull_async(self, predicate: TaskPredicate, field: str, value: str) -> Task | None:
        """Remove ``value`` from an array field; a non-member returns the task without a write."""
        ...
