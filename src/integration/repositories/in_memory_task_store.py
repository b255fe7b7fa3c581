"""In-memory implementation of TaskStore."""

from copy import deepcopy
from dataclasses import replace
from datetime import UTC, datetime
from typing import Any, Callable

from domain.entities import Task
from domain.exceptions import DuplicateTaskError
from domain.models import TaskPredicate
from domain.repositories import TaskStore


class InMemoryTaskStore(TaskStore):
    """In-memory implementation of TaskStore for testing and local runs.

    Each mutation runs without yielding to the event loop, so it is atomic
    with respect to other coroutines. Callers always receive copies.
    """

    def __init__(self) -> None:
        self._tasks: dict[str, Task] = {}

    def _select(self, predicate: TaskPredicate) -> list[Task]:
        return [task for task in self._tasks.values() if predicate.matches(task.to_dict())]

    def _update_first(self, predicate: TaskPredicate, change: Callable[[Task], Task | None]) -> Task | None:
        for task in self._select(predicate):
            updated = change(task)
            if updated is None:
                continue
            updated.updated_at = datetime.now(UTC)
            self._tasks[updated.id] = updated
            return deepcopy(updated)
        return None

    async def insert_async(self, task: Task) -> Task:
        if task.id in self._tasks:
            raise DuplicateTaskError(field="id")
        now = datetime.now(UTC)
        task.created_at = now
        task.updated_at = now
        self._tasks[task.id] = deepcopy(task)
        return task

    async def find_async(self, predicate: TaskPredicate, newest_first: bool = True) -> list[Task]:
        oldest = datetime.min.replace(tzinfo=UTC)
        tasks = sorted(self._select(predicate), key=lambda t: t.created_at or oldest, reverse=newest_first)
        return deepcopy(tasks)

    async def find_one_async(self, predicate: TaskPredicate) -> Task | None:
        matches = self._select(predicate)
        return deepcopy(matches[0]) if matches else None

    async def set_fields_async(self, predicate: TaskPredicate, fields: dict[str, Any]) -> Task | None:
        def change(task: Task) -> Task:
            data = task.to_dict()
            data.update(fields)
            return Task.from_dict(data)

        return self._update_first(predicate, change)

    async def toggle_checklist_item_async(self, predicate: TaskPredicate, item_id: str) -> Task | None:
        def change(task: Task) -> Task | None:
            if task.find_checklist_item(item_id) is None:
                return None
            return task.with_checklist_item_toggled(item_id)

        return self._update_first(predicate, change)

    async def add_to_set_async(self, predicate: TaskPredicate, field: str, values: list[str]) -> Task | None:
        def change(task: Task) -> Task:
            members = list(getattr(task, field))
            members.extend(v for v in dict.fromkeys(values) if v not in members)
            return replace(task, **{field: members})

        return self._update_first(predicate, change)

    async def pull_async(self, predicate: TaskPredicate, field: str, value: str) -> Task | None:
        def change(task: Task) -> Task | None:
            if value not in getattr(task, field):
                return None
            return replace(task, **{field: [m for m in getattr(task, field) if m != value]})

        return self._update_first(predicate, change) or await self.find_one_async(predicate)
