"""Builds the JSON views of tasks returned by the API.

Views use camelCase keys and embed ``{id, name, email}`` projections in
place of the ``creator``, ``assignees`` and ``shared_with`` user ids. All
references of a batch are resolved with one directory lookup.
"""

import logging
from datetime import datetime
from typing import Any, Iterable, Optional

from domain.entities import ChecklistItem, Task
from domain.repositories import UserDirectory
from integration.models import UserDto
from observability import user_reference_resolution_failures

log = logging.getLogger(__name__)


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def checklist_item_view(item: ChecklistItem) -> dict[str, Any]:
    return {"id": item.id, "text": item.text, "isCompleted": item.is_completed}


class TaskViewBuilder:
    """Turns Task entities into response payloads."""

    def __init__(self, user_directory: UserDirectory):
        self.user_directory = user_directory

    async def build_async(self, task: Task) -> dict[str, Any]:
        views = await self.build_many_async([task])
        return views[0]

    async def build_many_async(self, tasks: Iterable[Task]) -> list[dict[str, Any]]:
        tasks = list(tasks)
        users = await self._resolve_users_async(tasks)
        return [self._to_view(task, users) for task in tasks]

    async def _resolve_users_async(self, tasks: list[Task]) -> dict[str, UserDto]:
        user_ids: list[str] = []
        for task in tasks:
            user_ids.append(task.creator)
            user_ids.extend(task.assignees)
            user_ids.extend(task.shared_with)
        user_ids = list(dict.fromkeys(user_ids))
        if not user_ids:
            return {}

        try:
            return await self.user_directory.get_many_async(user_ids)
        except Exception as e:
            # A failing lookup degrades the views, never the request
            user_reference_resolution_failures.add(1, {"reference_count": len(user_ids)})
            log.warning(f"Failed to resolve {len(user_ids)} user reference(s), leaving them unresolved: {e}")
            return {}

    @staticmethod
    def _projection(user_id: str, users: dict[str, UserDto]) -> Optional[dict[str, Any]]:
        user = users.get(user_id)
        return user.to_projection() if user else None

    def _to_view(self, task: Task, users: dict[str, UserDto]) -> dict[str, Any]:
        return {
            "id": task.id,
            "title": task.title,
            "priority": task.priority.value,
            "status": task.status.value,
            "dueDate": _iso(task.due_date),
            "checklist": [checklist_item_view(item) for item in task.checklist],
            "assignees": [self._projection(user_id, users) for user_id in task.assignees],
            "creator": self._projection(task.creator, users),
            "sharedWith": [self._projection(user_id, users) for user_id in task.shared_with],
            "collapsed": task.collapsed,
            "createdAt": _iso(task.created_at),
            "updatedAt": _iso(task.updated_at),
        }
