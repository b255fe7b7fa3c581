"""Task queries and handlers.

Provides queries for:
- GetTasksQuery: Visible tasks, optionally restricted to a due-date window
- FilterTasksQuery: Legacy window filter, dated tasks only
- GetTaskByIdQuery: One visible task
"""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, tzinfo
from typing import Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from neuroglia.core import OperationResult
from neuroglia.mediation import Query, QueryHandler
from neuroglia.observability.tracing import add_span_attributes

from application.services import TaskViewBuilder, acting_user_id
from application.settings import app_settings
from domain.entities import Task
from domain.models import TaskPredicate, by_id, visibility_predicate, window_for
from domain.repositories import TaskStore, UserDirectory
from observability import task_queries

log = logging.getLogger(__name__)


def filter_zone(name: Optional[str] = None) -> tzinfo:
    """Resolve the zone in which date windows are drawn; unknown names fall back to UTC."""
    name = name or app_settings.task_filter_timezone
    if not name or name.upper() == "UTC":
        return UTC
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        log.warning(f"Unknown task filter time zone '{name}', using UTC")
        return UTC


class TaskQueryHandlerBase:
    """Shared plumbing for queries that list visible tasks."""

    def __init__(self, task_store: TaskStore, user_directory: UserDirectory):
        self.task_store = task_store
        self.views = TaskViewBuilder(user_directory)

    def window_predicate(self, token: Optional[str], reference: Optional[datetime], include_undated: bool) -> Optional[TaskPredicate]:
        window = window_for(token, reference or datetime.now(UTC), filter_zone())
        if window is None:
            return None
        add_span_attributes({"tasks.window_start": window.start.isoformat(), "tasks.window_end": window.end.isoformat()})
        return window.to_predicate(include_undated=include_undated)

    async def list_visible_async(self, user_id: str, window: Optional[TaskPredicate], newest_first: bool = True) -> list[dict[str, Any]]:
        predicate = visibility_predicate(user_id)
        if window is not None:
            predicate = predicate & window
        tasks = await self.task_store.find_async(predicate, newest_first=newest_first)
        return await self.views.build_many_async(tasks)


# =============================================================================
# Get Tasks Query
# =============================================================================


@dataclass
class GetTasksQuery(Query[OperationResult[list[dict]]]):
    """Query to list the tasks visible to the acting user, newest first.

    ``filter`` is ``today``, ``week`` or ``month``; any other value (or none)
    lists every visible task. Undated tasks are always included.
    """

    filter: Optional[str] = None
    user_info: Optional[dict[str, Any]] = None
    reference_time: Optional[datetime] = None
    """Instant the window is computed around (defaults to now)."""


class GetTasksQueryHandler(TaskQueryHandlerBase, QueryHandler[GetTasksQuery, OperationResult[list[dict]]]):
    """Handler for GetTasksQuery."""

    def __init__(self, task_store: TaskStore, user_directory: UserDirectory):
        super().__init__(task_store, user_directory)

    async def handle_async(self, request: GetTasksQuery) -> OperationResult[list[dict]]:
        query = request

        user_id = acting_user_id(query.user_info)
        if not user_id:
            return self.bad_request("An authenticated user is required")

        add_span_attributes({"tasks.filter": query.filter or "none"})
        task_queries.add(1, {"filter": query.filter or "none", "route": "list"})

        window = self.window_predicate(query.filter, query.reference_time, include_undated=True)
        return self.ok(await self.list_visible_async(user_id, window))


# =============================================================================
# Filter Tasks Query (legacy route)
# =============================================================================


@dataclass
class FilterTasksQuery(Query[OperationResult[list[dict]]]):
    """Query for the legacy ``/tasks/filter?type=`` route.

    Uses the same calendar windows as GetTasksQuery but only matches tasks
    that have a due date inside the window.
    """

    type: Optional[str] = None
    user_info: Optional[dict[str, Any]] = None
    reference_time: Optional[datetime] = None


class FilterTasksQueryHandler(TaskQueryHandlerBase, QueryHandler[FilterTasksQuery, OperationResult[list[dict]]]):
    """Handler for FilterTasksQuery."""

    def __init__(self, task_store: TaskStore, user_directory: UserDirectory):
        super().__init__(task_store, user_directory)

    async def handle_async(self, request: FilterTasksQuery) -> OperationResult[list[dict]]:
        query = request

        user_id = acting_user_id(query.user_info)
        if not user_id:
            return self.bad_request("An authenticated user is required")

        add_span_attributes({"tasks.filter": query.type or "none", "tasks.strict_window": True})
        task_queries.add(1, {"filter": query.type or "none", "route": "filter"})

        window = self.window_predicate(query.type, query.reference_time, include_undated=False)
        return self.ok(await self.list_visible_async(user_id, window))


# =============================================================================
# Get Task By ID Query
# =============================================================================


@dataclass
class GetTaskByIdQuery(Query[OperationResult[dict]]):
    """Query to get a single visible task by ID."""

    task_id: str
    user_info: Optional[dict[str, Any]] = None


class GetTaskByIdQueryHandler(TaskQueryHandlerBase, QueryHandler[GetTaskByIdQuery, OperationResult[dict]]):
    """Handler for GetTaskByIdQuery."""

    def __init__(self, task_store: TaskStore, user_directory: UserDirectory):
        super().__init__(task_store, user_directory)

    async def handle_async(self, request: GetTaskByIdQuery) -> OperationResult[dict]:
        query = request

        user_id = acting_user_id(query.user_info)
        if not user_id:
            return self.bad_request("An authenticated user is required")

        add_span_attributes({"task.id": query.task_id})

        task = await self.task_store.find_one_async(by_id(query.task_id) & visibility_predicate(user_id))
        if task is None:
            return self.not_found(Task, query.task_id)

        return self.ok(await self.views.build_async(task))
