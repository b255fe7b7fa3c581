"""Application queries package."""

from .get_tasks_query import (
    FilterTasksQuery,
    FilterTasksQueryHandler,
    GetTaskByIdQuery,
    GetTaskByIdQueryHandler,
    GetTasksQuery,
    GetTasksQueryHandler,
)
from .get_users_query import GetUsersQuery, GetUsersQueryHandler

__all__ = [
    # Task queries
    "GetTasksQuery",
    "GetTasksQueryHandler",
    "FilterTasksQuery",
    "FilterTasksQueryHandler",
    "GetTaskByIdQuery",
    "GetTaskByIdQueryHandler",
    # User queries
    "GetUsersQuery",
    "GetUsersQueryHandler",
]
