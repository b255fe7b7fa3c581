import logging
import time
from typing import Any, Optional

from neuroglia.core import OperationResult

from application.services import TaskViewBuilder, acting_user_id
from domain.entities import Task
from domain.models import TaskPredicate, by_id, visibility_predicate
from domain.repositories import TaskStore, UserDirectory
from observability import task_processing_time, tasks_failed

log = logging.getLogger(__name__)


class TaskCommandHandlerBase:
    """Represents the base class for all services used to handle task mutation commands."""

    task_store: TaskStore
    """ Gets the store holding the task documents """

    views: TaskViewBuilder
    """ Gets the service used to render tasks with resolved user projections """

    operation: str = "task"
    """ Gets the operation name used to label metrics """

    def __init__(self, task_store: TaskStore, user_directory: UserDirectory):
        self.task_store = task_store
        self.views = TaskViewBuilder(user_directory)

    @staticmethod
    def scoped(user_id: str, task_id: str, scope: Optional[TaskPredicate] = None) -> TaskPredicate:
        """Select ``task_id`` only if it falls within ``scope`` (visibility by default)."""
        return by_id(task_id) & (scope or visibility_predicate(user_id))

    def acting_user(self, user_info: Optional[dict[str, Any]]) -> Optional[str]:
        return acting_user_id(user_info)

    def record_failure(self, reason: str) -> None:
        tasks_failed.add(1, {"reason": reason, "operation": self.operation})

    def record_duration(self, start_time: float) -> None:
        processing_time_ms = (time.time() - start_time) * 1000
        task_processing_time.record(processing_time_ms, {"operation": self.operation})

    def task_not_found(self, task_id: str) -> OperationResult:
        """Absent and not-visible tasks yield the same result."""
        self.record_failure("not_found")
        return self.not_found(Task, task_id)  # type: ignore[attr-defined]

    def unauthenticated(self) -> OperationResult:
        self.record_failure("unauthenticated")
        return self.bad_request("An authenticated user is required")  # type: ignore[attr-defined]
