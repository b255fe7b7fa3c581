"""Create task command with handler."""

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from neuroglia.core import OperationResult
from neuroglia.mediation import Command, CommandHandler
from neuroglia.observability.tracing import add_span_attributes
from opentelemetry import trace

from domain.entities import Task
from domain.exceptions import TaskValidationError
from domain.repositories import TaskStore, UserDirectory
from observability import tasks_created

from .command_handler_base import TaskCommandHandlerBase

log = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


@dataclass
class CreateTaskCommand(Command[OperationResult[dict]]):
    """Command to create a new task owned by the acting user."""

    title: Optional[str]
    """Display title of the task (required, trimmed)."""

    priority: Optional[str]
    """One of HIGH, MODERATE, LOW (required)."""

    due_date: Optional[datetime] = None
    """Optional due instant; undated tasks appear under every date filter."""

    checklist: list[dict[str, Any]] = field(default_factory=list)
    """Checklist entries as ``{"text": ..., "is_completed": ...}``."""

    assignees: list[str] = field(default_factory=list)
    """User ids the task is assigned to."""

    user_info: Optional[dict[str, Any]] = None
    """User information from authentication context."""


class CreateTaskCommandHandler(TaskCommandHandlerBase, CommandHandler[CreateTaskCommand, OperationResult[dict]]):
    """Handle task creation."""

    operation = "create"

    def __init__(self, task_store: TaskStore, user_directory: UserDirectory):
        super().__init__(task_store, user_directory)

    async def handle_async(self, request: CreateTaskCommand) -> OperationResult[dict]:
        """Handle create task command with custom instrumentation.

        Duplicate-key failures from the store are not converted here: they
        propagate as DuplicateTaskError so the API can report the field.
        """
        command = request
        start_time = time.time()

        creator = self.acting_user(command.user_info)
        if not creator:
            return self.unauthenticated()

        add_span_attributes(
            {
                "task.priority": str(command.priority),
                "task.has_due_date": command.due_date is not None,
                "task.checklist_count": len(command.checklist),
                "task.assignee_count": len(command.assignees),
            }
        )

        with tracer.start_as_current_span("create_task_entity") as span:
            try:
                task = Task.create(
                    title=command.title,
                    priority=command.priority,
                    creator=creator,
                    due_date=command.due_date,
                    checklist=command.checklist,
                    assignees=command.assignees,
                )
            except TaskValidationError as e:
                self.record_failure("validation")
                return self.bad_request(f"Validation Error: {e}")
            span.set_attribute("task.id", task.id)

        task = await self.task_store.insert_async(task)

        tasks_created.add(1, {"priority": task.priority.value})
        self.record_duration(start_time)
        log.info(f"Created task {task.id} for user {creator}")

        return self.created(await self.views.build_async(task))
