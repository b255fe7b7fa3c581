"""Change task status command with handler."""

import logging
import time
from dataclasses import dataclass
from typing import Any, Optional

from neuroglia.core import OperationResult
from neuroglia.mediation import Command, CommandHandler
from neuroglia.observability.tracing import add_span_attributes

from domain.enums import TaskStatus
from domain.repositories import TaskStore, UserDirectory
from observability import task_status_changes, tasks_completed

from .command_handler_base import TaskCommandHandlerBase

log = logging.getLogger(__name__)


@dataclass
class ChangeTaskStatusCommand(Command[OperationResult[dict]]):
    """Command to move a visible task to any status (no state machine)."""

    task_id: str
    status: Optional[str]
    user_info: Optional[dict[str, Any]] = None


class ChangeTaskStatusCommandHandler(TaskCommandHandlerBase, CommandHandler[ChangeTaskStatusCommand, OperationResult[dict]]):
    """Handle status changes by any party the task is visible to."""

    operation = "change_status"

    def __init__(self, task_store: TaskStore, user_directory: UserDirectory):
        super().__init__(task_store, user_directory)

    async def handle_async(self, request: ChangeTaskStatusCommand) -> OperationResult[dict]:
        command = request
        start_time = time.time()

        user_id = self.acting_user(command.user_info)
        if not user_id:
            return self.unauthenticated()

        add_span_attributes({"task.id": command.task_id, "task.requested_status": str(command.status)})

        try:
            new_status = TaskStatus(command.status)
        except ValueError:
            self.record_failure("invalid_status")
            allowed = ", ".join(s.value for s in TaskStatus)
            return self.bad_request(f"status must be one of {allowed}")

        task = await self.task_store.set_fields_async(self.scoped(user_id, command.task_id), {"status": new_status.value})
        if task is None:
            return self.task_not_found(command.task_id)

        task_status_changes.add(1, {"status": new_status.value})
        if new_status == TaskStatus.DONE:
            tasks_completed.add(1, {"priority": task.priority.value})
        self.record_duration(start_time)
        log.debug(f"Task {task.id} status set to {new_status.value} by {user_id}")

        return self.ok(await self.views.build_async(task))
