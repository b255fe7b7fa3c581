"""Set task collapsed command with handler."""

from dataclasses import dataclass
from typing import Any, Optional

from neuroglia.core import OperationResult
from neuroglia.mediation import Command, CommandHandler
from neuroglia.observability.tracing import add_span_attributes

from domain.repositories import TaskStore, UserDirectory

from .command_handler_base import TaskCommandHandlerBase


@dataclass
class SetTaskCollapsedCommand(Command[OperationResult[dict]]):
    """Command to store the board's collapsed flag of a visible task."""

    task_id: str
    collapsed: bool
    user_info: Optional[dict[str, Any]] = None


class SetTaskCollapsedCommandHandler(TaskCommandHandlerBase, CommandHandler[SetTaskCollapsedCommand, OperationResult[dict]]):
    """Handle collapsed flag updates."""

    operation = "set_collapsed"

    def __init__(self, task_store: TaskStore, user_directory: UserDirectory):
        super().__init__(task_store, user_directory)

    async def handle_async(self, request: SetTaskCollapsedCommand) -> OperationResult[dict]:
        command = request

        user_id = self.acting_user(command.user_info)
        if not user_id:
            return self.unauthenticated()

        add_span_attributes({"task.id": command.task_id, "task.collapsed": command.collapsed})

        task = await self.task_store.set_fields_async(self.scoped(user_id, command.task_id), {"collapsed": bool(command.collapsed)})
        if task is None:
            return self.task_not_found(command.task_id)

        return self.ok(await self.views.build_async(task))
