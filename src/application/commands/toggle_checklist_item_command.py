"""Toggle checklist item command with handler."""

import logging
import time
from dataclasses import dataclass
from typing import Any, Optional

from neuroglia.core import OperationResult
from neuroglia.mediation import Command, CommandHandler
from neuroglia.observability.tracing import add_span_attributes

from domain.entities import ChecklistItem
from domain.repositories import TaskStore, UserDirectory
from observability import checklist_items_toggled

from .command_handler_base import TaskCommandHandlerBase

log = logging.getLogger(__name__)


@dataclass
class ToggleChecklistItemCommand(Command[OperationResult[dict]]):
    """Command to flip the completion flag of one checklist item."""

    task_id: str
    item_id: str
    user_info: Optional[dict[str, Any]] = None


class ToggleChecklistItemCommandHandler(TaskCommandHandlerBase, CommandHandler[ToggleChecklistItemCommand, OperationResult[dict]]):
    """Handle checklist toggles as a single atomic store write."""

    operation = "toggle_checklist_item"

    def __init__(self, task_store: TaskStore, user_directory: UserDirectory):
        super().__init__(task_store, user_directory)

    async def handle_async(self, request: ToggleChecklistItemCommand) -> OperationResult[dict]:
        command = request
        start_time = time.time()

        user_id = self.acting_user(command.user_info)
        if not user_id:
            return self.unauthenticated()

        add_span_attributes({"task.id": command.task_id, "task.checklist_item_id": command.item_id})

        scope = self.scoped(user_id, command.task_id)
        task = await self.task_store.toggle_checklist_item_async(scope, command.item_id)
        if task is None:
            # Only the failure path pays for telling the two cases apart
            if await self.task_store.find_one_async(scope) is None:
                return self.task_not_found(command.task_id)
            self.record_failure("item_not_found")
            return self.not_found(ChecklistItem, command.item_id)

        item = task.find_checklist_item(command.item_id)
        checklist_items_toggled.add(1, {"is_completed": bool(item and item.is_completed)})
        self.record_duration(start_time)

        return self.ok(await self.views.build_async(task))
