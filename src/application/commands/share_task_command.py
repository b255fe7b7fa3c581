"""Share and unshare task commands with handlers.

Sharing is creator-only. A caller who is not the creator receives the same
not-found result as for an absent task, so existence is never disclosed.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Optional

from neuroglia.core import OperationResult
from neuroglia.mediation import Command, CommandHandler
from neuroglia.observability.tracing import add_span_attributes

from domain.models import ownership_predicate
from domain.repositories import TaskStore, UserDirectory
from observability import task_sharing_changes

from .command_handler_base import TaskCommandHandlerBase

log = logging.getLogger(__name__)


@dataclass
class ShareTaskCommand(Command[OperationResult[dict]]):
    """Command to grant visibility of a task to more users (set union)."""

    task_id: str
    user_ids: list[str] = field(default_factory=list)
    user_info: Optional[dict[str, Any]] = None


@dataclass
class UnshareTaskCommand(Command[OperationResult[dict]]):
    """Command to revoke one user's shared visibility; absent members are a no-op."""

    task_id: str
    user_id: str
    user_info: Optional[dict[str, Any]] = None


class ShareTaskCommandHandler(TaskCommandHandlerBase, CommandHandler[ShareTaskCommand, OperationResult[dict]]):
    """Handle share requests from the task creator."""

    operation = "share"

    def __init__(self, task_store: TaskStore, user_directory: UserDirectory):
        super().__init__(task_store, user_directory)

    async def handle_async(self, request: ShareTaskCommand) -> OperationResult[dict]:
        command = request
        start_time = time.time()

        user_id = self.acting_user(command.user_info)
        if not user_id:
            return self.unauthenticated()

        user_ids = list(dict.fromkeys(u for u in command.user_ids if u))
        add_span_attributes({"task.id": command.task_id, "task.share_count": len(user_ids)})
        scope = self.scoped(user_id, command.task_id, ownership_predicate(user_id))
        if user_ids:
            task = await self.task_store.add_to_set_async(scope, "shared_with", user_ids)
        else:
            task = await self.task_store.find_one_async(scope)
        if task is None:
            return self.task_not_found(command.task_id)

        task_sharing_changes.add(1, {"change": "share"})
        self.record_duration(start_time)
        log.info(f"Task {task.id} shared with {len(user_ids)} user(s) by {user_id}")

        return self.ok(await self.views.build_async(task))


class UnshareTaskCommandHandler(TaskCommandHandlerBase, CommandHandler[UnshareTaskCommand, OperationResult[dict]]):
    """Handle unshare requests from the task creator."""

    operation = "unshare"

    def __init__(self, task_store: TaskStore, user_directory: UserDirectory):
        super().__init__(task_store, user_directory)

    async def handle_async(self, request: UnshareTaskCommand) -> OperationResult[dict]:
        command = request
        start_time = time.time()

        user_id = self.acting_user(command.user_info)
        if not user_id:
            return self.unauthenticated()

        add_span_attributes({"task.id": command.task_id})

        scope = self.scoped(user_id, command.task_id, ownership_predicate(user_id))
        task = await self.task_store.pull_async(scope, "shared_with", command.user_id)
        if task is None:
            return self.task_not_found(command.task_id)

        task_sharing_changes.add(1, {"change": "unshare"})
        self.record_duration(start_time)
        log.info(f"Task {task.id} unshared from {command.user_id} by {user_id}")

        return self.ok(await self.views.build_async(task))
