"""Application commands package."""

from .change_task_status_command import ChangeTaskStatusCommand, ChangeTaskStatusCommandHandler
from .command_handler_base import TaskCommandHandlerBase
from .create_task_command import CreateTaskCommand, CreateTaskCommandHandler
from .set_task_collapsed_command import SetTaskCollapsedCommand, SetTaskCollapsedCommandHandler
from .share_task_command import ShareTaskCommand, ShareTaskCommandHandler, UnshareTaskCommand, UnshareTaskCommandHandler
from .toggle_checklist_item_command import ToggleChecklistItemCommand, ToggleChecklistItemCommandHandler

__all__ = [
    "TaskCommandHandlerBase",
    # Task commands
    "CreateTaskCommand",
    "CreateTaskCommandHandler",
    "ChangeTaskStatusCommand",
    "ChangeTaskStatusCommandHandler",
    "ToggleChecklistItemCommand",
    "ToggleChecklistItemCommandHandler",
    "SetTaskCollapsedCommand",
    "SetTaskCollapsedCommandHandler",
    # Sharing commands
    "ShareTaskCommand",
    "ShareTaskCommandHandler",
    "UnshareTaskCommand",
    "UnshareTaskCommandHandler",
]
