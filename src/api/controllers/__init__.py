"""API controllers package."""

from .tasks_controller import TasksController
from .users_controller import UsersController

__all__ = [
    "TasksController",
    "UsersController",
]
