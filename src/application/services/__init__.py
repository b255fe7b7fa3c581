"""Application services package.

Contains logging setup, user context helpers and the task view builder.
"""

from .logger import configure_logging
from .task_view_builder import TaskViewBuilder, checklist_item_view
from .user_context import acting_user_id

__all__ = [
    "configure_logging",
    "TaskViewBuilder",
    "checklist_item_view",
    "acting_user_id",
]
