"""Observability utilities and metrics."""

from .metrics import (
    checklist_items_toggled,
    task_processing_time,
    task_queries,
    task_sharing_changes,
    task_status_changes,
    tasks_completed,
    tasks_created,
    tasks_failed,
    user_reference_resolution_failures,
)

__all__ = [
    # Task metrics
    "tasks_created",
    "task_status_changes",
    "tasks_completed",
    "checklist_items_toggled",
    "task_sharing_changes",
    "tasks_failed",
    "task_processing_time",
    # Query metrics
    "task_queries",
    "user_reference_resolution_failures",
]
