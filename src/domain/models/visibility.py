"""Visibility and ownership predicates.

A task is visible to a user when the user created it, is one of its
assignees, or is in its ``shared_with`` set. Only the creator owns the task.
"""

from .task_predicate import AnyOf, ArrayContains, FieldEquals


def visibility_predicate(user_id: str) -> AnyOf:
    """Select the tasks ``user_id`` may read and mutate."""
    return AnyOf.of(
        FieldEquals("creator", user_id),
        ArrayContains("assignees", user_id),
        ArrayContains("shared_with", user_id),
    )


def ownership_predicate(user_id: str) -> FieldEquals:
    """Select the tasks ``user_id`` created (sharing is creator-only)."""
    return FieldEquals("creator", user_id)
