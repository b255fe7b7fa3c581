"""Domain value objects for the task board.

These are immutable value objects that encapsulate the query side of the
domain: the predicate tree, visibility rules and due-date windows.

All value objects use @dataclass(frozen=True) for immutability.
"""

from .date_window import DateWindow, parse_period, window_for
from .task_predicate import AllOf, AnyOf, ArrayContains, FieldEquals, FieldInRange, FieldIsAbsent, MatchAll, TaskPredicate, by_id
from .visibility import ownership_predicate, visibility_predicate

__all__ = [
    "TaskPredicate",
    "MatchAll",
    "FieldEquals",
    "ArrayContains",
    "FieldInRange",
    "FieldIsAbsent",
    "AllOf",
    "AnyOf",
    "by_id",
    "visibility_predicate",
    "ownership_predicate",
    "DateWindow",
    "parse_period",
    "window_for",
]
