"""TaskPredicate value objects.

A small, typed query tree used to select task documents. The same tree is
evaluated in memory (``matches``) and translated to the native MongoDB
filter language by ``integration.repositories.MongoFilterTranslator``.

Documents are the storage representation produced by ``Task.to_dict()``:
snake_case keys, ``id`` as the identifier, enum values as strings.

Predicates compose with ``&`` and ``|``::

    visible = FieldEquals("creator", user_id) | ArrayContains("assignees", user_id)
    query = visible & FieldEquals("status", "TODO")
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any


class TaskPredicate:
    """Base class for every node of the predicate tree."""

    def matches(self, document: dict[str, Any]) -> bool:
        raise NotImplementedError

    def __and__(self, other: "TaskPredicate") -> "AllOf":
        return AllOf.of(self, other)

    def __or__(self, other: "TaskPredicate") -> "AnyOf":
        return AnyOf.of(self, other)


@dataclass(frozen=True)
class MatchAll(TaskPredicate):
    """Matches every document (the unbounded filter)."""

    def matches(self, document: dict[str, Any]) -> bool:
        return True


@dataclass(frozen=True)
class FieldEquals(TaskPredicate):
    """Scalar field equals the given value."""

    field: str
    value: Any

    def matches(self, document: dict[str, Any]) -> bool:
        return document.get(self.field) == self.value


@dataclass(frozen=True)
class ArrayContains(TaskPredicate):
    """Array field holds the given value."""

    field: str
    value: Any

    def matches(self, document: dict[str, Any]) -> bool:
        return self.value in (document.get(self.field) or [])


@dataclass(frozen=True)
class FieldInRange(TaskPredicate):
    """Instant field lies in ``[start, end]`` or ``[start, end)``.

    Documents whose field is absent never match.
    """

    field: str
    start: datetime
    end: datetime
    end_inclusive: bool = True

    def matches(self, document: dict[str, Any]) -> bool:
        value = document.get(self.field)
        if value is None or value < self.start:
            return False
        return value <= self.end if self.end_inclusive else value < self.end


@dataclass(frozen=True)
class FieldIsAbsent(TaskPredicate):
    """Field is missing or null."""

    field: str

    def matches(self, document: dict[str, Any]) -> bool:
        return document.get(self.field) is None


@dataclass(frozen=True)
class AllOf(TaskPredicate):
    """Conjunction; an empty conjunction matches everything."""

    operands: tuple[TaskPredicate, ...]

    @classmethod
    def of(cls, *operands: TaskPredicate) -> "AllOf":
        flattened: list[TaskPredicate] = []
        for operand in operands:
            if isinstance(operand, MatchAll):
                continue
            if isinstance(operand, AllOf):
                flattened.extend(operand.operands)
            else:
                flattened.append(operand)
        return cls(tuple(flattened))

    def matches(self, document: dict[str, Any]) -> bool:
        return all(operand.matches(document) for operand in self.operands)


@dataclass(frozen=True)
class AnyOf(TaskPredicate):
    """Disjunction; an empty disjunction matches nothing."""

    operands: tuple[TaskPredicate, ...]

    @classmethod
    def of(cls, *operands: TaskPredicate) -> "AnyOf":
        flattened: list[TaskPredicate] = []
        for operand in operands:
            if isinstance(operand, AnyOf):
                flattened.extend(operand.operands)
            else:
                flattened.append(operand)
        return cls(tuple(flattened))

    def matches(self, document: dict[str, Any]) -> bool:
        return any(operand.matches(document) for operand in self.operands)


def by_id(task_id: str) -> FieldEquals:
    """Select a single task by identifier."""
    return FieldEquals("id", task_id)
