"""Task entity for the domain layer.

A plain identifiable dataclass (no event sourcing): the task store persists the document
form returned by ``to_dict()`` and rebuilds entities with ``from_dict()``.
Mutations happen in the store as filter-scoped atomic updates, so the
entity only carries creation rules, visibility checks and the checklist
toggle semantics the in-memory store reuses.
"""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from typing import Any, Iterable
from uuid import uuid4

from neuroglia.data.abstractions import Identifiable

from domain.enums import TaskPriority, TaskStatus
from domain.exceptions import TaskValidationError


def _new_item_id() -> str:
    return uuid4().hex


def _as_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    return value.replace(tzinfo=UTC) if value.tzinfo is None else value


def _unique(values: Iterable[str] | None) -> list[str]:
    seen: list[str] = []
    for value in values or []:
        if value and value not in seen:
            seen.append(value)
    return seen


@dataclass(frozen=True)
class ChecklistItem:
    """One entry of a task checklist; ``id`` is stable across toggles."""

    text: str
    is_completed: bool = False
    id: str = field(default_factory=_new_item_id)

    def toggled(self) -> "ChecklistItem":
        return replace(self, is_completed=not self.is_completed)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "text": self.text, "is_completed": self.is_completed}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ChecklistItem":
        return cls(id=str(data["id"]), text=data["text"], is_completed=bool(data.get("is_completed", False)))


@dataclass
class Task(Identifiable[str]):
    """Task domain entity."""

    title: str
    priority: TaskPriority
    creator: str
    status: TaskStatus = TaskStatus.TODO
    due_date: datetime | None = None
    checklist: list[ChecklistItem] = field(default_factory=list)
    assignees: list[str] = field(default_factory=list)
    shared_with: list[str] = field(default_factory=list)
    collapsed: bool = False
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def create(
        cls,
        title: str | None,
        priority: str | TaskPriority | None,
        creator: str | None,
        due_date: datetime | None = None,
        checklist: Iterable[dict[str, Any]] | None = None,
        assignees: Iterable[str] | None = None,
    ) -> "Task":
        """Validate creation input and build a new task.

        Raises:
            TaskValidationError: When title, priority, creator or a checklist
                item text is missing, or the priority is not a known level
        """
        errors: list[str] = []

        clean_title = (title or "").strip()
        if not clean_title:
            errors.append("title is required")

        task_priority: TaskPriority | None = None
        if priority is None or priority == "":
            errors.append("priority is required")
        else:
            try:
                task_priority = TaskPriority(priority)
            except ValueError:
                allowed = ", ".join(p.value for p in TaskPriority)
                errors.append(f"priority must be one of {allowed}")

        if not creator:
            errors.append("creator is required")

        items: list[ChecklistItem] = []
        for entry in checklist or []:
            text = (entry.get("text") or "").strip()
            if not text:
                errors.append("checklist item text is required")
                continue
            items.append(ChecklistItem(text=text, is_completed=bool(entry.get("is_completed", False))))

        if errors:
            raise TaskValidationError(errors)

        return cls(
            title=clean_title,
            priority=task_priority,  # type: ignore[arg-type]
            creator=creator,  # type: ignore[arg-type]
            due_date=_as_utc(due_date),
            checklist=items,
            assignees=_unique(assignees),
        )

    def find_checklist_item(self, item_id: str) -> ChecklistItem | None:
        return next((item for item in self.checklist if item.id == item_id), None)

    def with_checklist_item_toggled(self, item_id: str) -> "Task":
        """Return a copy with the matching item's completion flipped."""
        checklist = [item.toggled() if item.id == item_id else item for item in self.checklist]
        return replace(self, checklist=checklist)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the storage document shape."""
        return {
            "id": self.id,
            "title": self.title,
            "priority": self.priority.value,
            "status": self.status.value,
            "due_date": self.due_date,
            "checklist": [item.to_dict() for item in self.checklist],
            "assignees": list(self.assignees),
            "creator": self.creator,
            "shared_with": list(self.shared_with),
            "collapsed": self.collapsed,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Task":
        """Deserialize from the storage document shape."""
        return cls(
            id=str(data["id"]),
            title=data["title"],
            priority=TaskPriority(data["priority"]),
            status=TaskStatus(data.get("status") or TaskStatus.TODO.value),
            due_date=_as_utc(data.get("due_date")),
            checklist=[ChecklistItem.from_dict(item) for item in data.get("checklist") or []],
            assignees=[str(a) for a in data.get("assignees") or []],
            creator=str(data["creator"]),
            shared_with=[str(s) for s in data.get("shared_with") or []],
            collapsed=bool(data.get("collapsed", False)),
            created_at=_as_utc(data.get("created_at")),
            updated_at=_as_utc(data.get("updated_at")),
        )
