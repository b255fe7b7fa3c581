"""Domain layer tests for Task entity.

Tests the core domain logic including:
- Task creation and validation
- Visibility and ownership checks
- Checklist toggle semantics
- Storage document round trip
"""

from datetime import datetime, timezone

import pytest

from domain.entities import ChecklistItem, Task
from domain.enums import TaskPriority, TaskStatus
from domain.exceptions import TaskValidationError
from tests.fixtures.factories import TaskFactory


class TestTaskCreation:
    """Test Task.create validation and defaults."""

    def test_create_task_with_defaults(self) -> None:
        task: Task = Task.create(title="  Write report ", priority="HIGH", creator="alice")

        assert task.title == "Write report"
        assert task.priority == TaskPriority.HIGH
        assert task.status == TaskStatus.TODO
        assert task.creator == "alice"
        assert task.due_date is None
        assert task.checklist == []
        assert task.assignees == []
        assert task.shared_with == []
        assert task.collapsed is False
        assert task.id

    def test_create_task_with_all_parameters(self) -> None:
        due = datetime(2024, 3, 15, 17, 0, tzinfo=timezone.utc)

        task: Task = Task.create(
            title="Release",
            priority=TaskPriority.LOW,
            creator="alice",
            due_date=due,
            checklist=[{"text": "Tag"}, {"text": "Publish", "is_completed": True}],
            assignees=["bob", "carol", "bob"],
        )

        assert task.due_date == due
        assert [item.text for item in task.checklist] == ["Tag", "Publish"]
        assert [item.is_completed for item in task.checklist] == [False, True]
        assert task.assignees == ["bob", "carol"]

    def test_checklist_items_get_distinct_ids(self) -> None:
        task: Task = Task.create(title="T", priority="LOW", creator="alice", checklist=[{"text": "a"}, {"text": "b"}])

        ids = [item.id for item in task.checklist]
        assert len(set(ids)) == 2
        assert all(ids)

    def test_naive_due_date_is_treated_as_utc(self) -> None:
        task: Task = Task.create(title="T", priority="LOW", creator="alice", due_date=datetime(2024, 1, 1, 12, 0))

        assert task.due_date == datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def test_task_id_is_unique(self) -> None:
        task1 = Task.create(title="Task 1", priority="LOW", creator="alice")
        task2 = Task.create(title="Task 2", priority="LOW", creator="alice")

        assert task1.id != task2.id

    @pytest.mark.parametrize(
        ("title", "priority", "expected"),
        [
            (None, "HIGH", "title is required"),
            ("   ", "HIGH", "title is required"),
            ("Title", None, "priority is required"),
            ("Title", "URGENT", "priority must be one of HIGH, MODERATE, LOW"),
        ],
    )
    def test_create_task_rejects_invalid_input(self, title, priority, expected) -> None:
        with pytest.raises(TaskValidationError) as exc_info:
            Task.create(title=title, priority=priority, creator="alice")

        assert expected in exc_info.value.errors

    def test_create_task_reports_every_error(self) -> None:
        with pytest.raises(TaskValidationError) as exc_info:
            Task.create(title="", priority="", creator=None, checklist=[{"text": ""}])

        assert exc_info.value.errors == [
            "title is required",
            "priority is required",
            "creator is required",
            "checklist item text is required",
        ]
        assert str(exc_info.value) == "; ".join(exc_info.value.errors)


class TestChecklistToggle:
    """Test checklist toggle semantics."""

    def test_toggle_flips_only_the_matching_item(self) -> None:
        task = TaskFactory.create_with_checklist("one", "two")
        target = task.checklist[1]

        toggled = task.with_checklist_item_toggled(target.id)

        assert toggled.checklist[1].is_completed is True
        assert toggled.checklist[0].is_completed is False
        assert task.checklist[1].is_completed is False

    def test_toggle_twice_restores_original_state(self) -> None:
        task = TaskFactory.create_with_checklist("one")
        item_id = task.checklist[0].id

        twice = task.with_checklist_item_toggled(item_id).with_checklist_item_toggled(item_id)

        assert twice.checklist == task.checklist

    def test_item_identity_is_stable_across_toggles(self) -> None:
        item = ChecklistItem(text="step")

        assert item.toggled().id == item.id
        assert item.toggled().text == item.text

    def test_find_unknown_item_returns_none(self) -> None:
        task = TaskFactory.create_with_checklist("one")

        assert task.find_checklist_item("missing") is None


class TestTaskSerialization:
    """Test the storage document shape."""

    def test_to_dict_uses_enum_values_and_snake_case(self) -> None:
        task = TaskFactory.create_with_checklist("one", priority=TaskPriority.HIGH, status=TaskStatus.IN_PROGRESS)

        document = task.to_dict()

        assert document["priority"] == "HIGH"
        assert document["status"] == "IN_PROGRESS"
        assert document["checklist"][0]["is_completed"] is False
        assert "shared_with" in document

    def test_from_dict_restores_the_task(self) -> None:
        task = TaskFactory.create_with_checklist(
            "one",
            due_date=datetime(2024, 5, 1, tzinfo=timezone.utc),
            assignees=["bob"],
            shared_with=["carol"],
            collapsed=True,
        )

        assert Task.from_dict(task.to_dict()) == task
