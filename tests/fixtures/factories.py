"""Test data factories and builders.

Provides reusable factory classes for creating test data with sensible defaults
and easy customization.
"""

import time
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

import jwt

from application.settings import app_settings
from domain.entities import ChecklistItem, Task
from domain.enums import TaskPriority, TaskStatus
from integration.models import UserDto

# ============================================================================
# TASK FACTORY
# ============================================================================


class TaskFactory:
    """Factory for creating Task entities with sensible defaults."""

    @staticmethod
    def create(
        task_id: str | None = None,
        title: str = "Test Task",
        priority: TaskPriority = TaskPriority.MODERATE,
        status: TaskStatus = TaskStatus.TODO,
        creator: str = "alice",
        due_date: datetime | None = None,
        checklist: list[ChecklistItem] | None = None,
        assignees: list[str] | None = None,
        shared_with: list[str] | None = None,
        collapsed: bool = False,
        created_at: datetime | None = None,
    ) -> Task:
        """Create a Task with defaults that can be overridden."""
        now = datetime.now(timezone.utc)
        task: Task = Task(
            id=task_id or str(uuid4()),
            title=title,
            priority=priority,
            status=status,
            creator=creator,
            due_date=due_date,
            checklist=list(checklist or []),
            assignees=list(assignees or []),
            shared_with=list(shared_with or []),
            collapsed=collapsed,
            created_at=created_at or now,
            updated_at=created_at or now,
        )
        return task

    @staticmethod
    def create_with_checklist(*texts: str, **kwargs: Any) -> Task:
        """Create a task with one open checklist item per text."""
        items = [ChecklistItem(text=text) for text in texts or ("First step",)]
        return TaskFactory.create(checklist=items, **kwargs)


# ============================================================================
# USER FACTORY
# ============================================================================


class UserFactory:
    """Factory for creating user directory entries."""

    @staticmethod
    def create(user_id: str = "alice", name: str | None = None, email: str | None = None) -> UserDto:
        return UserDto(id=user_id, name=name or user_id.capitalize(), email=email or f"{user_id}@example.com")

    @staticmethod
    def create_many(*user_ids: str) -> list[UserDto]:
        return [UserFactory.create(user_id) for user_id in user_ids]


# ============================================================================
# USER INFO / TOKEN FACTORY
# ============================================================================


class TokenFactory:
    """Factory for authenticated user info and signed bearer tokens."""

    @staticmethod
    def user_info(user_id: str = "alice") -> dict[str, Any]:
        """User info as produced by the bearer auth service."""
        return {"sub": user_id, "user_id": user_id, "username": user_id, "email": f"{user_id}@example.com", "name": None, "roles": []}

    @staticmethod
    def create(
        user_id: str = "alice",
        expires_in: int = 3600,
        secret: str | None = None,
        claim: str = "userId",
        **claims: Any,
    ) -> str:
        """Sign an HS256 token carrying ``user_id`` under ``claim``."""
        payload: dict[str, Any] = {claim: user_id, "exp": int(time.time()) + expires_in, **claims}
        return jwt.encode(payload, secret or app_settings.jwt_secret_key, algorithm=app_settings.jwt_algorithm)
