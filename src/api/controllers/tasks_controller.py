"""Tasks API controller.

Provides endpoints for:
- Creating tasks
- Listing visible tasks with optional due-date windows
- Changing status, toggling checklist items and the collapsed flag
- Sharing and unsharing (creator only)
"""

from datetime import datetime
from typing import Optional

from classy_fastapi.decorators import delete, get, patch, post
from fastapi import Depends, Query
from neuroglia.dependency_injection import ServiceProviderBase
from neuroglia.mapping import Mapper
from neuroglia.mediation import Mediator
from pydantic import BaseModel, ConfigDict, Field, field_validator

from api.dependencies import get_current_user
from application.commands import (
    ChangeTaskStatusCommand,
    CreateTaskCommand,
    SetTaskCollapsedCommand,
    ShareTaskCommand,
    ToggleChecklistItemCommand,
    UnshareTaskCommand,
)
from application.queries import FilterTasksQuery, GetTaskByIdQuery, GetTasksQuery
from domain.enums import TaskPriority

from .taskboard_controller_base import TaskboardControllerBase

# ============================================================================
# REQUEST MODELS
# ============================================================================


class ChecklistItemRequest(BaseModel):
    """One checklist entry supplied at creation."""

    model_config = ConfigDict(populate_by_name=True)

    text: str = Field(..., min_length=1, description="Checklist item text")
    is_completed: bool = Field(default=False, alias="isCompleted")


class CreateTaskRequest(BaseModel):
    """Request to create a new task."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "title": "Prepare release notes",
                "priority": "HIGH",
                "dueDate": "2024-03-15T17:00:00Z",
                "checklist": [{"text": "Collect merged changes"}],
                "assignees": ["64f1c2a9e4b0a1b2c3d4e5f6"],
            }
        },
    )

    title: str = Field(..., description="Task title")
    priority: TaskPriority = Field(..., description="HIGH, MODERATE or LOW")
    due_date: Optional[datetime] = Field(default=None, alias="dueDate", description="Optional due instant")
    checklist: list[ChecklistItemRequest] = Field(default_factory=list)
    assignees: list[str] = Field(default_factory=list, description="Assigned user ids")

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title is required")
        return value.strip()

    @field_validator("due_date", mode="before")
    @classmethod
    def empty_due_date_is_absent(cls, value):
        return None if value == "" else value


class ChangeStatusRequest(BaseModel):
    """Request to change a task's status."""

    status: str = Field(..., description="BACKLOG, TODO, IN_PROGRESS or DONE")


class ShareTaskRequest(BaseModel):
    """Request to share a task with more users."""

    model_config = ConfigDict(populate_by_name=True)

    user_ids: list[str] = Field(..., alias="userIds", description="User ids to share with; an empty list changes nothing")


class CollapseTaskRequest(BaseModel):
    """Request to set the collapsed flag."""

    collapsed: bool


# ============================================================================
# CONTROLLER
# ============================================================================


class TasksController(TaskboardControllerBase):
    """Controller for task operations."""

    def __init__(self, service_provider: ServiceProviderBase, mapper: Mapper, mediator: Mediator) -> None:
        super().__init__(service_provider, mapper, mediator)

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    @get("/")
    async def get_tasks(
        self,
        filter: Optional[str] = Query(default=None, description="today, week or month"),
        user: dict = Depends(get_current_user),
    ):
        """List tasks visible to the caller, newest first.

        Undated tasks are included under every filter.
        """
        result = await self.mediator.execute_async(GetTasksQuery(filter=filter, user_info=user))
        return self.respond(result)

    # Declared before "/{task_id}" so "filter" is not taken for an id
    @get("/filter")
    async def filter_tasks(
        self,
        type: Optional[str] = Query(default=None, description="today, week or month"),
        user: dict = Depends(get_current_user),
    ):
        """Legacy filter route: only tasks due inside the window."""
        result = await self.mediator.execute_async(FilterTasksQuery(type=type, user_info=user))
        return self.respond(result)

    @get("/{task_id}")
    async def get_task(self, task_id: str, user: dict = Depends(get_current_user)):
        """Get a single visible task."""
        result = await self.mediator.execute_async(GetTaskByIdQuery(task_id=task_id, user_info=user))
        return self.respond(result)

    # =========================================================================
    # WRITE OPERATIONS
    # =========================================================================

    @post("/", status_code=201)
    async def create_task(self, request: CreateTaskRequest, user: dict = Depends(get_current_user)):
        """Create a task owned by the caller."""
        command = CreateTaskCommand(
            title=request.title,
            priority=request.priority.value,
            due_date=request.due_date,
            checklist=[{"text": item.text, "is_completed": item.is_completed} for item in request.checklist],
            assignees=request.assignees,
            user_info=user,
        )
        result = await self.mediator.execute_async(command)
        return self.respond(result)

    @patch("/{task_id}/status")
    async def change_status(self, task_id: str, request: ChangeStatusRequest, user: dict = Depends(get_current_user)):
        """Move a visible task to any status."""
        result = await self.mediator.execute_async(ChangeTaskStatusCommand(task_id=task_id, status=request.status, user_info=user))
        return self.respond(result)

    @patch("/{task_id}/checklist/{item_id}")
    async def toggle_checklist_item(self, task_id: str, item_id: str, user: dict = Depends(get_current_user)):
        """Flip the completion flag of one checklist item."""
        result = await self.mediator.execute_async(ToggleChecklistItemCommand(task_id=task_id, item_id=item_id, user_info=user))
        return self.respond(result)

    @post("/{task_id}/share")
    async def share_task(self, task_id: str, request: ShareTaskRequest, user: dict = Depends(get_current_user)):
        """Share a task with more users (creator only)."""
        result = await self.mediator.execute_async(ShareTaskCommand(task_id=task_id, user_ids=request.user_ids, user_info=user))
        return self.respond(result)

    @delete("/{task_id}/share/{user_id}")
    async def unshare_task(self, task_id: str, user_id: str, user: dict = Depends(get_current_user)):
        """Remove one user from a task's shares (creator only)."""
        result = await self.mediator.execute_async(UnshareTaskCommand(task_id=task_id, user_id=user_id, user_info=user))
        return self.respond(result)

    @patch("/{task_id}/collapse")
    async def collapse_task(self, task_id: str, request: CollapseTaskRequest, user: dict = Depends(get_current_user)):
        """Store the board's collapsed flag for a visible task."""
        result = await self.mediator.execute_async(SetTaskCollapsedCommand(task_id=task_id, collapsed=request.collapsed, user_info=user))
        return self.respond(result)
