"""Users API controller (read-only)."""

from typing import Optional

from classy_fastapi.decorators import get
from fastapi import Depends, Query
from neuroglia.dependency_injection import ServiceProviderBase
from neuroglia.mapping import Mapper
from neuroglia.mediation import Mediator

from api.dependencies import get_current_user
from application.queries import GetUsersQuery

from .taskboard_controller_base import TaskboardControllerBase


class UsersController(TaskboardControllerBase):
    """Controller listing users as assignment and sharing candidates."""

    def __init__(self, service_provider: ServiceProviderBase, mapper: Mapper, mediator: Mediator) -> None:
        super().__init__(service_provider, mapper, mediator)

    @get("/")
    async def get_users(
        self,
        query: Optional[str] = Query(default=None, description="Filter by name or email (partial match)"),
        user: dict = Depends(get_current_user),
    ):
        """List users, optionally filtered by name or email."""
        result = await self.mediator.execute_async(GetUsersQuery(query=query, user_info=user))
        return self.respond(result)

    @get("/search")
    async def search_users(
        self,
        query: Optional[str] = Query(default=None, description="Name or email fragment"),
        user: dict = Depends(get_current_user),
    ):
        """Search users by name or email."""
        result = await self.mediator.execute_async(GetUsersQuery(query=query, user_info=user))
        return self.respond(result)
