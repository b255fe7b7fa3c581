"""User listing query and handler."""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from neuroglia.core import OperationResult
from neuroglia.mediation import Query, QueryHandler
from neuroglia.observability.tracing import add_span_attributes

from domain.repositories import UserDirectory

log = logging.getLogger(__name__)


@dataclass
class GetUsersQuery(Query[OperationResult[list[dict]]]):
    """Query to list users as ``{id, name, email}`` projections.

    Optionally filter by a case-insensitive substring of name or email.
    """

    query: Optional[str] = None
    """Search text (partial match on name or email)."""

    user_info: Optional[dict[str, Any]] = None
    """User information from authentication context."""


class GetUsersQueryHandler(QueryHandler[GetUsersQuery, OperationResult[list[dict]]]):
    """Handler for GetUsersQuery."""

    def __init__(self, user_directory: UserDirectory):
        super().__init__()
        self.user_directory = user_directory

    async def handle_async(self, request: GetUsersQuery) -> OperationResult[list[dict]]:
        """Handle get users query."""
        query = request
        search = (query.query or "").strip() or None

        add_span_attributes({"users.has_query": search is not None})

        users = await self.user_directory.search_async(search)
        return self.ok([user.to_projection() for user in users])
