"""Abstract read-only user directory.

Users are owned by the identity side of the system; the task board only
reads them to list assignee candidates and to resolve user references into
``{id, name, email}`` projections.
"""

from abc import ABC, abstractmethod

from integration.models.user_dto import UserDto


class UserDirectory(ABC):
    """Read model of registered users."""

    @abstractmethod
    async def get_async(self, user_id: str) -> UserDto | None:
        """Return one user, or None when unknown."""
        ...

    @abstractmethod
    async def get_many_async(self, user_ids: list[str]) -> dict[str, UserDto]:
        """Return the known users among ``user_ids`` keyed by id.

        Unknown ids are simply absent from the result.
        """
        ...

    @abstractmethod
    async def search_async(self, query: str | None = None) -> list[UserDto]:
        """List users, optionally filtered by a case-insensitive name/email substring."""
        ...
