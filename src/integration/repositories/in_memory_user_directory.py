"""In-memory implementation of UserDirectory."""

from domain.repositories import UserDirectory
from integration.models import UserDto


class InMemoryUserDirectory(UserDirectory):
    """In-memory implementation of UserDirectory for testing and local runs."""

    def __init__(self, users: list[UserDto] | None = None) -> None:
        self._users: dict[str, UserDto] = {}
        for user in users or []:
            self.add(user)

    def add(self, user: UserDto) -> UserDto:
        self._users[user.id] = user
        return user

    async def get_async(self, user_id: str) -> UserDto | None:
        return self._users.get(user_id)

    async def get_many_async(self, user_ids: list[str]) -> dict[str, UserDto]:
        return {user_id: self._users[user_id] for user_id in user_ids if user_id in self._users}

    async def search_async(self, query: str | None = None) -> list[UserDto]:
        users = sorted(self._users.values(), key=lambda u: u.name or "")
        if not query:
            return users
        needle = query.lower()
        return [u for u in users if needle in (u.name or "").lower() or needle in (u.email or "").lower()]
