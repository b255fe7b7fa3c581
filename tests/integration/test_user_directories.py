"""Tests for the Motor and in-memory user directories."""

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId

from integration.repositories import InMemoryUserDirectory, MotorUserDirectory


class _AsyncCursor:
    def __init__(self, documents: list[dict[str, Any]]):
        self._documents = documents

    def sort(self, *args: Any, **kwargs: Any) -> "_AsyncCursor":
        return self

    def __aiter__(self):
        self._iter = iter(self._documents)
        return self

    async def __anext__(self) -> dict[str, Any]:
        try:
            return next(self._iter)
        except StopIteration:
            raise StopAsyncIteration


@pytest.mark.repository
class TestMotorUserDirectory:
    @pytest.fixture
    def collection(self) -> MagicMock:
        mock = MagicMock()
        mock.find_one = AsyncMock(return_value=None)
        return mock

    @pytest.mark.asyncio
    async def test_get_matches_object_id_and_string_keys(self, collection: MagicMock) -> None:
        oid = ObjectId()
        collection.find_one.return_value = {"_id": oid, "name": "Alice", "email": "alice@example.com"}

        user = await MotorUserDirectory(collection).get_async(str(oid))

        filter_doc, projection = collection.find_one.call_args[0]
        assert filter_doc == {"_id": {"$in": [str(oid), oid]}}
        assert "password" not in projection
        assert user.id == str(oid)
        assert user.to_projection() == {"id": str(oid), "name": "Alice", "email": "alice@example.com"}

    @pytest.mark.asyncio
    async def test_get_many_returns_known_users_only(self, collection: MagicMock) -> None:
        collection.find.return_value = _AsyncCursor([{"_id": "alice", "name": "Alice", "email": "a@example.com"}])

        users = await MotorUserDirectory(collection).get_many_async(["alice", "ghost", "alice"])

        assert list(users) == ["alice"]

    @pytest.mark.asyncio
    async def test_get_many_without_ids_skips_the_database(self, collection: MagicMock) -> None:
        assert await MotorUserDirectory(collection).get_many_async([]) == {}
        collection.find.assert_not_called()

    @pytest.mark.asyncio
    async def test_search_escapes_the_query(self, collection: MagicMock) -> None:
        collection.find.return_value = _AsyncCursor([])

        await MotorUserDirectory(collection).search_async("a.b")

        filter_doc = collection.find.call_args[0][0]
        assert filter_doc["$or"][0] == {"name": {"$regex": r"a\.b", "$options": "i"}}


class TestInMemoryUserDirectory:
    @pytest.mark.asyncio
    async def test_search_matches_name_or_email_case_insensitively(self, user_directory: InMemoryUserDirectory) -> None:
        by_name = await user_directory.search_async("BO")
        by_email = await user_directory.search_async("carol@")

        assert [u.id for u in by_name] == ["bob"]
        assert [u.id for u in by_email] == ["carol"]

    @pytest.mark.asyncio
    async def test_search_without_query_lists_everyone(self, user_directory: InMemoryUserDirectory) -> None:
        users = await user_directory.search_async()

        assert [u.id for u in users] == ["alice", "bob", "carol", "dave"]
