"""MongoDB user directory implementation using Motor."""

import logging
import re
from typing import Any

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection

from domain.repositories import UserDirectory
from integration.models import UserDto

log = logging.getLogger(__name__)


def _id_candidates(user_id: str) -> list[Any]:
    """Users may be keyed by ObjectId or by plain string; match either."""
    candidates: list[Any] = [user_id]
    if ObjectId.is_valid(user_id):
        candidates.append(ObjectId(user_id))
    return candidates


class MotorUserDirectory(UserDirectory):
    """Read-only access to the users collection.

    Only ``name`` and ``email`` are projected; credentials stored alongside
    users never leave the database.
    """

    _projection = {"name": 1, "email": 1}

    def __init__(self, collection: AsyncIOMotorCollection) -> None:
        self._collection = collection

    @staticmethod
    def _to_dto(document: dict[str, Any]) -> UserDto:
        return UserDto(id=str(document["_id"]), name=document.get("name"), email=document.get("email"))

    async def get_async(self, user_id: str) -> UserDto | None:
        document = await self._collection.find_one({"_id": {"$in": _id_candidates(user_id)}}, self._projection)
        return self._to_dto(document) if document else None

    async def get_many_async(self, user_ids: list[str]) -> dict[str, UserDto]:
        ids = list(dict.fromkeys(u for u in user_ids if u))
        if not ids:
            return {}
        candidates = [c for user_id in ids for c in _id_candidates(user_id)]
        cursor = self._collection.find({"_id": {"$in": candidates}}, self._projection)
        users: dict[str, UserDto] = {}
        async for document in cursor:
            user = self._to_dto(document)
            users[user.id] = user
        log.debug(f"Resolved {len(users)} of {len(ids)} user references")
        return users

    async def search_async(self, query: str | None = None) -> list[UserDto]:
        filter_dict: dict[str, Any] = {}
        if query:
            # Substring match, user input taken literally
            pattern = {"$regex": re.escape(query), "$options": "i"}
            filter_dict = {"$or": [{"name": pattern}, {"email": pattern}]}

        cursor = self._collection.find(filter_dict, self._projection).sort("name", 1)
        return [self._to_dto(document) async for document in cursor]
