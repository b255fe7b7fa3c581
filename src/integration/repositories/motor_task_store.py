"""MongoDB task store implementation using Motor."""

import logging
from datetime import UTC, datetime
from typing import Any

from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError

from domain.entities import Task
from domain.exceptions import DuplicateTaskError
from domain.models import TaskPredicate
from domain.repositories import TaskStore

from .mongo_filter_translator import MongoFilterTranslator

log = logging.getLogger(__name__)


def duplicate_key_field(error: DuplicateKeyError) -> str:
    """Name the entity field behind a duplicate-key error."""
    details = error.details or {}
    key_pattern = details.get("keyPattern") or details.get("keyValue") or {}
    field = next(iter(key_pattern), "_id")
    return "id" if field == "_id" else field


class MotorTaskStore(TaskStore):
    """Task store backed by one MongoDB collection.

    Each mutation is a single ``find_one_and_update`` scoped by the translated
    predicate, returning the post-update document. The collection should be
    obtained from a client created with ``tz_aware=True`` so stored instants
    come back as aware UTC datetimes.
    """

    def __init__(self, collection: AsyncIOMotorCollection, translator: MongoFilterTranslator | None = None) -> None:
        self._collection = collection
        self._translator = translator or MongoFilterTranslator()

    async def ensure_indexes_async(self) -> None:
        """Create the indexes used by the visibility and due-date filters."""
        await self._collection.create_index([("due_date", ASCENDING)])
        await self._collection.create_index([("status", ASCENDING)])
        await self._collection.create_index([("creator", ASCENDING)])
        await self._collection.create_index([("assignees", ASCENDING)])
        await self._collection.create_index([("shared_with", ASCENDING)])
        await self._collection.create_index([("created_at", DESCENDING)])
        log.info(f"Indexes ensured on collection '{self._collection.name}'")

    def to_filter(self, predicate: TaskPredicate) -> dict[str, Any]:
        return self._translator.translate(predicate)

    @staticmethod
    def to_document(task: Task) -> dict[str, Any]:
        document = task.to_dict()
        document["_id"] = document.pop("id")
        return document

    @staticmethod
    def from_document(document: dict[str, Any]) -> Task:
        data = dict(document)
        data["id"] = str(data.pop("_id"))
        return Task.from_dict(data)

    async def insert_async(self, task: Task) -> Task:
        now = datetime.now(UTC)
        task.created_at = now
        task.updated_at = now
        try:
            await self._collection.insert_one(self.to_document(task))
        except DuplicateKeyError as e:
            raise DuplicateTaskError(field=duplicate_key_field(e)) from e
        return task

    async def find_async(self, predicate: TaskPredicate, newest_first: bool = True) -> list[Task]:
        cursor = self._collection.find(self.to_filter(predicate)).sort("created_at", DESCENDING if newest_first else ASCENDING)
        documents = await cursor.to_list(length=None)
        return [self.from_document(document) for document in documents]

    async def find_one_async(self, predicate: TaskPredicate) -> Task | None:
        document = await self._collection.find_one(self.to_filter(predicate))
        return self.from_document(document) if document else None

    async def _update_one_async(self, filter: dict[str, Any], update: dict[str, Any] | list[dict[str, Any]]) -> Task | None:
        document = await self._collection.find_one_and_update(filter, update, return_document=ReturnDocument.AFTER)
        return self.from_document(document) if document else None

    async def set_fields_async(self, predicate: TaskPredicate, fields: dict[str, Any]) -> Task | None:
        return await self._update_one_async(
            self.to_filter(predicate),
            {"$set": {**fields, "updated_at": datetime.now(UTC)}},
        )

    async def toggle_checklist_item_async(self, predicate: TaskPredicate, item_id: str) -> Task | None:
        # Pipeline update: the negation reads the stored value, so concurrent toggles never lose a flip
        pipeline = [
            {
                "$set": {
                    "checklist": {
                        "$map": {
                            "input": "$checklist",
                            "as": "item",
                            "in": {
                                "$cond": [
                                    {"$eq": ["$$item.id", item_id]},
                                    {"$mergeObjects": ["$$item", {"is_completed": {"$not": ["$$item.is_completed"]}}]},
                                    "$$item",
                                ]
                            },
                        }
                    },
                    "updated_at": datetime.now(UTC),
                }
            }
        ]
        scoped = {"$and": [self.to_filter(predicate), {"checklist.id": item_id}]}
        return await self._update_one_async(scoped, pipeline)

    async def add_to_set_async(self, predicate: TaskPredicate, field: str, values: list[str]) -> Task | None:
        return await self._update_one_async(
            self.to_filter(predicate),
            {"$addToSet": {field: {"$each": list(values)}}, "$set": {"updated_at": datetime.now(UTC)}},
        )

    async def pull_async(self, predicate: TaskPredicate, field: str, value: str) -> Task | None:
        # Only members are pulled; a miss is read back untouched
        scoped = {"$and": [self.to_filter(predicate), {field: value}]}
        task = await self._update_one_async(scoped, {"$pull": {field: value}, "$set": {"updated_at": datetime.now(UTC)}})
        return task or await self.find_one_async(predicate)
