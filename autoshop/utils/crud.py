"""
Shared CRUD plumbing for a single MongoDB collection.

Module services subclass CollectionService, set `collection_name` and
`entity`, and add their own business rules on top. Every document gets
created_at / updated_at; reads return serialized dicts (`_id` as str).
"""

from datetime import datetime, timezone
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from .exceptions import NotFound
from .helpers import serialize_mongo_doc, to_object_id


class CollectionService:
    collection_name: str = ""
    entity: str = "Resource"

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db[self.collection_name]

    def _not_found(self) -> NotFound:
        return NotFound(f"{self.entity} not found")

    async def _find_raw(self, doc_id: str) -> Optional[dict]:
        oid = to_object_id(doc_id)
        if oid is None:
            return None
        return await self.collection.find_one({"_id": oid})

    async def list(
        self,
        filters: Optional[dict] = None,
        sort_field: str = "created_at",
        limit: int = 0,
    ) -> list[dict]:
        cursor = self.collection.find(filters or {}).sort(sort_field, -1)
        if limit:
            cursor = cursor.limit(limit)
        return [serialize_mongo_doc(d) async for d in cursor]

    async def get(self, doc_id: str) -> dict:
        doc = await self._find_raw(doc_id)
        if not doc:
            raise self._not_found()
        return serialize_mongo_doc(doc)

    async def create(self, data: dict, created_by: str | None = None) -> dict:
        now = datetime.now(timezone.utc)
        doc = {
            **data,
            "created_by": created_by,
            "created_at": now,
            "updated_at": now,
        }
        result = await self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return serialize_mongo_doc(doc)

    async def update(self, doc_id: str, update_data: dict) -> dict:
        """Set the given fields. Only non-None values are written."""
        oid = to_object_id(doc_id)
        if oid is None:
            raise self._not_found()
        clean = {k: v for k, v in update_data.items() if v is not None}
        clean["updated_at"] = datetime.now(timezone.utc)
        doc = await self.collection.find_one_and_update(
            {"_id": oid},
            {"$set": clean},
            return_document=ReturnDocument.AFTER,
        )
        if not doc:
            raise self._not_found()
        return serialize_mongo_doc(doc)

    async def delete(self, doc_id: str) -> dict:
        """Hard delete. Returns the removed document."""
        oid = to_object_id(doc_id)
        if oid is None:
            raise self._not_found()
        doc = await self.collection.find_one_and_delete({"_id": oid})
        if not doc:
            raise self._not_found()
        return serialize_mongo_doc(doc)
