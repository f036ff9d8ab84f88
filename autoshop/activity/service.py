"""
Activity log: who did what to which record.

Collection: activity_logs

Usage from route handlers:
    await ActivityService(db).log(
        identity, "create", "product",
        resource_id=product["_id"],
        description="Created product: Brake Pads",
        ip_address=client_ip(request),
    )
"""

from datetime import datetime, timezone
from typing import Any, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from starlette.requests import Request

from autoshop.rbac import Identity
from autoshop.utils import serialize_mongo_doc


def client_ip(request: Request) -> Optional[str]:
    return request.client.host if request.client else None


class ActivityService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.logs = db["activity_logs"]

    async def log(
        self,
        identity: Identity,
        action: str,
        resource: str,
        resource_id: str | None = None,
        description: str = "",
        details: dict | Any = None,
        ip_address: str | None = None,
    ) -> dict:
        """Record one activity entry. Identity fields always come from the session."""
        entry = {
            "user_id": identity.user_id,
            "user_name": identity.name,
            "user_role": identity.role.value,
            "action": action,
            "resource": resource,
            "resource_id": resource_id,
            "description": description,
            "details": details,
            "ip_address": ip_address,
            "created_at": datetime.now(timezone.utc),
        }
        result = await self.logs.insert_one(entry)
        entry["_id"] = result.inserted_id
        return serialize_mongo_doc(entry)

    async def list_logs(
        self,
        role: str | None = None,
        resource: str | None = None,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
        limit: int = 50,
    ) -> list[dict]:
        """Most recent first."""
        filters: dict = {}
        if role:
            filters["user_role"] = role
        if resource:
            filters["resource"] = resource
        if start_date or end_date:
            date_filter = {}
            if start_date:
                date_filter["$gte"] = start_date
            if end_date:
                date_filter["$lte"] = end_date
            filters["created_at"] = date_filter

        cursor = self.logs.find(filters).sort("created_at", -1).limit(limit)
        return [serialize_mongo_doc(d) async for d in cursor]
