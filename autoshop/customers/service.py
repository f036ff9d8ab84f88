"""Customer service: CRUD on the customers collection plus loyalty tracking."""

from datetime import datetime, timezone
from typing import Optional

from pymongo import ReturnDocument

from autoshop.utils import serialize_mongo_doc, to_object_id
from autoshop.utils.crud import CollectionService
from autoshop.utils.exceptions import BadRequest

# (minimum visits, tier, discount %) checked top-down
LOYALTY_TIERS = (
    (20, "Platinum", 15),
    (10, "Gold", 10),
    (5, "Silver", 5),
    (0, "Bronze", 0),
)
POINTS_PER_VISIT = 10


def loyalty_tier(visit_count: int) -> dict:
    """Tier, discount and points earned for a number of completed visits."""
    for minimum, tier, discount in LOYALTY_TIERS:
        if visit_count >= minimum:
            break
    return {
        "loyalty_tier": tier,
        "discount_percentage": discount,
        "loyalty_points": visit_count * POINTS_PER_VISIT,
    }


class CustomerService(CollectionService):
    collection_name = "customers"
    entity = "Customer"

    async def _ensure_phone_free(self, phone: str, exclude_id=None) -> None:
        query: dict = {"phone": phone}
        if exclude_id is not None:
            query["_id"] = {"$ne": exclude_id}
        if await self.collection.find_one(query):
            raise BadRequest(f"Customer with phone '{phone}' already exists")

    async def search(self, q: Optional[str] = None) -> list[dict]:
        filters: dict = {}
        if q:
            filters["$or"] = [
                {"name": {"$regex": q, "$options": "i"}},
                {"phone": {"$regex": q, "$options": "i"}},
                {"email": {"$regex": q, "$options": "i"}},
                {"vehicles.reg_no": {"$regex": q, "$options": "i"}},
            ]
        return await self.list(filters)

    async def create_customer(self, data: dict, created_by: str | None = None) -> dict:
        await self._ensure_phone_free(data["phone"])
        return await self.create(
            {**data, "visit_count": 0, "total_spent": 0, **loyalty_tier(0)},
            created_by=created_by,
        )

    async def update_customer(self, customer_id: str, update_data: dict) -> dict:
        if update_data.get("phone"):
            await self._ensure_phone_free(update_data["phone"], exclude_id=to_object_id(customer_id))
        return await self.update(customer_id, update_data)

    async def record_completed_visit(self, customer_id: str, amount: float) -> Optional[dict]:
        """Count one completed visit, add its total to spend and recompute the tier."""
        oid = to_object_id(customer_id)
        if oid is None:
            return None
        doc = await self.collection.find_one_and_update(
            {"_id": oid},
            {"$inc": {"visit_count": 1, "total_spent": amount or 0}},
            return_document=ReturnDocument.AFTER,
        )
        if not doc:
            return None
        tier = loyalty_tier(doc.get("visit_count", 0))
        doc = await self.collection.find_one_and_update(
            {"_id": oid},
            {"$set": {**tier, "updated_at": datetime.now(timezone.utc)}},
            return_document=ReturnDocument.AFTER,
        )
        return serialize_mongo_doc(doc)

    async def name_of(self, customer_id: Optional[str]) -> str:
        oid = to_object_id(customer_id) if customer_id else None
        doc = await self.collection.find_one({"_id": oid}) if oid else None
        return doc.get("name", "Unknown Customer") if doc else "Unknown Customer"
