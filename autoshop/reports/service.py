"""
Reports Service: aggregation pipelines over orders, products and employees.

    - Sales: daily or monthly totals, optional date range
    - Inventory: low / out of stock and stock valuation
    - Top products by revenue
    - Employee performance by salesperson
"""

from datetime import datetime
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from autoshop.utils import serialize_mongo_doc, to_object_id


class ReportsService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.orders = db["orders"]
        self.products = db["products"]

    # ── Sales ────────────────────────────────────────────────────

    async def sales(
        self,
        period: str = "daily",
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> list[dict]:
        match: dict = {}
        if start_date and end_date:
            match["created_at"] = {"$gte": start_date, "$lte": end_date}

        date_format = "%Y-%m" if period == "monthly" else "%Y-%m-%d"
        pipeline = [
            {"$match": match},
            {"$group": {
                "_id": {"$dateToString": {"format": date_format, "date": "$created_at"}},
                "total_sales": {"$sum": "$total"},
                "total_orders": {"$sum": 1},
                "avg_order_value": {"$avg": "$total"},
            }},
            {"$sort": {"_id": -1}},
        ]
        results = await self.orders.aggregate(pipeline).to_list(None)
        return [{"period": r.pop("_id"), **r} for r in results]

    # ── Inventory ────────────────────────────────────────────────

    async def inventory(self) -> dict:
        low_cursor = self.products.find(
            {"$expr": {"$lte": ["$stock_qty", "$min_stock_level"]}}
        ).sort("stock_qty", 1)
        low_stock = [serialize_mongo_doc(d) async for d in low_cursor]
        out_of_stock = [p for p in low_stock if p.get("stock_qty", 0) <= 0]

        valuation = await self.products.aggregate([
            {"$group": {
                "_id": None,
                "total_value": {"$sum": {"$multiply": ["$stock_qty", "$selling_price"]}},
                "total_items": {"$sum": "$stock_qty"},
            }},
        ]).to_list(1)
        totals = valuation[0] if valuation else {"total_value": 0, "total_items": 0}
        totals.pop("_id", None)

        return {
            "low_stock_products": low_stock,
            "out_of_stock_products": out_of_stock,
            "total_inventory_value": totals,
        }

    # ── Top products ─────────────────────────────────────────────

    async def top_products(self, limit: int = 10) -> list[dict]:
        pipeline = [
            {"$unwind": "$items"},
            {"$group": {
                "_id": "$items.product_id",
                "total_quantity": {"$sum": "$items.quantity"},
                "total_revenue": {"$sum": {"$multiply": ["$items.quantity", "$items.price"]}},
                "order_count": {"$sum": 1},
            }},
            {"$sort": {"total_revenue": -1}},
            {"$limit": limit},
        ]
        results = await self.orders.aggregate(pipeline).to_list(limit)
        return [await self._with_lookup(r, "product_id", self.products, "product") for r in results]

    # ── Employee performance ─────────────────────────────────────

    async def employee_performance(self) -> list[dict]:
        pipeline = [
            {"$match": {"salesperson_id": {"$nin": [None, ""]}}},
            {"$group": {
                "_id": "$salesperson_id",
                "total_sales": {"$sum": "$total"},
                "order_count": {"$sum": 1},
                "avg_order_value": {"$avg": "$total"},
            }},
            {"$sort": {"total_sales": -1}},
        ]
        results = await self.orders.aggregate(pipeline).to_list(None)
        return [
            await self._with_lookup(r, "employee_id", self.db["employees"], "employee")
            for r in results
        ]

    async def _with_lookup(self, row: dict, key: str, collection, as_field: str) -> dict:
        """Ids are stored as strings on orders, so the join happens here instead of $lookup."""
        ref_id = row.pop("_id")
        oid = to_object_id(ref_id)
        doc = await collection.find_one({"_id": oid}) if oid else None
        return {key: ref_id, **row, as_field: serialize_mongo_doc(doc)}
