"""
Product catalogue and stock levels.

Collection: products
"""

from autoshop.utils import serialize_mongo_doc
from autoshop.utils.crud import CollectionService


class ProductService(CollectionService):
    collection_name = "products"
    entity = "Product"

    async def search(self, search: str | None = None, category: str | None = None) -> list[dict]:
        filters: dict = {}
        if category:
            filters["category"] = category
        if search:
            pattern = {"$regex": search, "$options": "i"}
            filters["$or"] = [{"name": pattern}, {"sku": pattern}, {"barcode": pattern}]
        return await self.list(filters)

    async def low_stock(self) -> list[dict]:
        """Products at or below their minimum stock level."""
        cursor = self.collection.find({"$expr": {"$lte": ["$stock_qty", "$min_stock_level"]}})
        return [serialize_mongo_doc(d) async for d in cursor.sort("stock_qty", 1)]

    async def by_barcode(self, barcode: str) -> dict:
        doc = await self.collection.find_one({"barcode": barcode})
        if not doc:
            raise self._not_found()
        return serialize_mongo_doc(doc)
