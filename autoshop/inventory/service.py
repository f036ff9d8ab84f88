"""
Inventory service: stock movements against products.

Collections used:
  - inventory_transactions  → every stock change, with before/after levels
  - products                → stock_qty is updated in place
"""

from datetime import datetime, timezone
from typing import Optional

from pymongo import ReturnDocument

from autoshop.utils import serialize_mongo_doc, to_object_id
from autoshop.utils.crud import CollectionService
from autoshop.utils.exceptions import NotFound
from .schemas import TransactionType


def compute_new_stock(tx_type: TransactionType | str, current: int, quantity: int) -> int:
    """
    Stock level after a movement.
    IN and RETURN add, OUT subtracts, ADJUSTMENT sets the absolute level.
    """
    tx_type = TransactionType(tx_type)
    if tx_type == TransactionType.ADJUSTMENT:
        return quantity
    if tx_type == TransactionType.OUT:
        return current - quantity
    return current + quantity


class InventoryService(CollectionService):
    collection_name = "inventory_transactions"
    entity = "Transaction"

    def __init__(self, db):
        super().__init__(db)
        self.products = db["products"]

    async def list_transactions(
        self, product_id: Optional[str] = None, tx_type: Optional[str] = None
    ) -> list[dict]:
        filters: dict = {}
        if product_id:
            filters["product_id"] = product_id
        if tx_type:
            filters["type"] = tx_type
        return await self.list(filters, sort_field="date")

    async def record(self, data: dict, user_id: str | None = None) -> tuple[dict, dict]:
        """
        Apply a movement to the product and store the transaction.
        Returns (transaction, updated product).
        """
        oid = to_object_id(data["product_id"])
        product = await self.products.find_one({"_id": oid}) if oid else None
        if not product:
            raise NotFound("Product not found")

        previous_stock = product.get("stock_qty", 0)
        new_stock = compute_new_stock(data["type"], previous_stock, data["quantity"])

        transaction = await self.create(
            {
                **data,
                "type": TransactionType(data["type"]).value,
                "user_id": user_id,
                "previous_stock": previous_stock,
                "new_stock": new_stock,
                "date": datetime.now(timezone.utc),
            },
            created_by=user_id,
        )
        updated = await self.products.find_one_and_update(
            {"_id": oid},
            {"$set": {"stock_qty": new_stock, "updated_at": datetime.now(timezone.utc)}},
            return_document=ReturnDocument.AFTER,
        )
        return transaction, serialize_mongo_doc(updated)

    async def apply_delta(self, product_id: str, delta: int, reason: str, user_id: str | None = None) -> Optional[dict]:
        """
        Increment a product's stock by `delta` and log an IN/OUT transaction.
        Used by orders and purchase-order receipts. Returns the updated product,
        or None when the product no longer exists.
        """
        oid = to_object_id(product_id)
        if oid is None:
            return None
        updated = await self.products.find_one_and_update(
            {"_id": oid},
            {"$inc": {"stock_qty": delta}},
            return_document=ReturnDocument.AFTER,
        )
        if not updated:
            return None
        new_stock = updated.get("stock_qty", 0)
        await self.create(
            {
                "product_id": product_id,
                "type": (TransactionType.IN if delta >= 0 else TransactionType.OUT).value,
                "quantity": abs(delta),
                "reason": reason,
                "user_id": user_id,
                "previous_stock": new_stock - delta,
                "new_stock": new_stock,
                "date": datetime.now(timezone.utc),
            },
            created_by=user_id,
        )
        return serialize_mongo_doc(updated)
