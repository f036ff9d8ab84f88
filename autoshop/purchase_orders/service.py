"""
Purchase orders raised against suppliers.

Collection: purchase_orders

Moving a PO to `received` books every linked line into stock (IN
transactions) and stamps actual_delivery_date. This happens once per PO.
"""

from datetime import datetime, timezone

from autoshop.inventory import InventoryService
from autoshop.utils import generate_reference
from autoshop.utils.crud import CollectionService
from .schemas import PurchaseOrderStatus


class PurchaseOrderService(CollectionService):
    collection_name = "purchase_orders"
    entity = "Purchase order"

    def __init__(self, db):
        super().__init__(db)
        self.inventory = InventoryService(db)

    async def create_po(self, data: dict, created_by: str | None = None) -> dict:
        return await self.create(
            {
                **data,
                "po_number": generate_reference("PO"),
                "order_date": datetime.now(timezone.utc),
            },
            created_by=created_by,
        )

    async def update_po(self, po_id: str, changes: dict, user_id: str | None = None) -> dict:
        previous = await self._find_raw(po_id)
        if not previous:
            raise self._not_found()

        receiving = (
            changes.get("status") == PurchaseOrderStatus.RECEIVED.value
            and previous.get("status") != PurchaseOrderStatus.RECEIVED.value
        )
        if receiving:
            changes = {**changes, "actual_delivery_date": datetime.now(timezone.utc)}
        po = await self.update(po_id, changes)

        if receiving:
            for item in po.get("items", []):
                if item.get("product_id"):
                    await self.inventory.apply_delta(
                        item["product_id"], item["quantity"],
                        f"Purchase Order {po['po_number']}", user_id,
                    )
        return po
