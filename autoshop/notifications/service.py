"""
Notification service: in-app alerts for stock, orders, payments and service visits.

Collection: notifications
"""

from datetime import datetime, timedelta, timezone

from pymongo import ReturnDocument

from autoshop.utils import serialize_mongo_doc, to_object_id
from autoshop.utils.crud import CollectionService


class NotificationType:
    LOW_STOCK = "low_stock"
    NEW_ORDER = "new_order"
    PAYMENT_DUE = "payment_due"
    SERVICE_VISIT = "service_visit"


class NotificationService(CollectionService):
    collection_name = "notifications"
    entity = "Notification"

    async def notify(self, message: str, type_: str, related_id: str | None = None) -> dict:
        return await self.create(
            {"message": message, "type": type_, "read": False, "related_id": related_id}
        )

    async def mark_read(self, notification_id: str) -> dict:
        oid = to_object_id(notification_id)
        if oid is None:
            raise self._not_found()
        doc = await self.collection.find_one_and_update(
            {"_id": oid},
            {"$set": {"read": True, "updated_at": datetime.now(timezone.utc)}},
            return_document=ReturnDocument.AFTER,
        )
        if not doc:
            raise self._not_found()
        return serialize_mongo_doc(doc)

    async def mark_all_read(self) -> int:
        result = await self.collection.update_many(
            {"read": False},
            {"$set": {"read": True, "updated_at": datetime.now(timezone.utc)}},
        )
        return result.modified_count

    # ── Domain events ────────────────────────────────────────────

    async def check_low_stock(self, product: dict) -> dict | None:
        """Raise one unread low-stock alert per product while it stays at or below its minimum."""
        stock = product.get("stock_qty", 0)
        minimum = product.get("min_stock_level", 0)
        if stock > minimum:
            return None
        product_id = str(product["_id"])
        existing = await self.collection.find_one(
            {"type": NotificationType.LOW_STOCK, "related_id": product_id, "read": False}
        )
        if existing:
            return None
        return await self.notify(
            f"Low stock alert: {product.get('name', 'Product')} ({stock} units remaining)",
            NotificationType.LOW_STOCK,
            product_id,
        )

    async def notify_new_order(self, order: dict, customer_name: str) -> dict:
        return await self.notify(
            f"New order received from {customer_name} - Order #{order.get('invoice_number')}",
            NotificationType.NEW_ORDER,
            str(order["_id"]),
        )

    async def notify_payment_due(self, order: dict, customer_name: str) -> dict:
        return await self.notify(
            f"Payment due: Order #{order.get('invoice_number')} for {customer_name}",
            NotificationType.PAYMENT_DUE,
            str(order["_id"]),
        )

    async def notify_service_visit_status(self, visit: dict, customer_name: str, status: str) -> dict:
        return await self.notify(
            f"Service visit for {visit.get('vehicle_reg')} ({customer_name}) is now {status}",
            NotificationType.SERVICE_VISIT,
            str(visit["_id"]),
        )

    async def check_overdue_payments(self, threshold_days: int) -> dict:
        """
        Flag orders still due/partial after `threshold_days`.
        At most one overdue notification is created per order.
        """
        now = datetime.now(timezone.utc)
        threshold = now - timedelta(days=threshold_days)
        cursor = self.db["orders"].find(
            {"payment_status": {"$in": ["due", "partial"]}, "created_at": {"$lt": threshold}}
        )
        checked = 0
        created = 0
        async for order in cursor:
            checked += 1
            order_id = str(order["_id"])
            existing = await self.collection.find_one(
                {"type": NotificationType.PAYMENT_DUE, "related_id": order_id, "overdue": True}
            )
            if existing:
                continue
            created_at = order["created_at"]
            if created_at.tzinfo is None:
                created_at = created_at.replace(tzinfo=timezone.utc)
            days_overdue = max((now - created_at).days - threshold_days, 1)
            customer_name = order.get("customer_name") or "Unknown Customer"
            await self.create(
                {
                    "message": (
                        f"Payment overdue: Order #{order.get('invoice_number')} "
                        f"for {customer_name} ({days_overdue} days)"
                    ),
                    "type": NotificationType.PAYMENT_DUE,
                    "read": False,
                    "related_id": order_id,
                    "overdue": True,
                }
            )
            created += 1
        return {"checked": checked, "notifications_created": created}
