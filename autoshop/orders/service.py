"""
Sales orders.

Collection: orders

Creating an order takes its items out of stock (one OUT transaction per
line) and raises new-order / low-stock notifications.
"""

from autoshop.customers import CustomerService
from autoshop.inventory import InventoryService
from autoshop.notifications import NotificationService
from autoshop.utils import Logger, generate_reference
from autoshop.utils.crud import CollectionService
from .schemas import PaymentStatus

logger = Logger("orders")


class OrderService(CollectionService):
    collection_name = "orders"
    entity = "Order"

    def __init__(self, db):
        super().__init__(db)
        self.inventory = InventoryService(db)
        self.notifications = NotificationService(db)
        self.customers = CustomerService(db)

    async def _customer_name(self, order: dict) -> str:
        if order.get("customer_name"):
            return order["customer_name"]
        return await self.customers.name_of(order.get("customer_id"))

    async def create_order(self, data: dict, created_by: str | None = None) -> dict:
        invoice_number = generate_reference("ORD")
        customer_name = await self._customer_name(data)
        order = await self.create(
            {**data, "invoice_number": invoice_number, "customer_name": customer_name},
            created_by=created_by,
        )

        for item in data["items"]:
            product = await self.inventory.apply_delta(
                item["product_id"], -item["quantity"], f"Order {invoice_number}", created_by
            )
            if product is None:
                logger.warning(f"Order {invoice_number}: product {item['product_id']} not found")
                continue
            await self.notifications.check_low_stock(product)

        await self.notifications.notify_new_order(order, customer_name)
        return order

    async def update_order(self, order_id: str, changes: dict) -> dict:
        previous = await self._find_raw(order_id)
        if not previous:
            raise self._not_found()
        order = await self.update(order_id, changes)

        new_status = changes.get("payment_status")
        if (
            new_status == PaymentStatus.DUE.value
            and new_status != previous.get("payment_status")
        ):
            await self.notifications.notify_payment_due(order, await self._customer_name(order))
        return order
