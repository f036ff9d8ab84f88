from .schemas import PurchaseOrderStatus
from .service import PurchaseOrderService
from .routes import purchase_orders_router

__all__ = ["PurchaseOrderService", "PurchaseOrderStatus", "purchase_orders_router"]
