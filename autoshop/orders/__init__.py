from .schemas import PaymentStatus
from .service import OrderService
from .routes import orders_router

__all__ = ["OrderService", "PaymentStatus", "orders_router"]
