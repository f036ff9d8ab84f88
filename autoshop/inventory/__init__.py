from .schemas import TransactionType
from .service import InventoryService, compute_new_stock
from .routes import inventory_router

__all__ = ["InventoryService", "TransactionType", "compute_new_stock", "inventory_router"]
