from .service import SupplierService
from .routes import suppliers_router

__all__ = ["SupplierService", "suppliers_router"]
