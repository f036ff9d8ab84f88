from .service import CustomerService, loyalty_tier
from .routes import customers_router

__all__ = ["CustomerService", "loyalty_tier", "customers_router"]
