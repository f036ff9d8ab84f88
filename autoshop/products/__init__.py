from .service import ProductService
from .routes import products_router

__all__ = ["ProductService", "products_router"]
