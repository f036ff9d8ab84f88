from .service import ReportsService
from .routes import reports_router

__all__ = ["ReportsService", "reports_router"]
