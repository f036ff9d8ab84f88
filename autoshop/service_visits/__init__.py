from .schemas import VisitStatus
from .service import ServiceVisitService, validate_images
from .routes import service_visits_router

__all__ = ["ServiceVisitService", "VisitStatus", "validate_images", "service_visits_router"]
