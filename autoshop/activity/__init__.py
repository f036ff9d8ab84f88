from .service import ActivityService, client_ip
from .routes import activity_router

__all__ = ["ActivityService", "client_ip", "activity_router"]
