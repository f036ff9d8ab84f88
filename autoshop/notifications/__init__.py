from .service import NotificationService, NotificationType
from .routes import notifications_router

__all__ = ["NotificationService", "NotificationType", "notifications_router"]
