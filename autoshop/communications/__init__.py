from .routes import CommunicationService, communications_router

__all__ = ["CommunicationService", "communications_router"]
