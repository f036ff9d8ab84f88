from .routes import FeedbackService, feedbacks_router

__all__ = ["FeedbackService", "feedbacks_router"]
