"""
Session middleware.

Runs on every request:
  1. Read the session cookie
  2. Load the session record from the configured store
  3. Set request.state.identity (Identity or None) and request.state.session_token

It never rejects a request: the route guards decide what an anonymous
caller may do. Session store failures propagate and surface as 500.
"""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from autoshop.config import settings
from autoshop.rbac.identity import Identity
from autoshop.utils import Logger

logger = Logger("session")


class SessionMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request.state.identity = None
        request.state.session_token = None

        token = request.cookies.get(settings.session_cookie_name)
        if token:
            store = request.app.state.session_store
            data = await store.get(token)
            if data is not None:
                identity = Identity.from_session(data)
                if identity is None:
                    logger.warning("Discarding session with unusable identity data")
                else:
                    request.state.identity = identity
                    request.state.session_token = token

        return await call_next(request)
