from .store import (
    MemorySessionStore,
    MongoSessionStore,
    SessionStore,
    build_session_store,
    new_session_token,
)

__all__ = [
    "SessionStore",
    "MemorySessionStore",
    "MongoSessionStore",
    "build_session_store",
    "new_session_token",
]
