"""
Server-side session stores keyed by an opaque token.

The token travels in an HttpOnly cookie; the session record holds the
identity fields and an absolute expiry. Two backends:

  - MongoSessionStore   → `sessions` collection, TTL index on expires_at
  - MemorySessionStore  → process-local dict, for development and tests
"""

import asyncio
import secrets
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Optional

from autoshop.config import get_database


def new_session_token() -> str:
    return secrets.token_urlsafe(32)


class SessionStore(ABC):
    """get / set / destroy keyed by session token."""

    def __init__(self, ttl_minutes: int):
        self.ttl = timedelta(minutes=ttl_minutes)

    def _expiry(self) -> datetime:
        return datetime.now(timezone.utc) + self.ttl

    @abstractmethod
    async def get(self, token: str) -> Optional[dict]:
        ...

    @abstractmethod
    async def set(self, token: str, data: dict) -> None:
        ...

    @abstractmethod
    async def destroy(self, token: str) -> None:
        ...


class MemorySessionStore(SessionStore):
    def __init__(self, ttl_minutes: int):
        super().__init__(ttl_minutes)
        self._sessions: dict[str, tuple[dict, datetime]] = {}
        self._lock = asyncio.Lock()

    async def get(self, token: str) -> Optional[dict]:
        async with self._lock:
            entry = self._sessions.get(token)
            if entry is None:
                return None
            data, expires_at = entry
            if expires_at <= datetime.now(timezone.utc):
                del self._sessions[token]
                return None
            return dict(data)

    async def set(self, token: str, data: dict) -> None:
        async with self._lock:
            self._sessions[token] = (dict(data), self._expiry())

    async def destroy(self, token: str) -> None:
        async with self._lock:
            self._sessions.pop(token, None)


class MongoSessionStore(SessionStore):
    collection_name = "sessions"

    async def _collection(self):
        db = await get_database()
        return db[self.collection_name]

    async def get(self, token: str) -> Optional[dict]:
        sessions = await self._collection()
        doc = await sessions.find_one({"_id": token})
        if not doc:
            return None
        expires_at = doc["expires_at"]
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        # The TTL monitor only runs once a minute
        if expires_at <= datetime.now(timezone.utc):
            return None
        return doc.get("data", {})

    async def set(self, token: str, data: dict) -> None:
        sessions = await self._collection()
        await sessions.replace_one(
            {"_id": token},
            {
                "_id": token,
                "data": data,
                "expires_at": self._expiry(),
                "created_at": datetime.now(timezone.utc),
            },
            upsert=True,
        )

    async def destroy(self, token: str) -> None:
        sessions = await self._collection()
        await sessions.delete_one({"_id": token})


def build_session_store(backend: str, ttl_minutes: int) -> SessionStore:
    if backend == "memory":
        return MemorySessionStore(ttl_minutes)
    if backend == "mongo":
        return MongoSessionStore(ttl_minutes)
    raise ValueError(f"Unknown session backend '{backend}'")
