"""
Session storage for interview state.

Sessions are keyed by the opaque id carried in the client's signed cookie and
expire after a fixed idle TTL. Callers treat the store as a value store:
read a session, mutate the copy, write it back.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, Protocol

from voicescreen.models.interview import InterviewSession

logger = logging.getLogger(__name__)


class SessionStore(Protocol):
    async def get(self, session_id: str) -> InterviewSession | None:
        ...

    async def set(self, session: InterviewSession) -> None:
        ...

    async def touch(self, session_id: str) -> None:
        ...

    async def expire(self, session_id: str) -> None:
        ...

    async def close(self) -> None:
        ...


class InMemorySessionStore:
    """Process-local store. Expired entries are evicted lazily on access."""

    def __init__(self, ttl_seconds: int, now: Callable[[], float] | None = None):
        self._ttl = ttl_seconds
        self._now = now or time.monotonic
        self._lock = asyncio.Lock()
        self._sessions: dict[str, tuple[InterviewSession, float]] = {}

    async def get(self, session_id: str) -> InterviewSession | None:
        if not session_id:
            return None
        async with self._lock:
            entry = self._sessions.get(session_id)
            if entry is None:
                return None
            session, expires_at = entry
            if self._now() >= expires_at:
                self._sessions.pop(session_id, None)
                logger.info(f"Evicted expired session: {session_id}")
                return None
            return session.model_copy(deep=True)

    async def set(self, session: InterviewSession) -> None:
        async with self._lock:
            now = self._now()
            expired = [key for key, (_, expires_at) in self._sessions.items() if now >= expires_at]
            for key in expired:
                del self._sessions[key]
            if expired:
                logger.info(f"Evicted {len(expired)} expired session(s)")
            self._sessions[session.session_id] = (
                session.model_copy(deep=True),
                now + self._ttl,
            )

    async def touch(self, session_id: str) -> None:
        async with self._lock:
            entry = self._sessions.get(session_id)
            if entry is None:
                return
            session, expires_at = entry
            if self._now() >= expires_at:
                self._sessions.pop(session_id, None)
                return
            self._sessions[session_id] = (session, self._now() + self._ttl)

    async def expire(self, session_id: str) -> None:
        async with self._lock:
            self._sessions.pop(session_id, None)

    async def close(self) -> None:
        async with self._lock:
            self._sessions.clear()


class RedisSessionStore:
    """Redis-backed store; the key TTL carries the session expiry.

    Keys:
    - interview:session:{session_id} (JSON string)
    """

    def __init__(self, redis_url: str, ttl_seconds: int):
        try:
            import redis.asyncio as redis_async  # type: ignore
        except Exception as exc:
            raise RuntimeError("redis package not installed; install 'redis' to enable the redis session backend") from exc

        self._redis = redis_async.from_url(redis_url, decode_responses=True)
        self._ttl = ttl_seconds

    @staticmethod
    def _key(session_id: str) -> str:
        return f"interview:session:{session_id}"

    async def get(self, session_id: str) -> InterviewSession | None:
        if not session_id:
            return None
        raw = await self._redis.get(self._key(session_id))
        if not raw:
            return None
        return InterviewSession.model_validate_json(raw)

    async def set(self, session: InterviewSession) -> None:
        await self._redis.set(
            self._key(session.session_id),
            session.model_dump_json(by_alias=True),
            ex=self._ttl,
        )

    async def touch(self, session_id: str) -> None:
        await self._redis.expire(self._key(session_id), self._ttl)

    async def expire(self, session_id: str) -> None:
        await self._redis.delete(self._key(session_id))

    async def close(self) -> None:
        await self._redis.aclose()


def build_session_store(backend: str, ttl_seconds: int, redis_url: str = "") -> SessionStore:
    backend = (backend or "memory").strip().lower()
    if backend == "memory":
        return InMemorySessionStore(ttl_seconds)
    if backend == "redis":
        if not redis_url.strip():
            raise RuntimeError("session_backend=redis requires REDIS_URL")
        return RedisSessionStore(redis_url.strip(), ttl_seconds)
    raise RuntimeError(f"Unknown session backend: {backend}")
