"""Per-event locking. SETNX pattern, TTL, safe release. Serializes transitions on the same event."""

import asyncio
import uuid
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Optional, Protocol, Tuple

from event_workflow.application.exceptions import LockUnavailableError


class LockBackend(Protocol):
    """Minimal key/value operations for the lock. Injected; no global state."""

    async def set_nx_ex(self, key: str, value: str, ttl: int) -> bool: ...
    async def get(self, key: str) -> Optional[str]: ...
    async def delete_if_value(self, key: str, value: str) -> bool: ...


LOCK_PREFIX = "lock:event:"


class InMemoryLockBackend:
    """Single-process backend. Expiry measured on the event loop clock."""

    def __init__(self) -> None:
        self._store: Dict[str, Tuple[str, float]] = {}

    def _now(self) -> float:
        return asyncio.get_running_loop().time()

    def _live(self, key: str) -> Optional[str]:
        item = self._store.get(key)
        if item is None:
            return None
        value, expires_at = item
        if expires_at <= self._now():
            del self._store[key]
            return None
        return value

    async def set_nx_ex(self, key: str, value: str, ttl: int) -> bool:
        if self._live(key) is not None:
            return False
        self._store[key] = (value, self._now() + ttl)
        return True

    async def get(self, key: str) -> Optional[str]:
        return self._live(key)

    async def delete_if_value(self, key: str, value: str) -> bool:
        if self._live(key) == value:
            del self._store[key]
            return True
        return False


class EventLock:
    """
    Lock keyed by event id. Each acquire gets a unique token so only the holder can release.
    TTL bounds how long a crashed holder can block the event.
    """

    def __init__(
        self,
        backend: LockBackend,
        *,
        ttl_seconds: int = 30,
        wait_seconds: float = 2.0,
        poll_interval_seconds: float = 0.05,
        key_prefix: str = LOCK_PREFIX,
    ) -> None:
        self._backend = backend
        self._ttl = ttl_seconds
        self._wait = wait_seconds
        self._poll = poll_interval_seconds
        self._prefix = key_prefix

    def _key(self, event_id: str) -> str:
        return f"{self._prefix}{event_id}"

    async def acquire(self, event_id: str) -> Optional[str]:
        """Try once. Returns the holder token, or None if already held."""
        token = str(uuid.uuid4())
        if await self._backend.set_nx_ex(self._key(event_id), token, self._ttl):
            return token
        return None

    async def release(self, event_id: str, token: str) -> None:
        """Release only if token still holds the lock (atomic compare-and-delete)."""
        await self._backend.delete_if_value(self._key(event_id), token)

    @asynccontextmanager
    async def hold(self, event_id: str) -> AsyncIterator[str]:
        """Wait up to wait_seconds for the lock. Raises LockUnavailableError on timeout."""
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self._wait
        token = await self.acquire(event_id)
        while token is None:
            if loop.time() >= deadline:
                raise LockUnavailableError(
                    f"Event {event_id} is being modified by another request",
                    {"event_id": event_id},
                )
            await asyncio.sleep(self._poll)
            token = await self.acquire(event_id)
        try:
            yield token
        finally:
            await self.release(event_id, token)
