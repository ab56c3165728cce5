"""SessionStore: process-scoped credential sessions with TTL expiry.

Sessions created by document-source logins live in a ``cachetools.TTLCache``
so that an expired session is invisible to readers even before it is swept.
Expired entries are physically removed by ``sweep()``, which the optional
background sweeper task calls every ``interval`` seconds.

Access discipline: lookups share a reader lock; inserts, removals and sweeps
take the writer lock exclusively.  The store is constructed explicitly by
the application (there is no module-level instance) and its sweeper is
stopped with ``aclose()`` at shutdown.

Example::

    store = SessionStore(ttl=3600.0)
    session = Session.create("https://docs.example/login", ["sid=abc; HttpOnly"], ttl=3600.0)
    await store.insert(session)
    await store.get(session.token)      # Session(...)
    store.start_sweeper(interval=300.0)
    ...
    await store.aclose()
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import time
import uuid
from collections.abc import AsyncIterator, Callable, Iterable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from cachetools import TTLCache

__all__ = ["Session", "SessionStore"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Session:
    """An authenticated session against a document source.

    Attributes:
        token: Opaque identifier handed back to callers (a UUID4 string).
        url: Login URL the session was created against.
        cookies: Raw ``Set-Cookie`` values returned by the login.
        created_at: UTC creation time.
        expires_at: UTC expiry time.
    """

    token: str
    url: str
    cookies: tuple[str, ...]
    created_at: datetime
    expires_at: datetime

    @classmethod
    def create(cls, url: str, cookies: Iterable[str], ttl: float) -> Session:
        now = datetime.now(UTC)
        return cls(
            token=str(uuid.uuid4()),
            url=url,
            cookies=tuple(cookies),
            created_at=now,
            expires_at=now + timedelta(seconds=ttl),
        )

    def is_expired(self, now: datetime | None = None) -> bool:
        now = now if now is not None else datetime.now(UTC)
        return now > self.expires_at

    def cookie_header(self) -> str:
        """``Cookie`` header value: the name=value part of every cookie."""
        pairs = (cookie.split(";", 1)[0].strip() for cookie in self.cookies)
        return "; ".join(pair for pair in pairs if pair)


class _ReadWriteLock:
    """Many concurrent readers or one exclusive writer."""

    def __init__(self) -> None:
        self._condition = asyncio.Condition()
        self._readers = 0
        self._writer = False

    @contextlib.asynccontextmanager
    async def read(self) -> AsyncIterator[None]:
        async with self._condition:
            await self._condition.wait_for(lambda: not self._writer)
            self._readers += 1
        try:
            yield
        finally:
            async with self._condition:
                self._readers -= 1
                if self._readers == 0:
                    self._condition.notify_all()

    @contextlib.asynccontextmanager
    async def write(self) -> AsyncIterator[None]:
        async with self._condition:
            await self._condition.wait_for(
                lambda: not self._writer and self._readers == 0
            )
            self._writer = True
        try:
            yield
        finally:
            async with self._condition:
                self._writer = False
                self._condition.notify_all()


class SessionStore:
    """TTL-bounded session store guarded by a reader/writer lock.

    Args:
        ttl: Seconds a session stays visible after insertion.
        max_size: Capacity; when exceeded the oldest session is evicted.
        timer: Monotonic clock used for expiry.  Injectable for tests.
    """

    def __init__(
        self,
        ttl: float = 3600.0,
        max_size: int = 1024,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl
        self._cache: TTLCache[str, Session] = TTLCache(
            maxsize=max_size, ttl=ttl, timer=timer
        )
        self._lock = _ReadWriteLock()
        self._sweeper: asyncio.Task[None] | None = None

    @property
    def ttl(self) -> float:
        return self._ttl

    def __len__(self) -> int:
        return len(self._cache)

    async def insert(self, session: Session) -> None:
        async with self._lock.write():
            self._cache[session.token] = session
        logger.info("Stored session for %s", session.url)

    async def get(self, token: str) -> Session | None:
        """Return the live session for ``token``, or None if unknown or expired."""
        async with self._lock.read():
            return self._cache.get(token)

    async def remove(self, token: str) -> bool:
        """Drop a session (explicit logout).  Returns True if it existed."""
        async with self._lock.write():
            removed = self._cache.pop(token, None) is not None
        if removed:
            logger.info("Removed session")
        return removed

    async def sweep(self) -> int:
        """Physically remove expired sessions.  Returns how many were removed."""
        async with self._lock.write():
            removed = len(self._cache.expire())
        if removed:
            logger.info("Swept %d expired sessions", removed)
        return removed

    # ------------------------------------------------------------------
    # Background sweeper
    # ------------------------------------------------------------------

    def start_sweeper(self, interval: float) -> asyncio.Task[None]:
        """Start the periodic sweep task on the running loop.

        Raises:
            RuntimeError: If a sweeper is already running, or no event loop
                is running.
        """
        if self._sweeper is not None and not self._sweeper.done():
            raise RuntimeError("session sweeper already running")
        self._sweeper = asyncio.get_running_loop().create_task(
            self._sweep_forever(interval), name="xml-compare-session-sweeper"
        )
        return self._sweeper

    async def _sweep_forever(self, interval: float) -> None:
        while True:
            await asyncio.sleep(interval)
            await self.sweep()

    async def aclose(self) -> None:
        """Cancel the sweeper task, if any, and wait for it to finish."""
        sweeper, self._sweeper = self._sweeper, None
        if sweeper is None:
            return
        sweeper.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await sweeper
