"""Process-wide entry cache: tag -> current value, mirroring the persistent store.

Warmed once at startup from the store's full scan, then kept consistent by
applying each write after the store accepted it. Single-process only; other
instances own independent caches.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from tresor.domain.exceptions import CacheNotReadyException
from tresor.shared.telemetry.tracing import add_span_attributes, traced

if TYPE_CHECKING:
    from tresor.application.interfaces.repositories import IEntrySource

logger = logging.getLogger(__name__)


class _TagLock:
    """Per-tag writer lock and the number of writers holding or awaiting it."""

    __slots__ = ("lock", "users")

    def __init__(self) -> None:
        self.lock = asyncio.Lock()
        self.users = 0


class EntryCache:
    """In-memory tag -> value mapping with warm/get/put lifecycle.

    The mapping is guarded by a threading lock (get/put never block on I/O).
    write_lock(tag) is an asyncio lock per tag, held by writers across the
    store call and put so same-tag writes apply in the order the store
    accepted them.
    """

    def __init__(self) -> None:
        self._entries: dict[str, str | None] = {}
        self._lock = threading.Lock()
        # Dropped once no writer holds or awaits the tag.
        self._tag_locks: dict[str, _TagLock] = {}
        self._warm_lock = asyncio.Lock()
        self._ready = False
        # Puts that land while a warm scan is in flight; re-applied after the swap.
        self._pending: dict[str, str | None] | None = None

    @property
    def is_ready(self) -> bool:
        return self._ready

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    @traced("entry_cache.warm")
    async def warm(self, source: IEntrySource) -> int:
        """Replace the mapping with the source's current entries. Returns entry count.

        Raises whatever the source raises (e.g. StorageUnavailableException);
        the previous mapping stays in place in that case. Concurrent warms run
        one after another.
        """
        async with self._warm_lock:
            return await self._warm(source)

    async def _warm(self, source: IEntrySource) -> int:
        with self._lock:
            self._pending = {}
        try:
            rows = await source.scan_entries()
        except BaseException:
            with self._lock:
                self._pending = None
            raise
        fresh = {tag: value for tag, value in rows}
        with self._lock:
            fresh.update(self._pending or {})
            self._pending = None
            self._entries = fresh
            self._ready = True
            count = len(fresh)
        add_span_attributes(entries=count)
        logger.info("Entry cache warmed: %s entries", count)
        return count

    def get(self, tag: str) -> str | None:
        """Return the cached value for tag, or None if absent."""
        if not self._ready:
            raise CacheNotReadyException()
        with self._lock:
            return self._entries.get(tag)

    def put(self, tag: str, value: str | None) -> None:
        """Install value for tag. Call only after the store accepted the same value."""
        with self._lock:
            self._entries[tag] = value
            if self._pending is not None:
                self._pending[tag] = value
        logger.debug("Cache PUT: %s", tag)

    @asynccontextmanager
    async def write_lock(self, tag: str) -> AsyncIterator[None]:
        """Hold the per-tag writer lock for the duration of the block."""
        with self._lock:
            entry = self._tag_locks.get(tag)
            if entry is None:
                entry = self._tag_locks[tag] = _TagLock()
            entry.users += 1
        try:
            async with entry.lock:
                yield
        finally:
            with self._lock:
                entry.users -= 1
                if entry.users == 0:
                    del self._tag_locks[tag]
