"""Entry use cases: write, single read, batch read.

Writes go to the persistent store first; the cache is updated only after
the store accepted the write. Reads are served from the cache alone and
never touch the store.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable, Sequence

from tresor.application.interfaces.repositories import IEntryStore
from tresor.application.interfaces.services import IEntryCache
from tresor.application.services.batch_reader import ResultTensor, resolve_batch
from tresor.application.services.tag_service import TagService
from tresor.domain.value_objects.path_template import PathTemplate

logger = logging.getLogger(__name__)


def normalize_value(value: str | None) -> str | None:
    """Blank (empty or whitespace-only) values clear the entry."""
    if value is None or not value.strip():
        return None
    return value


class EntryService:
    """Write and read (path, key) -> value entries through cache and store."""

    def __init__(
        self,
        store: IEntryStore,
        cache: IEntryCache,
        tags: TagService,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.store = store
        self.cache = cache
        self.tags = tags
        self._clock = clock

    async def store_entry(
        self,
        author_email: str,
        path: str,
        key: str,
        value: str | None,
    ) -> str:
        """Persist value for (path, key) as author_email, then update the cache.

        Returns the entry tag. On StorageUnavailableException the cache is
        left untouched and the error propagates. Cancelling the caller (e.g.
        a request timeout) does not split the commit from the cache update:
        the write runs to completion in its own task.
        """
        tag = self.tags.derive_tag(path.strip(), key)
        value = normalize_value(value)
        email_hash = self.tags.hash_email(author_email)
        await asyncio.shield(self._persist_then_put(tag, value, email_hash))
        logger.debug("Entry stored: tag=%s cleared=%s", tag, value is None)
        return tag

    async def _persist_then_put(
        self, tag: str, value: str | None, email_hash: str
    ) -> None:
        async with self.cache.write_lock(tag):
            ts = int(self._clock())
            await self.store.upsert_user(email_hash)
            await self.store.upsert_entry(tag, value, ts, email_hash)
            self.cache.put(tag, value)

    def get_entry(self, path: str, key: str) -> str | None:
        """Return the current value for (path, key), or None."""
        return self.cache.get(self.tags.derive_tag(path.strip(), key))

    def get_many(
        self, templates: Sequence[PathTemplate], key: str
    ) -> list[ResultTensor]:
        """Return one result tensor per template, in input order."""
        return resolve_batch(templates, key, self.cache, self.tags)
