"""Cache: process-wide entry cache mirroring the persistent store."""

from tresor.infrastructure.cache.entry_cache import EntryCache

__all__ = ["EntryCache"]
