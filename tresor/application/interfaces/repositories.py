"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
The entry store is the system of record; the cache only mirrors it.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol


class IEntrySource(Protocol):
    """Read side of the entry store needed to warm the cache."""

    async def scan_entries(self) -> Sequence[tuple[str, str | None]]:
        """Return (tag, value) for every stored entry."""


class IEntryStore(IEntrySource, Protocol):
    """Protocol for the persistent entry store (users, entries, write history)."""

    async def upsert_user(self, email_hash: str) -> None:
        """Create the user identified by email_hash unless it exists."""

    async def upsert_entry(
        self,
        tag: str,
        value: str | None,
        ts: int,
        author_email_hash: str,
    ) -> None:
        """Set entry value/ts_updated (creating it if new) and record the write.

        Raises StorageUnavailableException when the store cannot be reached;
        in that case nothing was recorded.
        """
