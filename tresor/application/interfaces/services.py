"""Service interfaces (ports) for the application layer.

Protocols define contracts for application services (DIP).
"""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from tresor.application.interfaces.repositories import IEntrySource


# Entry cache interface
class IEntryCache(Protocol):
    """Protocol for the process-wide tag -> value read cache."""

    @property
    def is_ready(self) -> bool:
        """Return True once the first warm completed."""

    async def warm(self, source: IEntrySource) -> int:
        """Replace the mapping with the source's entries; return entry count."""

    def get(self, tag: str) -> str | None:
        """Return the cached value for tag, or None if never written or cleared."""

    def put(self, tag: str, value: str | None) -> None:
        """Install value for tag (only after the store accepted the write)."""

    def write_lock(self, tag: str) -> AbstractAsyncContextManager[None]:
        """Serialize persist + put for one tag."""
