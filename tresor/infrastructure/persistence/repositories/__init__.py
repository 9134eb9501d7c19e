"""Persistence repositories. Re-exports for dependency injection."""

from tresor.infrastructure.persistence.repositories.entry_repo import SqlEntryStore

__all__ = ["SqlEntryStore"]
