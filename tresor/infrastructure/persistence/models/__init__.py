"""Persistence models: ORM entities."""

from tresor.infrastructure.persistence.models.entry import Entry, EntryUpdate
from tresor.infrastructure.persistence.models.user import User

__all__ = [
    "Entry",
    "EntryUpdate",
    "User",
]
