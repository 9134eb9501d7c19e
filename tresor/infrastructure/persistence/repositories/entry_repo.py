"""SQL entry store: users, entries and their write history (IEntryStore).

Each operation runs in its own transaction. Connection-level failures are
raised as StorageUnavailableException so callers never mistake them for
bad input.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tresor.domain.exceptions import StorageUnavailableException
from tresor.infrastructure.persistence.models import Entry, EntryUpdate, User

logger = logging.getLogger(__name__)

_UNAVAILABLE_ERRORS = (OperationalError, InterfaceError, OSError, TimeoutError)


class SqlEntryStore:
    """Postgres-backed entry store built on an async session factory."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    @asynccontextmanager
    async def _transaction(self, operation: str) -> AsyncIterator[AsyncSession]:
        """Session in a transaction; driver/connection errors -> StorageUnavailableException."""
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    yield session
        except _UNAVAILABLE_ERRORS as e:
            logger.warning("Entry store %s failed: %s", operation, e)
            raise StorageUnavailableException(operation, type(e).__name__) from e

    async def upsert_user(self, email_hash: str) -> None:
        """Create the user unless it exists."""
        stmt = (
            pg_insert(User)
            .values(email_hash=email_hash)
            .on_conflict_do_nothing(index_elements=[User.email_hash])
        )
        async with self._transaction("upsert_user") as session:
            await session.execute(stmt)

    async def upsert_entry(
        self,
        tag: str,
        value: str | None,
        ts: int,
        author_email_hash: str,
    ) -> None:
        """Set the entry's value and ts_updated and append the write record, atomically."""
        stmt = (
            pg_insert(Entry)
            .values(tag=tag, value=value, ts_updated=ts)
            .on_conflict_do_update(
                index_elements=[Entry.tag],
                set_={"value": value, "ts_updated": ts},
            )
        )
        async with self._transaction("upsert_entry") as session:
            await session.execute(stmt)
            session.add(
                EntryUpdate(
                    user_email_hash=author_email_hash,
                    entry_tag=tag,
                    ts=ts,
                    value=value,
                )
            )

    async def scan_entries(self) -> list[tuple[str, str | None]]:
        """Return (tag, value) for every entry."""
        async with self._transaction("scan_entries") as session:
            result = await session.execute(select(Entry.tag, Entry.value))
            return [(tag, value) for tag, value in result.all()]
