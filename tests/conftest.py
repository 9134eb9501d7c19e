"""Pytest configuration and fixtures for tresor.

Uses tresor.main:app for HTTP tests with an in-memory entry store; the
lifespan does not run under ASGITransport, so the client fixture installs
store, cache and tag service on app.state itself. Repository tests use
tresor.infrastructure.persistence.database and skip without DATABASE_URL.
"""

import os
import uuid

# Settings are validated on first get_settings(); provide the required secrets
# before anything imports tresor.main.
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("TAG_SALT", "test-tag-salt")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tresor.application.services.tag_service import TagService
from tresor.core.config import get_settings
from tresor.core.limiter import limiter
from tresor.domain.exceptions import StorageUnavailableException
from tresor.infrastructure.cache import EntryCache
from tresor.infrastructure.persistence import database
from tresor.infrastructure.security.jwt import create_access_token

get_settings.cache_clear()

from tresor.main import app  # noqa: E402

TEST_EMAIL = "teacher@school.example"


class InMemoryEntryStore:
    """Entry store fake: keeps users, entries and write records in dicts.

    Set unavailable = True to make every call raise StorageUnavailableException.
    """

    def __init__(self, entries: dict[str, str | None] | None = None) -> None:
        self.users: set[str] = set()
        self.entries: dict[str, tuple[str | None, int]] = {
            tag: (value, 0) for tag, value in (entries or {}).items()
        }
        self.updates: list[tuple[str, str, int, str | None]] = []
        self.unavailable = False
        self.scans = 0

    def _check(self, operation: str) -> None:
        if self.unavailable:
            raise StorageUnavailableException(operation, "ConnectionRefusedError")

    async def upsert_user(self, email_hash: str) -> None:
        self._check("upsert_user")
        self.users.add(email_hash)

    async def upsert_entry(
        self, tag: str, value: str | None, ts: int, author_email_hash: str
    ) -> None:
        self._check("upsert_entry")
        self.entries[tag] = (value, ts)
        self.updates.append((author_email_hash, tag, ts, value))

    async def scan_entries(self) -> list[tuple[str, str | None]]:
        self.scans += 1
        self._check("scan_entries")
        return [(tag, value) for tag, (value, _) in self.entries.items()]


@pytest.fixture
def tag_service() -> TagService:
    """Tag service with the test salt."""
    return TagService(get_settings().tag_salt.get_secret_value())


@pytest.fixture
def entry_store() -> InMemoryEntryStore:
    """Empty in-memory entry store."""
    return InMemoryEntryStore()


@pytest.fixture
async def entry_cache(entry_store: InMemoryEntryStore) -> EntryCache:
    """Entry cache warmed from entry_store."""
    cache = EntryCache()
    await cache.warm(entry_store)
    return cache


@pytest.fixture
async def client(
    entry_store: InMemoryEntryStore,
    entry_cache: EntryCache,
    tag_service: TagService,
) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI) with in-memory storage."""
    limiter.reset()
    app.state.entry_store = entry_store
    app.state.entry_cache = entry_cache
    app.state.tag_service = tag_service
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """X-JWT header carrying a valid token for TEST_EMAIL."""
    token = create_access_token(TEST_EMAIL, display_name="Teacher", teacher=True)
    return {get_settings().jwt_header_name: token}


@pytest.fixture
async def session_factory() -> async_sessionmaker[AsyncSession]:
    """Session factory for repository/integration tests (tables created on demand).

    Skips (pytest.skip) when DATABASE_URL is not set. Use
    @pytest.mark.requires_db to mark tests that need this fixture; run without
    DB via: pytest -m 'not requires_db'.
    """
    factory = database.get_session_factory()
    if factory is None:
        pytest.skip("Postgres not configured: set DATABASE_URL")
    await database.init_schema()
    yield factory
    await database.dispose_engine()


@pytest.fixture
def unique_tag() -> str:
    """Random 16-char tag so repository tests do not collide across runs."""
    return uuid.uuid4().hex[:16]
