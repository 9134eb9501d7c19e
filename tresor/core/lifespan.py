"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic; no business logic here, only
wiring of infrastructure (schema, entry store, entry cache, telemetry).
Startup does not finish (and the app serves nothing) until the entry cache
is warm; repeated storage failures abort startup.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from tresor.application.services.cache_warmup import retry_storage, warm_with_retry
from tresor.application.services.tag_service import TagService
from tresor.core.config import get_settings
from tresor.domain.exceptions import StorageUnavailableException
from tresor.infrastructure.cache import EntryCache
from tresor.infrastructure.persistence import database
from tresor.infrastructure.persistence.repositories import SqlEntryStore
from tresor.shared.telemetry import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: logging, telemetry (if enabled), schema (if auto-create),
    cache warm. Shutdown order: telemetry shutdown, SQL engine dispose.
    """
    settings = get_settings()
    setup_logging()

    # ---- Startup ----
    session_factory = database.get_session_factory()
    if session_factory is None:
        raise StorageUnavailableException("startup", "DATABASE_URL is not configured")

    if settings.telemetry_enabled:
        from tresor.shared.telemetry.telemetry import TelemetryConfig, set_telemetry

        telemetry = TelemetryConfig.from_settings(settings)
        telemetry.start(app, database.engine)
        set_telemetry(telemetry)

    if settings.database_auto_create:
        await retry_storage(
            database.init_schema,
            name="Schema setup",
            max_attempts=settings.cache_warm_max_attempts,
            delay_seconds=settings.cache_warm_retry_delay_seconds,
        )

    store = SqlEntryStore(session_factory)
    cache = EntryCache()
    await warm_with_retry(
        cache,
        store,
        max_attempts=settings.cache_warm_max_attempts,
        delay_seconds=settings.cache_warm_retry_delay_seconds,
    )
    app.state.entry_store = store
    app.state.entry_cache = cache
    app.state.tag_service = TagService(settings.tag_salt.get_secret_value())
    logger.info("Server is up and running")

    yield

    # ---- Shutdown ----
    from tresor.shared.telemetry.telemetry import get_telemetry, set_telemetry

    telemetry_instance = get_telemetry()
    if telemetry_instance is not None:
        telemetry_instance.shutdown()
        set_telemetry(None)

    await database.dispose_engine()
