"""Startup retry loop for storage preparation and cache warm-up."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from tresor.application.interfaces.repositories import IEntrySource
from tresor.application.interfaces.services import IEntryCache
from tresor.domain.exceptions import StorageUnavailableException

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def retry_storage(
    operation: Callable[[], Awaitable[T]],
    *,
    name: str,
    max_attempts: int,
    delay_seconds: float,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """Run operation until it stops raising StorageUnavailableException.

    Waits delay_seconds * attempt between attempts (linear backoff). Re-raises
    the last error after max_attempts.
    """
    for attempt in range(1, max_attempts + 1):
        try:
            return await operation()
        except StorageUnavailableException as e:
            if attempt == max_attempts:
                logger.error(
                    "%s failed after %s attempts: %s", name, max_attempts, e.details
                )
                raise
            delay = delay_seconds * attempt
            logger.warning(
                "%s failed (attempt %s/%s): %s. Retrying after %.1f seconds...",
                name,
                attempt,
                max_attempts,
                e.details.get("reason"),
                delay,
            )
            await sleep(delay)
    raise ValueError("max_attempts must be at least 1")


async def warm_with_retry(
    cache: IEntryCache,
    source: IEntrySource,
    *,
    max_attempts: int,
    delay_seconds: float,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> int:
    """Warm cache from source, retrying while the store is unavailable. Returns entry count."""
    return await retry_storage(
        lambda: cache.warm(source),
        name="Cache warm",
        max_attempts=max_attempts,
        delay_seconds=delay_seconds,
        sleep=sleep,
    )
