"""Tests for the startup retry loop (schema setup and cache warm)."""

import pytest

from tresor.application.services.cache_warmup import retry_storage, warm_with_retry
from tresor.domain.exceptions import StorageUnavailableException
from tresor.infrastructure.cache import EntryCache


class FlakySource:
    """Fails the first `failures` scans, then returns rows."""

    def __init__(self, failures: int, rows: list[tuple[str, str | None]]) -> None:
        self.failures = failures
        self.rows = rows
        self.calls = 0

    async def scan_entries(self) -> list[tuple[str, str | None]]:
        self.calls += 1
        if self.calls <= self.failures:
            raise StorageUnavailableException("scan_entries", "ConnectionRefusedError")
        return list(self.rows)


class RecordingSleep:
    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


async def test_warm_succeeds_first_try() -> None:
    cache = EntryCache()
    sleep = RecordingSleep()
    count = await warm_with_retry(
        cache, FlakySource(0, [("t", "v")]), max_attempts=3, delay_seconds=1, sleep=sleep
    )
    assert count == 1
    assert sleep.delays == []


async def test_warm_retries_with_linear_backoff() -> None:
    cache = EntryCache()
    source = FlakySource(2, [("t", "v")])
    sleep = RecordingSleep()
    await warm_with_retry(cache, source, max_attempts=5, delay_seconds=0.5, sleep=sleep)
    assert source.calls == 3
    assert sleep.delays == [0.5, 1.0]
    assert cache.get("t") == "v"


async def test_warm_gives_up_after_max_attempts() -> None:
    cache = EntryCache()
    source = FlakySource(10, [])
    sleep = RecordingSleep()
    with pytest.raises(StorageUnavailableException):
        await warm_with_retry(cache, source, max_attempts=3, delay_seconds=1, sleep=sleep)
    assert source.calls == 3
    assert sleep.delays == [1, 2]
    assert not cache.is_ready


async def test_retry_storage_does_not_retry_other_errors() -> None:
    calls = 0

    async def boom() -> None:
        nonlocal calls
        calls += 1
        raise RuntimeError("bug")

    with pytest.raises(RuntimeError):
        await retry_storage(
            boom, name="x", max_attempts=5, delay_seconds=0, sleep=RecordingSleep()
        )
    assert calls == 1


async def test_retry_storage_returns_value() -> None:
    async def ok() -> str:
        return "done"

    result = await retry_storage(ok, name="x", max_attempts=1, delay_seconds=0)
    assert result == "done"
