"""Application use cases: one entry point per workflow."""

from tresor.application.use_cases.entries import EntryService, normalize_value

__all__ = ["EntryService", "normalize_value"]
