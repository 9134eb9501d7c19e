"""Pydantic request/response schemas for the API."""

from tresor.schemas.entry import (
    EntryValueResponse,
    GetEntryRequest,
    GetManyRequest,
    GetManyResponse,
    StoreEntryRequest,
)
from tresor.schemas.health import (
    HealthResponse,
    PingResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)

__all__ = [
    "EntryValueResponse",
    "GetEntryRequest",
    "GetManyRequest",
    "GetManyResponse",
    "HealthResponse",
    "PingResponse",
    "ReadinessErrorResponse",
    "ReadinessResponse",
    "StoreEntryRequest",
]
