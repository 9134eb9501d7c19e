"""Entry API schemas.

Request models document the JSON bodies in OpenAPI; bodies are parsed and
size-checked by tresor.application.services.request_parser.
"""

from typing import Any

from pydantic import BaseModel, Field


class StoreEntryRequest(BaseModel):
    """Request body for POST /entries/store. Blank value clears the entry."""

    path: str = Field(..., description="Slash-joined 'dimension:value' segments")
    key: str = Field(..., description="Field name under the path (e.g. 'note')")
    value: str | None = Field(..., description="New value; blank or null clears it")


class GetEntryRequest(BaseModel):
    """Request body for POST /entries/get."""

    path: str
    key: str


class GetManyRequest(BaseModel):
    """Request body for POST /entries/get-many.

    Each path array is a list of [dimension_key, value_or_values] pairs;
    list values expand to one nesting level of the matching result.
    """

    path_arrays: list[list[tuple[str, Any]]] = Field(
        ...,
        examples=[[[["student", ["alice", "bob"]], ["subject", "Math"]]]],
    )
    key: str


class EntryValueResponse(BaseModel):
    """Response for POST /entries/get."""

    value: str | None


class GetManyResponse(BaseModel):
    """Response for POST /entries/get-many: one nested result per path array."""

    results: list[Any]
