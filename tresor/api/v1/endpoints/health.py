"""Health check endpoints, used for liveness and readiness probes."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from tresor.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Entry cache not warm", "model": ReadinessErrorResponse}},
)
def readiness_check(request: Request) -> ReadinessResponse | JSONResponse:
    """Return 200 once the entry cache is warm; 503 before that."""
    cache = getattr(request.app.state, "entry_cache", None)
    if cache is not None and cache.is_ready:
        return ReadinessResponse(entries=len(cache))
    return JSONResponse(
        status_code=503,
        content=ReadinessErrorResponse(
            message="Entry cache is not warmed yet",
        ).model_dump(),
    )
