"""Health and ping API schemas."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health (liveness)."""

    status: str = Field(default="ok", description="Service status")


class ReadinessResponse(BaseModel):
    """Response for GET /health/ready when the entry cache is warm."""

    status: str = Field(default="ok", description="Readiness status")
    entries: int = Field(..., description="Entries held by the cache")


class ReadinessErrorResponse(BaseModel):
    """Response for GET /health/ready before the cache is warm (503)."""

    status: str = Field(default="not_ready", description="Readiness status")
    message: str = Field(..., description="Reason")


class PingResponse(BaseModel):
    """Response for ping endpoints; welcome carries the caller's email when authenticated."""

    pong: str = "yay"
    welcome: str | None = None
