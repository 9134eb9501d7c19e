"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags.
"""

from fastapi import APIRouter

from tresor.api.v1.endpoints import entries, health, ping

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(ping.router, prefix="/ping", tags=["ping"])
api_router.include_router(entries.router, prefix="/entries", tags=["entries"])
