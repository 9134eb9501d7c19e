"""Ping endpoints: public reachability check and authenticated token check."""

from typing import Annotated

from fastapi import APIRouter, Depends

from tresor.api.v1.dependencies import get_current_user
from tresor.application.dtos.identity import AuthenticatedUser
from tresor.schemas.health import PingResponse

router = APIRouter()


@router.api_route("", methods=["GET", "POST"], response_model=PingResponse)
def public_ping() -> PingResponse:
    """Return pong without authentication."""
    return PingResponse()


@router.post("/me", response_model=PingResponse)
async def authenticated_ping(
    current_user: Annotated[AuthenticatedUser, Depends(get_current_user)],
) -> PingResponse:
    """Return pong and the caller's email (checks the token end to end)."""
    return PingResponse(welcome=current_user.email)
