"""FastAPI dependencies (composition root): identity, entry service, parsed bodies."""

import logging
from collections.abc import Awaitable, Callable
from typing import Annotated, Any, TypeVar

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from tresor.application.dtos.identity import AuthenticatedUser
from tresor.application.services.request_parser import RequestSpec, parse_request_data
from tresor.application.use_cases.entries import EntryService
from tresor.core.config import Settings, get_settings
from tresor.domain.exceptions import (
    AuthenticationException,
    CacheNotReadyException,
    ValidationException,
)
from tresor.domain.result import Err, Result
from tresor.infrastructure.cache import EntryCache
from tresor.infrastructure.security.jwt import identity_from_token

logger = logging.getLogger(__name__)

_http_bearer = HTTPBearer(auto_error=False)

T = TypeVar("T")


def unwrap(result: Result[T, ValidationException]) -> T:
    """Return the Ok value or raise the carried ValidationException."""
    if isinstance(result, Err):
        raise result.error
    return result.value


async def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
) -> AuthenticatedUser:
    """Return the caller from the dashboard JWT (X-JWT header or Bearer); 401 otherwise."""
    settings = get_settings()
    token = request.headers.get(settings.jwt_header_name)
    if not token and credentials is not None:
        token = credentials.credentials
    if not token:
        raise AuthenticationException()
    try:
        user = identity_from_token(token)
    except ValueError as e:
        logger.debug("Rejected token on %s: %s", request.url.path, e)
        raise AuthenticationException("Invalid token") from e
    logger.debug("[%s@jwt] %s", user.email.split("@")[0], request.url.path)
    return user


def get_entry_cache(request: Request) -> EntryCache:
    """Process-wide entry cache installed by the lifespan."""
    cache: EntryCache | None = getattr(request.app.state, "entry_cache", None)
    if cache is None or not cache.is_ready:
        raise CacheNotReadyException()
    return cache


def get_entry_service(
    request: Request,
    cache: Annotated[EntryCache, Depends(get_entry_cache)],
) -> EntryService:
    """Entry use cases over the shared store, cache and tag service."""
    state = request.app.state
    return EntryService(state.entry_store, cache, state.tag_service)


def json_body(
    spec_for: Callable[[Settings], RequestSpec],
) -> Callable[[Request], Awaitable[dict[str, Any]]]:
    """Dependency factory: read the raw body and validate it against spec_for(settings).

    The raw body is kept on request.state.raw_body for error logging.
    """

    async def _parse(request: Request) -> dict[str, Any]:
        raw = await request.body()
        request.state.raw_body = raw
        result = parse_request_data(raw, spec_for(get_settings()))
        if isinstance(result, Err):
            logger.debug(
                "Rejected %s body (%s): %r",
                request.url.path,
                result.error.message,
                raw[:512],
            )
        return unwrap(result)

    return _parse
