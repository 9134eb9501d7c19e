"""Request ID middleware (raw ASGI).

Forwards a sane client X-Request-ID or makes a new one, echoes it on the
response and exposes it to log records through request_id_var.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Callable

from tresor.middleware._asgi import get_header

REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")

request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


def resolve_request_id(raw: str | None) -> str:
    """Client value when it matches REQUEST_ID_PATTERN; otherwise a fresh hex UUID."""
    if raw and REQUEST_ID_PATTERN.match(raw.strip()):
        return raw.strip()
    return uuid.uuid4().hex


def RequestIDMiddleware(app: Callable, header_name: str = "X-Request-ID") -> Callable:
    """Add or forward the request ID on each request and response."""
    header_bytes = header_name.lower().encode()

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        request_id = resolve_request_id(get_header(scope, header_name))
        scope.setdefault("state", {})["request_id"] = request_id
        token = request_id_var.set(request_id)

        async def send_with_id(message: dict) -> None:
            if message["type"] == "http.response.start":
                message["headers"] = [
                    *message.get("headers", []),
                    (header_bytes, request_id.encode()),
                ]
            await send(message)

        try:
            await app(scope, receive, send_with_id)
        finally:
            request_id_var.reset(token)

    return asgi_app
