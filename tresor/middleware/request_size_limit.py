"""Global request body cap (raw ASGI).

Outer bound for every route (at least the batch-read limit); per-operation
limits are enforced later by the body-parsing dependency. Oversized bodies
are a client validation error (413, message 'too_much_data').
"""

from typing import Any, Callable

from tresor.middleware._asgi import get_header, send_json_error


class _BodyTooLarge(Exception):
    """Internal signal: streamed body crossed the limit."""


async def _reject(send: Callable, max_bytes: int, actual: int | None = None) -> None:
    details: dict[str, Any] = {"max_bytes": max_bytes}
    if actual is not None:
        details["content_length"] = actual
    await send_json_error(send, 413, "VALIDATION_ERROR", "too_much_data", details)


def RequestSizeLimitMiddleware(app: Callable, max_bytes: int) -> Callable:
    """Reject requests whose body exceeds max_bytes (declared or streamed)."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return

        declared = get_header(scope, "content-length")
        if declared is not None and declared.isdigit() and int(declared) > max_bytes:
            await _reject(send, max_bytes, int(declared))
            return

        total = 0

        async def limited_receive() -> dict:
            nonlocal total
            message = await receive()
            if message["type"] == "http.request":
                total += len(message.get("body", b""))
                if total > max_bytes:
                    raise _BodyTooLarge()
            return message

        try:
            await app(scope, limited_receive, send)
        except _BodyTooLarge:
            await _reject(send, max_bytes, total)

    return asgi_app
