"""Dashboard JWTs: issue (tooling/tests) and verify (every authenticated route).

Tokens are HS256-signed by the dashboard with the shared SECRET_KEY and carry
the caller's email plus optional display_name and teacher claims.
"""

from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt

from tresor.application.dtos.identity import AuthenticatedUser
from tresor.core.config import get_settings


def create_access_token(
    email: str,
    *,
    display_name: str | None = None,
    teacher: bool = False,
    expires_delta: timedelta | None = None,
) -> str:
    """Sign a token for email, expiring after expires_delta (default from settings)."""
    settings = get_settings()
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    claims: dict[str, Any] = {
        "email": email,
        "teacher": teacher,
        "exp": datetime.now(UTC) + expires_delta,
    }
    if display_name:
        claims["display_name"] = display_name
    return jwt.encode(
        claims, settings.secret_key.get_secret_value(), algorithm=settings.algorithm
    )


def verify_token(token: str) -> dict[str, Any]:
    """Verify signature and expiry and return the claims.

    Raises:
        ValueError: If the token is invalid, expired, lacks exp, or lacks a
            non-empty string email claim.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    email = payload.get("email")
    if not isinstance(email, str) or not email:
        raise ValueError("Token missing required claim: email")
    return payload


def identity_from_token(token: str) -> AuthenticatedUser:
    """Verified caller identity (see verify_token for the ValueError cases)."""
    payload = verify_token(token)
    display_name = payload.get("display_name")
    return AuthenticatedUser(
        email=payload["email"],
        display_name=display_name if isinstance(display_name, str) else None,
        is_teacher=payload.get("teacher") is True,
    )
