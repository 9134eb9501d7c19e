"""DTOs for the authenticated caller (no dependency on token format)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AuthenticatedUser:
    """Identity taken from a verified dashboard token."""

    email: str
    display_name: str | None = None
    is_teacher: bool = False
