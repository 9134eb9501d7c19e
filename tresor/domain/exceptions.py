"""Domain exceptions for the Tresor application.

Defines the error kinds a request can end in. These exceptions are
independent of infrastructure concerns. Presentation layer maps them to
HTTP responses in exception handlers.
"""

from typing import Any


class TresorException(Exception):
    """Base exception for all Tresor application errors.

    Presentation layer maps these to HTTP responses using message,
    error_code, and details.

    Attributes:
        message: Human-readable (or short machine-readable) error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, limit).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error body: error, message, details."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(TresorException):
    """Raised (or returned in an Err) when request input is malformed or too large.

    message is a short code such as 'too_much_data' or 'missing_key'.
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        **details_extra: Any,
    ) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Short code for the validation failure.
            field: Optional request field that failed validation.
            **details_extra: Optional keys merged into details (e.g. max_length).
        """
        details: dict[str, Any] = {"field": field} if field else {}
        details.update(details_extra)
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(TresorException):
    """Raised when an operation requires an identity the request does not carry."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class StorageUnavailableException(TresorException):
    """Raised when the persistent store cannot be reached (warm or write)."""

    def __init__(self, operation: str, reason: str) -> None:
        """Initialize with the failing store operation and driver reason.

        Args:
            operation: Store operation (e.g. 'upsert_entry', 'scan_entries').
            reason: Short description of the underlying failure.
        """
        super().__init__(
            f"Persistent store unavailable during {operation}",
            "STORAGE_UNAVAILABLE",
            {"operation": operation, "reason": reason},
        )


class CacheNotReadyException(TresorException):
    """Raised when a read arrives before the entry cache finished its first warm."""

    def __init__(self) -> None:
        super().__init__("Entry cache is not warmed yet", "CACHE_NOT_READY")


class InvariantViolationException(TresorException):
    """Raised when an internal invariant does not hold (server error)."""

    def __init__(self, condition: str) -> None:
        super().__init__(
            f"Invariant violated: {condition}",
            "INTERNAL_ERROR",
            {"condition": condition},
        )
