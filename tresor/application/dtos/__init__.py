"""Application DTOs (read models passed between layers)."""

from tresor.application.dtos.identity import AuthenticatedUser

__all__ = ["AuthenticatedUser"]
