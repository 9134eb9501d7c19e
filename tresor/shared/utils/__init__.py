"""Shared utilities."""

from tresor.shared.utils.generators import UPDATE_ID_LENGTH, generate_update_id

__all__ = ["UPDATE_ID_LENGTH", "generate_update_id"]
