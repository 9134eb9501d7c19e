"""ID generators for write-history rows."""

from cuid2 import cuid_wrapper

# entry_update ids; width matches the column length.
UPDATE_ID_LENGTH = 24

_next_cuid = cuid_wrapper()


def generate_update_id() -> str:
    """Return a new CUID2 for an entry_update row."""
    return str(_next_cuid())[:UPDATE_ID_LENGTH]
