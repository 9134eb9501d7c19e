"""Application interfaces (ports): entry store and entry cache protocols.

No runtime imports from tresor.infrastructure.
"""

from tresor.application.interfaces.repositories import IEntrySource, IEntryStore
from tresor.application.interfaces.services import IEntryCache

__all__ = [
    "IEntryCache",
    "IEntrySource",
    "IEntryStore",
]
