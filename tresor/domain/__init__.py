"""Domain layer: exceptions, result type, and path template value objects.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from tresor.domain.exceptions import (
    AuthenticationException,
    CacheNotReadyException,
    InvariantViolationException,
    StorageUnavailableException,
    TresorException,
    ValidationException,
)
from tresor.domain.result import Err, Ok, Result
from tresor.domain.value_objects import (
    ListDimension,
    PathTemplate,
    ScalarDimension,
)

__all__ = [
    "AuthenticationException",
    "CacheNotReadyException",
    "Err",
    "InvariantViolationException",
    "ListDimension",
    "Ok",
    "PathTemplate",
    "Result",
    "ScalarDimension",
    "StorageUnavailableException",
    "TresorException",
    "ValidationException",
]
