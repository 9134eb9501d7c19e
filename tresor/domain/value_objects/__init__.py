"""Domain value objects: path templates and their dimensions."""

from tresor.domain.value_objects.path_template import (
    Dimension,
    ListDimension,
    PathTemplate,
    ScalarDimension,
)

__all__ = [
    "Dimension",
    "ListDimension",
    "PathTemplate",
    "ScalarDimension",
]
