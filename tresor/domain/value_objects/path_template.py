"""Path template value objects for batch reads.

A PathTemplate is an ordered list of dimensions. Each dimension is either
a ScalarDimension (one value, folded into every path, no nesting level) or
a ListDimension (n values, one nesting level of size n in the result).
A one-element ListDimension is not the same shape as a ScalarDimension.
"""

import math
from dataclasses import dataclass
from typing import TypeAlias

from tresor.core.constants import SEGMENT_SEP


@dataclass(frozen=True)
class ScalarDimension:
    """Dimension with a single value; contributes a fixed path segment."""

    key: str
    value: str

    def segment(self) -> str:
        return f"{self.key}{SEGMENT_SEP}{self.value}"


@dataclass(frozen=True)
class ListDimension:
    """Dimension expanded over all of its values (may be empty)."""

    key: str
    values: tuple[str, ...]

    def segment(self, index: int) -> str:
        return f"{self.key}{SEGMENT_SEP}{self.values[index]}"


Dimension: TypeAlias = ScalarDimension | ListDimension


@dataclass(frozen=True)
class PathTemplate:
    """Ordered dimensions whose Cartesian product names the paths to read."""

    dimensions: tuple[Dimension, ...] = ()

    @property
    def shape(self) -> tuple[int, ...]:
        """Lengths of the list-valued dimensions, in template order."""
        return tuple(
            len(d.values) for d in self.dimensions if isinstance(d, ListDimension)
        )

    @property
    def combination_count(self) -> int:
        """Number of concrete paths the template expands to (1 with no list dimension)."""
        return math.prod(self.shape)
