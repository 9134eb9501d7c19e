"""Cartesian expansion of a PathTemplate into concrete paths and result coordinates."""

from collections.abc import Iterator
from itertools import product

from tresor.core.constants import PATH_SEP
from tresor.domain.value_objects.path_template import ListDimension, PathTemplate


def expand(template: PathTemplate) -> Iterator[tuple[str, tuple[int, ...]]]:
    """Yield (path, index_vector) for every combination of the template's list dimensions.

    Order is row-major over the dimensions (leftmost varies slowest). Scalar
    dimensions add a segment to every path but no index. A template without
    dimensions yields one ("", ()) pair; any empty list dimension yields nothing.
    Each call starts a fresh enumeration.
    """
    axes = [
        range(len(dim.values)) if isinstance(dim, ListDimension) else (None,)
        for dim in template.dimensions
    ]
    for choice in product(*axes):
        segments: list[str] = []
        index: list[int] = []
        for dim, i in zip(template.dimensions, choice):
            if isinstance(dim, ListDimension):
                segments.append(dim.segment(i))
                index.append(i)
            else:
                segments.append(dim.segment())
        yield PATH_SEP.join(segments), tuple(index)
