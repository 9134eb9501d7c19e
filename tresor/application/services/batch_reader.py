"""Batch reads: resolve path templates against the entry cache into nested results."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, TypeAlias

from tresor.application.services.path_expander import expand
from tresor.domain.exceptions import InvariantViolationException
from tresor.domain.value_objects.path_template import PathTemplate
from tresor.shared.telemetry.tracing import add_span_attributes, traced

if TYPE_CHECKING:
    from tresor.application.interfaces.services import IEntryCache
    from tresor.application.services.tag_service import TagService

# Nested lists of str | None; depth equals the template's list-dimension count.
ResultTensor: TypeAlias = str | None | list[Any]


def allocate_tensor(shape: Sequence[int]) -> ResultTensor:
    """Return nested lists of None with the given shape; () gives a bare None."""
    if not shape:
        return None
    size, rest = shape[0], shape[1:]
    return [allocate_tensor(rest) for _ in range(size)]


def _place(tensor: list[Any], index: tuple[int, ...], value: str | None) -> None:
    """Set tensor[i0][i1]...[in] = value."""
    node = tensor
    for i in index[:-1]:
        node = node[i]
    node[index[-1]] = value


def resolve_template(
    template: PathTemplate,
    key: str,
    cache: IEntryCache,
    tags: TagService,
) -> ResultTensor:
    """Resolve one template; missing entries stay None at their coordinate."""
    shape = template.shape
    tensor = allocate_tensor(shape)
    for path, index in expand(template):
        if len(index) != len(shape):
            raise InvariantViolationException(
                f"index vector {index!r} does not match shape {shape!r}"
            )
        value = cache.get(tags.derive_tag(path, key))
        if not index:
            return value
        _place(tensor, index, value)
    return tensor


@traced("batch_reader.resolve_batch")
def resolve_batch(
    templates: Sequence[PathTemplate],
    key: str,
    cache: IEntryCache,
    tags: TagService,
) -> list[ResultTensor]:
    """Resolve each template into its own tensor, in input order. Read-only."""
    add_span_attributes(
        templates=len(templates),
        combinations=sum(t.combination_count for t in templates),
    )
    return [resolve_template(t, key, cache, tags) for t in templates]
