"""Request body parsing and validation.

Helpers return Result (Ok / Err[ValidationException]) instead of raising;
the API layer decides how an Err becomes an HTTP error. Error messages are
short machine-readable codes.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from tresor.core.constants import DEFAULT_MAX_BODY_LENGTH, DEFAULT_MAX_STRING_LENGTH
from tresor.domain.exceptions import ValidationException
from tresor.domain.result import Err, Ok, Result
from tresor.domain.value_objects.path_template import (
    Dimension,
    ListDimension,
    PathTemplate,
    ScalarDimension,
)


@dataclass(frozen=True)
class RequestSpec:
    """Per-operation body contract: keys, types and size limits.

    Keys default to type str. String values are limited by
    max_value_lengths[key], else max_string_length.
    """

    required_keys: tuple[str, ...] = ()
    optional_keys: tuple[str, ...] = ()
    types: Mapping[str, type | tuple[type, ...]] = field(default_factory=dict)
    max_body_length: int = DEFAULT_MAX_BODY_LENGTH
    max_string_length: int = DEFAULT_MAX_STRING_LENGTH
    max_value_lengths: Mapping[str, int] = field(default_factory=dict)


def _check_field(
    data: dict[str, Any], key: str, spec: RequestSpec
) -> ValidationException | None:
    expected = spec.types.get(key, str)
    value = data[key]
    # bool is an int subclass; never accept it where a number or string is declared.
    if isinstance(value, bool) and expected is not bool:
        return ValidationException("invalid_type", field=key, got="bool")
    if not isinstance(value, expected):
        return ValidationException(
            "invalid_type", field=key, got=type(value).__name__
        )
    if isinstance(value, str):
        limit = spec.max_value_lengths.get(key, spec.max_string_length)
        if len(value) > limit:
            return ValidationException("too_much_data", field=key, max_length=limit)
    return None


def parse_request_data(
    raw: bytes, spec: RequestSpec
) -> Result[dict[str, Any], ValidationException]:
    """Parse and validate a JSON object body against spec.

    Unknown keys are dropped. Body length must be strictly below
    spec.max_body_length.
    """
    if len(raw) >= spec.max_body_length:
        return Err(
            ValidationException("too_much_data", max_body_length=spec.max_body_length)
        )
    try:
        # Deeply nested arrays exhaust the decoder's recursion limit.
        data = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError, RecursionError):
        return Err(ValidationException("invalid_json"))
    if not isinstance(data, dict):
        return Err(ValidationException("invalid_json", got=type(data).__name__))

    result: dict[str, Any] = {}
    for key in spec.required_keys:
        if key not in data:
            return Err(ValidationException("missing_key", field=key))
        error = _check_field(data, key, spec)
        if error is not None:
            return Err(error)
        result[key] = data[key]
    for key in spec.optional_keys:
        if key in data:
            error = _check_field(data, key, spec)
            if error is not None:
                return Err(error)
            result[key] = data[key]
    return Ok(result)


def _render_scalar(value: Any) -> str | None:
    """Text form of a path value; None when value is not a scalar."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return None


def _parse_dimension(raw: Any, where: str) -> Result[Dimension, ValidationException]:
    if not isinstance(raw, (list, tuple)) or len(raw) != 2:
        return Err(ValidationException("invalid_template", field=where))
    key, values = raw
    if not isinstance(key, str):
        return Err(ValidationException("invalid_template", field=f"{where}[0]"))
    if isinstance(values, list):
        rendered: list[str] = []
        for i, item in enumerate(values):
            text = _render_scalar(item)
            if text is None:
                return Err(
                    ValidationException("invalid_template", field=f"{where}[1][{i}]")
                )
            rendered.append(text)
        return Ok(ListDimension(key, tuple(rendered)))
    text = _render_scalar(values)
    if text is None:
        return Err(ValidationException("invalid_template", field=f"{where}[1]"))
    return Ok(ScalarDimension(key, text))


def parse_path_templates(
    raw: Any, max_combinations: int
) -> Result[list[PathTemplate], ValidationException]:
    """Parse path_arrays: a list of templates, each a list of [key, values] pairs.

    values is a scalar (str/int/float) or a list of scalars. The total number
    of combinations over all templates is capped at max_combinations.
    """
    if not isinstance(raw, list):
        return Err(ValidationException("invalid_type", field="path_arrays"))
    templates: list[PathTemplate] = []
    total = 0
    for t, raw_template in enumerate(raw):
        where = f"path_arrays[{t}]"
        if not isinstance(raw_template, list):
            return Err(ValidationException("invalid_template", field=where))
        dimensions: list[Dimension] = []
        for d, raw_dimension in enumerate(raw_template):
            parsed = _parse_dimension(raw_dimension, f"{where}[{d}]")
            if isinstance(parsed, Err):
                return parsed
            dimensions.append(parsed.value)
        template = PathTemplate(tuple(dimensions))
        total += template.combination_count
        if total > max_combinations:
            return Err(
                ValidationException(
                    "too_many_combinations",
                    field="path_arrays",
                    max_combinations=max_combinations,
                )
            )
        templates.append(template)
    return Ok(templates)
