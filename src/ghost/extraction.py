"""Typed extraction of dataclass models from request data.

Populates dataclass instances from a mapping (path parameters, parsed
JSON bodies, query strings), converting values to the annotated field
types. Used by the built-in ``PathParamsModel`` and ``JSONBodyModel``.

Supported field types: ``str``, ``int``, ``float``, ``bool``. Other
annotations receive the raw value. Missing keys use the dataclass field
default. String values are kept exactly as sent. Unlike a lenient form
parser, a value that cannot be converted is an error: the caller turns
it into a 400.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import Any, get_type_hints


class ExtractionError(ValueError):
    """A mapping could not be turned into the requested dataclass."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


def is_extractable_dataclass(annotation: Any) -> bool:
    """Return True if *annotation* is a dataclass type (not an instance)."""
    return isinstance(annotation, type) and dataclasses.is_dataclass(annotation)


def extract_dataclass[T](cls: type[T], data: Mapping[str, Any]) -> T:
    """Create a dataclass instance from *data*.

    For each field in *cls*, looks up the field name in *data* and
    converts the value to the field's annotated type.

    Raises:
        ExtractionError: If a field without a default is missing, or a
            value cannot be converted to its field type.
    """
    hints = get_type_hints(cls)
    kwargs: dict[str, Any] = {}

    for f in dataclasses.fields(cls):  # type: ignore[arg-type]
        if not f.init:
            continue
        if f.name not in data:
            if f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING:
                raise ExtractionError(f.name, f"Missing required field {f.name!r}")
            continue
        kwargs[f.name] = _convert(f.name, data[f.name], hints.get(f.name, Any))

    return cls(**kwargs)


def _convert(name: str, value: Any, target_type: Any) -> Any:
    """Convert *value* to *target_type* or raise ``ExtractionError``."""
    if target_type is str:
        if not isinstance(value, str | int | float):
            raise ExtractionError(name, f"Field {name!r} must be a string")
        return str(value)

    if target_type is bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            lowered = value.lower()
            if lowered in ("true", "1", "yes", "on"):
                return True
            if lowered in ("false", "0", "no", "off"):
                return False
        raise ExtractionError(name, f"Field {name!r} must be a boolean")

    if target_type is int:
        if isinstance(value, bool) or isinstance(value, float):
            raise ExtractionError(name, f"Field {name!r} must be an integer")
        try:
            return int(value)
        except (ValueError, TypeError):
            raise ExtractionError(name, f"Field {name!r} must be an integer") from None

    if target_type is float:
        if isinstance(value, bool):
            raise ExtractionError(name, f"Field {name!r} must be a number")
        try:
            return float(value)
        except (ValueError, TypeError):
            raise ExtractionError(name, f"Field {name!r} must be a number") from None

    # Unknown type, pass the raw value through
    return value
