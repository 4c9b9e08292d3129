"""Validation result — immutable container for validated data or errors."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """The outcome of checking a model against a set of rules.

    ``is_valid`` is True when there are no errors.
    The result is falsy when invalid, so you can write::

        result = validate(model, rules)
        if not result:
            raise BadRequest(result.message)

    ``data`` holds the values of every field that passed.

    ``errors`` maps field names to lists of error messages::

        {"id": ["Must be at least 0"],
         "email": ["Must be a valid email address"]}
    """

    data: dict[str, Any]
    errors: dict[str, list[str]]

    @property
    def is_valid(self) -> bool:
        """True if validation passed with no errors."""
        return not self.errors

    @property
    def message(self) -> str:
        """All errors as one line, e.g. ``"id: Must be at least 0"``."""
        return "; ".join(
            f"{field}: {', '.join(messages)}" for field, messages in self.errors.items()
        )

    def __bool__(self) -> bool:
        """Falsy when invalid — enables ``if not result:`` pattern."""
        return self.is_valid
