"""Model validation — composable rules, clean results.

Usage::

    from ghost.validation import validate, required, min_value, email

    result = validate(model, {
        "id": [min_value(0)],
        "email": [required, email],
    })
    if not result:
        raise BadRequest(result.message)

``RulesValidator`` in ``ghost.pipeline`` wraps this as a pipeline stage.
"""

from collections.abc import Mapping
from typing import Any

from ghost.validation.result import ValidationResult
from ghost.validation.rules import (
    Rule,
    email,
    matches,
    max_length,
    max_value,
    min_length,
    min_value,
    one_of,
    required,
)

__all__ = [
    "Rule",
    "ValidationResult",
    "email",
    "matches",
    "max_length",
    "max_value",
    "min_length",
    "min_value",
    "one_of",
    "required",
    "validate",
]


def _field_value(model: Any, name: str) -> Any:
    if isinstance(model, Mapping):
        return model.get(name)
    return getattr(model, name, None)


def validate(model: Any, rules: dict[str, list[Rule]]) -> ValidationResult:
    """Validate a model against a set of rules.

    Args:
        model: A mapping or any object with attributes (typically a
            dataclass built by the model stage).
        rules: A dict mapping field names to lists of rules. Each rule
            returns an error message string on failure, or ``None``.

    Returns:
        A ``ValidationResult`` with ``.data`` (values that passed) and
        ``.errors`` (field → list of error messages).
    """
    errors: dict[str, list[str]] = {}
    cleaned: dict[str, Any] = {}

    for field_name, field_rules in rules.items():
        value = _field_value(model, field_name)

        field_errors: list[str] = []
        for rule in field_rules:
            # Nothing else can be checked on a missing value
            if value is None and rule is not required:
                continue
            error = rule(value)
            if error is not None:
                field_errors.append(error)
                if rule is required:
                    break

        if field_errors:
            errors[field_name] = field_errors
        else:
            cleaned[field_name] = value

    return ValidationResult(data=cleaned, errors=errors)
