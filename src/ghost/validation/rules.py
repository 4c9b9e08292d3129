"""Built-in validation rules for model fields.

Each rule is a callable with the signature::

    def rule(value: Any) -> str | None:
        '''Return error message, or None if valid.'''

Parameterized rules are factory functions that return a rule::

    def max_length(n: int) -> Rule:
        def check(value: Any) -> str | None:
            if len(value) > n:
                return f"Must be at most {n} characters"
            return None
        return check

Custom rules follow the same protocol — any callable matching
``(Any) -> str | None`` works with ``validate()``.
"""

import re
from collections.abc import Callable
from typing import Any

# Type alias for a validation rule
type Rule = Callable[[Any], str | None]


# ---------------------------------------------------------------------------
# Presence
# ---------------------------------------------------------------------------


def required(value: Any) -> str | None:
    """Field must be present and, for strings, non-blank."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return "This field is required"
    return None


# ---------------------------------------------------------------------------
# Length
# ---------------------------------------------------------------------------


def max_length(n: int) -> Rule:
    """Value must have at most *n* characters (or items)."""

    def check(value: Any) -> str | None:
        if len(value) > n:
            return f"Must be at most {n} characters"
        return None

    return check


def min_length(n: int) -> Rule:
    """Value must have at least *n* characters (or items)."""

    def check(value: Any) -> str | None:
        if len(value) < n:
            return f"Must be at least {n} characters"
        return None

    return check


# ---------------------------------------------------------------------------
# Range
# ---------------------------------------------------------------------------


def min_value(n: float) -> Rule:
    """Number must be at least *n*."""

    def check(value: Any) -> str | None:
        if value < n:
            return f"Must be at least {n}"
        return None

    return check


def max_value(n: float) -> Rule:
    """Number must be at most *n*."""

    def check(value: Any) -> str | None:
        if value > n:
            return f"Must be at most {n}"
        return None

    return check


# ---------------------------------------------------------------------------
# Format
# ---------------------------------------------------------------------------

# Basic email pattern: checks structure, not deliverability
_EMAIL_RE = re.compile(r"^[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}$")


def email(value: Any) -> str | None:
    """Value must be a valid email address (basic format check)."""
    if not isinstance(value, str) or not _EMAIL_RE.match(value):
        return "Must be a valid email address"
    return None


def matches(pattern: str, message: str | None = None) -> Rule:
    """String value must match the given regex pattern."""
    compiled = re.compile(pattern)

    def check(value: Any) -> str | None:
        if not isinstance(value, str) or not compiled.match(value):
            return message or f"Must match pattern: {pattern}"
        return None

    return check


# ---------------------------------------------------------------------------
# Choice
# ---------------------------------------------------------------------------


def one_of(*choices: Any) -> Rule:
    """Value must be one of the given choices."""
    allowed = frozenset(choices)

    def check(value: Any) -> str | None:
        if value not in allowed:
            options = ", ".join(sorted(str(c) for c in allowed))
            return f"Must be one of: {options}"
        return None

    return check
