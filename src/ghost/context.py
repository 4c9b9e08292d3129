"""Typed, request-scoped context.

Extenders attach values to a ``RequestContext`` through ``ContextKey``
objects. Each key carries the type its value must have, so a stage that
reads a value gets either the right thing or an explicit error::

    from ghost.context import ContextKey

    SECRET = ContextKey("secret", str)

    class SecretExtender:
        def extend(self, context):
            return context.with_value(SECRET, "s3cr3t")

    class UserModel:
        def from_request(self, request):
            secret = request.context[SECRET]  # str, or ContextLookupError
            ...

Contexts are immutable. ``with_value()`` returns a new context, so the
per-request chain of extenders never mutates anything shared.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, cast, overload

from ghost.errors import ContextLookupError


@dataclass(frozen=True, eq=False)
class ContextKey[T]:
    """A typed key for a ``RequestContext`` value.

    Keys compare by identity: two keys with the same name are distinct,
    so packages can't collide by picking the same string.
    """

    name: str
    type: type[T]

    def __repr__(self) -> str:
        return f"ContextKey({self.name!r}, {self.type.__name__})"


class RequestContext:
    """An immutable mapping of ``ContextKey`` to value for one request."""

    __slots__ = ("_values",)

    def __init__(self, values: dict[ContextKey[Any], Any] | None = None) -> None:
        self._values: MappingProxyType[ContextKey[Any], Any] = MappingProxyType(
            dict(values or {})
        )

    def with_value[T](self, key: ContextKey[T], value: T) -> RequestContext:
        """Return a new context with *key* set to *value*.

        Raises ``TypeError`` if *value* is not an instance of ``key.type``.
        """
        if not isinstance(value, key.type):
            msg = (
                f"Context value for {key.name!r} must be {key.type.__name__}, "
                f"got {type(value).__name__}"
            )
            raise TypeError(msg)
        return RequestContext({**self._values, key: value})

    def __getitem__[T](self, key: ContextKey[T]) -> T:
        try:
            value = self._values[key]
        except KeyError:
            msg = f"No context value for {key.name!r}; was its extender registered?"
            raise ContextLookupError(msg) from None
        return cast(T, value)

    @overload
    def get[T](self, key: ContextKey[T]) -> T | None: ...

    @overload
    def get[T](self, key: ContextKey[T], default: T) -> T: ...

    def get(self, key: ContextKey[Any], default: Any = None) -> Any:
        """Return the value for *key*, or *default* if it was never set."""
        return self._values.get(key, default)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[ContextKey[Any]]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        items = ", ".join(f"{k.name!r}: {v!r}" for k, v in self._values.items())
        return f"RequestContext({{{items}}})"
