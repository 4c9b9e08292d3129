"""Built-in pipeline stages.

Ready-made implementations of the common cases: a constant-value
extender, dataclass models filled from path parameters or a JSON body,
a rule-based validator, and a JSON writer.
"""

from __future__ import annotations

import dataclasses
import json
from typing import Any

from ghost.context import ContextKey, RequestContext
from ghost.errors import BadRequest, ConfigurationError, HTTPError
from ghost.extraction import ExtractionError, extract_dataclass, is_extractable_dataclass
from ghost.http.request import Request
from ghost.validation import Rule, validate


class ValueExtender[T]:
    """Sets one context key to a fixed value on every request."""

    __slots__ = ("key", "value")

    def __init__(self, key: ContextKey[T], value: T) -> None:
        # Fail at registration, not on the first request
        RequestContext().with_value(key, value)
        self.key = key
        self.value = value

    def extend(self, context: RequestContext) -> RequestContext:
        return context.with_value(self.key, self.value)


def _check_dataclass(cls: Any) -> None:
    if not is_extractable_dataclass(cls):
        msg = f"Model class must be a dataclass type, got {cls!r}"
        raise ConfigurationError(msg)


class PathParamsModel[T]:
    """Builds a dataclass from the route's path parameters.

    Usage::

        @dataclass(frozen=True, slots=True)
        class UserId:
            id: int

        router.add_route("/user/id/{id}").model(PathParamsModel(UserId))

    A parameter that cannot be converted to its field type is a 400.
    """

    __slots__ = ("cls",)

    def __init__(self, cls: type[T]) -> None:
        _check_dataclass(cls)
        self.cls = cls

    def from_request(self, request: Request) -> T:
        try:
            return extract_dataclass(self.cls, request.path_params)
        except ExtractionError as exc:
            raise BadRequest(str(exc)) from exc


class JSONBodyModel[T]:
    """Builds a dataclass from a JSON object in the request body.

    Path parameters are merged in underneath the body, so a
    ``PUT /items/{id}`` model can carry both.
    """

    __slots__ = ("cls", "include_path_params")

    def __init__(self, cls: type[T], *, include_path_params: bool = True) -> None:
        _check_dataclass(cls)
        self.cls = cls
        self.include_path_params = include_path_params

    async def from_request(self, request: Request) -> T:
        try:
            payload = await request.json()
        except (ValueError, UnicodeDecodeError) as exc:
            raise BadRequest(f"Malformed JSON body: {exc}") from exc

        if not isinstance(payload, dict):
            raise BadRequest("JSON body must be an object")

        data = {**request.path_params, **payload} if self.include_path_params else payload
        try:
            return extract_dataclass(self.cls, data)
        except ExtractionError as exc:
            raise BadRequest(str(exc)) from exc


class RulesValidator:
    """Validates model fields against ``ghost.validation`` rules.

    Usage::

        RulesValidator({"id": [min_value(0)], "email": [required, email]})

    Every failing field is reported in one error, with *status*
    (400 unless overridden).
    """

    __slots__ = ("rules", "status")

    def __init__(self, rules: dict[str, list[Rule]], *, status: int = 400) -> None:
        self.rules = rules
        self.status = status

    def validate(self, model: Any) -> None:
        result = validate(model, self.rules)
        if not result:
            raise HTTPError(status=self.status, detail=result.message)


def _to_jsonable(obj: Any) -> Any:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    if isinstance(obj, set | frozenset):
        return sorted(obj)
    msg = f"Object of type {type(obj).__name__} is not JSON serializable"
    raise TypeError(msg)


class JSONWriter:
    """Serializes the output with ``json.dumps``.

    Dataclass instances are converted with ``dataclasses.asdict``.
    Anything the encoder rejects becomes a 500.
    """

    __slots__ = ("indent", "sort_keys")

    content_type = "application/json"

    def __init__(self, *, indent: int | None = None, sort_keys: bool = False) -> None:
        self.indent = indent
        self.sort_keys = sort_keys

    def serialize(self, output: Any) -> bytes:
        try:
            text = json.dumps(
                output,
                default=_to_jsonable,
                indent=self.indent,
                sort_keys=self.sort_keys,
                separators=None if self.indent is not None else (",", ":"),
            )
        except (TypeError, ValueError) as exc:
            raise HTTPError.wrap(exc, 500) from exc
        return text.encode("utf-8")
