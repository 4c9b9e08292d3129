"""Pipeline role protocols.

Every route runs the same five stages, each filled by an object with a
single method::

    extend(context)        -> RequestContext   (zero or more per route)
    from_request(request)  -> model
    validate(model)        -> None
    process(model)         -> output
    serialize(output)      -> bytes

No base class required. The route builder checks the shape, not the
lineage. Methods may be plain or ``async def``; the builder awaits
whatever is awaitable.

A stage fails by raising ``HTTPError``. The builder writes the error's
detail and status straight to the client and runs nothing after it.
"""

from collections.abc import Awaitable
from typing import Any, Protocol, runtime_checkable

from ghost.context import RequestContext
from ghost.http.request import Request


@runtime_checkable
class Extender(Protocol):
    """Adds values to the request context before the model is built.

    For example, an extender can hand a database pool to later stages::

        POOL = ContextKey("pool", Pool)

        class PoolExtender:
            def __init__(self, pool: Pool) -> None:
                self.pool = pool

            def extend(self, context: RequestContext) -> RequestContext:
                return context.with_value(POOL, self.pool)
    """

    def extend(self, context: RequestContext) -> RequestContext | Awaitable[RequestContext]: ...


@runtime_checkable
class RequestModel(Protocol):
    """Builds the model value from the raw request.

    Returns a fresh value per request: path parameters, body and context
    values, parsed into whatever shape the later stages expect. Raise a
    4xx ``HTTPError`` when the input is malformed.
    """

    def from_request(self, request: Request) -> Any: ...


@runtime_checkable
class Validator(Protocol):
    """Checks a parsed model against domain constraints.

    Returns nothing on success; raises a 4xx ``HTTPError`` otherwise.
    """

    def validate(self, model: Any) -> None | Awaitable[None]: ...


@runtime_checkable
class Processor(Protocol):
    """Computes the output from a validated model.

    Raise an ``HTTPError`` with whatever status fits the failure
    (404 for a missing record, 409 for a conflict, ...).
    """

    def process(self, model: Any) -> Any: ...


@runtime_checkable
class Writer(Protocol):
    """Serializes the processor's output into the response body.

    Returns ``bytes`` (a ``str`` is encoded as UTF-8). A writer may set a
    ``content_type`` attribute; the builder sends it with the payload.
    Encoding failures should raise a 500 ``HTTPError``.
    """

    def serialize(self, output: Any) -> bytes | str | Awaitable[bytes | str]: ...
