"""Ghost exception hierarchy.

Shared across the router, the route builder, and the pipeline stages so
every module raises and catches the same types.
"""

from __future__ import annotations

from dataclasses import dataclass


class GhostError(Exception):
    """Base for all ghost-specific errors."""


class ConfigurationError(GhostError):
    """Raised when a route or router is configured incorrectly.

    Typically raised while routes are being registered, before the
    router freezes.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(GhostError):
    """An error that maps directly to an HTTP status code.

    Raised by pipeline stages. The route builder catches these and
    writes ``detail`` as a plain-text body with ``status`` as the code.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)

    @staticmethod
    def wrap(exc: BaseException, status: int) -> HTTPError:
        """Build an HTTPError carrying *exc*'s message.

        Usage::

            try:
                user_id = int(raw)
            except ValueError as exc:
                raise HTTPError.wrap(exc, 400) from exc
        """
        return HTTPError(status=status, detail=str(exc))


class BadRequest(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """400 — the request input is malformed or fails validation."""

    def __init__(self, detail: str = "Bad Request") -> None:
        super().__init__(status=400, detail=detail)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — the requested resource does not exist."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class ContextLookupError(GhostError, LookupError):
    """A request context value was read but never set by an extender."""
