"""No-op stages.

A fresh route builder starts with one of each, so a route only has to
install the stages it actually needs.
"""

from typing import Any

from ghost.http.request import Request


class NullModel:
    """Accepts any request; the model value is ``None``."""

    def from_request(self, request: Request) -> None:  # noqa: ARG002
        return None


class NullValidator:
    """Never fails."""

    def validate(self, model: Any) -> None:  # noqa: ARG002
        return None


class NullProcessor:
    """Produces no output."""

    def process(self, model: Any) -> None:  # noqa: ARG002
        return None


class NullWriter:
    """Writes an empty body."""

    content_type = "text/plain; charset=utf-8"

    def serialize(self, output: Any) -> bytes:  # noqa: ARG002
        return b""
