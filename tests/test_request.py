"""Tests for ghost.http.request — frozen Request with async body access."""

import json

import pytest

from ghost.context import ContextKey, RequestContext
from ghost.http.request import Request

USER = ContextKey("user", str)


def _make_scope(**overrides: object) -> dict[str, object]:
    """Build a minimal valid ASGI HTTP scope."""
    base: dict[str, object] = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "GET",
        "path": "/",
        "raw_path": b"/",
        "query_string": b"",
        "root_path": "",
        "headers": [],
        "server": ("localhost", 8000),
        "client": ("127.0.0.1", 54321),
    }
    base.update(overrides)
    return base


def _make_receive(*bodies: bytes):
    """Create an ASGI receive callable that yields bodies."""
    messages = []
    for i, body in enumerate(bodies):
        is_last = i == len(bodies) - 1
        messages.append({"type": "http.request", "body": body, "more_body": not is_last})
    if not messages:
        messages.append({"type": "http.request", "body": b"", "more_body": False})
    it = iter(messages)

    async def receive():
        return next(it)

    return receive


class TestRequestFromASGI:
    def test_basic_fields(self) -> None:
        scope = _make_scope(method="POST", path="/users")
        req = Request.from_asgi(scope, _make_receive())

        assert req.method == "POST"
        assert req.path == "/users"
        assert req.client == ("127.0.0.1", 54321)
        assert req.path_params == {}
        assert len(req.context) == 0

    def test_headers_case_insensitive(self) -> None:
        scope = _make_scope(headers=[(b"content-type", b"application/json")])
        req = Request.from_asgi(scope, _make_receive())

        assert req.headers["Content-Type"] == "application/json"
        assert req.content_type == "application/json"

    def test_query_params(self) -> None:
        scope = _make_scope(query_string=b"page=2&tag=a&tag=b")
        req = Request.from_asgi(scope, _make_receive())

        assert req.query["page"] == "2"
        assert req.query.getlist("tag") == ["a", "b"]

    def test_path_params_from_scope(self) -> None:
        scope = _make_scope(path="/user/id/1", path_params={"id": "1"})
        req = Request.from_asgi(scope, _make_receive())

        assert req.path_params == {"id": "1"}

    def test_missing_client(self) -> None:
        scope = _make_scope()
        del scope["client"]
        req = Request.from_asgi(scope, _make_receive())

        assert req.client is None

    def test_frozen(self) -> None:
        req = Request.from_asgi(_make_scope(), _make_receive())
        with pytest.raises(AttributeError):
            req.path = "/other"  # type: ignore[misc]


class TestRequestBody:
    async def test_body(self) -> None:
        req = Request.from_asgi(_make_scope(method="POST"), _make_receive(b"hello"))
        assert await req.body() == b"hello"

    async def test_body_chunks_joined(self) -> None:
        req = Request.from_asgi(_make_scope(method="POST"), _make_receive(b"hel", b"lo"))
        assert await req.body() == b"hello"

    async def test_body_cached(self) -> None:
        req = Request.from_asgi(_make_scope(method="POST"), _make_receive(b"once"))
        assert await req.body() == b"once"
        # receive() is exhausted; the cached bytes are returned
        assert await req.body() == b"once"

    async def test_json(self) -> None:
        payload = json.dumps({"title": "Buy milk"}).encode()
        req = Request.from_asgi(_make_scope(method="POST"), _make_receive(payload))
        assert await req.json() == {"title": "Buy milk"}

    async def test_json_malformed(self) -> None:
        req = Request.from_asgi(_make_scope(method="POST"), _make_receive(b"{nope"))
        with pytest.raises(ValueError):
            await req.json()

    async def test_text(self) -> None:
        req = Request.from_asgi(_make_scope(method="POST"), _make_receive("héllo".encode()))
        assert await req.text() == "héllo"

    async def test_stream_stops_on_disconnect(self) -> None:
        messages = iter(
            [
                {"type": "http.request", "body": b"a", "more_body": True},
                {"type": "http.disconnect"},
            ]
        )

        async def receive():
            return next(messages)

        req = Request.from_asgi(_make_scope(method="POST"), receive)
        chunks = [chunk async for chunk in req.stream()]
        assert chunks == [b"a"]


class TestWithContext:
    def test_returns_new_request(self) -> None:
        req = Request.from_asgi(_make_scope(), _make_receive())
        extended = req.with_context(RequestContext().with_value(USER, "joe"))

        assert extended is not req
        assert extended.context[USER] == "joe"
        assert USER not in req.context
        assert extended.path == req.path

    async def test_body_cache_shared(self) -> None:
        req = Request.from_asgi(_make_scope(method="POST"), _make_receive(b"data"))
        assert await req.body() == b"data"

        extended = req.with_context(RequestContext())
        assert await extended.body() == b"data"
