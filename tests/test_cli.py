"""Tests for ghost.cli — entrypoint, router resolution, subcommands."""

import sys
import types

import pytest

from ghost.cli import main
from ghost.cli._resolve import resolve_router
from ghost.cli._routes import format_route
from ghost.context import ContextKey
from ghost.pipeline import JSONWriter, ValueExtender
from ghost.routing.router import Router
from ghost.server.serve import Server

TOKEN = ContextKey("token", str)


def _make_router() -> Router:
    router = Router()
    router.add_route("/user/id/{id}").methods("GET").name("user").writer(JSONWriter())
    return router


@pytest.fixture
def _fake_router_module(monkeypatch: pytest.MonkeyPatch) -> None:
    """Register a fake module with ghost routers on sys.modules."""
    mod = types.ModuleType("_fake_ghost_app")
    mod.router = _make_router()  # type: ignore[attr-defined]
    mod.custom = Router()  # type: ignore[attr-defined]
    mod.factory = _make_router  # type: ignore[attr-defined]
    mod.not_a_router = "just a string"  # type: ignore[attr-defined]

    def broken_factory() -> Router:
        raise RuntimeError("config missing")

    mod.broken = broken_factory  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "_fake_ghost_app", mod)


class TestCLIHelp:
    def test_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--help"])
        assert exc_info.value.code == 0

    def test_run_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["run", "--help"])
        assert exc_info.value.code == 0

    def test_routes_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", "--help"])
        assert exc_info.value.code == 0

    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "usage: ghost" in capsys.readouterr().out


class TestCLIMissingArgs:
    def test_run_missing_app(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["run"])
        assert exc_info.value.code == 2

    def test_routes_missing_app(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes"])
        assert exc_info.value.code == 2

    def test_bad_log_level(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["run", "x:router", "--log-level", "loud"])
        assert exc_info.value.code == 2


@pytest.mark.usefixtures("_fake_router_module")
class TestResolveRouter:
    def test_default_attribute(self) -> None:
        """Omitting :attr defaults to 'router'."""
        router = resolve_router("_fake_ghost_app")
        assert isinstance(router, Router)
        assert len(router.routes) == 1

    def test_custom_attribute(self) -> None:
        assert isinstance(resolve_router("_fake_ghost_app:custom"), Router)

    def test_factory_called(self) -> None:
        router = resolve_router("_fake_ghost_app:factory")
        assert router.routes[0].route_name == "user"

    def test_factory_error(self) -> None:
        with pytest.raises(TypeError, match="Factory function"):
            resolve_router("_fake_ghost_app:broken")

    def test_not_a_router(self) -> None:
        with pytest.raises(TypeError, match="resolved to str, not a ghost.Router"):
            resolve_router("_fake_ghost_app:not_a_router")

    def test_missing_attribute(self) -> None:
        with pytest.raises(AttributeError):
            resolve_router("_fake_ghost_app:nope")

    def test_missing_module(self) -> None:
        with pytest.raises(ModuleNotFoundError):
            resolve_router("_no_such_module_for_ghost")


class TestFormatRoute:
    def test_full_chain(self) -> None:
        router = Router()
        builder = (
            router.add_route("/user/id/{id}")
            .methods("GET")
            .name("user")
            .extender(ValueExtender(TOKEN, "t"))
            .writer(JSONWriter())
        )
        line = format_route(builder)
        assert line.startswith("GET ")
        assert "/user/id/{id} [user]" in line
        assert line.endswith(
            "ValueExtender -> NullModel -> NullValidator -> NullProcessor -> JSONWriter"
        )

    def test_any_method(self) -> None:
        line = format_route(Router().add_route("/x"))
        assert line.startswith("*")
        assert "[" not in line


@pytest.mark.usefixtures("_fake_router_module")
class TestRoutesCommand:
    def test_lists_routes(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", "_fake_ghost_app"])
        out = capsys.readouterr().out
        assert "/user/id/{id} [user]" in out

    def test_empty_router(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", "_fake_ghost_app:custom"])
        assert capsys.readouterr().out.strip() == "No routes registered."

    def test_resolve_error(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", "_fake_ghost_app:not_a_router"])
        assert exc_info.value.code == 1
        assert capsys.readouterr().err.startswith("Error: ")


@pytest.mark.usefixtures("_fake_router_module")
class TestRunCommand:
    def test_serves_with_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls: list[dict] = []

        class FakeServer:
            def __init__(self, router, *, host, port, log_level) -> None:
                calls.append(
                    {"router": router, "host": host, "port": port, "log_level": log_level}
                )

            def run(self) -> None:
                calls.append({"ran": True})

        monkeypatch.setattr("ghost.server.serve.Server", FakeServer)
        main(["run", "_fake_ghost_app", "--host", "0.0.0.0", "--port", "9000", "--log-level", "debug"])

        assert calls[0]["host"] == "0.0.0.0"
        assert calls[0]["port"] == 9000
        assert calls[0]["log_level"] == "debug"
        assert isinstance(calls[0]["router"], Router)
        assert calls[1] == {"ran": True}

    def test_defaults_left_to_config(self, monkeypatch: pytest.MonkeyPatch) -> None:
        seen: dict = {}

        class FakeServer:
            def __init__(self, router, *, host, port, log_level) -> None:
                seen.update(host=host, port=port, log_level=log_level)

            def run(self) -> None:
                pass

        monkeypatch.setattr("ghost.server.serve.Server", FakeServer)
        main(["run", "_fake_ghost_app"])
        assert seen == {"host": None, "port": None, "log_level": None}

    def test_port_zero_reaches_server(self, monkeypatch: pytest.MonkeyPatch) -> None:
        created: list[Server] = []
        original_init = Server.__init__

        def spy_init(self: Server, router: Router, **kwargs) -> None:
            original_init(self, router, **kwargs)
            created.append(self)

        monkeypatch.setattr(Server, "__init__", spy_init)
        monkeypatch.setattr(Server, "run", lambda self: None)
        main(["run", "_fake_ghost_app", "--port", "0"])

        assert created[0].port == 0
        assert created[0]._uvicorn.config.port == 0

    def test_resolve_error(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["run", "_fake_ghost_app:nope"])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err
