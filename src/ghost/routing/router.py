"""Ghost router — route builders on top of a Starlette router.

Mutable during setup (``add_route()``, lifecycle hooks). Frozen on
first use: every builder is compiled into a ``starlette.routing.Route``
and the lot into one ``starlette.routing.Router``, which owns path
matching, method filtering, and path parameter conversion.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any

from starlette.routing import Route
from starlette.routing import Router as StarletteRouter
from starlette.routing import compile_path

from ghost._internal.asgi import Receive, Scope, Send
from ghost._internal.invoke import invoke
from ghost.config import RouterConfig
from ghost.errors import ConfigurationError
from ghost.routing.builder import RouteBuilder

logger = logging.getLogger("ghost.routing")


class Router:
    """The ghost router.

    Usage::

        router = Router()
        router.add_route("/user/id/{id}").methods("GET").processor(...)
        router.run()

    The router is itself an ASGI application, so any ASGI server can
    serve it directly (``uvicorn myapp:router``).

    Thread safety:
        Setup is single-threaded (module import time). The freeze
        transition uses a Lock + double-check so exactly one thread
        compiles the route table; afterwards everything is read-only.
    """

    __slots__ = (
        "_builders",
        "_freeze_lock",
        "_frozen",
        "_mux",
        "_shutdown_hooks",
        "_startup_hooks",
        "config",
    )

    def __init__(self, config: RouterConfig | None = None) -> None:
        self.config: RouterConfig = config or RouterConfig()
        self._builders: list[RouteBuilder] = []
        self._startup_hooks: list[Callable[..., Any]] = []
        self._shutdown_hooks: list[Callable[..., Any]] = []
        self._mux: StarletteRouter | None = None
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

    # -- Route registration --

    def add_route(self, path: str) -> RouteBuilder:
        """Add *path* to the router and return its builder.

        The builder starts with a no-op stage in every slot and no
        extenders. *path* uses Starlette's syntax: ``/user/id/{id}``,
        ``/files/{name:path}``, ``/items/{n:int}``.
        """
        self._check_not_frozen()
        if not path.startswith("/"):
            msg = f"Route path {path!r} must start with '/'"
            raise ConfigurationError(msg)
        try:
            compile_path(path)
        except (AssertionError, ValueError) as exc:
            msg = f"Invalid route path {path!r}: {exc}"
            raise ConfigurationError(msg) from exc

        builder = RouteBuilder(path, debug=self.config.debug)
        self._builders.append(builder)
        return builder

    @property
    def routes(self) -> tuple[RouteBuilder, ...]:
        """All registered route builders, in registration order."""
        return tuple(self._builders)

    # -- Lifecycle hooks --

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register a hook run once before the server accepts requests.

        Usage::

            @router.on_startup
            async def connect():
                await pool.open()
        """
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register a hook run once after the server stops accepting requests."""
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    async def startup(self) -> None:
        """Freeze the router and run the startup hooks."""
        self._ensure_frozen()
        for hook in self._startup_hooks:
            await invoke(hook)

    async def shutdown(self) -> None:
        """Run the shutdown hooks."""
        for hook in self._shutdown_hooks:
            await invoke(hook)

    # -- Underlying router --

    @property
    def mux(self) -> StarletteRouter:
        """The compiled Starlette router (freezes this router)."""
        self._ensure_frozen()
        assert self._mux is not None
        return self._mux

    def url_path_for(self, name: str, /, **path_params: Any) -> str:
        """Build the path of the route named *name*.

        Raises ``starlette.routing.NoMatchFound`` for unknown names or
        missing parameters.
        """
        return str(self.mux.url_path_for(name, **path_params))

    # -- Serving --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Serve the router until the process is interrupted.

        Blocks. For an explicitly managed lifecycle, use
        ``ghost.server.serve.Server`` instead.
        """
        from ghost.server.serve import Server

        Server(self, host=host, port=port).run()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point.

        Handles the lifespan scope directly, then delegates HTTP scopes
        to the Starlette router.
        """
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        await self.mux(scope, receive, send)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        Freezes the router at startup (before the first HTTP request),
        runs the registered hooks, and signals completion to the server.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    await self.startup()
                except Exception as exc:
                    logger.exception("Startup failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                try:
                    await self.shutdown()
                except Exception as exc:
                    logger.exception("Shutdown failed")
                    await send({"type": "lifespan.shutdown.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the builders into the Starlette router.

        MUST only be called while holding _freeze_lock.
        """
        routes = []
        for builder in self._builders:
            methods = builder.allowed_methods
            routes.append(
                Route(
                    builder.path,
                    endpoint=builder,
                    methods=sorted(methods) if methods else None,
                    name=builder.route_name,
                )
            )
            builder._freeze()

        self._mux = StarletteRouter(routes=routes, redirect_slashes=self.config.redirect_slashes)
        self._frozen = True
        logger.debug("Compiled %d route(s)", len(routes))

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the router after it has started serving requests. "
                "Register routes and hooks before calling router.run()."
            )
            raise RuntimeError(msg)
