"""Server lifecycle — an explicitly owned uvicorn server.

The caller creates the server, starts it, and decides when it stops::

    server = Server(router, port=8080)

    # blocking, until Ctrl+C or a fatal transport error
    server.run()

    # or inside an existing event loop
    task = asyncio.create_task(server.serve())
    ...
    server.shutdown()
    await task
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import uvicorn

from ghost._internal.logs import LEVELS, configure_logging
from ghost.errors import ConfigurationError

if TYPE_CHECKING:
    from ghost.routing.router import Router

logger = logging.getLogger("ghost.server")


class Server:
    """Serves a ghost Router over HTTP with uvicorn.

    Host, port and logging settings default to the router's config;
    keyword arguments override them. ``port=0`` binds an ephemeral port.

    Raises ``ConfigurationError`` for an unknown log level.
    """

    __slots__ = ("_uvicorn", "host", "log_level", "port", "router")

    def __init__(
        self,
        router: Router,
        *,
        host: str | None = None,
        port: int | None = None,
        log_level: str | None = None,
    ) -> None:
        self.router = router
        self.host = host if host is not None else router.config.host
        self.port = port if port is not None else router.config.port
        self.log_level = (log_level or router.config.log_level).lower()
        if self.log_level not in LEVELS:
            msg = f"Unknown log level {self.log_level!r}; expected one of {', '.join(LEVELS)}"
            raise ConfigurationError(msg)

        config = uvicorn.Config(
            app=router,
            host=self.host,
            port=self.port,
            log_level=self.log_level,
            access_log=router.config.access_log,
            log_config=None,
            lifespan="on",
        )
        self._uvicorn = uvicorn.Server(config)

    @property
    def started(self) -> bool:
        """True once the socket is bound and the lifespan startup ran."""
        return self._uvicorn.started

    @property
    def should_exit(self) -> bool:
        """True once shutdown has been requested."""
        return self._uvicorn.should_exit

    async def serve(self) -> None:
        """Serve until ``shutdown()`` is called or a fatal error occurs."""
        self._log_start()
        try:
            await self._uvicorn.serve()
        finally:
            logger.info("Server stopped")

    def run(self) -> None:
        """Configure console logging and serve, blocking the caller."""
        configure_logging(self.log_level, access_log=self.router.config.access_log)
        self._log_start()
        self._uvicorn.run()
        logger.info("Server stopped")

    def _log_start(self) -> None:
        logger.info(
            "Serving %d route(s) on http://%s:%d", len(self.router.routes), self.host, self.port
        )

    def shutdown(self) -> None:
        """Ask the server to stop after in-flight requests finish."""
        logger.info("Shutdown requested")
        self._uvicorn.should_exit = True
