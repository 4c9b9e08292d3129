"""Router configuration.

RouterConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router and server configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(port=9000, log_level="debug")
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8080
    debug: bool = False

    # Logging
    log_level: str = "info"
    access_log: bool = True

    # Routing (passed through to the Starlette router)
    redirect_slashes: bool = True
