"""Console logging setup for ``ghost run`` and ``Server.run()``.

Routes ghost's own loggers and the uvicorn/starlette loggers to one
stderr handler. uvicorn is then started with ``log_config=None`` so it
does not install handlers of its own.
"""

import copy
import logging.config
from typing import Any

from ghost.errors import ConfigurationError

LEVELS = ("debug", "info", "warning", "error", "critical")

BASE_LOG_CFG: dict[str, Any] = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "console": {
            "format": "%(asctime)s %(levelname)-7s %(name)s: %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "console",
            "stream": "ext://sys.stderr",
        },
    },
    "loggers": {
        "ghost": {"handlers": ["console"], "propagate": False, "level": "INFO"},
        "uvicorn": {"handlers": ["console"], "propagate": False, "level": "INFO"},
        "uvicorn.error": {"handlers": ["console"], "propagate": False, "level": "INFO"},
        "uvicorn.access": {"handlers": ["console"], "propagate": False, "level": "INFO"},
        "starlette": {"handlers": ["console"], "propagate": False, "level": "WARNING"},
    },
    "root": {"handlers": ["console"], "level": "WARNING"},
}


def logging_config(level: str = "info", *, access_log: bool = True) -> dict[str, Any]:
    """Build the dictConfig mapping for *level*.

    Raises ``ConfigurationError`` for an unknown level name.
    """
    if level.lower() not in LEVELS:
        msg = f"Unknown log level {level!r}; expected one of {', '.join(LEVELS)}"
        raise ConfigurationError(msg)
    level_name = level.upper()

    cfg = copy.deepcopy(BASE_LOG_CFG)
    for name in ("ghost", "uvicorn", "uvicorn.error"):
        cfg["loggers"][name]["level"] = level_name
    cfg["loggers"]["uvicorn.access"]["level"] = "INFO" if access_log else "WARNING"
    if level_name == "DEBUG":
        cfg["loggers"]["starlette"]["level"] = "DEBUG"
        cfg["root"]["level"] = "DEBUG"
    return cfg


def configure_logging(level: str = "info", *, access_log: bool = True) -> None:
    """Apply the console logging setup."""
    logging.config.dictConfig(logging_config(level, access_log=access_log))
