"""Error handling for the route pipeline.

Maps ``HTTPError`` exceptions raised by stages, and unexpected failures,
to plain-text Response objects.
"""

import logging

from ghost.errors import HTTPError
from ghost.http.request import Request
from ghost.http.response import Response

logger = logging.getLogger("ghost.server")


def handle_http_error(exc: HTTPError, request: Request, stage: str) -> Response:
    """Map an HTTPError raised by *stage* to its response."""
    logger.debug(
        "%d %s %s (%s stage): %s", exc.status, request.method, request.path, stage, exc.detail
    )
    return Response.from_error(exc)


def handle_internal_error(
    exc: Exception,
    request: Request,
    stage: str,
    *,
    debug: bool = False,
) -> Response:
    """Handle an unexpected exception from *stage* as a 500 error."""
    logger.exception("500 %s %s (%s stage)", request.method, request.path, stage)

    detail = "Internal Server Error"
    if debug:
        detail = f"{detail}: {type(exc).__name__} in {stage} stage: {exc}"
    return Response.from_error(HTTPError(status=500, detail=detail))
