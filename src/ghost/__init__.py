"""Ghost — five-stage request pipelines on top of a Starlette router.

Every route runs the same fixed pipeline: extenders, model, validator,
processor, writer. The first stage to raise ``HTTPError`` ends the
request with that error's status and message.

Basic usage::

    from dataclasses import dataclass

    from ghost import NotFound, Router
    from ghost.pipeline import JSONWriter, PathParamsModel, RulesValidator
    from ghost.validation import min_value

    @dataclass(frozen=True, slots=True)
    class UserId:
        id: int

    class UserLookup:
        def process(self, model: UserId) -> dict:
            if model.id != 1:
                raise NotFound("User not found!")
            return {"id": 1, "name": "Joe"}

    router = Router()
    router.add_route("/user/id/{id}") \\
        .methods("GET") \\
        .model(PathParamsModel(UserId)) \\
        .validator(RulesValidator({"id": [min_value(0)]})) \\
        .processor(UserLookup()) \\
        .writer(JSONWriter())

    router.run()
"""

__version__ = "0.1.0"
__all__ = [
    "BadRequest",
    "ConfigurationError",
    "ContextKey",
    "ContextLookupError",
    "GhostError",
    "HTTPError",
    "NotFound",
    "Request",
    "RequestContext",
    "Response",
    "RouteBuilder",
    "Router",
    "RouterConfig",
    "Server",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import ghost`` fast while providing a clean top-level API.
    """
    if name == "Router":
        from ghost.routing.router import Router

        return Router

    if name == "RouteBuilder":
        from ghost.routing.builder import RouteBuilder

        return RouteBuilder

    if name == "RouterConfig":
        from ghost.config import RouterConfig

        return RouterConfig

    if name == "Server":
        from ghost.server.serve import Server

        return Server

    if name == "Request":
        from ghost.http.request import Request

        return Request

    if name == "Response":
        from ghost.http.response import Response

        return Response

    if name in ("ContextKey", "RequestContext"):
        from ghost import context as _ctx

        return getattr(_ctx, name)

    if name in (
        "BadRequest",
        "ConfigurationError",
        "ContextLookupError",
        "GhostError",
        "HTTPError",
        "NotFound",
    ):
        from ghost import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
