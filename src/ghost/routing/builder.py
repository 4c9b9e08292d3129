"""Route builder — one route's fixed five-stage pipeline.

A builder is created by ``Router.add_route()`` with a no-op stage in
every slot. Chain calls to install the stages the route needs::

    router.add_route("/user/id/{id}") \\
        .methods("GET") \\
        .extender(ValueExtender(SECRET, "s3cr3t")) \\
        .model(PathParamsModel(UserId)) \\
        .validator(RulesValidator({"id": [min_value(0)]})) \\
        .processor(UserLookup()) \\
        .writer(JSONWriter())

Per request the stages run in order: every extender, then model,
validator, processor, writer. The first ``HTTPError`` stops the run and
becomes the response. The builder is frozen together with its router;
from then on it is shared read-only across concurrent requests.
"""

from __future__ import annotations

from typing import Any

from ghost._internal.asgi import Receive, Scope, Send
from ghost._internal.invoke import invoke
from ghost.errors import HTTPError
from ghost.http.request import Request
from ghost.http.response import PLAIN_TEXT, Response
from ghost.pipeline.null import NullModel, NullProcessor, NullValidator, NullWriter
from ghost.pipeline.protocols import Extender, Processor, RequestModel, Validator, Writer
from ghost.server.errors import handle_http_error, handle_internal_error
from ghost.server.sender import send_response


class RouteBuilder:
    """Composes one instance of each stage into an ASGI endpoint."""

    __slots__ = (
        "_extenders",
        "_frozen",
        "_methods",
        "_model",
        "_name",
        "_processor",
        "_validator",
        "_writer",
        "debug",
        "path",
    )

    def __init__(self, path: str, *, debug: bool = False) -> None:
        self.path = path
        self.debug = debug
        self._methods: frozenset[str] | None = None
        self._name: str | None = None
        self._extenders: list[Extender] = []
        self._model: RequestModel = NullModel()
        self._validator: Validator = NullValidator()
        self._processor: Processor = NullProcessor()
        self._writer: Writer = NullWriter()
        self._frozen = False

    def __repr__(self) -> str:
        methods = ",".join(sorted(self._methods)) if self._methods else "*"
        return f"<RouteBuilder {methods} {self.path}>"

    # -- Configuration (chainable) --

    def methods(self, *methods: str) -> RouteBuilder:
        """Restrict the route to the given HTTP methods (verbs)."""
        self._check_not_frozen()
        self._methods = frozenset(m.upper() for m in methods)
        return self

    def name(self, name: str) -> RouteBuilder:
        """Name the route for ``Router.url_path_for()``."""
        self._check_not_frozen()
        self._name = name
        return self

    def extender(self, extender: Extender) -> RouteBuilder:
        """Append an extender. Extenders run in the order they are added."""
        self._check_not_frozen()
        self._extenders.append(extender)
        return self

    def model(self, model: RequestModel) -> RouteBuilder:
        """Set the stage that turns the request into a model value."""
        self._check_not_frozen()
        self._model = model
        return self

    def validator(self, validator: Validator) -> RouteBuilder:
        """Set the stage that checks the model before processing."""
        self._check_not_frozen()
        self._validator = validator
        return self

    def processor(self, processor: Processor) -> RouteBuilder:
        """Set the stage that computes the output from the model."""
        self._check_not_frozen()
        self._processor = processor
        return self

    def writer(self, writer: Writer) -> RouteBuilder:
        """Set the stage that serializes the output."""
        self._check_not_frozen()
        self._writer = writer
        return self

    # -- Introspection --

    @property
    def allowed_methods(self) -> frozenset[str] | None:
        """Methods the route accepts, or None for any method."""
        return self._methods

    @property
    def route_name(self) -> str | None:
        return self._name

    @property
    def extenders(self) -> tuple[Extender, ...]:
        return tuple(self._extenders)

    @property
    def stages(self) -> tuple[RequestModel, Validator, Processor, Writer]:
        """The model, validator, processor and writer, in run order."""
        return (self._model, self._validator, self._processor, self._writer)

    # -- Pipeline --

    async def handle(self, request: Request) -> Response:
        """Run the pipeline for one request and return its response.

        Never raises for stage failures: an ``HTTPError`` becomes a plain
        text response with its status; anything else becomes a 500.
        """
        stage = "extend"
        try:
            context = request.context
            for ext in self._extenders:
                context = await invoke(ext.extend, context)
            request = request.with_context(context)

            stage = "model"
            model: Any = await invoke(self._model.from_request, request)

            stage = "validate"
            await invoke(self._validator.validate, model)

            stage = "process"
            output: Any = await invoke(self._processor.process, model)

            stage = "serialize"
            payload = await invoke(self._writer.serialize, output)
            if not isinstance(payload, bytes | str):
                msg = (
                    f"{type(self._writer).__name__}.serialize() returned "
                    f"{type(payload).__name__}, expected bytes"
                )
                raise TypeError(msg)
        except HTTPError as exc:
            return handle_http_error(exc, request, stage)
        except Exception as exc:
            return handle_internal_error(exc, request, stage, debug=self.debug)

        content_type = getattr(self._writer, "content_type", PLAIN_TEXT)
        return Response(body=payload, content_type=content_type)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI endpoint, mounted on the Starlette route for ``path``."""
        request = Request.from_asgi(scope, receive)
        response = await self.handle(request)
        await send_response(response, send)

    # -- Internal --

    def _freeze(self) -> None:
        self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                f"Cannot modify route {self.path!r} after the router has started "
                "serving requests. Configure routes before calling router.run()."
            )
            raise RuntimeError(msg)
