"""Users — the five stages written out by hand.

``GET /user/id/{id}`` with a context extender carrying a secret, a model
that parses ``{id}``, a validator rejecting negative ids, a processor
that knows exactly one user, and a JSON writer.

Run:
    python app.py
"""

import json
from dataclasses import asdict, dataclass

from ghost import BadRequest, ContextKey, HTTPError, NotFound, Request, RequestContext, Router

SECRET = ContextKey("secret", str)


class SecretExtender:
    def __init__(self, secret: str) -> None:
        self.secret = secret

    def extend(self, context: RequestContext) -> RequestContext:
        return context.with_value(SECRET, self.secret)


@dataclass(frozen=True, slots=True)
class User:
    id: int
    name: str
    email: str
    secret: str


@dataclass(frozen=True, slots=True)
class UserIdGet:
    id: int
    secret: str


class UserIdGetModel:
    """Extracts ``{id}`` from the URL and the secret from the context."""

    def from_request(self, request: Request) -> UserIdGet:
        try:
            user_id = int(request.path_params["id"])
        except ValueError as exc:
            raise HTTPError.wrap(exc, 400) from exc
        return UserIdGet(id=user_id, secret=request.context[SECRET])


class UserIdGetValidator:
    def validate(self, model: UserIdGet) -> None:
        if model.id < 0:
            raise BadRequest("Please enter a valid user id.")


class UserIdGetProcessor:
    def process(self, model: UserIdGet) -> User:
        if model.id == 1:
            return User(id=1, name="Joe", email="joe@example.com", secret=model.secret)
        raise NotFound("User not found!")


class UserWriter:
    content_type = "application/json"

    def serialize(self, output: User) -> bytes:
        try:
            return json.dumps(asdict(output)).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise HTTPError.wrap(exc, 500) from exc


def build_router() -> Router:
    router = Router()

    router.add_route("/user/id/{id}") \
        .methods("GET") \
        .extender(SecretExtender("s3cr3tstr!ng")) \
        .model(UserIdGetModel()) \
        .validator(UserIdGetValidator()) \
        .processor(UserIdGetProcessor()) \
        .writer(UserWriter())

    return router


router = build_router()

if __name__ == "__main__":
    router.run()
