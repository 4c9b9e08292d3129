"""``ghost routes`` — print the route table of a router."""

import argparse
import sys

from ghost.cli._resolve import resolve_router
from ghost.routing.builder import RouteBuilder


def _stage_name(stage: object) -> str:
    return type(stage).__name__


def format_route(builder: RouteBuilder) -> str:
    """One line per route: methods, path, name, then the stage chain."""
    methods = ",".join(sorted(builder.allowed_methods)) if builder.allowed_methods else "*"
    chain = [_stage_name(e) for e in builder.extenders]
    chain.extend(_stage_name(s) for s in builder.stages)
    name = f" [{builder.route_name}]" if builder.route_name else ""
    return f"{methods:<12} {builder.path}{name}  {' -> '.join(chain)}"


def show_routes(args: argparse.Namespace) -> None:
    """Resolve ``args.app`` to a Router and print its routes."""
    try:
        router = resolve_router(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if not router.routes:
        print("No routes registered.")
        return
    for builder in router.routes:
        print(format_route(builder))
