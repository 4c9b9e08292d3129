"""``ghost run`` — serve a router with uvicorn."""

import argparse
import sys

from ghost.cli._resolve import resolve_router


def run_server(args: argparse.Namespace) -> None:
    """Resolve ``args.app`` to a Router and serve it until interrupted.

    CLI flags override the router's config.
    """
    try:
        router = resolve_router(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    from ghost.server.serve import Server

    server = Server(router, host=args.host, port=args.port, log_level=args.log_level)
    server.run()
