"""Ghost CLI — serve a router and inspect its routes.

Entry point registered as ``ghost`` in ``pyproject.toml``::

    [project.scripts]
    ghost = "ghost.cli:main"
"""

import argparse
import sys

from ghost._internal.logs import LEVELS


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``ghost`` command."""
    parser = argparse.ArgumentParser(
        prog="ghost",
        description="Ghost — five-stage request pipelines on a Starlette router.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- ghost run --------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Serve a router")
    run_parser.add_argument("app", help="Import string (e.g. myapp:router)")
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    run_parser.add_argument(
        "--log-level",
        default=None,
        choices=LEVELS,
        help="Log level (default: from the router config)",
    )

    # -- ghost routes -----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List a router's routes")
    routes_parser.add_argument("app", help="Import string (e.g. myapp:router)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "run":
        from ghost.cli._run import run_server

        run_server(args)
    elif args.command == "routes":
        from ghost.cli._routes import show_routes

        show_routes(args)
