"""Perch CLI — route table inspection and key resolution.

Entry point registered as ``perch`` in ``pyproject.toml``::

    [project.scripts]
    perch = "perch.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``perch`` command."""
    parser = argparse.ArgumentParser(
        prog="perch",
        description="Perch — page routing and page state for forum front ends.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- perch routes -----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes")
    routes_parser.add_argument(
        "app",
        help="Import string (e.g. forum:app)",
    )

    # -- perch key --------------------------------------------------------
    key_parser = subparsers.add_parser(
        "key",
        help="Show which page and key a path resolves to",
    )
    key_parser.add_argument(
        "app",
        help="Import string (e.g. forum:app)",
    )
    key_parser.add_argument("paths", nargs="+", help="Paths to resolve (e.g. /d/42-hello/3)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from perch.cli._routes import run_routes

        run_routes(args)
    elif args.command == "key":
        from perch.cli._key import run_key

        run_key(args)
