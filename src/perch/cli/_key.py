"""``perch key`` — show how paths resolve without mounting anything.

Useful for checking which navigations will reuse a mounted page: paths
that print the same key share one page instance.
"""

import argparse
import sys

from perch.cli._resolve import resolve_app
from perch.errors import NotFound


def run_key(args: argparse.Namespace) -> None:
    """Print ``PATH  ROUTE  COMPONENT  KEY`` for each path.

    Exits with status 1 if any path has no accepting route.
    """
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    missing = False
    for path in args.paths:
        try:
            match, node = app.engine.resolve(path)
        except NotFound as exc:
            print(f"{path}  (no route): {exc}", file=sys.stderr)
            missing = True
            continue
        component = getattr(node.component, "__name__", str(node.component))
        print(f"{path}  {match.route.name}  {component}  {node.key}")

    if missing:
        raise SystemExit(1)
