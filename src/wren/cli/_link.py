"""``wren link`` — build a path from a route name."""

import argparse
import sys

from wren.cli._resolve import load_router
from wren.errors import RouteNotFound


def parse_params(pairs: list[str]) -> dict[str, str]:
    """Parse ``KEY=VALUE`` arguments. Values may themselves contain ``=``."""
    params: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            msg = f"Expected KEY=VALUE, got {pair!r}"
            raise ValueError(msg)
        params[key] = value
    return params


def run_link(args: argparse.Namespace) -> None:
    """Print the path for ``args.name`` with ``args.params`` substituted."""
    router = load_router(args)

    try:
        params = parse_params(args.params)
        print(router.link(args.name, params))
    except (RouteNotFound, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
