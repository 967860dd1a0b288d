"""``wren match`` — show which route a request would hit.

Resolution only: no middleware or handler is run.
"""

import argparse
import sys

from wren.cli._resolve import load_router
from wren.errors import InvalidRequestMethod


def run_match(args: argparse.Namespace) -> None:
    """Print the matching route and its params, or the 404/405 outcome.

    Exits with status 1 when nothing matches.
    """
    router = load_router(args)

    try:
        outcome = router.resolve(args.method, args.path)
    except InvalidRequestMethod as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if outcome.match is None:
        print(f"{outcome.status} {outcome.outcome.value}")
        if outcome.allowed:
            print(f"Allowed methods: {', '.join(sorted(outcome.allowed))}")
        raise SystemExit(1)

    route = outcome.match.route
    print(f"{route.method} {route.template} -> {route.handler.describe()}")
    if route.name:
        print(f"  name: {route.name}")
    for key, value in outcome.match.params.items():
        print(f"  {key} = {value}")
