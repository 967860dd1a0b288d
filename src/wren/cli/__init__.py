"""Wren CLI — inspect a router's table, matches, and links.

Entry point registered as ``wren`` in ``pyproject.toml``::

    [project.scripts]
    wren = "wren.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``wren`` command."""
    parser = argparse.ArgumentParser(
        prog="wren",
        description="Wren — request routing and dispatch.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log routing decisions to stderr",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- wren routes ------------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes")
    routes_parser.add_argument("router", help="Import string (e.g. myapp:router)")

    # -- wren match -------------------------------------------------------
    match_parser = subparsers.add_parser(
        "match", help="Show which route serves a request, without running it"
    )
    match_parser.add_argument("router", help="Import string (e.g. myapp:router)")
    match_parser.add_argument("method", help="HTTP method (e.g. GET)")
    match_parser.add_argument("path", help="Request path (e.g. /user/42)")

    # -- wren link --------------------------------------------------------
    link_parser = subparsers.add_parser("link", help="Build a path from a route name")
    link_parser.add_argument("router", help="Import string (e.g. myapp:router)")
    link_parser.add_argument("name", help="Route name (e.g. user.show)")
    link_parser.add_argument(
        "params",
        nargs="*",
        metavar="KEY=VALUE",
        help="Placeholder values",
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from wren.cli._routes import run_routes

        run_routes(args)
    elif args.command == "match":
        from wren.cli._match import run_match

        run_match(args)
    elif args.command == "link":
        from wren.cli._link import run_link

        run_link(args)
