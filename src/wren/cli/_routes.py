"""``wren routes`` — list registered routes.

Prints every route in match order with method, template, and handler.
"""

import argparse

from wren.cli._resolve import load_router


def run_routes(args: argparse.Namespace) -> None:
    """Print a table of METHOD, TEMPLATE, and HANDLER for ``args.router``."""
    router = load_router(args)

    routes = router.routes
    if not routes:
        print("No routes registered.")
        return

    rows: list[tuple[str, str, str]] = []
    for route in routes:
        handler_name = route.handler.describe()
        if route.name:
            handler_name = f"{handler_name} ({route.name})"
        if route.middleware:
            chain = ", ".join(mw.describe() for mw in route.middleware)
            handler_name = f"{handler_name} [{chain}]"
        rows.append((route.method, route.template, handler_name))

    max_method = max(max(len(r[0]) for r in rows), 6)  # "METHOD" header
    max_template = max(max(len(r[1]) for r in rows), 8)  # "TEMPLATE" header

    fmt = f"{{:<{max_method}}}  {{:<{max_template}}}  {{}}"
    print(fmt.format("METHOD", "TEMPLATE", "HANDLER"))
    sep_len = max_method + max_template + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for method, template, handler_name in rows:
        print(fmt.format(method, template, handler_name))
