"""Ordered route table grouped by HTTP method.

Routes are tried in registration order; the first one whose pattern
matches wins. There is no specificity scoring, so register specific
templates before general ones::

    table.register("GET", Route.build("GET", RouteSpec("/user/profile/{id}", profile)))
    table.register("GET", Route.build("GET", RouteSpec("/user/{id}", show)))

The table is built during setup and frozen before (or on) the first
dispatch. After freezing it is an immutable snapshot read without locks.
"""

import logging
import threading

from wren.errors import RouteNotFound
from wren.routing.route import Route

logger = logging.getLogger("wren.routing")

HTTP_METHODS: tuple[str, ...] = ("GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD")


class RouteTable:
    """Mapping of upper-cased method to an ordered sequence of routes."""

    __slots__ = ("_frozen", "_lock", "_routes")

    def __init__(self) -> None:
        self._routes: dict[str, list[Route] | tuple[Route, ...]] = {}
        self._lock = threading.Lock()
        self._frozen = False

    def register(self, method: str, route: Route) -> None:
        """Append *route* to the sequence for *method*. Never reorders."""
        key = method.upper()
        with self._lock:
            if self._frozen:
                msg = "Cannot register routes after the route table is frozen."
                raise RuntimeError(msg)
            routes = self._routes.setdefault(key, [])
            assert isinstance(routes, list)
            routes.append(route)
        logger.debug("registered %s %s (name=%s)", key, route.template, route.name)

    def routes_for(self, method: str) -> tuple[Route, ...]:
        """Routes for *method* in match order. Empty if none are registered."""
        return tuple(self._routes.get(method.upper(), ()))

    def has_method(self, method: str) -> bool:
        return bool(self._routes.get(method.upper()))

    @property
    def methods(self) -> frozenset[str]:
        """Methods that have at least one route."""
        return frozenset(m for m, routes in self._routes.items() if routes)

    @property
    def routes(self) -> list[Route]:
        """Every route, grouped by method in first-registration order."""
        return [route for routes in self._routes.values() for route in routes]

    def find_by_name(self, name: str) -> Route:
        """Return the first route carrying *name*, in table order.

        Duplicate names are not rejected at registration; the earliest
        registered route wins.
        """
        for routes in self._routes.values():
            for route in routes:
                if route.name == name:
                    return route
        raise RouteNotFound(name)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Make the table read-only. Idempotent."""
        if self._frozen:
            return
        with self._lock:
            if self._frozen:
                return
            self._routes = {m: tuple(routes) for m, routes in self._routes.items()}
            self._frozen = True

    def __len__(self) -> int:
        return sum(len(routes) for routes in self._routes.values())

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return f"<RouteTable {len(self)} routes, {state}>"
