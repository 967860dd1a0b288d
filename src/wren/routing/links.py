"""Reverse routing — build a concrete path from a route name.

Substitution is raw: values are inserted as given, without URL-encoding
or validation. A value containing ``/`` produces a path that will not
match the route it came from.
"""

from collections.abc import Mapping

from wren.routing.pattern import Placeholder
from wren.routing.table import RouteTable


class LinkGenerator:
    """Generates paths from named routes in a ``RouteTable``.

    Usage::

        links = LinkGenerator(table)
        links.link("user.show", {"id": "42"})  # "/user/42"
        links.link("user.show")                # "/user/{id}"
    """

    __slots__ = ("_table",)

    def __init__(self, table: RouteTable) -> None:
        self._table = table

    def link(self, name: str, params: Mapping[str, object] | None = None) -> str:
        """Build the path for route *name*.

        With no params the template form is returned, placeholders as bare
        ``{name}`` tokens. Placeholders missing from *params* are rendered
        the same way; extra keys are ignored.

        Raises ``RouteNotFound`` if no route carries *name*.
        """
        route = self._table.find_by_name(name)
        if not params:
            return "".join(str(part) for part in route.pattern.parts)

        out: list[str] = []
        for part in route.pattern.parts:
            if isinstance(part, Placeholder) and part.name in params:
                out.append(str(params[part.name]))
            else:
                out.append(str(part))
        return "".join(out)
