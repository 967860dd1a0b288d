"""Wren exception hierarchy.

Shared across the pattern compiler, route table, dispatcher, and link
generator so every module raises and catches the same types.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wren.routing.route import Route


class WrenError(Exception):
    """Base for all wren-specific errors."""


class ConfigurationError(WrenError):
    """Raised when routes or router configuration are invalid.

    Surfaces at registration time, never during dispatch.
    """


class InvalidTemplate(ConfigurationError, ValueError):  # noqa: N818
    """A route template has a malformed ``{name}`` placeholder."""

    def __init__(self, template: str, placeholder: str, reason: str) -> None:
        self.template = template
        self.placeholder = placeholder
        super().__init__(f"Invalid placeholder {{{placeholder}}} in {template!r}: {reason}")


class InvalidRequestMethod(WrenError, ValueError):  # noqa: N818
    """The request method is empty or missing."""

    def __init__(self, method: object = None) -> None:
        super().__init__(f"Request method value is invalid: {method!r}")


class RouteNotFound(WrenError, LookupError):  # noqa: N818
    """No registered route carries the requested name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Route name {name!r} not found.")


class InvalidHandler(WrenError, TypeError):  # noqa: N818
    """A handler or middleware reference cannot be invoked."""


class MiddlewareFailure(WrenError):  # noqa: N818
    """A route middleware raised; the handler was not invoked.

    ``route`` is the matched route whose middleware failed. The original
    exception is chained as ``__cause__``.
    """

    def __init__(self, route: "Route", middleware: str, error: BaseException) -> None:
        self.route = route
        self.template = route.template
        self.middleware = middleware
        super().__init__(f"Middleware {middleware} failed for {route.template!r}: {error}")


class InstanceNotReady(WrenError, LookupError):  # noqa: N818
    """Context accessors were used outside of a dispatch call."""

    def __init__(self) -> None:
        super().__init__(
            "No request is being dispatched. Context accessors are only "
            "available inside middleware and handlers."
        )


@dataclass(frozen=True, slots=True)
class HTTPError(WrenError):
    """An error that maps directly to an HTTP status code.

    Never raised by dispatch itself. ``DispatchOutcome.raise_for_status()``
    raises these for transports that prefer exceptions over outcomes.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404 — no route matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405 — no routes are registered for this HTTP method.

    Includes an ``Allow`` header listing the methods that do have routes.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )
