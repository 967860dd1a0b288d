"""Dispatcher — resolve one (method, path) and run middleware then handler.

Per call:

1. No routes for the method  -> ``METHOD_NOT_ALLOWED`` (not-allowed handler, if any)
2. Scan the method's routes in registration order; first match wins
3. Publish a ``RequestContext`` with the matched params
4. Run the route's middleware in order, with no arguments
5. Run the handler with the param values as positional arguments
6. Nothing matched            -> ``NOT_FOUND`` (not-found handler, if any)

The dispatcher never produces status codes on a wire. It returns a
``DispatchOutcome`` and the transport decides what each outcome means.
Middleware and handler failures are logged, then re-raised to the caller.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from wren._internal.invoke import Invocable, invoke, resolve_invocable
from wren._internal.types import HandlerRef
from wren.config import RouterConfig
from wren.context import RequestContext, activate
from wren.errors import InvalidHandler, MethodNotAllowed, MiddlewareFailure, NotFound
from wren.routing.route import Route, RouteMatch
from wren.routing.table import RouteTable

logger = logging.getLogger("wren.dispatch")


class Outcome(Enum):
    """Discriminant of a dispatch result."""

    MATCHED = "matched"
    NOT_FOUND = "not_found"
    METHOD_NOT_ALLOWED = "method_not_allowed"


_STATUS = {
    Outcome.MATCHED: 200,
    Outcome.NOT_FOUND: 404,
    Outcome.METHOD_NOT_ALLOWED: 405,
}


@dataclass(frozen=True, slots=True)
class DispatchOutcome:
    """Result of one dispatch call.

    ``result`` is the handler's return value for ``MATCHED``, or the
    fallback handler's return value (``None`` when none is configured)
    for ``NOT_FOUND`` and ``METHOD_NOT_ALLOWED``.
    """

    outcome: Outcome
    result: Any = None
    match: RouteMatch | None = None
    allowed: frozenset[str] = frozenset()

    @property
    def found(self) -> bool:
        return self.outcome is Outcome.MATCHED

    @property
    def status(self) -> int:
        """The HTTP status a transport would normally send for this outcome."""
        return _STATUS[self.outcome]

    @property
    def params(self) -> dict[str, str]:
        return dict(self.match.params) if self.match is not None else {}

    def raise_for_status(self) -> None:
        """Raise ``NotFound`` or ``MethodNotAllowed`` unless a route matched."""
        if self.outcome is Outcome.NOT_FOUND:
            raise NotFound()
        if self.outcome is Outcome.METHOD_NOT_ALLOWED:
            raise MethodNotAllowed(self.allowed)


class Dispatcher:
    """Dispatches requests against a ``RouteTable``.

    Usage::

        dispatcher = Dispatcher(table)
        outcome = dispatcher.dispatch("GET", "/user/42")
        if outcome.found:
            body = outcome.result
    """

    __slots__ = ("_config", "_not_allowed", "_not_found", "_table")

    def __init__(
        self,
        table: RouteTable,
        config: RouterConfig | None = None,
        *,
        not_found: HandlerRef = None,
        not_allowed: HandlerRef = None,
    ) -> None:
        self._table = table
        self._config = config or RouterConfig()
        self._not_found: Invocable | None = None
        self._not_allowed: Invocable | None = None
        self.set_not_found(not_found)
        self.set_not_allowed(not_allowed)

    def set_not_found(self, handler: HandlerRef) -> None:
        """Set the handler invoked (with no arguments) when no route matches."""
        self._not_found = resolve_invocable(handler) if handler is not None else None

    def set_not_allowed(self, handler: HandlerRef) -> None:
        """Set the handler invoked (with no arguments) for unregistered methods."""
        self._not_allowed = resolve_invocable(handler) if handler is not None else None

    @property
    def table(self) -> RouteTable:
        return self._table

    # -- Resolution --

    def resolve(self, method: str, path: str) -> DispatchOutcome:
        """Find the route for a request without running anything.

        Raises ``InvalidRequestMethod`` if *method* is empty.
        """
        ctx = RequestContext(method, path)
        if self._config.freeze_on_dispatch:
            self._table.freeze()

        if not self._table.has_method(ctx.method):
            logger.debug("405 %s %s", ctx.method, path)
            return DispatchOutcome(Outcome.METHOD_NOT_ALLOWED, allowed=self._table.methods)

        for route in self._table.routes_for(ctx.method):
            captured = route.pattern.match(path)
            if captured is not None:
                logger.debug("match %s %s -> %s", ctx.method, path, route.template)
                return DispatchOutcome(Outcome.MATCHED, match=RouteMatch(route, captured))

        logger.debug("404 %s %s", ctx.method, path)
        return DispatchOutcome(Outcome.NOT_FOUND)

    def _fallback(self, outcome: DispatchOutcome) -> Invocable | None:
        if outcome.outcome is Outcome.METHOD_NOT_ALLOWED:
            return self._not_allowed
        return self._not_found

    # -- Sync dispatch --

    def dispatch(self, method: str, path: str) -> DispatchOutcome:
        """Dispatch a request and return its outcome.

        Raises ``MiddlewareFailure`` if a middleware raises (the handler is
        not run), ``InvalidHandler`` if a reference cannot be invoked, and
        re-raises whatever the handler raises.
        """
        outcome = self.resolve(method, path)
        ctx = RequestContext(method, path, outcome.params)

        if outcome.match is None:
            fallback = self._fallback(outcome)
            if fallback is None:
                return outcome
            with activate(ctx):
                result = self._call(fallback, (), path)
            return DispatchOutcome(outcome.outcome, result=result, allowed=outcome.allowed)

        route = outcome.match.route
        with activate(ctx):
            for mw in route.middleware:
                self._call_middleware(mw, route)
            result = self._call(route.handler, outcome.match.args, path)
        return DispatchOutcome(Outcome.MATCHED, result=result, match=outcome.match)

    def _call(self, target: Invocable, args: tuple[Any, ...], path: str) -> Any:
        self._ensure_valid(target, path)
        try:
            return target(*args)
        except Exception:
            self._record("handler %s failed for %s", target.describe(), path)
            raise

    def _call_middleware(self, mw: Invocable, route: Route) -> None:
        self._ensure_valid(mw, route.template)
        try:
            mw()
        except Exception as exc:
            self._record("middleware %s failed for %s", mw.describe(), route.template)
            raise MiddlewareFailure(route, mw.describe(), exc) from exc

    def _ensure_valid(self, target: Invocable, where: str) -> None:
        if not target.valid:
            if self._config.log_failures:
                logger.error(
                    "invalid handler %s for %s: %s", target.describe(), where, target.fault
                )
            raise InvalidHandler(target.fault)

    def _record(self, msg: str, *args: Any) -> None:
        if self._config.log_failures:
            logger.exception(msg, *args)

    # -- Async dispatch --

    async def dispatch_async(self, method: str, path: str) -> DispatchOutcome:
        """Like ``dispatch``, awaiting async middleware and handlers."""
        outcome = self.resolve(method, path)
        ctx = RequestContext(method, path, outcome.params)

        if outcome.match is None:
            fallback = self._fallback(outcome)
            if fallback is None:
                return outcome
            with activate(ctx):
                result = await self._call_async(fallback, (), path)
            return DispatchOutcome(outcome.outcome, result=result, allowed=outcome.allowed)

        route = outcome.match.route
        with activate(ctx):
            for mw in route.middleware:
                await self._call_middleware_async(mw, route)
            result = await self._call_async(route.handler, outcome.match.args, path)
        return DispatchOutcome(Outcome.MATCHED, result=result, match=outcome.match)

    async def _call_async(self, target: Invocable, args: tuple[Any, ...], path: str) -> Any:
        self._ensure_valid(target, path)
        try:
            return await invoke(target, *args, offload=self._config.offload_sync_handlers)
        except Exception:
            self._record("handler %s failed for %s", target.describe(), path)
            raise

    async def _call_middleware_async(self, mw: Invocable, route: Route) -> None:
        self._ensure_valid(mw, route.template)
        try:
            await invoke(mw, offload=self._config.offload_sync_handlers)
        except Exception as exc:
            self._record("middleware %s failed for %s", mw.describe(), route.template)
            raise MiddlewareFailure(route, mw.describe(), exc) from exc

