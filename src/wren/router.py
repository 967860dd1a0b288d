"""Wren router — registration surface, dispatch, and link generation.

Mutable during setup (route registration, fallback handlers).
Frozen at runtime when ``dispatch()`` is first called, or explicitly
with ``freeze()``.
"""

from collections.abc import Callable, Iterable, Mapping
from typing import Any

from wren._internal.types import Handler, HandlerRef, MiddlewareRef
from wren.config import RouterConfig
from wren.dispatch import Dispatcher, DispatchOutcome
from wren.routing.links import LinkGenerator
from wren.routing.route import Route, RouteSpec
from wren.routing.table import RouteTable


class Router:
    """The wren router.

    Usage::

        router = Router()

        router.get("/user/profile/{id}", show_profile)
        router.get("/user/{id}", show_user, name="user.show")
        router.post("/user", (UserController, "create"), middleware=check_csrf)

        @router.route("/health")
        def health():
            return "ok"

        outcome = router.dispatch("GET", "/user/42")
        router.link("user.show", {"id": "42"})  # "/user/42"

    Thread safety:
        Registration is meant to happen at startup. The route table is
        frozen on first dispatch (see ``RouterConfig.freeze_on_dispatch``)
        and read without locks afterwards; the request context is held in
        a ContextVar, so concurrent dispatches do not share state.
    """

    __slots__ = ("_dispatcher", "_links", "_table", "config")

    def __init__(self, config: RouterConfig | None = None) -> None:
        self.config: RouterConfig = config or RouterConfig()
        self._table = RouteTable()
        self._dispatcher = Dispatcher(self._table, self.config)
        self._links = LinkGenerator(self._table)

    # -- Route registration --

    def add(
        self,
        method: str,
        template: str,
        handler: HandlerRef,
        *,
        middleware: MiddlewareRef = None,
        name: str | None = None,
    ) -> Route:
        """Register *handler* for *method* and *template*.

        Raises ``InvalidTemplate`` for malformed placeholders and
        ``RuntimeError`` once the router is frozen.
        """
        return self.add_spec(method, RouteSpec(template, handler, middleware, name))

    def add_spec(self, method: str, spec: RouteSpec) -> Route:
        """Register a prepared ``RouteSpec`` for *method*."""
        route = Route.build(method, spec)
        self._table.register(route.method, route)
        return route

    def get(
        self,
        template: str,
        handler: HandlerRef,
        *,
        middleware: MiddlewareRef = None,
        name: str | None = None,
    ) -> Route:
        return self.add("GET", template, handler, middleware=middleware, name=name)

    def post(
        self,
        template: str,
        handler: HandlerRef,
        *,
        middleware: MiddlewareRef = None,
        name: str | None = None,
    ) -> Route:
        return self.add("POST", template, handler, middleware=middleware, name=name)

    def put(
        self,
        template: str,
        handler: HandlerRef,
        *,
        middleware: MiddlewareRef = None,
        name: str | None = None,
    ) -> Route:
        return self.add("PUT", template, handler, middleware=middleware, name=name)

    def patch(
        self,
        template: str,
        handler: HandlerRef,
        *,
        middleware: MiddlewareRef = None,
        name: str | None = None,
    ) -> Route:
        return self.add("PATCH", template, handler, middleware=middleware, name=name)

    def delete(
        self,
        template: str,
        handler: HandlerRef,
        *,
        middleware: MiddlewareRef = None,
        name: str | None = None,
    ) -> Route:
        return self.add("DELETE", template, handler, middleware=middleware, name=name)

    def options(
        self,
        template: str,
        handler: HandlerRef,
        *,
        middleware: MiddlewareRef = None,
        name: str | None = None,
    ) -> Route:
        return self.add("OPTIONS", template, handler, middleware=middleware, name=name)

    def head(
        self,
        template: str,
        handler: HandlerRef,
        *,
        middleware: MiddlewareRef = None,
        name: str | None = None,
    ) -> Route:
        return self.add("HEAD", template, handler, middleware=middleware, name=name)

    def route(
        self,
        template: str,
        *,
        methods: Iterable[str] | None = None,
        middleware: MiddlewareRef = None,
        name: str | None = None,
    ) -> Callable[[Handler], Handler]:
        """Register a route handler via decorator.

        Args:
            template: Path template. Use ``{param}`` for path parameters.
            methods: HTTP methods. A single method may be given as a plain
                string. Defaults to ``RouterConfig.default_methods``.
            middleware: A middleware or ordered list of middleware run before
                the handler.
            name: Optional route name for link generation. With several
                methods, every registered route carries the name.
        """

        if isinstance(methods, str):
            methods = (methods,)

        def decorator(func: Handler) -> Handler:
            for method in methods or self.config.default_methods:
                self.add(method, template, func, middleware=middleware, name=name)
            return func

        return decorator

    # -- Fallback handlers --

    def not_found(self, handler: Handler) -> Handler:
        """Register the handler run when no route matches. Usable as a decorator."""
        self._check_not_frozen()
        self._dispatcher.set_not_found(handler)
        return handler

    def not_allowed(self, handler: Handler) -> Handler:
        """Register the handler run for methods with no routes. Usable as a decorator."""
        self._check_not_frozen()
        self._dispatcher.set_not_allowed(handler)
        return handler

    # -- Runtime --

    def dispatch(self, method: str, path: str) -> DispatchOutcome:
        """Dispatch a request. See ``Dispatcher.dispatch``."""
        return self._dispatcher.dispatch(method, path)

    async def dispatch_async(self, method: str, path: str) -> DispatchOutcome:
        """Dispatch a request, awaiting async middleware and handlers."""
        return await self._dispatcher.dispatch_async(method, path)

    def resolve(self, method: str, path: str) -> DispatchOutcome:
        """Find the route a request would hit without running it."""
        return self._dispatcher.resolve(method, path)

    def link(self, name: str, params: Mapping[str, Any] | None = None) -> str:
        """Build a path from a route name. See ``LinkGenerator.link``."""
        return self._links.link(name, params)

    def freeze(self) -> None:
        """Make the route table read-only."""
        self._table.freeze()

    @property
    def frozen(self) -> bool:
        return self._table.frozen

    @property
    def routes(self) -> list[Route]:
        """All registered routes, in table order."""
        return self._table.routes

    @property
    def table(self) -> RouteTable:
        return self._table

    # -- Internal --

    def _check_not_frozen(self) -> None:
        if self._table.frozen:
            msg = (
                "Cannot modify the router after it has started dispatching. "
                "Register routes and fallback handlers before the first dispatch."
            )
            raise RuntimeError(msg)
