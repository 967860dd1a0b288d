"""Route, RouteSpec, and RouteMatch frozen dataclasses."""

from dataclasses import dataclass, field
from typing import Any

from wren._internal.invoke import Invocable, resolve_invocable, resolve_middleware
from wren._internal.types import HandlerRef, MiddlewareRef
from wren.routing.pattern import CompiledPattern, compile_template


@dataclass(frozen=True, slots=True)
class RouteSpec:
    """What a caller registers: a template plus its handler references.

    Usage::

        spec = RouteSpec("/user/{id}", show_user, middleware=auth, name="user.show")
        router.add_spec("GET", spec)
    """

    template: str
    handler: HandlerRef = None
    middleware: MiddlewareRef = None
    name: str | None = None


@dataclass(frozen=True, slots=True)
class Route:
    """A compiled, registered route. Immutable after registration."""

    method: str
    template: str
    pattern: CompiledPattern
    handler: Invocable
    middleware: tuple[Invocable, ...] = ()
    name: str | None = None

    @classmethod
    def build(cls, method: str, spec: RouteSpec) -> "Route":
        """Compile *spec* into a route for *method*.

        Raises ``InvalidTemplate`` for malformed placeholders. Handler
        faults are deferred to dispatch time.
        """
        return cls(
            method=method.upper(),
            template=spec.template,
            pattern=compile_template(spec.template),
            handler=resolve_invocable(spec.handler),
            middleware=resolve_middleware(spec.middleware),
            name=spec.name,
        )

    @property
    def param_names(self) -> tuple[str, ...]:
        return self.pattern.param_names


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    params: dict[str, str] = field(default_factory=dict)

    @property
    def args(self) -> tuple[Any, ...]:
        """Param values in placeholder order, for positional invocation."""
        return tuple(self.params[name] for name in self.route.param_names)
