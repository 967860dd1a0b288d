"""Wren — request routing and dispatch.

Maps ``(method, path)`` to a registered handler, extracts ``{name}`` path
params, runs route middleware, and builds paths back from route names.

Basic usage::

    from wren import Router

    router = Router()

    @router.route("/user/{id}", name="user.show")
    def show_user(id):
        return f"user {id}"

    outcome = router.dispatch("GET", "/user/42")
    outcome.result                              # "user 42"
    router.link("user.show", {"id": "7"})       # "/user/7"

Handlers and middleware read the current request through the context
accessors::

    from wren import get_context

    def audit():
        ctx = get_context()
        log.info("%s %s %s", ctx.method, ctx.path, dict(ctx.params))
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "DispatchOutcome",
    "Dispatcher",
    "HTTPError",
    "InstanceNotReady",
    "InvalidHandler",
    "InvalidRequestMethod",
    "InvalidTemplate",
    "LinkGenerator",
    "MethodNotAllowed",
    "MiddlewareFailure",
    "NotFound",
    "Outcome",
    "RequestContext",
    "Route",
    "RouteNotFound",
    "RouteSpec",
    "RouteTable",
    "Router",
    "RouterConfig",
    "WrenError",
    "compile_template",
    "g",
    "get_context",
]

# name -> module that defines it
_LAZY_IMPORTS: dict[str, str] = {
    "ConfigurationError": "wren.errors",
    "DispatchOutcome": "wren.dispatch",
    "Dispatcher": "wren.dispatch",
    "HTTPError": "wren.errors",
    "InstanceNotReady": "wren.errors",
    "InvalidHandler": "wren.errors",
    "InvalidRequestMethod": "wren.errors",
    "InvalidTemplate": "wren.errors",
    "LinkGenerator": "wren.routing.links",
    "MethodNotAllowed": "wren.errors",
    "MiddlewareFailure": "wren.errors",
    "NotFound": "wren.errors",
    "Outcome": "wren.dispatch",
    "RequestContext": "wren.context",
    "Route": "wren.routing.route",
    "RouteNotFound": "wren.errors",
    "RouteSpec": "wren.routing.route",
    "RouteTable": "wren.routing.table",
    "Router": "wren.router",
    "RouterConfig": "wren.config",
    "WrenError": "wren.errors",
    "compile_template": "wren.routing.pattern",
    "g": "wren.context",
    "get_context": "wren.context",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import wren`` fast while providing a clean top-level API.
    """
    module_path = _LAZY_IMPORTS.get(name)
    if module_path is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_path), name)
