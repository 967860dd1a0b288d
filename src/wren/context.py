"""Request-scoped context via ContextVar.

Provides:
- ``RequestContext``: method, path, and matched params of one dispatch.
- ``get_context()`` plus the ``params()``, ``current()``, ``method()``
  shortcuts for handler and middleware code.
- ``g``: a mutable namespace scoped to the current dispatch, so
  middleware can hand values to the handler.

The dispatcher activates both for the duration of one call and resets
them afterwards. Outside a dispatch the accessors raise
``InstanceNotReady``.

Thread safety:
    ``ContextVar`` is task-local under asyncio and thread-local under
    threads. Concurrent dispatches never observe each other's context.
"""

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from wren.errors import InstanceNotReady, InvalidRequestMethod


@dataclass(frozen=True, slots=True)
class RequestContext:
    """Snapshot of the request being dispatched. Read-only to handlers."""

    method: str
    path: str
    params: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.method or not isinstance(self.method, str):
            raise InvalidRequestMethod(self.method)
        object.__setattr__(self, "method", self.method.upper())
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))


# -- Request context --

context_var: ContextVar[RequestContext] = ContextVar("wren_context")
"""The current request context. Set by the dispatcher before middleware runs."""


def get_context() -> RequestContext:
    """Return the context of the dispatch in progress.

    Raises ``InstanceNotReady`` if called outside a dispatch.
    """
    try:
        return context_var.get()
    except LookupError:
        raise InstanceNotReady() from None


def params() -> Mapping[str, str]:
    """Matched path params of the current dispatch."""
    return get_context().params


def current() -> str:
    """Path of the current dispatch."""
    return get_context().path


def method() -> str:
    """Upper-cased method of the current dispatch."""
    return get_context().method


# -- Request-scoped namespace --

_g_store: ContextVar[dict[str, Any]] = ContextVar("wren_g")


class _RequestGlobals:
    """A mutable namespace scoped to the current dispatch.

    Usage::

        from wren.context import g

        # In middleware
        def load_user():
            g.user = users.get(params()["id"])

        # In handler
        def show(id):
            return g.user.name
    """

    __slots__ = ()

    def _get_dict(self) -> dict[str, Any]:
        try:
            return _g_store.get()
        except LookupError:
            raise InstanceNotReady() from None

    def __getattr__(self, name: str) -> Any:
        d = self._get_dict()
        try:
            return d[name]
        except KeyError:
            msg = f"'g' has no attribute {name!r} in the current dispatch scope"
            raise AttributeError(msg) from None

    def __setattr__(self, name: str, value: Any) -> None:
        self._get_dict()[name] = value

    def __delattr__(self, name: str) -> None:
        d = self._get_dict()
        try:
            del d[name]
        except KeyError:
            msg = f"'g' has no attribute {name!r} in the current dispatch scope"
            raise AttributeError(msg) from None

    def __contains__(self, name: str) -> bool:
        return name in self._get_dict()

    def get(self, name: str, default: Any = None) -> Any:
        """Get an attribute with a default value."""
        return self._get_dict().get(name, default)

    def __repr__(self) -> str:
        try:
            return f"<g {self._get_dict()!r}>"
        except InstanceNotReady:
            return "<g (no dispatch)>"


g = _RequestGlobals()
"""Dispatch-scoped namespace. Stores arbitrary per-request data."""


@contextmanager
def activate(ctx: RequestContext) -> Iterator[RequestContext]:
    """Publish *ctx* and a fresh ``g`` namespace until the block exits."""
    ctx_token = context_var.set(ctx)
    g_token = _g_store.set({})
    try:
        yield ctx
    finally:
        _g_store.reset(g_token)
        context_var.reset(ctx_token)
