"""Invocable — one call contract for every handler reference.

Routes accept handlers in several shapes::

    router.get("/", index)                           # any callable
    router.get("/users", (UserController, "index"))  # class + method name
    router.get("/about", "myapp.views:about")        # import string

``resolve_invocable`` normalizes each shape once, at registration, into an
``Invocable``. Faults are not raised there: a reference that cannot be
called produces an ``Invocable`` that raises ``InvalidHandler`` when the
dispatcher calls it.

``invoke`` awaits the result when a handler is ``async def``, so the
async dispatch path can treat sync and async handlers uniformly. It can
also push blocking sync handlers onto an anyio worker thread.
"""

import contextvars
import importlib
import inspect
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from anyio import to_thread

from wren._internal.types import HandlerRef, MiddlewareRef
from wren.errors import InvalidHandler


@dataclass(frozen=True, slots=True)
class Invocable:
    """A resolved handler or middleware reference.

    ``func`` is ``None`` when the reference could not be resolved; calling
    the invocable then raises ``InvalidHandler`` with ``fault`` as message.
    """

    func: Callable[..., Any] | None
    label: str
    fault: str = ""

    def __call__(self, *args: Any) -> Any:
        if self.func is None:
            raise InvalidHandler(self.fault or f"Invalid route callback provided: {self.label}")
        return self.func(*args)

    @property
    def valid(self) -> bool:
        return self.func is not None

    @property
    def is_async(self) -> bool:
        """True when calling the target produces a coroutine."""
        if self.func is None:
            return False
        return inspect.iscoroutinefunction(self.func) or inspect.iscoroutinefunction(
            getattr(self.func, "__call__", None)
        )

    def describe(self) -> str:
        """Human-readable name for logs and the CLI."""
        return self.label


def _callable_label(func: Callable[..., Any]) -> str:
    name = getattr(func, "__qualname__", None) or getattr(func, "__name__", None)
    if name is None:
        return type(func).__qualname__
    module = getattr(func, "__module__", None)
    return f"{module}.{name}" if module else name


def _bound_to_class(cls: type, method_name: str) -> Invocable:
    label = f"{cls.__qualname__}.{method_name}"
    if not callable(getattr(cls, method_name, None)):
        return Invocable(None, label, f"{cls.__qualname__!r} has no callable {method_name!r}")

    if inspect.iscoroutinefunction(getattr(cls, method_name)):

        async def acall(*args: Any) -> Any:
            return await getattr(cls(), method_name)(*args)

        return Invocable(acall, label)

    def call(*args: Any) -> Any:
        return getattr(cls(), method_name)(*args)

    return Invocable(call, label)


def _from_import_string(ref: str) -> Invocable:
    module_path, _, attr_path = ref.partition(":")
    if not module_path or not attr_path:
        return Invocable(None, ref, f"Import string {ref!r} must look like 'module:attribute'")
    try:
        obj: Any = importlib.import_module(module_path)
        for attr in attr_path.split("."):
            obj = getattr(obj, attr)
    except (ImportError, AttributeError) as exc:
        return Invocable(None, ref, f"Cannot resolve handler {ref!r}: {exc}")
    if not callable(obj):
        return Invocable(None, ref, f"{ref!r} resolved to {type(obj).__name__}, not a callable")
    return Invocable(obj, ref)


def _is_class_pair(ref: object) -> bool:
    return (
        isinstance(ref, tuple)
        and len(ref) == 2
        and isinstance(ref[0], type)
        and isinstance(ref[1], str)
    )


def resolve_invocable(ref: HandlerRef) -> Invocable:
    """Normalize a handler reference into an ``Invocable``. Never raises."""
    if isinstance(ref, Invocable):
        return ref
    if isinstance(ref, str):
        return _from_import_string(ref)
    if _is_class_pair(ref):
        return _bound_to_class(ref[0], ref[1])
    if callable(ref):
        return Invocable(ref, _callable_label(ref))
    return Invocable(None, repr(ref), f"Invalid route callback provided: {ref!r}")


def resolve_middleware(ref: MiddlewareRef) -> tuple[Invocable, ...]:
    """Normalize a single middleware or an ordered sequence of them."""
    if ref is None:
        return ()
    if isinstance(ref, Sequence) and not isinstance(ref, str) and not _is_class_pair(ref):
        return tuple(resolve_invocable(item) for item in ref)
    return (resolve_invocable(ref),)


def _run_sync(func: Callable[..., Any], *args: Any) -> Any:
    """Run blocking call in anyio worker thread."""
    return to_thread.run_sync(func, *args)


async def invoke(handler: Callable[..., Any], *args: Any, offload: bool = False) -> Any:
    """Call a handler and await the result if it's awaitable.

    Works with both sync and async callables::

        def show(id):
            return f"user {id}"

        async def show(id):
            return await load_user(id)

    With ``offload=True`` a sync handler runs in an anyio worker thread,
    inside a copy of the caller's context so the request context stays
    visible to it.
    """
    if offload and not (isinstance(handler, Invocable) and handler.is_async):
        ctx = contextvars.copy_context()
        result = await _run_sync(ctx.run, handler, *args)
    else:
        result = handler(*args)
    if inspect.isawaitable(result):
        result = await result
    return result
