"""Shared type aliases used across wren modules."""

from collections.abc import Callable, Sequence
from typing import Any, TypeAlias

# Route handler: a user-defined callable receiving path params positionally
Handler: TypeAlias = Callable[..., Any]

# Anything resolve_invocable() accepts: a callable, a (cls, "method") pair,
# a "module:attr" import string, or None (rejected at dispatch time)
HandlerRef: TypeAlias = Handler | tuple[type, str] | str | None

# A single middleware reference or an ordered sequence of them
MiddlewareRef: TypeAlias = HandlerRef | Sequence[HandlerRef]
