"""Router configuration.

RouterConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(freeze_on_dispatch=False)
    """

    # Freeze the route table on the first dispatch (read-only afterwards)
    freeze_on_dispatch: bool = True

    # Log middleware/handler failures before re-raising them
    log_failures: bool = True

    # Methods used by @router.route() when none are given
    default_methods: tuple[str, ...] = ("GET",)

    # dispatch_async: run sync middleware/handlers in an anyio worker thread
    offload_sync_handlers: bool = False
