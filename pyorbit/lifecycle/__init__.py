from pyorbit.lifecycle.observability import (
    enable_tracing,
    disable_tracing,
    RequestEvent,
    add_listener,
    remove_listener,
    get_events,
    clear_events,
    get_outcome_counts,
)

__all__ = [
    "enable_tracing",
    "disable_tracing",
    "RequestEvent",
    "add_listener",
    "remove_listener",
    "get_events",
    "clear_events",
    "get_outcome_counts",
]
