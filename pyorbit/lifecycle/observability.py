"""Per-request tracing for executors.

Every request run through ``track_request`` produces one ``RequestEvent``
once tracing is enabled. Events are tallied by outcome, optionally kept in
memory, handed to listeners and mirrored as OpenTelemetry spans when the
``otel`` extra is installed.
"""

from __future__ import annotations

import logging
import time
from collections import Counter
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncIterator, Callable

logger = logging.getLogger("pyorbit")

OUTCOME_OK = "ok"
OUTCOME_CANCELLED = "cancelled"
OUTCOME_TRANSPORT_ERROR = "transport_error"
_FAILED_OUTCOMES = frozenset({"errors", OUTCOME_TRANSPORT_ERROR})


@dataclass(frozen=True)
class RequestEvent:
    """One finished (or abandoned) request."""

    operation: str
    variables: dict[str, Any] | None = None
    duration_ms: float = 0.0
    outcome: str = OUTCOME_OK
    error_count: int = 0
    slow: bool = False

    @property
    def failed(self) -> bool:
        """True when the request produced no usable data."""
        return self.outcome in _FAILED_OUTCOMES


class RequestTrace:
    """Collects what the body of ``track_request`` learned about a request."""

    def __init__(self) -> None:
        self.outcome: str | None = None
        self.error_count = 0

    def record(self, completion: Any) -> None:
        """Record a QueryResult or the TransportError that replaced one."""
        if isinstance(completion, BaseException):
            self.outcome = OUTCOME_TRANSPORT_ERROR
            self.error_count = 1
        else:
            self.outcome = completion.outcome
            self.error_count = len(completion.errors)


class _TracingState:
    def __init__(self) -> None:
        self.enabled = False
        self.slow_request_threshold_ms = 500.0
        self.listeners: list[Callable[[RequestEvent], Any]] = []
        self.events: list[RequestEvent] = []
        self.capture_events = False
        self.outcomes: Counter[str] = Counter()


_state = _TracingState()


def enable_tracing(slow_request_ms: float = 500.0, capture_events: bool = False) -> None:
    """Start emitting a RequestEvent per request.

    Args:
        slow_request_ms: Requests slower than this log a warning
        capture_events: Keep events in memory for ``get_events()``
    """
    _state.enabled = True
    _state.slow_request_threshold_ms = slow_request_ms
    _state.capture_events = capture_events


def disable_tracing() -> None:
    """Stop tracing and forget listeners, events and tallies."""
    global _state
    _state = _TracingState()


def get_events() -> list[RequestEvent]:
    return list(_state.events)


def clear_events() -> None:
    _state.events.clear()


def get_outcome_counts() -> dict[str, int]:
    """Number of traced requests per outcome since tracing was enabled."""
    return dict(_state.outcomes)


def add_listener(callback: Callable[[RequestEvent], Any]) -> None:
    _state.listeners.append(callback)


def remove_listener(callback: Callable[[RequestEvent], Any]) -> None:
    _state.listeners.remove(callback)


def emit_event(event: RequestEvent) -> None:
    """Tally, store, warn if slow, then notify listeners.

    A listener that raises is logged and skipped; the others still run.
    """
    if not _state.enabled:
        return

    _state.outcomes[event.outcome] += 1
    if _state.capture_events:
        _state.events.append(event)

    if event.slow:
        logger.warning(
            "Slow request: %s took %.1fms (threshold: %.1fms, outcome: %s)",
            event.operation,
            event.duration_ms,
            _state.slow_request_threshold_ms,
            event.outcome,
        )

    for listener in list(_state.listeners):
        try:
            listener(event)
        except Exception:
            logger.exception("Request listener %r failed for %s", listener, event.operation)

    _try_emit_otel_span(event)


def _try_emit_otel_span(event: RequestEvent) -> None:
    try:
        from opentelemetry import trace
        from opentelemetry.trace import Status, StatusCode
    except ImportError:
        return

    tracer = trace.get_tracer("pyorbit")
    with tracer.start_as_current_span(f"graphql.{event.operation}") as span:
        span.set_attribute("graphql.operation.name", event.operation)
        span.set_attribute("graphql.outcome", event.outcome)
        span.set_attribute("graphql.error_count", event.error_count)
        span.set_attribute("graphql.duration_ms", event.duration_ms)
        if event.failed:
            span.set_status(Status(StatusCode.ERROR, event.outcome))


@asynccontextmanager
async def track_request(
    operation: str, variables: dict | None = None
) -> AsyncIterator[RequestTrace]:
    """Time the enclosed request and emit a RequestEvent when it ends.

    The body calls ``trace.record(...)`` with the completion. If the body
    exits with an exception before recording, the request counts as
    cancelled.
    """
    trace = RequestTrace()
    if not _state.enabled:
        yield trace
        return

    start = time.perf_counter()
    try:
        yield trace
    except BaseException:
        if trace.outcome is None:
            trace.outcome = OUTCOME_CANCELLED
        raise
    finally:
        duration_ms = (time.perf_counter() - start) * 1000
        emit_event(
            RequestEvent(
                operation=operation,
                variables=variables,
                duration_ms=duration_ms,
                outcome=trace.outcome or OUTCOME_OK,
                error_count=trace.error_count,
                slow=duration_ms > _state.slow_request_threshold_ms,
            )
        )
