from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Protocol, Union

from pyorbit.core.handle import RequestHandle, TaskHandle
from pyorbit.core.query import Query
from pyorbit.core.result import QueryResult
from pyorbit.lifecycle.observability import track_request
from pyorbit.utils.exceptions import TransportError
from pyorbit.utils.types import ResponseBody

logger = logging.getLogger(__name__)

# What a completion callback receives: a structured result, or the reason
# no result was produced.
Completion = Union[QueryResult[Any], TransportError]
CompletionCallback = Callable[[Completion], None]

# User-supplied transport: send the query, return the decoded response body
# (or an already-built QueryResult).
Fetch = Callable[[Query], Awaitable[Union[ResponseBody, QueryResult[Any]]]]


class QueryExecutor(Protocol):
    def execute(self, query: Query, on_complete: CompletionCallback) -> RequestHandle:
        ...


class AsyncQueryExecutor:
    """Runs each query as an asyncio task on the caller's event loop.

    ``on_complete`` is invoked exactly once per request from inside that
    loop, so completions are serialized with everything else the loop runs.
    A request cancelled before its fetch returns never calls back.

    Args:
        fetch: Coroutine function performing the actual transport call
        timeout: Optional per-request timeout in seconds; expiry is reported
            as a TransportError
    """

    def __init__(self, fetch: Fetch, *, timeout: float | None = None) -> None:
        if timeout is not None and timeout <= 0:
            raise ValueError("timeout must be > 0")
        self._fetch = fetch
        self.timeout = timeout

    def execute(self, query: Query, on_complete: CompletionCallback) -> TaskHandle:
        """Schedule ``query`` and return a handle to the scheduled task.

        Raises:
            RuntimeError: If called outside a running event loop
        """
        loop = asyncio.get_running_loop()
        task = loop.create_task(
            self._run(query, on_complete),
            name=f"pyorbit:{query.operation_name()}",
        )
        logger.debug("Scheduled %r", query)
        return TaskHandle(task)

    async def _run(self, query: Query, on_complete: CompletionCallback) -> None:
        operation = query.operation_name()
        async with track_request(operation, query.variables()) as trace:
            try:
                outcome: Completion = await self._fetch_result(query)
            except asyncio.CancelledError:
                logger.debug("Request for %s cancelled", operation)
                raise
            except Exception as e:
                outcome = _as_transport_error(operation, e)
                logger.warning("Request for %s failed: %s", operation, outcome)
            trace.record(outcome)
        on_complete(outcome)

    async def _fetch_result(self, query: Query) -> QueryResult[Any]:
        if self.timeout is None:
            response = await self._fetch(query)
        else:
            try:
                response = await asyncio.wait_for(self._fetch(query), self.timeout)
            except TimeoutError as e:
                raise TransportError(
                    f"{query.operation_name()} timed out after {self.timeout}s"
                ) from e
        if isinstance(response, QueryResult):
            return response
        return query.parse_result(response)


def _as_transport_error(operation: str, exc: Exception) -> TransportError:
    if isinstance(exc, TransportError):
        return exc
    error = TransportError(f"{operation} failed: {str(exc) or exc.__class__.__name__}")
    error.__cause__ = exc
    return error
