"""Single-flight loading of successive pages into a PaginationState."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import partial
from typing import Any, Callable, Generic, Sequence, TypeVar

from pyorbit.core.client import get_executor
from pyorbit.core.executor import Completion, QueryExecutor
from pyorbit.core.handle import RequestHandle
from pyorbit.core.pagination import EXHAUSTED, NOT_LOADED, PaginationState
from pyorbit.core.query import Query
from pyorbit.core.result import QueryError
from pyorbit.core.sinks import ErrorSink, LoggingErrorSink
from pyorbit.utils.pagination import PaginationPage

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(eq=False)
class _PageRequest:
    query: Query
    handle: RequestHandle | None = None


class PageLoadController(Generic[T]):
    """Loads the next page of a collection, one request at a time.

    At most one request is in flight. Asking for the next page while one is
    loading, or after the last page arrived, does nothing; it is never
    queued. Because a second request cannot start before the first one
    completes, pages reach the state in the order they were requested.

    Failures never raise out of this class. They go to the error sink and
    leave the state as it was, so the caller can simply ask again.
    A page that promises more but carries no cursor is reported and stops
    loading until reset().

    Args:
        query: Query for the first page; later pages reuse it with the
            cursor variable replaced.
        extract_page: Turns a result's data into a PaginationPage. May
            return None when the payload holds no connection.
        executor: Executor to run queries on; defaults to the one
            registered under ``alias``.
        error_sink: Receives every error; defaults to LoggingErrorSink.
        dedupe_key: Optional key function to drop items repeated across pages.
        on_page: Optional callback invoked after each page is applied.

    Raises:
        ValueError: If the query declares no cursor variable
        NotConfigured: If no executor is given and none is registered
    """

    def __init__(
        self,
        query: Query,
        extract_page: Callable[[Any], PaginationPage[T] | None],
        *,
        executor: QueryExecutor | None = None,
        error_sink: ErrorSink | None = None,
        alias: str = "default",
        dedupe_key: Callable[[T], Any] | None = None,
        on_page: Callable[[PaginationPage[T]], Any] | None = None,
    ) -> None:
        if not query.has_variable(query.cursor_variable()):
            raise ValueError(
                f"{query.__class__.__name__} has no '{query.cursor_variable()}' "
                "variable to paginate with"
            )
        self._query = query
        self._extract_page = extract_page
        self._executor = executor if executor is not None else get_executor(alias)
        self._error_sink = error_sink if error_sink is not None else LoggingErrorSink()
        self._dedupe_key = dedupe_key
        self._on_page = on_page
        self._state: PaginationState[T] = PaginationState.initial(dedupe_key=dedupe_key)
        self._in_flight: _PageRequest | None = None

    # --- State ---

    @property
    def state(self) -> PaginationState[T]:
        return self._state

    @property
    def items(self) -> tuple[T, ...]:
        return self._state.accumulated

    def is_loading(self) -> bool:
        return self._in_flight is not None

    # --- Requests ---

    def request_next_page_if_needed(self) -> bool:
        """Issue a request for the next page unless one is loading or none is left.

        Returns:
            True if a request was issued
        """
        if self._in_flight is not None:
            return False

        cursor = self._state.next_cursor()
        if cursor is EXHAUSTED:
            return False
        if cursor is None:
            # More pages were promised without a cursor to reach them
            logger.debug("Not requesting past page %d: no cursor", self._state.page_count)
            return False
        query = self._query if cursor is NOT_LOADED else self._query.with_cursor(cursor)

        request = _PageRequest(query)
        self._in_flight = request
        logger.debug("Requesting page %d: %r", self._state.page_count + 1, query)
        try:
            handle = self._executor.execute(query, partial(self._on_complete, request))
        except Exception as e:
            logger.warning("Could not issue %s: %s", query.operation_name(), e)
            if self._in_flight is request:
                self._in_flight = None
            self._report([QueryError.from_exception(e)])
            return False

        # An executor may complete synchronously inside execute()
        if self._in_flight is request:
            request.handle = handle
        return True

    def cancel_active(self) -> None:
        """Cancel and release the in-flight request, if any."""
        request = self._in_flight
        if request is None:
            return
        self._in_flight = None
        if request.handle is not None:
            request.handle.cancel()
        logger.debug("Cancelled page request %r", request.query)

    def reset(self) -> None:
        """Start a new pagination session, dropping everything loaded so far."""
        self.cancel_active()
        self._state = PaginationState.initial(dedupe_key=self._dedupe_key)

    # --- Completion ---

    def _on_complete(self, request: _PageRequest, outcome: Completion) -> None:
        if request is not self._in_flight:
            logger.debug("Ignoring completion of released request %r", request.query)
            return
        self._in_flight = None

        if isinstance(outcome, BaseException):
            self._report([QueryError.from_exception(outcome)])
            return

        errors = list(outcome.errors)
        if outcome.data is not None:
            try:
                page = self._extract_page(outcome.data)
            except Exception as e:
                logger.warning("Could not read a page from %s data: %s", request.query.operation_name(), e)
                page = None
                errors.append(QueryError.from_exception(e))
            if page is not None:
                added = self._state.apply(page)
                logger.debug(
                    "Applied page %d (+%d items, has_more=%s)",
                    self._state.page_count,
                    added,
                    page.has_more,
                )
                if page.has_more and page.cursor is None:
                    errors.append(
                        QueryError(
                            message=f"{request.query.operation_name()} reported more pages "
                            "but sent no cursor"
                        )
                    )
                self._notify(page)
            elif not errors:
                errors.append(
                    QueryError(message=f"{request.query.operation_name()} returned no page")
                )
        self._report(errors)

    def _notify(self, page: PaginationPage[T]) -> None:
        if self._on_page is None:
            return
        try:
            self._on_page(page)
        except Exception:
            logger.exception("on_page callback failed for page %d", self._state.page_count)

    def _report(self, errors: Sequence[QueryError]) -> None:
        if errors:
            self._error_sink.report(list(errors))

    def __repr__(self) -> str:
        return f"<PageLoadController {self._query.operation_name()} {self._state!r} loading={self.is_loading()}>"
