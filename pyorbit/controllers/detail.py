"""Loading of a single record by identifier, memoized against the record held."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from functools import partial
from typing import Any, Callable, Generic, Sequence, TypeVar

from pyorbit.core.client import get_executor
from pyorbit.core.executor import Completion, QueryExecutor
from pyorbit.core.handle import RequestHandle
from pyorbit.core.query import Query
from pyorbit.core.result import QueryError
from pyorbit.core.sinks import ErrorSink, LoggingErrorSink
from pyorbit.fields.base import GraphQLID
from pyorbit.utils.types import Identifier

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DetailState(str, enum.Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass(frozen=True)
class DetailRecord(Generic[T]):
    """A loaded record together with the identifier it was requested by."""

    id: GraphQLID
    record: T


@dataclass(eq=False)
class _DetailRequest:
    id: GraphQLID
    handle: RequestHandle | None = None


class DetailRecordController(Generic[T]):
    """Fetches one record by identifier and holds on to it.

    Selecting the identifier of the record already held, or the one already
    being fetched, does nothing. Selecting a different identifier cancels
    whatever is in flight and fetches the new one. A response only replaces
    the held record when it belongs to the latest selection, so a late
    answer for an earlier selection can never overwrite a newer one.

    On failure the held record is kept (it is still valid, just not for the
    selection) and the errors go to the error sink.

    Args:
        query_for: Builds the query for an identifier.
        extract_record: Picks the record out of a result's data; defaults
            to the data itself. Returning None means "not found".
        executor: Executor to run queries on; defaults to the one
            registered under ``alias``.
        error_sink: Receives every error; defaults to LoggingErrorSink.
        on_record: Optional callback invoked when a new record is held.
    """

    def __init__(
        self,
        query_for: Callable[[GraphQLID], Query],
        extract_record: Callable[[Any], T | None] | None = None,
        *,
        executor: QueryExecutor | None = None,
        error_sink: ErrorSink | None = None,
        alias: str = "default",
        on_record: Callable[[DetailRecord[T]], Any] | None = None,
    ) -> None:
        self._query_for = query_for
        self._extract_record = extract_record
        self._executor = executor if executor is not None else get_executor(alias)
        self._error_sink = error_sink if error_sink is not None else LoggingErrorSink()
        self._on_record = on_record
        self._held: DetailRecord[T] | None = None
        self._selected_id: GraphQLID | None = None
        self._in_flight: _DetailRequest | None = None
        self._state = DetailState.IDLE

    # --- State ---

    @property
    def state(self) -> DetailState:
        return self._state

    @property
    def selected_id(self) -> GraphQLID | None:
        return self._selected_id

    def current_record(self) -> DetailRecord[T] | None:
        """Return the held record, or None if nothing has loaded yet.

        The held record may belong to an earlier selection while a fetch
        is running or after one failed; compare its ``id`` with
        ``selected_id`` to tell.
        """
        return self._held

    def is_loading(self) -> bool:
        return self._in_flight is not None

    # --- Selection ---

    def select(self, id: Identifier) -> bool:
        """Make ``id`` the current selection, fetching it if needed.

        Returns:
            True if a fetch was issued

        Raises:
            ValueError: If ``id`` is not a valid GraphQL ID
        """
        target = GraphQLID(id)
        held_id = self._held.id if self._held is not None else None

        if target == self._selected_id and (self._in_flight is not None or held_id == target):
            return False

        if held_id == target:
            # Back to the record already held; whatever was in flight is stale now
            self._cancel_in_flight()
            self._selected_id = target
            self._state = DetailState.LOADED
            return False

        return self._fetch(target)

    def refresh(self) -> bool:
        """Fetch the current selection again, even if it is already held.

        Returns:
            True if a fetch was issued
        """
        if self._selected_id is None:
            return False
        return self._fetch(self._selected_id)

    def cancel_active(self) -> None:
        """Cancel the in-flight fetch, if any."""
        if self._in_flight is None:
            return
        self._cancel_in_flight()
        held_id = self._held.id if self._held is not None else None
        self._state = DetailState.LOADED if held_id == self._selected_id else DetailState.IDLE

    def _fetch(self, target: GraphQLID) -> bool:
        query = self._query_for(target)
        self._cancel_in_flight()
        self._selected_id = target
        self._state = DetailState.FETCHING

        request = _DetailRequest(target)
        self._in_flight = request
        logger.debug("Fetching record '%s': %r", target, query)
        try:
            handle = self._executor.execute(query, partial(self._on_complete, request))
        except Exception as e:
            logger.warning("Could not issue %s: %s", query.operation_name(), e)
            if self._in_flight is request:
                self._in_flight = None
                self._state = DetailState.FAILED
            self._report([QueryError.from_exception(e)])
            return False

        # An executor may complete synchronously inside execute()
        if self._in_flight is request:
            request.handle = handle
        return True

    def _cancel_in_flight(self) -> None:
        request = self._in_flight
        if request is None:
            return
        self._in_flight = None
        if request.handle is not None:
            request.handle.cancel()
        logger.debug("Cancelled fetch for record '%s'", request.id)

    # --- Completion ---

    def _on_complete(self, request: _DetailRequest, outcome: Completion) -> None:
        if request is not self._in_flight or request.id != self._selected_id:
            logger.debug("Ignoring stale completion for record '%s'", request.id)
            return
        self._in_flight = None

        if isinstance(outcome, BaseException):
            self._state = DetailState.FAILED
            self._report([QueryError.from_exception(outcome)])
            return

        errors = list(outcome.errors)
        record = None
        if outcome.data is not None:
            try:
                record = self._read_record(outcome.data)
            except Exception as e:
                logger.warning("Could not read record '%s' from response data: %s", request.id, e)
                errors.append(QueryError.from_exception(e))
            if record is None and not errors:
                errors.append(QueryError(message=f"No record found for id '{request.id}'"))

        if record is not None:
            self._held = DetailRecord(id=request.id, record=record)
            self._state = DetailState.LOADED
            logger.debug("Loaded record '%s'", request.id)
            self._notify(self._held)
        else:
            self._state = DetailState.FAILED
        self._report(errors)

    def _notify(self, held: DetailRecord[T]) -> None:
        if self._on_record is None:
            return
        try:
            self._on_record(held)
        except Exception:
            logger.exception("on_record callback failed for record '%s'", held.id)

    def _read_record(self, data: Any) -> T | None:
        if self._extract_record is None:
            return data
        return self._extract_record(data)

    def _report(self, errors: Sequence[QueryError]) -> None:
        if errors:
            self._error_sink.report(list(errors))

    def __repr__(self) -> str:
        return f"<DetailRecordController selected={self._selected_id!r} state={self._state.value}>"
