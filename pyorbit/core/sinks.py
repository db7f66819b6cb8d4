"""Error sinks: where controllers forward the errors they encounter."""

from __future__ import annotations

import logging
from typing import Protocol, Sequence, runtime_checkable

from pyorbit.core.result import QueryError


@runtime_checkable
class ErrorSink(Protocol):
    def report(self, errors: Sequence[QueryError]) -> None:
        ...


class LoggingErrorSink:
    """Default sink: logs each error at WARNING."""

    def __init__(self, name: str = "pyorbit.errors") -> None:
        self._logger = logging.getLogger(name)

    def report(self, errors: Sequence[QueryError]) -> None:
        for error in errors:
            if error.path:
                self._logger.warning("Query error at %s: %s", error.path, error.message)
            else:
                self._logger.warning("Query error: %s", error.message)


class CollectingErrorSink:
    """Keeps every reported batch, in order."""

    def __init__(self) -> None:
        self.batches: list[list[QueryError]] = []

    def report(self, errors: Sequence[QueryError]) -> None:
        self.batches.append(list(errors))

    @property
    def errors(self) -> list[QueryError]:
        return [error for batch in self.batches for error in batch]

    def clear(self) -> None:
        self.batches.clear()
