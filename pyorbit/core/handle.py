from __future__ import annotations

import asyncio
from typing import Protocol, runtime_checkable


@runtime_checkable
class RequestHandle(Protocol):
    """Cancellable token for one in-flight query execution."""

    def cancel(self) -> None:
        ...

    @property
    def is_active(self) -> bool:
        ...


class TaskHandle:
    """RequestHandle backed by the asyncio task running the request.

    Cancelling is idempotent and best-effort: if the task already finished
    its completion callback has run (or is about to), and callers must still
    treat that completion as possibly stale.
    """

    def __init__(self, task: asyncio.Task) -> None:
        self._task = task
        self._cancelled = False

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        if not self._task.done():
            self._task.cancel()

    @property
    def is_active(self) -> bool:
        return not self._cancelled and not self._task.done()

    @property
    def task(self) -> asyncio.Task:
        return self._task

    def __repr__(self) -> str:
        state = "active" if self.is_active else "cancelled" if self._cancelled else "done"
        return f"<TaskHandle {self._task.get_name()} {state}>"
