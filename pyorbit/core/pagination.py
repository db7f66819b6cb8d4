from __future__ import annotations

import enum
from typing import Any, Callable, Generic, Iterator, TypeVar

from pyorbit.utils.pagination import PaginationPage

T = TypeVar("T")


class PageMarker(enum.Enum):
    """Answers from ``next_cursor()`` that are not a cursor to send."""

    NOT_LOADED = "not_loaded"
    EXHAUSTED = "exhausted"

    def __repr__(self) -> str:
        return f"PageMarker.{self.name}"


NOT_LOADED = PageMarker.NOT_LOADED
EXHAUSTED = PageMarker.EXHAUSTED


class PaginationState(Generic[T]):
    """Accumulates the pages of one pagination session into a single sequence.

    ``accumulated`` only ever grows: pages are appended in the order they
    are applied and nothing is removed or reordered. Items are not
    deduplicated unless a ``dedupe_key`` is given, so an upstream that
    repeats items across cursors produces duplicates here.
    """

    def __init__(self, dedupe_key: Callable[[T], Any] | None = None) -> None:
        self._accumulated: list[T] = []
        self._last_page: PaginationPage[T] | None = None
        self._page_count = 0
        self._dedupe_key = dedupe_key
        self._seen_keys: set[Any] = set()

    @classmethod
    def initial(cls, dedupe_key: Callable[[T], Any] | None = None) -> PaginationState[T]:
        """Return an empty state for a new pagination session."""
        return cls(dedupe_key=dedupe_key)

    # --- Accessors ---

    @property
    def accumulated(self) -> tuple[T, ...]:
        return tuple(self._accumulated)

    @property
    def last_page(self) -> PaginationPage[T] | None:
        return self._last_page

    @property
    def page_count(self) -> int:
        return self._page_count

    def __len__(self) -> int:
        return len(self._accumulated)

    def __iter__(self) -> Iterator[T]:
        return iter(tuple(self._accumulated))

    # --- Mutation ---

    def apply(self, page: PaginationPage[T]) -> int:
        """Append a page's items and make it the last page.

        Returns:
            Number of items appended
        """
        if self._dedupe_key is None:
            self._accumulated.extend(page.items)
            added = len(page.items)
        else:
            added = 0
            for item in page.items:
                key = self._dedupe_key(item)
                if key in self._seen_keys:
                    continue
                self._seen_keys.add(key)
                self._accumulated.append(item)
                added += 1
        self._last_page = page
        self._page_count += 1
        return added

    # --- Continuation ---

    def next_cursor(self) -> str | None | PageMarker:
        """Return the cursor for the next fetch.

        Returns ``NOT_LOADED`` before any page was applied (fetch the first
        page without a cursor) and ``EXHAUSTED`` once the last applied page
        said there is nothing more. ``None`` means more pages exist but the
        server issued no cursor.
        """
        if self._last_page is None:
            return NOT_LOADED
        if not self._last_page.has_more:
            return EXHAUSTED
        return self._last_page.cursor

    def is_exhausted(self) -> bool:
        return self._last_page is not None and not self._last_page.has_more

    def __repr__(self) -> str:
        return (
            f"PaginationState(items={len(self._accumulated)}, "
            f"pages={self._page_count}, exhausted={self.is_exhausted()})"
        )
