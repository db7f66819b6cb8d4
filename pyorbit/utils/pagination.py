from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class PaginationPage(Generic[T]):
    """One page of a cursor-paginated collection.

    The cursor is an opaque server-issued token, only ever passed back to
    request the following page. ``has_more=False`` marks the last page.
    """

    items: tuple[T, ...]
    cursor: str | None = None
    has_more: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.items, tuple):
            object.__setattr__(self, "items", tuple(self.items))

    def __len__(self) -> int:
        return len(self.items)


def connection_page(
    path: str = "",
    *,
    items: str = "items",
    cursor: str = "cursor",
    has_more: str = "hasMore",
) -> Callable[[Any], PaginationPage[Any] | None]:
    """Build an extractor reading a connection object out of query data.

    ``path`` is a dotted path to the connection (``"launches"``); each step
    reads a mapping key or an attribute, so it works on raw dicts and on
    validated models alike. Returns None when the connection is null.

    Example:
        extract = connection_page("launches", items="launches")
        page = extract({"launches": {"cursor": "c1", "hasMore": True, "launches": [...]}})
    """

    def extract(data: Any) -> PaginationPage[Any] | None:
        node = data
        for step in filter(None, path.split(".")):
            node = _read(node, step)
            if node is None:
                return None
        return PaginationPage(
            items=tuple(_read(node, items) or ()),
            cursor=_read(node, cursor),
            has_more=bool(_read(node, has_more)),
        )

    return extract


def _read(node: Any, name: str) -> Any:
    if isinstance(node, Mapping):
        return node.get(name)
    return getattr(node, name, None)
