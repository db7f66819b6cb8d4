from __future__ import annotations

from typing import Any, Callable, Optional

import pytest
from pydantic import BaseModel, Field

from pyorbit import CollectingErrorSink, GraphQLID, Query, TransportError, disable_tracing
from pyorbit.core.client import _executors


class Launch(BaseModel):
    id: GraphQLID
    site: Optional[str] = None


class LaunchConnection(BaseModel):
    cursor: Optional[str] = None
    has_more: bool = Field(alias="hasMore")
    launches: list[Launch]


class LaunchListData(BaseModel):
    launches: LaunchConnection


class LaunchListQuery(Query):
    cursor: Optional[str] = None

    class Settings:
        document = """
        query LaunchList($cursor: String) {
          launches(after: $cursor) { cursor hasMore launches { id site } }
        }
        """
        data = LaunchListData


class LaunchDetailsData(BaseModel):
    launch: Optional[Launch] = None


class LaunchDetailsQuery(Query):
    id: GraphQLID = Field(alias="launchId")

    class Settings:
        document = """
        query LaunchDetails($launchId: ID!) {
          launch(id: $launchId) { id site }
        }
        """
        data = LaunchDetailsData


class ManualHandle:
    def __init__(self) -> None:
        self.cancel_count = 0
        self.completed = False

    def cancel(self) -> None:
        self.cancel_count += 1

    @property
    def is_active(self) -> bool:
        return not self.cancel_count and not self.completed


class ManualCall:
    def __init__(self, query: Query, on_complete: Callable[[Any], None]) -> None:
        self.query = query
        self.on_complete = on_complete
        self.handle = ManualHandle()

    def complete(self, outcome: Any) -> None:
        self.handle.completed = True
        self.on_complete(outcome)

    def respond(self, body: dict[str, Any]) -> None:
        self.complete(self.query.parse_result(body))

    def fail(self, message: str = "connection reset by peer") -> None:
        self.complete(TransportError(message))


class ManualExecutor:
    """Records every execute() call; tests complete each call explicitly."""

    def __init__(self) -> None:
        self.calls: list[ManualCall] = []

    def execute(self, query: Query, on_complete: Callable[[Any], None]) -> ManualHandle:
        call = ManualCall(query, on_complete)
        self.calls.append(call)
        return call.handle

    @property
    def last(self) -> ManualCall:
        return self.calls[-1]


def launch_page(ids: list[str], cursor: Optional[str], has_more: bool) -> dict[str, Any]:
    """Build a LaunchList response body."""
    return {
        "data": {
            "launches": {
                "cursor": cursor,
                "hasMore": has_more,
                "launches": [{"id": i, "site": f"site-{i}"} for i in ids],
            }
        }
    }


@pytest.fixture
def executor() -> ManualExecutor:
    return ManualExecutor()


@pytest.fixture
def sink() -> CollectingErrorSink:
    return CollectingErrorSink()


@pytest.fixture
def make_page():
    return launch_page


@pytest.fixture
def launch_list_query() -> LaunchListQuery:
    return LaunchListQuery()


@pytest.fixture
def launch_details_query():
    return lambda launch_id: LaunchDetailsQuery(id=launch_id)


@pytest.fixture(autouse=True)
def reset_pyorbit_state():
    """Reset observability state and the executor registry between tests."""
    yield
    disable_tracing()
    _executors.clear()
