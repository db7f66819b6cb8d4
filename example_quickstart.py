"""
Pyorbit Quick Start Example

A launch list that grows page by page, plus a detail view that only
refetches when a different launch is selected.

Features covered:
- Define typed queries
- Plug in a transport
- Paginate with PageLoadController
- Load a record with DetailRecordController

Run with: python example_quickstart.py
"""

import asyncio
import logging
from typing import Optional

from pydantic import BaseModel, Field

from pyorbit import (
    DetailRecordController,
    GraphQLID,
    PageLoadController,
    Query,
    configure,
    connection_page,
    enable_tracing,
)


# ============================================================================
# 1. DEFINE YOUR QUERIES
# ============================================================================


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
    """All launches, one page at a time."""

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
    """A single launch by id."""

    id: GraphQLID = Field(alias="launchId")

    class Settings:
        document = """
        query LaunchDetails($launchId: ID!) {
          launch(id: $launchId) { id site }
        }
        """
        data = LaunchDetailsData


# ============================================================================
# 2. A STAND-IN TRANSPORT
# ============================================================================

# Replace this with a real HTTP call posting query.to_request() to your server.
LAUNCHES = [{"id": str(n), "site": "KSC LC 39A" if n % 2 else "CCAFS SLC 40"} for n in range(1, 8)]
PAGE_SIZE = 3


async def fetch(query: Query) -> dict:
    await asyncio.sleep(0.01)
    variables = query.variables()
    if isinstance(query, LaunchListQuery):
        start = int(variables.get("cursor", "0"))
        chunk = LAUNCHES[start : start + PAGE_SIZE]
        end = start + len(chunk)
        return {
            "data": {
                "launches": {
                    "cursor": str(end),
                    "hasMore": end < len(LAUNCHES),
                    "launches": chunk,
                }
            }
        }
    launch = next((l for l in LAUNCHES if l["id"] == variables["launchId"]), None)
    return {"data": {"launch": launch}}


# ============================================================================
# 3. ASYNC MAIN FUNCTION
# ============================================================================


async def main():
    """Run the quickstart example."""
    logging.basicConfig(level=logging.INFO)
    enable_tracing(slow_request_ms=250.0)
    configure(fetch, timeout=5.0)

    # --- List ---
    launches = PageLoadController(
        LaunchListQuery(),
        connection_page("launches", items="launches", has_more="has_more"),
        on_page=lambda page: print(f"📄 Page with {len(page)} launches"),
    )
    while not launches.state.is_exhausted():
        launches.request_next_page_if_needed()
        launches.request_next_page_if_needed()  # ignored: a page is already loading
        while launches.is_loading():
            await asyncio.sleep(0.005)
    print(f"✅ Loaded {len(launches.items)} launches\n")

    # --- Detail ---
    details = DetailRecordController(
        lambda launch_id: LaunchDetailsQuery(id=launch_id),
        lambda data: data.launch,
        on_record=lambda held: print(f"🚀 Launch {held.id} from {held.record.site}"),
    )
    details.select("5")
    details.select(3)  # supersedes 5 before it arrives
    await asyncio.sleep(0.05)

    issued = details.select("3")  # already held: no request
    print(f"Re-selecting 3 issued a request: {issued}")
    print(f"Current record: {details.current_record()}")


if __name__ == "__main__":
    asyncio.run(main())
