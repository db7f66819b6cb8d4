"""Controllers driven by the asyncio executor end to end."""

import asyncio

from pyorbit import AsyncQueryExecutor, DetailRecordController, PageLoadController
from pyorbit.utils.pagination import connection_page


class ScriptedServer:
    """Fetch callable whose responses are released by the test."""

    def __init__(self) -> None:
        self.requests = []
        self._gates: dict[int, asyncio.Event] = {}
        self._bodies: dict[int, dict] = {}

    async def fetch(self, query):
        n = len(self.requests)
        self.requests.append(query.variables())
        gate = self._gates.setdefault(n, asyncio.Event())
        await gate.wait()
        return self._bodies[n]

    def release(self, n: int, body: dict) -> None:
        self._bodies[n] = body
        self._gates.setdefault(n, asyncio.Event()).set()


async def settle():
    for _ in range(5):
        await asyncio.sleep(0)


async def test_page_loader_single_flight(launch_list_query, make_page, sink):
    server = ScriptedServer()
    controller = PageLoadController(
        launch_list_query,
        connection_page("launches", items="launches", has_more="has_more"),
        executor=AsyncQueryExecutor(server.fetch),
        error_sink=sink,
    )

    assert controller.request_next_page_if_needed() is True
    assert controller.request_next_page_if_needed() is False
    await settle()
    assert len(server.requests) == 1

    server.release(0, make_page(["A", "B"], "c1", True))
    await settle()
    assert [launch.id for launch in controller.items] == ["A", "B"]
    assert controller.is_loading() is False

    controller.request_next_page_if_needed()
    await settle()
    assert server.requests[1] == {"cursor": "c1"}
    server.release(1, make_page(["C"], "c2", False))
    await settle()
    assert [launch.id for launch in controller.items] == ["A", "B", "C"]
    assert controller.request_next_page_if_needed() is False


async def test_page_loader_timeout_frees_slot(launch_list_query, make_page, sink):
    server = ScriptedServer()
    controller = PageLoadController(
        launch_list_query,
        connection_page("launches", items="launches", has_more="has_more"),
        executor=AsyncQueryExecutor(server.fetch, timeout=0.01),
        error_sink=sink,
    )
    controller.request_next_page_if_needed()
    await asyncio.sleep(0.05)
    assert controller.is_loading() is False
    assert "timed out" in sink.errors[0].message


async def test_detail_staleness_with_real_tasks(launch_details_query, sink):
    server = ScriptedServer()
    controller = DetailRecordController(
        launch_details_query,
        lambda data: data.launch,
        executor=AsyncQueryExecutor(server.fetch),
        error_sink=sink,
    )

    controller.select("A")
    await settle()
    controller.select("B")
    await settle()
    assert server.requests == [{"launchId": "A"}, {"launchId": "B"}]

    server.release(1, {"data": {"launch": {"id": "B", "site": "b"}}})
    server.release(0, {"data": {"launch": {"id": "A", "site": "a"}}})
    await settle()

    assert controller.current_record().id == "B"
    assert sink.errors == []
