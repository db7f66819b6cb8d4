import logging

from pyorbit import CollectingErrorSink, ErrorSink, LoggingErrorSink
from pyorbit.core.result import QueryError


def test_sinks_satisfy_protocol():
    assert isinstance(LoggingErrorSink(), ErrorSink)
    assert isinstance(CollectingErrorSink(), ErrorSink)


def test_collecting_sink_keeps_batches():
    sink = CollectingErrorSink()
    sink.report([QueryError(message="a")])
    sink.report([QueryError(message="b"), QueryError(message="c")])
    assert [len(batch) for batch in sink.batches] == [1, 2]
    assert [e.message for e in sink.errors] == ["a", "b", "c"]
    sink.clear()
    assert sink.errors == []


def test_logging_sink_warns(caplog):
    sink = LoggingErrorSink()
    with caplog.at_level(logging.WARNING, logger="pyorbit.errors"):
        sink.report([QueryError(message="denied"), QueryError(message="null", path=["launch", "site"])])
    messages = [record.getMessage() for record in caplog.records]
    assert "Query error: denied" in messages
    assert "Query error at ['launch', 'site']: null" in messages
