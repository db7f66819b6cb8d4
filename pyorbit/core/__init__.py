from pyorbit.core.query import Query, get_query_class, _query_registry
from pyorbit.core.result import QueryError, QueryResult
from pyorbit.core.handle import RequestHandle, TaskHandle
from pyorbit.core.executor import AsyncQueryExecutor, QueryExecutor
from pyorbit.core.client import configure, register_executor, unregister_executor, get_executor
from pyorbit.core.pagination import PaginationState, PageMarker, NOT_LOADED, EXHAUSTED
from pyorbit.core.sinks import ErrorSink, LoggingErrorSink, CollectingErrorSink

__all__ = [
    "Query",
    "get_query_class",
    "_query_registry",
    "QueryError",
    "QueryResult",
    "RequestHandle",
    "TaskHandle",
    "AsyncQueryExecutor",
    "QueryExecutor",
    "configure",
    "register_executor",
    "unregister_executor",
    "get_executor",
    "PaginationState",
    "PageMarker",
    "NOT_LOADED",
    "EXHAUSTED",
    "ErrorSink",
    "LoggingErrorSink",
    "CollectingErrorSink",
]
