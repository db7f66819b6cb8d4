from pyorbit.core import (
    Query,
    get_query_class,
    QueryError,
    QueryResult,
    RequestHandle,
    TaskHandle,
    AsyncQueryExecutor,
    QueryExecutor,
    configure,
    register_executor,
    unregister_executor,
    get_executor,
    PaginationState,
    NOT_LOADED,
    EXHAUSTED,
    ErrorSink,
    LoggingErrorSink,
    CollectingErrorSink,
)
from pyorbit.controllers import (
    PageLoadController,
    DetailRecordController,
    DetailRecord,
    DetailState,
)
from pyorbit.fields import GraphQLID
from pyorbit.lifecycle import (
    enable_tracing,
    disable_tracing,
    RequestEvent,
    add_listener,
)
from pyorbit.utils import (
    PyorbitError,
    TransportError,
    InvalidResponse,
    UnknownQuery,
    NotConfigured,
    PaginationPage,
    connection_page,
)

__all__ = [
    # Core
    "Query",
    "get_query_class",
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
    "NOT_LOADED",
    "EXHAUSTED",
    "ErrorSink",
    "LoggingErrorSink",
    "CollectingErrorSink",
    # Controllers
    "PageLoadController",
    "DetailRecordController",
    "DetailRecord",
    "DetailState",
    # Fields
    "GraphQLID",
    # Lifecycle
    "enable_tracing",
    "disable_tracing",
    "RequestEvent",
    "add_listener",
    # Utils
    "PyorbitError",
    "TransportError",
    "InvalidResponse",
    "UnknownQuery",
    "NotConfigured",
    "PaginationPage",
    "connection_page",
]
