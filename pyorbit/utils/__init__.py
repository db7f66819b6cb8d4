from pyorbit.utils.exceptions import (
    PyorbitError,
    TransportError,
    InvalidResponse,
    UnknownQuery,
    NotConfigured,
)
from pyorbit.utils.pagination import PaginationPage, connection_page
from pyorbit.utils.types import (
    Variables,
    ResponseBody,
    Identifier,
    merge_variables,
    DEFAULT_CURSOR_VARIABLE,
)

__all__ = [
    "PyorbitError",
    "TransportError",
    "InvalidResponse",
    "UnknownQuery",
    "NotConfigured",
    "PaginationPage",
    "connection_page",
    "Variables",
    "ResponseBody",
    "Identifier",
    "merge_variables",
    "DEFAULT_CURSOR_VARIABLE",
]
