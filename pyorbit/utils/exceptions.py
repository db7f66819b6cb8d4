class PyorbitError(Exception):
    """Base exception for all Pyorbit errors."""


class TransportError(PyorbitError):
    """Raised when a query produced no structured result at all."""


class InvalidResponse(PyorbitError):
    """Raised when a response body carries neither data nor errors."""


class UnknownQuery(PyorbitError):
    """Raised when no Query class is registered under an operation name."""


class NotConfigured(PyorbitError):
    """Raised when no executor is registered under an alias."""
