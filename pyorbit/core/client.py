from __future__ import annotations

import logging

from pyorbit.core.executor import AsyncQueryExecutor, Fetch, QueryExecutor
from pyorbit.utils.exceptions import NotConfigured

logger = logging.getLogger(__name__)

_executors: dict[str, QueryExecutor] = {}


def configure(
    fetch: Fetch, *, alias: str = "default", timeout: float | None = None
) -> AsyncQueryExecutor:
    """Build an AsyncQueryExecutor around ``fetch`` and register it.

    Args:
        fetch: Coroutine function that sends a query and returns the response body.
        alias: Executor alias for multi-endpoint setups.
        timeout: Optional per-request timeout in seconds.

    Returns:
        The registered executor.

    Raises:
        ValueError: If timeout is not positive
    """
    executor = AsyncQueryExecutor(fetch, timeout=timeout)
    register_executor(executor, alias=alias)
    return executor


def register_executor(executor: QueryExecutor, *, alias: str = "default") -> None:
    """Register any QueryExecutor under an alias, replacing an existing one.

    Args:
        executor: Executor instance
        alias: Executor alias
    """
    if alias in _executors:
        logger.info(f"Replacing executor registered with alias '{alias}'")
    else:
        logger.info(f"Registered executor with alias '{alias}'")
    _executors[alias] = executor


def unregister_executor(alias: str = "default") -> None:
    """Remove a registered executor. Unknown aliases are ignored.

    Args:
        alias: Executor alias to remove
    """
    if _executors.pop(alias, None) is not None:
        logger.info(f"Unregistered executor (alias: '{alias}')")


def get_executor(alias: str = "default") -> QueryExecutor:
    """Retrieve a registered executor or raise NotConfigured.

    Args:
        alias: Executor alias

    Returns:
        QueryExecutor instance

    Raises:
        NotConfigured: If no executor exists for the alias
    """
    try:
        return _executors[alias]
    except KeyError:
        raise NotConfigured(
            f"No executor registered for alias '{alias}'. Call configure() first."
        )
