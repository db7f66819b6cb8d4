from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, Mapping, Optional, TypeVar

from pydantic import BaseModel, ValidationError

from pyorbit.utils.exceptions import InvalidResponse

logger = logging.getLogger(__name__)

T = TypeVar("T")


class QueryError(BaseModel):
    """A single error entry from a GraphQL response.

    Only ``message`` is relied upon; the remaining fields are kept as the
    server sent them so the presentation layer can use them if it wants to.
    """

    model_config = {"frozen": True, "extra": "ignore"}

    message: str
    locations: Optional[list[dict[str, int]]] = None
    path: Optional[list[str | int]] = None
    extensions: Optional[dict[str, Any]] = None

    @classmethod
    def from_exception(cls, exc: BaseException) -> QueryError:
        """Synthesize an error for a request that never produced a result."""
        message = str(exc) or exc.__class__.__name__
        return cls(message=message, extensions={"exception": exc.__class__.__name__})

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class QueryResult(Generic[T]):
    """Possibly-partial payload plus zero or more independent errors.

    At least one of ``data`` and ``errors`` is populated. Both may be, which
    is a partial success: the data is usable and the errors still need
    reporting.
    """

    data: T | None = None
    errors: tuple[QueryError, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.errors, tuple):
            object.__setattr__(self, "errors", tuple(self.errors))
        if self.data is None and not self.errors:
            raise InvalidResponse("A query result must carry data, errors, or both")

    @property
    def ok(self) -> bool:
        return self.data is not None and not self.errors

    @property
    def is_partial(self) -> bool:
        return self.data is not None and bool(self.errors)

    @property
    def outcome(self) -> str:
        if self.data is None:
            return "errors"
        return "partial" if self.errors else "ok"

    @classmethod
    def from_response(
        cls,
        body: Mapping[str, Any],
        validate: Callable[[Any], T] | None = None,
    ) -> QueryResult[T]:
        """Interpret a raw GraphQL response body.

        Args:
            body: Decoded response with optional ``data`` and ``errors`` keys
            validate: Callable turning the raw ``data`` payload into a typed value

        Returns:
            QueryResult with the typed data and parsed errors

        Raises:
            InvalidResponse: If the body is malformed or carries neither data nor errors
        """
        if not isinstance(body, Mapping):
            raise InvalidResponse(
                f"Expected a mapping response body, got {type(body).__name__}"
            )

        errors = [_parse_error(entry) for entry in body.get("errors") or ()]

        data = body.get("data")
        if data is not None and validate is not None:
            try:
                data = validate(data)
            except ValidationError as e:
                logger.warning("Response data failed validation: %s", e)
                data = None
                errors.append(
                    QueryError(
                        message=f"Invalid response data: {e.error_count()} validation error(s)",
                        extensions={
                            "code": "INVALID_DATA",
                            "details": [err["msg"] for err in e.errors()],
                        },
                    )
                )

        return cls(data=data, errors=tuple(errors))


def _parse_error(entry: Any) -> QueryError:
    """Parse one entry of a response's ``errors`` list."""
    if isinstance(entry, QueryError):
        return entry
    if not isinstance(entry, Mapping):
        return QueryError(message=str(entry))
    try:
        return QueryError.model_validate(entry)
    except ValidationError as e:
        raise InvalidResponse(f"Malformed error entry: {entry!r}") from e
