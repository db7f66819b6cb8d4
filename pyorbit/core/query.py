from __future__ import annotations

from typing import Any, ClassVar, Self

from pydantic import BaseModel, TypeAdapter

from pyorbit.core.result import QueryResult
from pyorbit.utils.exceptions import UnknownQuery
from pyorbit.utils.settings import SettingsResolver
from pyorbit.utils.types import ResponseBody, Variables, merge_variables

# Global registry mapping operation name -> Query subclass
_query_registry: dict[str, type[Query]] = {}


class Query(BaseModel):
    """Base class for typed GraphQL queries.

    Fields declared on a subclass are the operation's variables. The
    document text, operation name, cursor variable and data model come from
    an inner ``Settings`` class::

        class LaunchListQuery(Query):
            cursor: str | None = None

            class Settings:
                document = "query LaunchList($cursor: String) { ... }"
                data = LaunchListData
    """

    model_config = {"populate_by_name": True, "frozen": True}

    # ClassVars, set by __init_subclass__
    _document: ClassVar[str] = ""
    _operation_name: ClassVar[str] = ""
    _cursor_variable: ClassVar[str] = ""
    _data_adapter: ClassVar[TypeAdapter | None] = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)

        cls._document = SettingsResolver.get_document(cls)
        cls._operation_name = SettingsResolver.get_operation_name(cls)
        cls._cursor_variable = SettingsResolver.get_cursor_variable(cls)

        data_model = SettingsResolver.get_data_model(cls)
        cls._data_adapter = TypeAdapter(data_model) if data_model is not None else None

        _query_registry[cls._operation_name] = cls

    # --- Metadata ---

    @classmethod
    def document(cls) -> str:
        return cls._document

    @classmethod
    def operation_name(cls) -> str:
        return cls._operation_name

    @classmethod
    def cursor_variable(cls) -> str:
        return cls._cursor_variable

    # --- Variables ---

    def variables(self, **overrides: Any) -> Variables:
        """Return JSON-ready variables for this query.

        Unset optional variables (a ``None`` cursor on the first page, for
        example) are left out rather than sent as null.
        """
        data = self.model_dump(by_alias=True, mode="json", exclude_none=True)
        return merge_variables(data, **overrides)

    def with_cursor(self, cursor: str | None) -> Self:
        """Return a copy of this query with the cursor variable replaced."""
        field_name = self._field_for_variable(self._cursor_variable)
        if field_name is None:
            raise ValueError(
                f"{self.__class__.__name__} has no '{self._cursor_variable}' variable"
            )
        return self.model_copy(update={field_name: cursor})

    @classmethod
    def has_variable(cls, variable: str) -> bool:
        return cls._field_for_variable(variable) is not None

    @classmethod
    def _field_for_variable(cls, variable: str) -> str | None:
        for field_name, field_info in cls.model_fields.items():
            if (field_info.alias or field_name) == variable:
                return field_name
        return None

    # --- Wire shapes ---

    def to_request(self) -> dict[str, Any]:
        """Build the standard GraphQL request body for a transport to send."""
        return {
            "query": self._document,
            "operationName": self._operation_name,
            "variables": self.variables(),
        }

    @classmethod
    def parse_result(cls, body: ResponseBody) -> QueryResult[Any]:
        """Interpret a raw response body, validating ``data`` into the query's model."""
        validate = cls._data_adapter.validate_python if cls._data_adapter else None
        return QueryResult.from_response(body, validate)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.variables()!r})"


def get_query_class(operation_name: str) -> type[Query]:
    """Look up a declared Query class by operation name.

    Raises:
        UnknownQuery: If no Query class declares that operation name
    """
    try:
        return _query_registry[operation_name]
    except KeyError:
        raise UnknownQuery(f"No query registered for operation '{operation_name}'")
