from __future__ import annotations

from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema


class GraphQLID(str):
    """Pydantic v2-compatible GraphQL ``ID`` type.

    Accepts str or int input and always holds the string form, which is how
    the ID scalar is serialized on the wire. ``GraphQLID(25) == "25"``.
    """

    def __new__(cls, value: Any) -> GraphQLID:
        if isinstance(value, GraphQLID):
            return value
        if isinstance(value, bool):
            raise ValueError("Cannot convert bool to GraphQL ID")
        if isinstance(value, int):
            value = str(value)
        if not isinstance(value, str):
            raise ValueError(f"Cannot convert {type(value)} to GraphQL ID")
        if not value:
            raise ValueError("GraphQL ID cannot be empty")
        return super().__new__(cls, value)

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> CoreSchema:
        return core_schema.no_info_wrap_validator_function(
            cls._validate,
            core_schema.union_schema(
                [
                    core_schema.int_schema(strict=True),
                    core_schema.str_schema(min_length=1),
                ]
            ),
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda v: str(v),
                info_arg=False,
            ),
        )

    @classmethod
    def _validate(cls, value: Any, handler: Any) -> GraphQLID:
        if isinstance(value, bool):
            raise ValueError("Cannot convert bool to GraphQL ID")
        return cls(handler(value))
