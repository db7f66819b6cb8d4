from typing import Optional

import pytest
from pydantic import BaseModel

from pyorbit import GraphQLID, Query, UnknownQuery, get_query_class
from pyorbit.core.result import QueryResult


class RocketData(BaseModel):
    name: str


class RocketQuery(Query):
    id: GraphQLID
    cursor: Optional[str] = None

    class Settings:
        document = "query Rocket($id: ID!) { rocket(id: $id) { name } }"
        data = RocketData


class FeedQuery(Query):
    after: Optional[str] = None
    first: int = 20

    class Settings:
        document = "query Feed($after: String, $first: Int) { feed { id } }"
        operation_name = "HomeFeed"
        cursor_variable = "after"


class TestSettings:
    def test_operation_name_from_class_name(self):
        assert RocketQuery.operation_name() == "Rocket"

    def test_operation_name_override(self):
        assert FeedQuery.operation_name() == "HomeFeed"

    def test_document_is_stripped(self):
        assert RocketQuery.document().startswith("query Rocket")

    def test_default_cursor_variable(self):
        assert RocketQuery.cursor_variable() == "cursor"
        assert FeedQuery.cursor_variable() == "after"

    def test_missing_document_raises(self):
        with pytest.raises(ValueError, match="document"):

            class Broken(Query):
                value: int = 0

    def test_registry_lookup(self):
        assert get_query_class("Rocket") is RocketQuery
        assert get_query_class("HomeFeed") is FeedQuery

    def test_registry_unknown(self):
        with pytest.raises(UnknownQuery):
            get_query_class("DoesNotExist")


class TestVariables:
    def test_none_values_left_out(self):
        assert RocketQuery(id=25).variables() == {"id": "25"}

    def test_overrides_win(self):
        assert FeedQuery().variables(first=5) == {"first": 5}

    def test_with_cursor(self):
        query = FeedQuery(first=10)
        next_query = query.with_cursor("abc")
        assert next_query.variables() == {"after": "abc", "first": 10}
        assert query.variables() == {"first": 10}

    def test_with_cursor_requires_cursor_variable(self):
        class NoCursorQuery(Query):
            id: int

            class Settings:
                document = "query NoCursor($id: Int) { x }"

        with pytest.raises(ValueError, match="cursor"):
            NoCursorQuery(id=1).with_cursor("c1")
        assert NoCursorQuery.has_variable("cursor") is False
        assert FeedQuery.has_variable("after") is True

    def test_to_request(self):
        body = RocketQuery(id="7").to_request()
        assert body["operationName"] == "Rocket"
        assert body["variables"] == {"id": "7"}
        assert body["query"].startswith("query Rocket")

    def test_queries_are_frozen(self):
        query = RocketQuery(id="7")
        with pytest.raises(Exception):
            query.id = "8"


class TestParseResult:
    def test_validates_into_data_model(self):
        result = RocketQuery.parse_result({"data": {"name": "Falcon 9"}})
        assert isinstance(result, QueryResult)
        assert result.data == RocketData(name="Falcon 9")

    def test_without_data_model_keeps_raw(self):
        result = FeedQuery.parse_result({"data": {"feed": []}})
        assert result.data == {"feed": []}

    def test_invalid_data_is_reported_as_error(self):
        result = RocketQuery.parse_result({"data": {"title": "wrong shape"}})
        assert result.data is None
        assert result.errors[0].extensions["code"] == "INVALID_DATA"
