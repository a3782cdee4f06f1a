"""
Unit tests for query parameter filtering and serialization.
"""
import pytest

from apiclients.sources.client.http.query import QueryBuilder, serialize_query_value


@pytest.mark.unit
class TestSerializeQueryValue:
    """Rendering of individual query values."""

    def test_booleans_are_lowercase(self):
        assert serialize_query_value(True) == "true"
        assert serialize_query_value(False) == "false"

    def test_sequences_are_comma_joined(self):
        assert serialize_query_value(["envelope_folders", "template_folders"]) == "envelope_folders,template_folders"
        assert serialize_query_value((1, 2, 3)) == "1,2,3"

    def test_scalars_use_str(self):
        assert serialize_query_value(42) == "42"
        assert serialize_query_value("owned_by_me") == "owned_by_me"


@pytest.mark.unit
class TestQueryBuilder:
    """Optional-argument filtering."""

    def test_absent_values_are_omitted(self):
        query = (
            QueryBuilder()
            .add("include", None)
            .add("search_text", "")
            .add("status", [])
            .add("user_filter", "all")
            .build()
        )
        assert query == {"user_filter": "all"}

    def test_false_and_zero_are_kept_by_add(self):
        query = QueryBuilder().add("include_items", False).add("start_position", 0).build()
        assert query == {"include_items": "false", "start_position": "0"}

    def test_add_positive_drops_zero_negative_and_none(self):
        query = (
            QueryBuilder()
            .add_positive("page", 0)
            .add_positive("per", -5)
            .add_positive("limit", None)
            .add_positive("offset", 20)
            .build()
        )
        assert query == {"offset": "20"}

    def test_add_positive_ignores_booleans(self):
        assert QueryBuilder().add_positive("count", True).build() == {}

    def test_insertion_order_is_preserved(self):
        query = (
            QueryBuilder()
            .add("next_page_token", "abc")
            .add_positive("page_size", 30)
            .add("search_key", "jane@example.com")
            .build()
        )
        assert list(query) == ["next_page_token", "page_size", "search_key"]

    def test_later_value_for_same_name_wins(self):
        assert QueryBuilder().add("order", "asc").add("order", "desc").build() == {"order": "desc"}
