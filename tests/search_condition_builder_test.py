"""
Tests for allow-listed filters, free-text search and sort resolution.
"""

from datetime import date

import pytest

from backoffice.entities import SortOrder
from backoffice.errors import ValidationError
from backoffice.query_builder import QueryBuilder
from backoffice.search_condition_builder import FilterField, SearchConditionBuilder

FILTERS = {
    "country_id": FilterField(column="c.country_id", cast="int"),
    "state_id": FilterField(column="c.state_id", cast="int"),
    "type": FilterField(column="c.type"),
    "date_from": FilterField(column="DATE(c.created_at)", operator=">=", cast="date"),
}

SORTS = {"name": "c.name", "id": "c.id"}


class TestApplyFilters:
    def test_filters_follow_allow_list_order(self):
        """Test predicates are emitted in declaration order, not request order"""
        builder = SearchConditionBuilder.apply_filters(
            QueryBuilder("cities", "c"), {"state_id": "9", "country_id": "5"}, FILTERS
        )
        query, params = builder.build()

        assert query == "SELECT * FROM cities c WHERE c.country_id = $1 AND c.state_id = $2"
        assert params == [5, 9]

    def test_unknown_keys_are_ignored(self):
        """Test keys outside the allow-list never reach the query"""
        builder = SearchConditionBuilder.apply_filters(
            QueryBuilder("cities", "c"),
            {"country_id": 5, "name; DROP TABLE cities": "x", "page": "2"},
            FILTERS,
        )
        query, params = builder.build()

        assert query == "SELECT * FROM cities c WHERE c.country_id = $1"
        assert params == [5]

    def test_blank_values_are_skipped(self):
        """Test None and whitespace-only values add no predicate"""
        builder = SearchConditionBuilder.apply_filters(
            QueryBuilder("cities", "c"), {"country_id": None, "type": "   "}, FILTERS
        )

        assert builder.build() == ("SELECT * FROM cities c", [])

    def test_date_filter_is_parsed(self):
        """Test ISO dates become date parameters"""
        builder = SearchConditionBuilder.apply_filters(
            QueryBuilder("cities", "c"), {"date_from": "2024-02-01"}, FILTERS
        )
        query, params = builder.build()

        assert query == "SELECT * FROM cities c WHERE DATE(c.created_at) >= $1"
        assert params == [date(2024, 2, 1)]

    @pytest.mark.parametrize("key, value", [("country_id", "five"), ("date_from", "yesterday")])
    def test_bad_typed_value_raises_validation_error(self, key, value):
        """Test a non-numeric id or malformed date is a 400, not a database error"""
        with pytest.raises(ValidationError) as exc_info:
            SearchConditionBuilder.apply_filters(QueryBuilder("cities", "c"), {key: value}, FILTERS)

        assert exc_info.value.message == f"Invalid value for {key}"


class TestApplySearch:
    def test_search_binds_term_per_column(self):
        """Test one ILIKE per search column inside a single OR group"""
        builder = SearchConditionBuilder.apply_search(
            QueryBuilder("cities", "c").where("c.status", 1), " dub ", ["c.name", "c.slug"]
        )
        query, params = builder.build()

        assert query == (
            "SELECT * FROM cities c WHERE c.status = $1 AND (c.name ILIKE $2 OR c.slug ILIKE $3)"
        )
        assert params == [1, "%dub%", "%dub%"]

    @pytest.mark.parametrize("term", [None, "", "   "])
    def test_empty_term_adds_nothing(self, term):
        """Test a blank search leaves the query unchanged"""
        builder = SearchConditionBuilder.apply_search(QueryBuilder("cities"), term, ["name"])

        assert builder.build() == ("SELECT * FROM cities", [])


class TestSort:
    def test_allowed_sort_with_requested_direction(self):
        """Test an allow-listed key maps to its column and the direction is parsed"""
        column, order = SearchConditionBuilder.resolve_sort(
            "id", "desc", SORTS, "name", SortOrder.ASC
        )

        assert (column, order) == ("c.id", SortOrder.DESC)

    def test_unknown_sort_uses_default_column_and_direction(self):
        """Test a rejected sort key falls back to both defaults"""
        column, order = SearchConditionBuilder.resolve_sort(
            "name; DROP TABLE cities", "DESC", SORTS, "name", SortOrder.ASC
        )

        assert (column, order) == ("c.name", SortOrder.ASC)

    def test_missing_sort_keeps_requested_direction(self):
        """Test the default column can still be sorted the other way"""
        column, order = SearchConditionBuilder.resolve_sort(None, "DESC", SORTS, "name", SortOrder.ASC)

        assert (column, order) == ("c.name", SortOrder.DESC)

    def test_invalid_direction_uses_default(self):
        """Test an unrecognized direction falls back to the default order"""
        _, order = SearchConditionBuilder.resolve_sort("id", "sideways", SORTS, "name", SortOrder.ASC)

        assert order == SortOrder.ASC

    def test_apply_sort(self):
        """Test ASC and DESC rendering"""
        asc = SearchConditionBuilder.apply_sort(QueryBuilder("cities", "c"), "c.name", SortOrder.ASC)
        desc = SearchConditionBuilder.apply_sort(QueryBuilder("cities", "c"), "c.id", SortOrder.DESC)

        assert asc.to_sql() == "SELECT * FROM cities c ORDER BY c.name ASC"
        assert desc.to_sql() == "SELECT * FROM cities c ORDER BY c.id DESC"
