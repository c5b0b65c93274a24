"""
Tests for WHERE conditions, operators, NULL handling and parameter indexing.
"""

from datetime import date

from backoffice.query_builder import QueryBuilder


class TestWhereConditions:
    """Test cases for WHERE clause functionality"""

    def test_single_where_condition(self):
        """Test SELECT with single WHERE condition"""
        query, params = QueryBuilder("cities").where("country_id", 5).build()

        assert query == "SELECT * FROM cities WHERE country_id = $1"
        assert params == [5]

    def test_multiple_where_conditions(self):
        """Test SELECT with multiple WHERE conditions"""
        query, params = (
            QueryBuilder("cities").where("country_id", 5).where("status", 1).build()
        )

        assert query == "SELECT * FROM cities WHERE country_id = $1 AND status = $2"
        assert params == [5, 1]

    def test_where_with_different_operators(self):
        """Test WHERE conditions with different operators"""
        since = date(2024, 1, 1)
        query, params = (
            QueryBuilder("enquire")
            .where("DATE(created_at)", ">=", since)
            .where("lead_status", "!=", 4)
            .where("message", "ILIKE", "%villa%")
            .build()
        )

        assert query == (
            "SELECT * FROM enquire WHERE DATE(created_at) >= $1 "
            "AND lead_status != $2 AND message ILIKE $3"
        )
        assert params == [since, 4, "%villa%"]

    def test_none_value_renders_is_null(self):
        """Test that comparing with None uses IS NULL and binds nothing"""
        query, params = QueryBuilder("enquire").where("agent_id", None).build()

        assert query == "SELECT * FROM enquire WHERE agent_id IS NULL"
        assert params == []

    def test_none_with_not_equal_renders_is_not_null(self):
        """Test that != None uses IS NOT NULL"""
        query, params = (
            QueryBuilder("enquire")
            .where("status", 1)
            .where("agent_id", "!=", None)
            .where("type", "B2C")
            .build()
        )

        assert query == (
            "SELECT * FROM enquire WHERE status = $1 AND agent_id IS NOT NULL AND type = $2"
        )
        assert params == [1, "B2C"]

    def test_where_raw_binds_nothing(self):
        """Test parameterless raw conditions keep later placeholders in order"""
        query, params = (
            QueryBuilder("applyed_jobs")
            .where_raw("apply_date >= NOW() - INTERVAL '7 days'")
            .where("status", 1)
            .build()
        )

        assert query == (
            "SELECT * FROM applyed_jobs WHERE apply_date >= NOW() - INTERVAL '7 days' "
            "AND status = $1"
        )
        assert params == [1]

    def test_hostile_value_is_only_a_parameter(self):
        """Test that a value never reaches the SQL text"""
        hostile = "x'; DROP TABLE cities; --"
        query, params = QueryBuilder("cities").where("name", hostile).build()

        assert "DROP" not in query
        assert params == [hostile]
