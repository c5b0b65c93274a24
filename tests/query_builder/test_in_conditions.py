"""
Tests for IN and NOT IN conditions.
"""

import pytest

from backoffice.query_builder import QueryBuilder


class TestInConditions:
    """Test cases for IN / NOT IN"""

    def test_where_in(self):
        """Test IN with one placeholder per value"""
        query, params = QueryBuilder("enquire").where_in("id", [4, 5, 6]).build()

        assert query == "SELECT * FROM enquire WHERE id IN ($1, $2, $3)"
        assert params == [4, 5, 6]

    def test_where_in_after_other_conditions(self):
        """Test IN placeholders continue after earlier parameters"""
        query, params = (
            QueryBuilder("enquire").where("status", 1).where_in("agent_id", [2, 3]).build()
        )

        assert query == "SELECT * FROM enquire WHERE status = $1 AND agent_id IN ($2, $3)"
        assert params == [1, 2, 3]

    def test_where_not_in(self):
        """Test NOT IN"""
        query, params = QueryBuilder("enquire").where_not_in("lead_status", [3, 4]).build()

        assert query == "SELECT * FROM enquire WHERE lead_status NOT IN ($1, $2)"
        assert params == [3, 4]

    def test_where_in_requires_values(self):
        """Test that an empty IN list is rejected"""
        with pytest.raises(ValueError):
            QueryBuilder("enquire").where_in("id", [])
