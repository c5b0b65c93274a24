"""
Tests for ORDER BY, GROUP BY / HAVING and complete dashboard-style queries.
"""

from backoffice.query_builder import QueryBuilder


class TestOrderBy:
    """Test cases for ORDER BY"""

    def test_order_by_keeps_field_text(self):
        """Test order_by appends the expression as given"""
        query, _ = QueryBuilder("tasks").order_by("date ASC").build()

        assert query == "SELECT * FROM tasks ORDER BY date ASC"

    def test_order_by_desc_and_chaining(self):
        """Test several sort keys in call order"""
        query, _ = QueryBuilder("jobs").order_by_desc("created_at").order_by("title").build()

        assert query == "SELECT * FROM jobs ORDER BY created_at DESC, title"


class TestComplexQueries:
    """Test cases combining grouping with filters and paging"""

    def test_group_by_having(self):
        """Test GROUP BY with a bound HAVING value"""
        query, params = (
            QueryBuilder("cities")
            .select("country_id", "COUNT(*) AS count")
            .where("status", 1)
            .group_by("country_id")
            .having("COUNT(*)", ">", 5)
            .order_by_desc("count")
            .limit(10)
            .build()
        )

        assert query == (
            "SELECT country_id, COUNT(*) AS count FROM cities WHERE status = $1 "
            "GROUP BY country_id HAVING COUNT(*) > $2 ORDER BY count DESC LIMIT $3"
        )
        assert params == [1, 5, 10]

    def test_group_by_without_fields_is_noop(self):
        """Test group_by() with no fields adds nothing"""
        query, _ = QueryBuilder("deals").group_by().build()

        assert query == "SELECT * FROM deals"

    def test_full_list_query(self):
        """Test filter, search group, sort and page in one statement"""
        query, params = (
            QueryBuilder("jobs")
            .where("status", 1)
            .where("type", "Full Time")
            .where_group(lambda q: q.or_where("title", "ILIKE", "%eng%").or_where("description", "ILIKE", "%eng%"))
            .order_by_desc("created_at")
            .paginate(3, 10)
            .build()
        )

        assert query == (
            "SELECT * FROM jobs WHERE status = $1 AND type = $2 "
            "AND (title ILIKE $3 OR description ILIKE $4) "
            "ORDER BY created_at DESC LIMIT $5 OFFSET $6"
        )
        assert params == [1, "Full Time", "%eng%", "%eng%", 10, 20]
