"""
Tests for OR conditions and parenthesized condition groups.
"""

from backoffice.query_builder import QueryBuilder


class TestOrWhereConditions:
    """Test cases for OR WHERE functionality"""

    def test_where_or_where(self):
        """Test a single AND condition followed by an OR condition"""
        query, params = QueryBuilder("tasks").where("assign", "sara").or_where("assign", "omar").build()

        assert query == "SELECT * FROM tasks WHERE assign = $1 OR assign = $2"
        assert params == ["sara", "omar"]

    def test_multiple_and_conditions_are_wrapped_before_or(self):
        """Test that several ANDs are parenthesized when an OR follows"""
        query, params = (
            QueryBuilder("tasks")
            .where("assign", "sara")
            .where("date", "2024-05-01")
            .or_where("title", "Urgent")
            .build()
        )

        assert query == "SELECT * FROM tasks WHERE (assign = $1 AND date = $2) OR title = $3"
        assert params == ["sara", "2024-05-01", "Urgent"]


class TestGroupedConditions:
    """Test cases for grouped WHERE conditions"""

    def test_search_group_after_filter(self):
        """Test an OR group of ILIKE conditions numbered after earlier params"""
        query, params = (
            QueryBuilder("cities", "c")
            .where("c.status", 1)
            .where_group(
                lambda q: q.or_where("c.name", "ILIKE", "%dub%").or_where(
                    "c.slug", "ILIKE", "%dub%"
                )
            )
            .build()
        )

        assert query == (
            "SELECT * FROM cities c WHERE c.status = $1 "
            "AND (c.name ILIKE $2 OR c.slug ILIKE $3)"
        )
        assert params == [1, "%dub%", "%dub%"]

    def test_group_before_filter(self):
        """Test that conditions added after a group continue the numbering"""
        query, params = (
            QueryBuilder("jobs")
            .where(lambda q: q.or_where("title", "ILIKE", "%dev%").or_where("job_title", "ILIKE", "%dev%"))
            .where("status", 1)
            .build()
        )

        assert query == "SELECT * FROM jobs WHERE (title ILIKE $1 OR job_title ILIKE $2) AND status = $3"
        assert params == ["%dev%", "%dev%", 1]

    def test_group_with_null_check(self):
        """Test a group mixing IS NULL with a bound comparison"""
        query, params = (
            QueryBuilder("enquire", "e")
            .where("e.status", "!=", 0)
            .where(lambda q: q.where("e.agent_id", None).or_where("e.agent_id", 0))
            .build()
        )

        assert query == (
            "SELECT * FROM enquire e WHERE e.status != $1 "
            "AND (e.agent_id IS NULL OR e.agent_id = $2)"
        )
        assert params == [0, 0]

    def test_empty_group_is_ignored(self):
        """Test that a group adding no conditions leaves the query unchanged"""
        query, params = QueryBuilder("deals").where("closing_status", "open").where_group(lambda q: q).build()

        assert query == "SELECT * FROM deals WHERE closing_status = $1"
        assert params == ["open"]

    def test_or_group(self):
        """Test or_where with a group function"""
        query, params = (
            QueryBuilder("contact_us")
            .where("status", 1)
            .or_where(lambda q: q.where("lead_status", 2).where("agent_id", 7))
            .build()
        )

        assert query == (
            "SELECT * FROM contact_us WHERE status = $1 OR (lead_status = $2 AND agent_id = $3)"
        )
        assert params == [1, 2, 7]
