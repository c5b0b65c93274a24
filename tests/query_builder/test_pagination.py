"""
Tests for LIMIT, OFFSET, pagination and the count variant of a query.
"""

import pytest

from backoffice.query_builder import QueryBuilder


class TestPaginationFeatures:
    """Test cases for pagination functionality"""

    def test_limit_clause(self):
        """Test LIMIT is bound as a parameter"""
        query, params = QueryBuilder("jobs").limit(10).build()

        assert query == "SELECT * FROM jobs LIMIT $1"
        assert params == [10]

    def test_offset_clause(self):
        """Test OFFSET is bound as a parameter"""
        query, params = QueryBuilder("jobs").offset(20).build()

        assert query == "SELECT * FROM jobs OFFSET $1"
        assert params == [20]

    def test_paginate_second_page(self):
        """Test page 2 of 10 skips the first 10 rows"""
        query, params = (
            QueryBuilder("cities").where("country_id", 5).order_by("name ASC").paginate(2, 10).build()
        )

        assert query == (
            "SELECT * FROM cities WHERE country_id = $1 ORDER BY name ASC LIMIT $2 OFFSET $3"
        )
        assert params == [5, 10, 10]

    def test_paginate_first_page(self):
        """Test page 1 has offset 0"""
        _, params = QueryBuilder("cities").paginate(1, 20).build()

        assert params == [20, 0]

    @pytest.mark.parametrize("page, per_page", [(0, 10), (-1, 10), (1, 0)])
    def test_paginate_rejects_values_below_one(self, page, per_page):
        """Test that page and page size must be at least 1"""
        with pytest.raises(ValueError):
            QueryBuilder("cities").paginate(page, per_page)

    def test_for_count_keeps_filters_and_drops_paging(self):
        """Test the count query shares FROM/JOIN/WHERE but not ORDER/LIMIT/OFFSET"""
        listing = (
            QueryBuilder("cities", "c")
            .select("c.*", "co.name AS country_name")
            .join("LEFT JOIN country co ON c.country_id = co.id")
            .where("c.country_id", 5)
            .order_by("c.name ASC")
            .paginate(2, 10)
        )

        query, params = listing.for_count().build()

        assert query == (
            "SELECT COUNT(*) AS total FROM cities c "
            "LEFT JOIN country co ON c.country_id = co.id WHERE c.country_id = $1"
        )
        assert params == [5]
