"""
Tests for pagination math, sort order parsing and operation results.
"""

import pytest

from backoffice.entities import OperationResult, Pagination, SortOrder


class TestPagination:
    @pytest.mark.parametrize(
        "page, limit, total, total_pages",
        [(1, 10, 0, 0), (1, 10, 10, 1), (2, 10, 11, 2), (3, 20, 41, 3)],
    )
    def test_total_pages_is_ceiling(self, page, limit, total, total_pages):
        """Test totalPages = ceil(total / limit)"""
        assert Pagination.compute(page, limit, total).total_pages == total_pages

    def test_response_uses_camel_case(self):
        """Test the pagination block keys match the API contract"""
        assert Pagination.compute(2, 10, 35).to_response() == {
            "currentPage": 2,
            "totalPages": 4,
            "totalItems": 35,
            "itemsPerPage": 10,
        }


class TestSortOrder:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("asc", SortOrder.ASC),
            (" Desc ", SortOrder.DESC),
            (SortOrder.DESC, SortOrder.DESC),
            (None, SortOrder.ASC),
            ("", SortOrder.ASC),
            ("random", SortOrder.ASC),
        ],
    )
    def test_normalize(self, value, expected):
        """Test case-insensitive parsing with a default for anything else"""
        assert SortOrder.normalize(value, SortOrder.ASC) == expected


class TestOperationResult:
    def test_ok(self):
        result = OperationResult.ok({"id": 3})

        assert result.success
        assert result.data == {"id": 3}
        assert result.affected_rows == 1

    def test_failures_carry_reason(self):
        assert OperationResult.not_found("City not found").reason == "not_found"
        assert OperationResult.conflict("Slug already exists").reason == "conflict"
