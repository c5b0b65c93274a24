"""
Tests for INSERT / UPDATE / DELETE statement builders.
"""

import pytest

from backoffice.mutation_builder import (
    affected_rows,
    build_delete,
    build_delete_many,
    build_insert,
    build_update,
    build_update_many,
    quote_identifier,
)


class TestInsert:
    def test_insert_returning_id(self):
        """Test INSERT binds one placeholder per column in dict order"""
        query, params = build_insert("cities", {"name": "Dubai", "country_id": 5})

        assert query == "INSERT INTO cities (name, country_id) VALUES ($1, $2) RETURNING id"
        assert params == ["Dubai", 5]

    def test_insert_without_returning(self):
        """Test INSERT with returning disabled"""
        query, _ = build_insert("tasks", {"title": "Call"}, returning=None)

        assert query == "INSERT INTO tasks (title) VALUES ($1)"

    def test_insert_requires_columns(self):
        """Test INSERT with no columns is rejected"""
        with pytest.raises(ValueError):
            build_insert("tasks", {})


class TestUpdate:
    def test_partial_update_sets_only_supplied_columns(self):
        """Test UPDATE writes exactly the given keys and then the id condition"""
        query, params = build_update("cities", {"name": "Abu Dhabi"}, {"id": 12})

        assert query == "UPDATE cities SET name = $1 WHERE id = $2"
        assert params == ["Abu Dhabi", 12]

    def test_update_with_guard_condition(self):
        """Test extra conditions are ANDed after the id"""
        query, params = build_update("jobs", {"status": 1}, {"id": 3, "status": 0})

        assert query == "UPDATE jobs SET status = $1 WHERE id = $2 AND status = $3"
        assert params == [1, 3, 0]

    def test_update_requires_condition(self):
        """Test UPDATE without WHERE is refused"""
        with pytest.raises(ValueError):
            build_update("jobs", {"status": 1}, {})

    def test_update_many(self):
        """Test bulk UPDATE with an IN list after the SET params"""
        query, params = build_update_many("enquire", {"agent_id": 7}, [1, 2, 999999])

        assert query == "UPDATE enquire SET agent_id = $1 WHERE id IN ($2, $3, $4)"
        assert params == [7, 1, 2, 999999]

    def test_update_many_requires_ids(self):
        """Test bulk UPDATE with no ids is refused"""
        with pytest.raises(ValueError):
            build_update_many("enquire", {"status": 0}, [])


class TestDelete:
    def test_delete_returning_row(self):
        """Test single DELETE returning the removed row"""
        query, params = build_delete("deals", 4, returning="*")

        assert query == "DELETE FROM deals WHERE id = $1 RETURNING *"
        assert params == [4]

    def test_delete_many(self):
        """Test bulk DELETE with an IN list"""
        query, params = build_delete_many("tasks", [5, 6])

        assert query == "DELETE FROM tasks WHERE id IN ($1, $2)"
        assert params == [5, 6]


class TestIdentifiers:
    @pytest.mark.parametrize("name", ["name", "seo_keywork", "_hidden", "col2"])
    def test_plain_identifiers_pass(self, name):
        """Test ordinary column names are accepted unchanged"""
        assert quote_identifier(name) == name

    @pytest.mark.parametrize("name", ["name; DROP TABLE x", "a b", "1col", "c.name", ""])
    def test_unsafe_identifiers_rejected(self, name):
        """Test anything but a bare identifier raises"""
        with pytest.raises(ValueError):
            quote_identifier(name)

    def test_insert_rejects_unsafe_column(self):
        """Test a payload key can never become SQL text"""
        with pytest.raises(ValueError):
            build_insert("cities", {"name) VALUES (1); --": "x"})


class TestAffectedRows:
    @pytest.mark.parametrize(
        "status, expected",
        [("UPDATE 3", 3), ("DELETE 0", 0), ("INSERT 0 1", 1), ("garbage", 0), (None, 0)],
    )
    def test_command_tag_parsing(self, status, expected):
        """Test asyncpg command tags parse to a row count"""
        assert affected_rows(status) == expected
