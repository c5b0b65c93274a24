"""
Tests for the top-level package surface.
"""

import inspect

import backoffice
from backoffice.repository import Repository


class TestPackageExports:
    def test_public_names(self):
        """Test the package re-exports the core building blocks"""
        assert set(backoffice.__all__) == {
            "DatabaseManager",
            "QueryBuilder",
            "Repository",
            "ResourceConfig",
            "RepositoryFeature",
            "TimestampFeature",
            "StatusFlagFeature",
        }
        for name in backoffice.__all__:
            assert getattr(backoffice, name) is not None

    def test_repository_keeps_list_operation(self):
        """Test a method named `list` coexists with `list[...]` return annotations"""
        assert inspect.iscoroutinefunction(Repository.list)
        assert inspect.iscoroutinefunction(Repository.fetch)
        assert backoffice.Repository is Repository
