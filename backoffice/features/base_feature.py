"""Base feature interface for repository features"""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from backoffice.query_builder import QueryBuilder


class RepositoryFeature:
    """
    Base class for repository features.

    Features hook into repository lifecycle events to add behavior such as
    timestamps or status-flag soft deletes without each resource repeating it.
    """

    def before_create(self, data: dict[str, Any]) -> dict[str, Any]:
        """
        Hook called before inserting a row.

        Args:
            data: Column values about to be inserted

        Returns:
            Modified data dictionary
        """
        return data

    def before_update(self, data: dict[str, Any]) -> dict[str, Any]:
        """
        Hook called before a partial or bulk update.

        Args:
            data: Column values about to be written

        Returns:
            Modified data dictionary
        """
        return data

    def apply_query_filters(
        self, builder: "QueryBuilder", column_prefix: str = ""
    ) -> "QueryBuilder":
        """
        Hook to restrict default list queries (e.g. hide soft-deleted rows).

        Args:
            builder: Query builder instance
            column_prefix: Table alias plus dot, e.g. "c.", or ""

        Returns:
            Modified query builder
        """
        return builder
