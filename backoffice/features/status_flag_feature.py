"""Soft delete through an integer status column"""

from typing import Any, Literal

from backoffice.features.base_feature import RepositoryFeature
from backoffice.query_builder import QueryBuilder

ACTIVE = 1
DELETED = 0


class StatusFlagFeature(RepositoryFeature):
    """
    Feature that turns deletes into `status = 0` and hides those rows by default.

    Rows move ACTIVE(1) -> DELETED(0) on soft delete and back on restore;
    a hard delete removes the row and is terminal.

    visibility:
        "active"      default lists show only `status = 1`
        "not_deleted" default lists show everything except `status = 0`
                      (tables that use other status values as workflow states)
    """

    def __init__(
        self,
        column: str = "status",
        visibility: Literal["active", "not_deleted"] = "active",
    ):
        self.column = column
        self.visibility = visibility

    def before_create(self, data: dict[str, Any]) -> dict[str, Any]:
        if data.get(self.column) is None:
            data[self.column] = ACTIVE
        return data

    def apply_query_filters(
        self, builder: QueryBuilder, column_prefix: str = ""
    ) -> QueryBuilder:
        column = f"{column_prefix}{self.column}"
        if self.visibility == "not_deleted":
            return builder.where(column, "!=", DELETED)
        return builder.where(column, ACTIVE)

    def deleted_values(self) -> dict[str, Any]:
        return {self.column: DELETED}

    def restored_values(self) -> dict[str, Any]:
        return {self.column: ACTIVE}
