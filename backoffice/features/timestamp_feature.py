"""Timestamp feature for automatic timestamp management"""

from datetime import UTC, datetime
from typing import Any, Literal

from backoffice.features.base_feature import RepositoryFeature


class TimestampFeature(RepositoryFeature):
    """
    Stamps creation and modification times on writes.

    Column names differ between tables (`created_at`/`updated_at` on most,
    only `updated_at` on deals), so both are configurable and either may be
    None. Tables that historically store timestamps as text use style="iso".
    """

    def __init__(
        self,
        created_column: str | None = "created_at",
        updated_column: str | None = "updated_at",
        style: Literal["datetime", "iso"] = "datetime",
    ):
        self.created_column = created_column
        self.updated_column = updated_column
        self.style = style

    def _get_current_timestamp(self) -> datetime | str:
        now = datetime.now(UTC)
        if self.style == "iso":
            return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")
        return now

    def before_create(self, data: dict[str, Any]) -> dict[str, Any]:
        """Inject creation and modification timestamps unless the caller set them"""
        timestamp = self._get_current_timestamp()
        for column in (self.created_column, self.updated_column):
            if column and data.get(column) is None:
                data[column] = timestamp
        return data

    def before_update(self, data: dict[str, Any]) -> dict[str, Any]:
        if self.updated_column:
            data[self.updated_column] = self._get_current_timestamp()
        return data
