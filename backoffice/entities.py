import math
from enum import Enum
from typing import Any, ClassVar, Literal

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

Record = dict[str, Any]


# Sorting functionality
class SortOrder(str, Enum):
    ASC = "ASC"
    DESC = "DESC"

    @classmethod
    def normalize(
        cls, value: "str | SortOrder | None", default: "SortOrder"
    ) -> "SortOrder":
        """Case-insensitive parse; anything unrecognized falls back to `default`."""
        if isinstance(value, SortOrder):
            return value
        if not value:
            return default
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            return default


class Pagination(BaseModel):
    """Pagination block returned next to every list page."""

    model_config: ClassVar[ConfigDict] = ConfigDict(populate_by_name=True)

    current_page: int = Field(alias="currentPage")
    total_pages: int = Field(alias="totalPages")
    total_items: int = Field(alias="totalItems")
    items_per_page: int = Field(alias="itemsPerPage")

    @classmethod
    def compute(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(
            current_page=page,
            total_pages=math.ceil(total / limit) if limit else 0,
            total_items=total,
            items_per_page=limit,
        )

    def to_response(self) -> dict[str, int]:
        return self.model_dump(by_alias=True)


class PageResult(BaseModel):
    rows: list[Record]
    pagination: Pagination


class OperationResult(BaseModel):
    """Outcome of a repository write.

    Expected failures (missing row, uniqueness clash) are reported here instead
    of being raised; the controller decides which HTTP status they map to.
    """

    success: bool
    message: str | None = None
    reason: Literal["not_found", "conflict"] | None = None
    data: Any = None
    affected_rows: int = 0

    @classmethod
    def ok(cls, data: Any = None, affected_rows: int = 1, message: str | None = None):
        return cls(success=True, data=data, affected_rows=affected_rows, message=message)

    @classmethod
    def not_found(cls, message: str) -> "OperationResult":
        return cls(success=False, reason="not_found", message=message)

    @classmethod
    def conflict(cls, message: str) -> "OperationResult":
        return cls(success=False, reason="conflict", message=message)
