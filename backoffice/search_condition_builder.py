from collections.abc import Mapping
from datetime import date
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

from backoffice.entities import SortOrder
from backoffice.errors import ValidationError
from backoffice.query_builder import QueryBuilder


class FilterField(BaseModel):
    """One allow-listed filter: request key -> SQL column, operator and value type."""

    model_config = ConfigDict(frozen=True)

    column: str
    operator: str = "="
    cast: Literal["str", "int", "date"] = "str"


def _coerce(key: str, value: Any, cast: str) -> Any:
    if cast == "str":
        return str(value).strip()
    try:
        if cast == "int":
            return int(str(value).strip())
        if isinstance(value, date):
            return value
        return date.fromisoformat(str(value).strip())
    except ValueError as exc:
        raise ValidationError(f"Invalid value for {key}") from exc


class SearchConditionBuilder:
    """Composition class for building filter, search and sort conditions"""

    @staticmethod
    def apply_filters(
        builder: QueryBuilder,
        filters: Mapping[str, Any],
        allowed: Mapping[str, FilterField],
    ) -> QueryBuilder:
        """Add one bound predicate per present allow-listed filter.

        Iterates the allow-list (not the request) so predicates follow the
        declaration order and unknown request keys are dropped.
        """
        for key, field in allowed.items():
            value = filters.get(key)
            if value is None or (isinstance(value, str) and not value.strip()):
                continue
            builder = builder.where(field.column, field.operator, _coerce(key, value, field.cast))
        return builder

    @staticmethod
    def apply_search(
        builder: QueryBuilder, term: str | None, columns: list[str]
    ) -> QueryBuilder:
        """`(c1 ILIKE $n OR c2 ILIKE $n+1 ...)` with the term bound once per column."""
        if not term or not term.strip() or not columns:
            return builder

        pattern = f"%{term.strip()}%"

        def group(qb: QueryBuilder) -> QueryBuilder:
            for column in columns:
                qb = qb.or_where(column, "ILIKE", pattern)
            return qb

        return builder.where_group(group)

    @staticmethod
    def resolve_sort(
        sort_by: str | None,
        sort_order: str | SortOrder | None,
        allowed: Mapping[str, str],
        default_sort: str,
        default_order: SortOrder,
    ) -> tuple[str, SortOrder]:
        """Map a requested sort key to its column.

        An unknown key falls back to the default column *and* direction, so a
        rejected sort never yields a half-applied ordering.
        """
        if sort_by and sort_by not in allowed:
            return allowed[default_sort], default_order
        column = allowed[sort_by or default_sort]
        return column, SortOrder.normalize(sort_order, default_order)

    @staticmethod
    def apply_sort(builder: QueryBuilder, column: str, order: SortOrder) -> QueryBuilder:
        if order == SortOrder.DESC:
            return builder.order_by_desc(column)
        return builder.order_by(f"{column} ASC")
