"""Generic repository driven by a per-resource configuration"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import date, timedelta
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from backoffice.database_operations import DatabaseOperations
from backoffice.db_context import DatabaseManager
from backoffice.entities import OperationResult, PageResult, Pagination, Record, SortOrder
from backoffice.features import RepositoryFeature, StatusFlagFeature
from backoffice.mutation_builder import (
    affected_rows,
    build_delete,
    build_delete_many,
    build_insert,
    build_update,
    build_update_many,
)
from backoffice.query_builder import QueryBuilder
from backoffice.search_condition_builder import FilterField, SearchConditionBuilder
from backoffice.utils.logging import get_logger
from backoffice.utils.slugs import slugify, with_timestamp_suffix

logger = get_logger(__name__)


class ResourceConfig(BaseModel):
    """Everything that differs between two resources' list/CRUD code.

    All identifiers here are trusted constants; request data only ever
    selects among them (filters, sort keys) or is bound as parameters.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    table: str
    alias: str | None = None
    entity_name: str = Field(description="Singular label used in messages, e.g. 'City'")
    id_column: str = "id"

    # List query shape
    select: list[str] = Field(default_factory=lambda: ["*"])
    joins: list[str] = Field(default_factory=list)
    filters: dict[str, FilterField] = Field(default_factory=dict)
    search_columns: list[str] = Field(default_factory=list)
    sort_columns: dict[str, str] = Field(default_factory=lambda: {"id": "id"})
    default_sort: str = "id"
    default_order: SortOrder = SortOrder.DESC
    default_limit: int = 20

    # Writes
    columns: frozenset[str] = Field(description="Columns callers may write")
    unique_columns: dict[str, str] = Field(
        default_factory=dict, description="column -> label for conflict messages"
    )
    slug_column: str | None = None
    slug_source: str | None = None
    slug_collision: Literal["suffix", "conflict"] = "suffix"
    reslug_on_rename: bool = False
    slug_max_length: int = 255
    features: list[RepositoryFeature] = Field(default_factory=list)

    @property
    def prefix(self) -> str:
        return f"{self.alias}." if self.alias else ""

    @property
    def not_found_message(self) -> str:
        return f"{self.entity_name} not found"


class Repository:
    """Parameterized CRUD, list, bulk and aggregate operations for one table.

    Each public coroutine is one logical operation and runs on a single
    pooled connection scoped with `db.connection()`. Expected failures come
    back as `OperationResult`; database errors propagate.
    """

    def __init__(self, db: DatabaseManager, config: ResourceConfig):
        self.db = db
        self.config = config
        self.db_ops = DatabaseOperations(db)
        self.status_feature: StatusFlagFeature | None = next(
            (f for f in config.features if isinstance(f, StatusFlagFeature)), None
        )

    # Query helpers
    def col(self, name: str) -> str:
        """Qualify a column with the table alias."""
        return f"{self.config.prefix}{name}"

    def table_query(self) -> QueryBuilder:
        """Bare `FROM table [alias]`, no joins; used for counts and lookups."""
        return QueryBuilder(self.config.table, self.config.alias)

    def base_query(self) -> QueryBuilder:
        """`SELECT <list columns> FROM table <joins>` as configured."""
        builder = self.table_query().select(*self.config.select)
        for clause in self.config.joins:
            builder = builder.join(clause)
        return builder

    def apply_visibility(self, builder: QueryBuilder) -> QueryBuilder:
        for feature in self.config.features:
            builder = feature.apply_query_filters(builder, self.config.prefix)
        return builder

    def writable(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        """Keep only configured columns; unknown keys never reach SQL text."""
        return {k: v for k, v in fields.items() if k in self.config.columns}

    # Reads
    async def list(
        self,
        filters: Mapping[str, Any] | None = None,
        page: int = 1,
        limit: int | None = None,
        sort_by: str | None = None,
        sort_order: str | SortOrder | None = None,
        include_inactive: bool = False,
        base: QueryBuilder | None = None,
    ) -> PageResult:
        """Filtered, sorted, paginated list plus the total count.

        Soft-deleted rows are hidden unless `include_inactive` is set or the
        caller filters on `status` explicitly.
        """
        filters = filters or {}
        limit = limit or self.config.default_limit
        builder = base or self.base_query()

        explicit_status = "status" in self.config.filters and filters.get("status") not in (
            None,
            "",
        )
        if not include_inactive and not explicit_status:
            builder = self.apply_visibility(builder)

        builder = SearchConditionBuilder.apply_filters(builder, filters, self.config.filters)
        builder = SearchConditionBuilder.apply_search(
            builder, filters.get("search"), self.config.search_columns
        )
        column, order = SearchConditionBuilder.resolve_sort(
            sort_by,
            sort_order,
            self.config.sort_columns,
            self.config.default_sort,
            self.config.default_order,
        )
        data_builder = SearchConditionBuilder.apply_sort(builder, column, order).paginate(
            page, limit
        )

        async with self.db.connection():
            count_query, count_params = builder.for_count().build()
            total = await self.db_ops.fetch_value(count_query, count_params) or 0
            query, params = data_builder.build()
            rows = await self.db_ops.fetch_all(query, params)

        return PageResult(rows=rows, pagination=Pagination.compute(page, limit, total))

    async def fetch(self, builder: QueryBuilder) -> list[Record]:
        """Run an arbitrary SELECT built from `base_query()`/`table_query()`."""
        query, params = builder.build()
        async with self.db.connection():
            return await self.db_ops.fetch_all(query, params)

    async def fetch_first(self, builder: QueryBuilder) -> Record | None:
        query, params = builder.limit(1).build()
        async with self.db.connection():
            return await self.db_ops.fetch_one(query, params)

    async def find_by_id(self, entity_id: int, active_only: bool = False) -> Record | None:
        return await self.find_one(self.config.id_column, entity_id, active_only)

    async def find_one(
        self, column: str, value: Any, active_only: bool = False
    ) -> Record | None:
        builder = self.base_query().where(self.col(column), value)
        if active_only:
            builder = self.apply_visibility(builder)
        return await self.fetch_first(builder)

    async def find_many(
        self,
        conditions: Mapping[str, Any],
        order_column: str | None = None,
        limit: int | None = None,
        active_only: bool = True,
        descending: bool = True,
    ) -> list[Record]:
        """Rows matching every `column = value`, newest first by default."""
        builder = self.base_query()
        for column, value in conditions.items():
            builder = builder.where(self.col(column), value)
        if active_only:
            builder = self.apply_visibility(builder)
        order_column = self.col(order_column or self.config.id_column)
        if descending:
            builder = builder.order_by_desc(order_column)
        else:
            builder = builder.order_by(order_column)
        if limit:
            builder = builder.limit(limit)
        return await self.fetch(builder)

    async def exists(self, entity_id: int) -> bool:
        builder = QueryBuilder(self.config.table).select("1").where(
            self.config.id_column, entity_id
        )
        return await self.fetch_first(builder) is not None

    async def is_taken(self, column: str, value: Any, exclude_id: int | None = None) -> bool:
        """Whether another row already holds `value` in `column`."""
        builder = QueryBuilder(self.config.table).select("1").where(column, value)
        if exclude_id is not None:
            builder = builder.where(self.config.id_column, "!=", exclude_id)
        return await self.fetch_first(builder) is not None

    async def slug_available(self, slug: str, exclude_id: int | None = None) -> bool:
        if not self.config.slug_column:
            raise ValueError(f"{self.config.table} has no slug column")
        return not await self.is_taken(self.config.slug_column, slugify(slug), exclude_id)

    # Writes
    async def _first_conflict(
        self, data: Mapping[str, Any], exclude_id: int | None = None
    ) -> OperationResult | None:
        for column, label in self.config.unique_columns.items():
            value = data.get(column)
            if value in (None, ""):
                continue
            if await self.is_taken(column, value, exclude_id):
                return OperationResult.conflict(f"{label} already exists")
        return None

    async def _resolve_slug(
        self, data: dict[str, Any], exclude_id: int | None = None
    ) -> OperationResult | None:
        """Fill/normalize the slug column in place; returns a conflict when unusable."""
        slug_column = self.config.slug_column
        if not slug_column:
            return None

        explicit = slugify(str(data.get(slug_column) or ""), self.config.slug_max_length)
        data.pop(slug_column, None)
        if explicit:
            data[slug_column] = explicit
            if await self.is_taken(slug_column, data[slug_column], exclude_id):
                return OperationResult.conflict("Slug already exists")
            return None

        source = data.get(self.config.slug_source) if self.config.slug_source else None
        derive = source and (exclude_id is None or self.config.reslug_on_rename)
        if not derive:
            return None

        max_length = self.config.slug_max_length
        slug = slugify(str(source), max_length)
        if not slug:
            # Nothing alphanumeric to derive from.
            slug = with_timestamp_suffix(slugify(self.config.entity_name), max_length=max_length)
        elif await self.is_taken(slug_column, slug, exclude_id):
            if self.config.slug_collision == "conflict" and exclude_id is None:
                return OperationResult.conflict("Slug already exists")
            slug = with_timestamp_suffix(slug, max_length=max_length)
        data[slug_column] = slug
        return None

    async def create(self, fields: Mapping[str, Any]) -> OperationResult:
        """Insert a row; data is `{"id": ..., "slug": ...?}` on success."""
        data = self.writable(fields)

        async with self.db.connection():
            problem = await self._resolve_slug(data) or await self._first_conflict(data)
            if problem:
                return problem

            for feature in self.config.features:
                data = feature.before_create(data)

            query, params = build_insert(self.config.table, data, self.config.id_column)
            new_id = await self.db_ops.fetch_value(query, params)

        logger.info(
            "%s created", self.config.entity_name, extra={"table": self.config.table, "id": new_id}
        )
        result: dict[str, Any] = {"id": new_id}
        if self.config.slug_column:
            result["slug"] = data.get(self.config.slug_column)
        return OperationResult.ok(result)

    async def update(self, entity_id: int, fields: Mapping[str, Any]) -> OperationResult:
        """Partial update of exactly the supplied (writable) columns."""
        data = self.writable(fields)
        if not data:
            raise ValueError("update() needs at least one writable column")

        async with self.db.connection():
            if not await self.exists(entity_id):
                return OperationResult.not_found(self.config.not_found_message)

            problem = await self._resolve_slug(data, entity_id) or await self._first_conflict(
                data, entity_id
            )
            if problem:
                return problem

            for feature in self.config.features:
                data = feature.before_update(data)
            if not data:
                # Only an unusable slug was sent.
                return OperationResult.ok({"id": entity_id})

            query, params = build_update(
                self.config.table, data, {self.config.id_column: entity_id}
            )
            await self.db_ops.execute_query(query, params)

        result: dict[str, Any] = {"id": entity_id}
        if self.config.slug_column and self.config.slug_column in data:
            result["slug"] = data[self.config.slug_column]
        return OperationResult.ok(result)

    async def set_fields(
        self,
        entity_id: int,
        fields: Mapping[str, Any],
        only_if: Mapping[str, Any] | None = None,
        not_found_message: str | None = None,
    ) -> OperationResult:
        """Single-statement transition (status, lead status, assignment...).

        Zero affected rows means the row is missing or `only_if` did not hold.
        """
        data = dict(fields)
        for feature in self.config.features:
            data = feature.before_update(data)

        conditions = {self.config.id_column: entity_id, **(only_if or {})}
        query, params = build_update(self.config.table, data, conditions)
        async with self.db.connection():
            status = await self.db_ops.execute_query(query, params)

        if affected_rows(status) == 0:
            return OperationResult.not_found(not_found_message or self.config.not_found_message)
        return OperationResult.ok({"id": entity_id})

    def _require_status_feature(self) -> StatusFlagFeature:
        if self.status_feature is None:
            raise ValueError(f"{self.config.table} has no status flag; use hard_delete()")
        return self.status_feature

    async def soft_delete(self, entity_id: int) -> OperationResult:
        feature = self._require_status_feature()
        result = await self.set_fields(entity_id, feature.deleted_values())
        if result.success:
            logger.info("%s soft-deleted", self.config.entity_name, extra={"id": entity_id})
        return result

    async def restore(self, entity_id: int) -> OperationResult:
        """DELETED -> ACTIVE; rows that are not currently deleted are left alone."""
        feature = self._require_status_feature()
        return await self.set_fields(
            entity_id,
            feature.restored_values(),
            only_if=feature.deleted_values(),
            not_found_message=f"{self.config.entity_name} not found or not deleted",
        )

    async def hard_delete(self, entity_id: int) -> OperationResult:
        """Remove the row; data is the deleted row so callers can clean up files."""
        query, params = build_delete(
            self.config.table, entity_id, self.config.id_column, returning="*"
        )
        async with self.db.connection():
            row = await self.db_ops.fetch_one(query, params)

        if row is None:
            return OperationResult.not_found(self.config.not_found_message)
        logger.info("%s deleted permanently", self.config.entity_name, extra={"id": entity_id})
        return OperationResult.ok(row)

    async def bulk_update(self, ids: Sequence[int], fields: Mapping[str, Any]) -> int:
        """One UPDATE ... WHERE id IN (...); returns the affected-row count."""
        data = dict(fields)
        for feature in self.config.features:
            data = feature.before_update(data)

        query, params = build_update_many(self.config.table, data, ids, self.config.id_column)
        async with self.db.connection():
            status = await self.db_ops.execute_query(query, params)
        return affected_rows(status)

    async def bulk_soft_delete(self, ids: Sequence[int]) -> int:
        feature = self._require_status_feature()
        return await self.bulk_update(ids, feature.deleted_values())

    async def bulk_hard_delete(self, ids: Sequence[int]) -> list[Record]:
        """Delete every listed row that exists; returns the removed rows."""
        query, params = build_delete_many(
            self.config.table, ids, self.config.id_column, returning="*"
        )
        async with self.db.connection():
            rows = await self.db_ops.fetch_all(query, params)
        logger.info(
            "%s bulk delete", self.config.entity_name, extra={"requested": len(ids), "deleted": len(rows)}
        )
        return rows

    # Aggregates for dashboards
    async def aggregate(
        self,
        named_conditions: Mapping[str, str],
        builder: QueryBuilder | None = None,
        total_label: str = "total",
    ) -> dict[str, int]:
        """`COUNT(*) AS <total_label>` plus one `COUNT(*) FILTER (WHERE cond) AS name` per entry."""
        selects = [f"COUNT(*) AS {total_label}"] + [
            f"COUNT(*) FILTER (WHERE {condition}) AS {name}"
            for name, condition in named_conditions.items()
        ]
        row = await self.fetch_first((builder or self.table_query()).select(*selects))
        return {key: int(value or 0) for key, value in (row or {}).items()}

    async def group_counts(
        self,
        column: str,
        label: str | None = None,
        limit: int | None = None,
        builder: QueryBuilder | None = None,
    ) -> list[Record]:
        """`[{label: value, "count": n}, ...]` largest groups first, NULL groups skipped."""
        label = label or column.rsplit(".", 1)[-1]
        grouped = (
            (builder or self.table_query())
            .select(f"{column} AS {label}", "COUNT(*) AS count")
            .where(column, "!=", None)
            .group_by(column)
            .order_by_desc("count")
        )
        if limit:
            grouped = grouped.limit(limit)
        return await self.fetch(grouped)

    async def daily_trend(
        self, column: str, days: int = 30, builder: QueryBuilder | None = None
    ) -> list[Record]:
        """Row counts per calendar day over the last `days` days."""
        since = date.today() - timedelta(days=days)
        day = f"DATE({column})"
        trend = (
            (builder or self.table_query())
            .select(f"{day} AS date", "COUNT(*) AS count")
            .where(day, ">=", since)
            .group_by(day)
            .order_by(day)
        )
        return await self.fetch(trend)

    async def distinct_values(self, column: str, active_only: bool = True) -> list[Any]:
        builder = (
            self.table_query()
            .select(f"DISTINCT {self.col(column)} AS value")
            .where(self.col(column), "!=", None)
            .where(self.col(column), "!=", "")
            .order_by("value")
        )
        if active_only:
            builder = self.apply_visibility(builder)
        return [row["value"] for row in await self.fetch(builder)]
