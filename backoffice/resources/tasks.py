"""Back-office tasks. No status column: deletes are hard."""

from typing import Any

from backoffice.db_context import DatabaseManager
from backoffice.entities import OperationResult, Record, SortOrder
from backoffice.repository import Repository, ResourceConfig
from backoffice.search_condition_builder import FilterField

TASK_COLUMNS = frozenset(
    {
        "commission",
        "assign",
        "date",
        "title",
        "slug",
        "descriptions",
        "heading",
        "seo_title",
        "seo_keywork",
        "seo_description",
    }
)

TASKS = ResourceConfig(
    table="tasks",
    entity_name="Task",
    filters={
        "assign": FilterField(column="assign"),
        "date": FilterField(column="date"),
        "slug": FilterField(column="slug"),
    },
    search_columns=["title", "heading", "descriptions", "assign"],
    sort_columns={"id": "id", "title": "title", "date": "date", "assign": "assign"},
    default_sort="id",
    default_order=SortOrder.DESC,
    default_limit=20,
    columns=TASK_COLUMNS,
    slug_column="slug",
    slug_source="title",
    slug_collision="conflict",
    reslug_on_rename=True,
    slug_max_length=100,
)


class TaskRepository(Repository):
    def __init__(self, db: DatabaseManager):
        super().__init__(db, TASKS)

    async def find_by_slug(self, slug: str) -> Record | None:
        return await self.find_one("slug", slug)

    async def find_by_assignee(self, assign: str) -> list[Record]:
        return await self.find_many({"assign": assign})

    async def find_by_date(self, day: str) -> list[Record]:
        return await self.find_many({"date": day})

    async def find_in_date_range(self, start: str, end: str) -> list[Record]:
        # `date` is free text; ISO dates compare correctly as strings
        builder = (
            self.base_query()
            .where("date", ">=", start)
            .where("date", "<=", end)
            .order_by("date ASC")
        )
        return await self.fetch(builder)

    async def assign(self, task_id: int, assign: str) -> OperationResult:
        return await self.set_fields(task_id, {"assign": assign})

    async def set_commission(self, task_id: int, commission: Any) -> OperationResult:
        return await self.set_fields(task_id, {"commission": commission})

    async def bulk_assign(self, ids: list[int], assign: str) -> int:
        return await self.bulk_update(ids, {"assign": assign})

    async def by_assignee(self) -> list[Record]:
        return await self.group_counts(
            "assign", builder=self.table_query().where("assign", "!=", "")
        )

    async def stats(self) -> dict[str, Any]:
        totals = await self.fetch_first(
            self.table_query().select(
                "COUNT(*) AS total_tasks",
                "COUNT(DISTINCT assign) AS total_assignees",
                "COUNT(DISTINCT date) AS total_dates",
            )
        )
        return {
            **{key: int(value or 0) for key, value in (totals or {}).items()},
            "by_assignee": await self.by_assignee(),
        }
