"""Job postings and the applications submitted against them."""

from typing import Any

from backoffice.db_context import DatabaseManager
from backoffice.entities import OperationResult, SortOrder
from backoffice.features import StatusFlagFeature, TimestampFeature
from backoffice.repository import Repository, ResourceConfig
from backoffice.search_condition_builder import FilterField

JOB_COLUMNS = frozenset(
    {
        "full_name", "title", "description", "sub_title", "sub_description",
        "about_team", "about_company", "job_title", "city_name", "responsibilities",
        "type", "link", "facilities", "social", "seo_title", "seo_description",
        "seo_keyword", "status", "slug",
    }
)  # fmt: skip

_JOB_FILTERS = {
    "type": FilterField(column="type"),
    "city_name": FilterField(column="city_name"),
}

JOBS = ResourceConfig(
    table="jobs",
    entity_name="Job",
    filters=_JOB_FILTERS,
    search_columns=["title", "description", "job_title"],
    sort_columns={
        "created_at": "created_at",
        "updated_at": "updated_at",
        "title": "title",
        "id": "id",
        "type": "type",
    },
    default_sort="created_at",
    default_order=SortOrder.DESC,
    default_limit=10,
    columns=JOB_COLUMNS,
    slug_column="slug",
    slug_source="title",
    # jobs.created_at / updated_at are text columns holding ISO-8601 strings
    features=[StatusFlagFeature(), TimestampFeature(style="iso")],
)

JOBS_ADMIN = JOBS.model_copy(
    update={"filters": {"status": FilterField(column="status", cast="int"), **_JOB_FILTERS}}
)

APPLICATION_STATUSES = {1: "new", 2: "reviewed"}

APPLICATIONS = ResourceConfig(
    table="applyed_jobs",
    entity_name="Application",
    filters={
        "status": FilterField(column="status", cast="int"),
        "job_id": FilterField(column="job_id", cast="int"),
    },
    search_columns=["first_name", "last_name", "email", "current_job_title"],
    sort_columns={"apply_date": "apply_date", "id": "id"},
    default_sort="apply_date",
    default_order=SortOrder.DESC,
    default_limit=20,
    columns=frozenset(
        {
            "job_id", "first_name", "last_name", "email", "phone", "message", "resume",
            "current_last_employer", "current_job_title", "employment_status", "term",
            "status",
        }
    ),  # fmt: skip
    features=[TimestampFeature(created_column="apply_date", updated_column="update_date")],
)


class JobRepository(Repository):
    def __init__(self, db: DatabaseManager):
        super().__init__(db, JOBS)
        self.admin = Repository(db, JOBS_ADMIN)
        self.applications = Repository(db, APPLICATIONS)

    async def list_admin(self, filters: dict[str, Any], page: int = 1, **kwargs):
        return await self.admin.list(filters, page, include_inactive=True, **kwargs)

    async def types(self) -> list[str]:
        return await self.distinct_values("type")

    async def locations(self) -> list[str]:
        return await self.distinct_values("city_name")

    async def apply(self, fields: dict[str, Any]) -> OperationResult:
        """Store an application; new applications start as status 1 (new)."""
        data = {"term": 0, "status": 1, **fields}
        return await self.applications.create(data)

    async def set_application_status(self, application_id: int, status: int):
        return await self.applications.set_fields(application_id, {"status": status})

    async def delete_application(self, application_id: int) -> OperationResult:
        return await self.applications.hard_delete(application_id)

    async def stats(self) -> dict[str, Any]:
        jobs = await self.aggregate(
            {"active_jobs": "status = 1", "inactive_jobs": "status = 0"},
            total_label="total_jobs",
        )
        applications = await self.applications.aggregate(
            {
                "new_applications": "status = 1",
                "reviewed_applications": "status = 2",
                "new_this_week": "apply_date >= NOW() - INTERVAL '7 days'",
            },
            total_label="total_applications",
        )
        return {**jobs, "applications": applications}
