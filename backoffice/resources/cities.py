"""Cities, plus the country/state/city_data lookups the city forms need."""

from typing import Any

from backoffice.db_context import DatabaseManager
from backoffice.entities import Record, SortOrder
from backoffice.features import StatusFlagFeature, TimestampFeature
from backoffice.query_builder import QueryBuilder
from backoffice.repository import Repository, ResourceConfig
from backoffice.search_condition_builder import FilterField

CITY_COLUMNS = frozenset(
    {
        "country_id",
        "state_id",
        "city_data_id",
        "name",
        "slug",
        "latitude",
        "longitude",
        "img",
        "description",
        "seo_title",
        "seo_keywork",
        "seo_description",
        "status",
    }
)

_CITY_FILTERS = {
    "country_id": FilterField(column="c.country_id", cast="int"),
    "state_id": FilterField(column="c.state_id", cast="int"),
}

CITIES = ResourceConfig(
    table="cities",
    alias="c",
    entity_name="City",
    select=[
        "c.*",
        "co.name AS country_name",
        "s.name AS state_name",
        "(SELECT COUNT(*) FROM properties p WHERE p.city_id = c.id AND p.status = 1) AS property_count",
        "(SELECT COUNT(*) FROM project_listing pl WHERE pl.city_id = c.id AND pl.status = 1) AS project_count",
    ],
    joins=[
        "LEFT JOIN country co ON c.country_id = co.id",
        "LEFT JOIN state s ON c.state_id = s.id",
    ],
    filters=_CITY_FILTERS,
    search_columns=["c.name", "c.slug"],
    sort_columns={"name": "c.name", "id": "c.id", "country_id": "c.country_id"},
    default_sort="name",
    default_order=SortOrder.ASC,
    default_limit=20,
    columns=CITY_COLUMNS,
    slug_column="slug",
    slug_source="name",
    features=[StatusFlagFeature()],
)

# Back-office grid: every status, filterable by it, newest first.
CITIES_ADMIN = CITIES.model_copy(
    update={
        "select": [
            "c.*",
            "co.name AS country_name",
            "(SELECT COUNT(*) FROM community cm WHERE cm.city_id = c.id) AS community_count",
            "(SELECT COUNT(*) FROM properties p WHERE p.city_id = c.id) AS property_count",
        ],
        "joins": ["LEFT JOIN country co ON c.country_id = co.id"],
        "filters": {"status": FilterField(column="c.status", cast="int"), **_CITY_FILTERS},
        "sort_columns": {
            "id": "c.id",
            "name": "c.name",
            "country_id": "c.country_id",
            "status": "c.status",
        },
        "default_sort": "id",
        "default_order": SortOrder.DESC,
        "default_limit": 10,
    }
)

CITY_DATA = ResourceConfig(
    table="city_data",
    entity_name="City data",
    select=["*"],
    sort_columns={"name": "name"},
    default_sort="name",
    default_order=SortOrder.ASC,
    columns=frozenset({"country_id", "name", "description", "status"}),
    features=[
        StatusFlagFeature(),
        TimestampFeature(created_column="create_date", updated_column="update_date"),
    ],
)


class CityRepository(Repository):
    def __init__(self, db: DatabaseManager):
        super().__init__(db, CITIES)
        self.admin = Repository(db, CITIES_ADMIN)
        self.city_data = Repository(db, CITY_DATA)

    async def list_admin(
        self,
        filters: dict[str, Any],
        page: int = 1,
        limit: int | None = None,
        sort_by: str | None = None,
        sort_order: str | None = None,
    ):
        return await self.admin.list(
            filters, page, limit, sort_by, sort_order, include_inactive=True
        )

    async def find_by_slug(self, slug: str) -> Record | None:
        """Active city by slug, with its active communities attached."""
        city = await self.fetch_first(
            self.table_query()
            .select("c.*", "co.name AS country_name")
            .join("LEFT JOIN country co ON c.country_id = co.id")
            .where("c.slug", slug)
            .where("c.status", 1)
        )
        if city is None:
            return None

        city["communities"] = await self.fetch(
            QueryBuilder("community")
            .select("id", "name", "slug", "img")
            .where("city_id", city["id"])
            .where("status", 1)
            .order_by("name ASC")
        )
        return city

    async def update_status(self, city_id: int, status: int):
        return await self.set_fields(city_id, {"status": status})

    async def countries(self) -> list[Record]:
        return await self.fetch(
            QueryBuilder("country").where("status", 1).order_by("name ASC")
        )

    async def states(self, country_id: int | None = None) -> list[Record]:
        builder = QueryBuilder("state").where("status", 1)
        if country_id:
            builder = builder.where("country_id", country_id)
        return await self.fetch(builder.order_by("name ASC"))

    async def city_data_for_country(self, country_id: int) -> list[Record]:
        return await self.city_data.find_many(
            {"country_id": country_id}, order_column="name", descending=False
        )

    async def stats(self) -> dict[str, Any]:
        totals = await self.aggregate(
            {"active_cities": "status = 1", "inactive_cities": "status = 0"},
            builder=QueryBuilder("cities"),
            total_label="total_cities",
        )
        by_country = await self.group_counts(
            "country_id",
            limit=10,
            builder=QueryBuilder("cities").where("status", 1),
        )
        return {**totals, "by_country": by_country}
