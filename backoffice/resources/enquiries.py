"""Property/project enquiries (`enquire` table).

Status here is a workflow value rather than a plain on/off flag, so default
lists show everything except soft-deleted rows (status 0).
"""

from datetime import date
from typing import Any

from backoffice.db_context import DatabaseManager
from backoffice.entities import OperationResult, PageResult, Record, SortOrder
from backoffice.features import StatusFlagFeature, TimestampFeature
from backoffice.query_builder import QueryBuilder
from backoffice.repository import Repository, ResourceConfig
from backoffice.search_condition_builder import FilterField, SearchConditionBuilder

ENQUIRY_COLUMNS = frozenset(
    {
        "contact_id", "property_id", "project_item_id", "item_type", "type", "source",
        "agent_id", "country", "priority", "quality", "contact_type", "agent_activity",
        "admin_activity", "listing_type", "exclusive_status", "construction_status",
        "state_id", "community_id", "sub_community_id", "project_id", "building",
        "price_min", "price_max", "bedroom_min", "bedroom_max", "contact_source",
        "lead_source", "property_image", "message", "resume", "drip_marketing",
        "status", "contact_date", "lead_status", "lost_status",
    }
)  # fmt: skip

_RELATED = [
    "LEFT JOIN properties p ON e.property_id = p.id",
    "LEFT JOIN project_listing pr ON e.project_id = pr.id",
    "LEFT JOIN agents a ON e.agent_id = a.id",
    "LEFT JOIN community c ON e.community_id = c.id",
    "LEFT JOIN sub_community sc ON e.sub_community_id = sc.id",
    "LEFT JOIN users cu ON e.contact_id = cu.id",
]

ENQUIRIES = ResourceConfig(
    table="enquire",
    alias="e",
    entity_name="Enquiry",
    select=[
        "e.*",
        "p.property_name",
        "p.property_slug",
        "p.featured_image AS property_featured_image",
        "pr.project_name",
        "pr.project_slug",
        "a.name AS agent_name",
        "a.email AS agent_email",
        "a.phone AS agent_phone",
        "c.name AS community_name",
        "sc.name AS sub_community_name",
        "cu.name AS contact_name",
        "cu.email AS contact_email",
        "cu.phone AS contact_phone",
    ],
    joins=_RELATED,
    filters={
        "type": FilterField(column="e.type"),
        "source": FilterField(column="e.source"),
        "priority": FilterField(column="e.priority"),
        "quality": FilterField(column="e.quality"),
        "status": FilterField(column="e.status", cast="int"),
        "lead_status": FilterField(column="e.lead_status", cast="int"),
        "agent_id": FilterField(column="e.agent_id", cast="int"),
        "property_id": FilterField(column="e.property_id", cast="int"),
        "project_id": FilterField(column="e.project_id", cast="int"),
        "community_id": FilterField(column="e.community_id", cast="int"),
        "contact_type": FilterField(column="e.contact_type"),
        "listing_type": FilterField(column="e.listing_type"),
        "date_from": FilterField(column="DATE(e.created_at)", operator=">=", cast="date"),
        "date_to": FilterField(column="DATE(e.created_at)", operator="<=", cast="date"),
    },
    search_columns=["e.message", "e.building", "e.contact_source"],
    sort_columns={
        "created_at": "e.created_at",
        "updated_at": "e.updated_at",
        "priority": "e.priority",
        "status": "e.status",
        "lead_status": "e.lead_status",
        "type": "e.type",
    },
    default_sort="created_at",
    default_order=SortOrder.DESC,
    default_limit=20,
    columns=ENQUIRY_COLUMNS,
    features=[StatusFlagFeature(visibility="not_deleted"), TimestampFeature()],
)

# Free-text search across the enquiry and the joined contact/property.
GLOBAL_SEARCH_COLUMNS = ["e.message", "e.building", "cu.name", "cu.email", "p.property_name"]

# Single-field transitions: route segment -> column.
FIELD_TRANSITIONS = {
    "status": "status",
    "priority": "priority",
    "quality": "quality",
    "assign-agent": "agent_id",
    "agent-activity": "agent_activity",
    "admin-activity": "admin_activity",
}

# Bulk route segment -> (column, verb used in the result message).
BULK_ACTIONS = {
    "status": ("status", "updated"),
    "assign": ("agent_id", "assigned"),
    "lead-status": ("lead_status", "updated"),
}


class EnquiryRepository(Repository):
    def __init__(self, db: DatabaseManager):
        super().__init__(db, ENQUIRIES)

    def _visible(self) -> QueryBuilder:
        return self.apply_visibility(self.base_query())

    async def find_related(self, column: str, value: int, limit: int = 10) -> list[Record]:
        """Latest visible enquiries for a property, project or contact."""
        return await self.find_many({column: value}, order_column="created_at", limit=limit)

    async def list_for_agent(
        self, agent_id: int, filters: dict[str, Any], page: int = 1, limit: int | None = None
    ) -> PageResult:
        scoped = self.base_query().where("e.agent_id", agent_id)
        return await self.list(
            {k: filters.get(k) for k in ("status", "lead_status")},
            page,
            limit,
            sort_by="created_at",
            sort_order=SortOrder.DESC,
            include_inactive=True,
            base=self.apply_visibility(scoped),
        )

    async def recent(self, limit: int = 10) -> list[Record]:
        return await self.fetch(self._visible().order_by_desc("e.created_at").limit(limit))

    async def unassigned(self, limit: int = 50) -> list[Record]:
        builder = self._visible().where(
            lambda q: q.where("e.agent_id", None).or_where("e.agent_id", 0)
        )
        return await self.fetch(builder.order_by_desc("e.created_at").limit(limit))

    async def high_priority(self, limit: int = 20) -> list[Record]:
        builder = self._visible().where("e.priority", "high").where("e.lead_status", "!=", 4)
        return await self.fetch(builder.order_by_desc("e.created_at").limit(limit))

    async def search(self, term: str, limit: int = 50) -> list[Record]:
        builder = SearchConditionBuilder.apply_search(
            self._visible(), term, GLOBAL_SEARCH_COLUMNS
        )
        return await self.fetch(builder.order_by_desc("e.created_at").limit(limit))

    async def set_field(self, enquiry_id: int, transition: str, value: Any) -> OperationResult:
        return await self.set_fields(enquiry_id, {FIELD_TRANSITIONS[transition]: value})

    async def set_lead_status(
        self, enquiry_id: int, lead_status: int, lost_status: str | None = None
    ) -> OperationResult:
        fields: dict[str, Any] = {"lead_status": lead_status}
        if lost_status:
            fields["lost_status"] = lost_status
        return await self.set_fields(enquiry_id, fields)

    async def set_drip_marketing(self, enquiry_id: int, enabled: bool) -> OperationResult:
        value = "yes" if enabled else "no"
        return await self.set_fields(enquiry_id, {"drip_marketing": value})

    async def bulk_action(self, ids: list[int], action: str, value: Any) -> OperationResult:
        column, verb = BULK_ACTIONS[action]
        count = await self.bulk_update(ids, {column: value})
        return OperationResult.ok(affected_rows=count, message=f"{count} enquiries {verb}")

    async def stats(
        self,
        agent_id: int | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> dict[str, Any]:
        scoped = QueryBuilder("enquire")
        if agent_id:
            scoped = scoped.where("agent_id", agent_id)
        if date_from:
            scoped = scoped.where("DATE(created_at)", ">=", date_from)
        if date_to:
            scoped = scoped.where("DATE(created_at)", "<=", date_to)

        totals = await self.aggregate(
            {
                "active_enquiries": "status = 1",
                "deleted_enquiries": "status = 0",
                "new_leads": "lead_status = 1",
                "in_progress_leads": "lead_status = 2",
                "converted_leads": "lead_status = 3",
                "lost_leads": "lead_status = 4",
                "high_priority": "priority = 'high'",
                "medium_priority": "priority = 'medium'",
                "low_priority": "priority = 'low'",
            },
            builder=scoped,
            total_label="total_enquiries",
        )

        visible = QueryBuilder("enquire").where("status", "!=", 0)
        recent = await self.aggregate(
            {"new_enquiries_week": "created_at >= NOW() - INTERVAL '7 days'"}, builder=visible
        )
        by_agent = await self.fetch(
            QueryBuilder("enquire", "e")
            .select(
                "e.agent_id",
                "a.name AS agent_name",
                "COUNT(*) AS total_enquiries",
                "COUNT(*) FILTER (WHERE e.lead_status = 3) AS converted",
            )
            .join("LEFT JOIN agents a ON e.agent_id = a.id")
            .where("e.status", "!=", 0)
            .where("e.agent_id", "!=", None)
            .group_by("e.agent_id", "a.name")
            .order_by_desc("total_enquiries")
            .limit(10)
        )

        return {
            **totals,
            "new_enquiries_week": recent["new_enquiries_week"],
            "by_type": await self.group_counts(
                "type", builder=visible.where("type", "!=", "")
            ),
            "by_source": await self.group_counts(
                "source", limit=10, builder=visible.where("source", "!=", "")
            ),
            "by_agent": by_agent,
            "daily_trend": await self.daily_trend("created_at", 30, builder=visible),
        }
