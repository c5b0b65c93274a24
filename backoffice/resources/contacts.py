"""Contacts / leads (`contact_us` table)."""

from datetime import UTC, date, datetime, time
from typing import Any

from backoffice.db_context import DatabaseManager
from backoffice.entities import OperationResult, Record, SortOrder
from backoffice.features import StatusFlagFeature, TimestampFeature
from backoffice.repository import Repository, ResourceConfig
from backoffice.search_condition_builder import FilterField

CONTACT_COLUMNS = frozenset(
    {
        "cuid", "property_id", "agent_id", "individualid", "compnayid", "developerid",
        "connected_agent", "connected_agency", "connected_employee", "sharing_with",
        "item_type", "sub_item_type", "type", "represent_type", "source", "name",
        "first_name", "last_name", "surname", "salutaion", "drip_marketing",
        "designation", "company", "nationality", "whats_app", "facebook", "insta",
        "linkedin", "brn_number", "mortgage", "landline", "profile", "priority",
        "contact_type", "agent_activity", "admin_activity", "email", "email_status",
        "phone", "cell_status", "verified", "property_type", "website", "message",
        "resume", "job_role", "status", "contact_date", "lead_status",
        "last_activity_logged", "last_activity_date_time",
    }
)  # fmt: skip

CONTACTS = ResourceConfig(
    table="contact_us",
    entity_name="Contact",
    filters={
        "status": FilterField(column="status", cast="int"),
        "source": FilterField(column="source"),
        "type": FilterField(column="type"),
        "lead_status": FilterField(column="lead_status", cast="int"),
        "contact_type": FilterField(column="contact_type"),
        "agent_id": FilterField(column="agent_id", cast="int"),
        "property_id": FilterField(column="property_id", cast="int"),
        "developerid": FilterField(column="developerid", cast="int"),
        "individualid": FilterField(column="individualid", cast="int"),
        "compnayid": FilterField(column="compnayid", cast="int"),
    },
    search_columns=["name", "first_name", "last_name", "email", "phone"],
    sort_columns={
        "created_at": "created_at",
        "updated_at": "updated_at",
        "id": "id",
        "name": "name",
        "lead_status": "lead_status",
    },
    default_sort="created_at",
    default_order=SortOrder.DESC,
    default_limit=20,
    columns=CONTACT_COLUMNS,
    unique_columns={"email": "Email", "phone": "Phone", "cuid": "CUID"},
    features=[StatusFlagFeature(), TimestampFeature()],
)

# Route segment -> foreign key column for the "contacts of X" finders.
RELATION_COLUMNS = {
    "agent": "agent_id",
    "property": "property_id",
    "developer": "developerid",
    "individual": "individualid",
    "company": "compnayid",
    "source": "source",
    "type": "type",
}

# Which column each assignment endpoint writes.
ASSIGNMENT_COLUMNS = {
    "agent": "agent_id",
    "connected-agent": "connected_agent",
    "connected-agency": "connected_agency",
    "connected-employee": "connected_employee",
}


class ContactRepository(Repository):
    def __init__(self, db: DatabaseManager):
        super().__init__(db, CONTACTS)

    async def find_related(self, relation: str, value: Any) -> list[Record]:
        """Active contacts linked to an agent/property/developer/... newest first."""
        return await self.find_many(
            {RELATION_COLUMNS[relation]: value}, order_column="created_at"
        )

    async def find_in_date_range(self, start: date, end: date) -> list[Record]:
        """Active contacts created between two days, both inclusive."""
        builder = (
            self.base_query()
            .where("created_at", ">=", datetime.combine(start, time.min, tzinfo=UTC))
            .where("created_at", "<=", datetime.combine(end, time.max, tzinfo=UTC))
        )
        builder = self.apply_visibility(builder).order_by_desc("created_at")
        return await self.fetch(builder)

    async def set_lead_status(self, contact_id: int, lead_status: int) -> OperationResult:
        return await self.set_fields(contact_id, {"lead_status": lead_status})

    async def log_activity(
        self, contact_id: int, activity: str, activity_date_time: str
    ) -> OperationResult:
        return await self.set_fields(
            contact_id,
            {
                "last_activity_logged": activity,
                "last_activity_date_time": activity_date_time,
            },
        )

    async def assign(self, contact_id: int, target: str, value: Any) -> OperationResult:
        return await self.set_fields(contact_id, {ASSIGNMENT_COLUMNS[target]: value})

    async def stats(self) -> dict[str, int]:
        conditions = {"active": "status = 1", "inactive": "status = 0"}
        labels = {1: "new_leads", 2: "contacted", 3: "qualified", 4: "won", 5: "lost"}
        conditions.update(
            {label: f"lead_status = {code}" for code, label in labels.items()}
        )
        conditions["new_this_week"] = "created_at >= NOW() - INTERVAL '7 days'"
        return await self.aggregate(conditions)
