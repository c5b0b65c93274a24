"""Closed and in-flight property deals. No status flag, so deletes are hard."""

from backoffice.db_context import DatabaseManager
from backoffice.entities import Record, SortOrder
from backoffice.features import TimestampFeature
from backoffice.repository import Repository, ResourceConfig
from backoffice.search_condition_builder import FilterField

CLOSING_STATUSES = ("Completed", "In Process", "Cancelled")

DEAL_COLUMNS = frozenset(
    {
        "closing_ids",
        "listing",
        "buyers",
        "sellers",
        "sales_price",
        "target_closing",
        "closing",
        "closing_status",
        "client_type",
        "developer",
        "closing_broker",
        "commission",
        "lead_source",
        "listing_type",
        "listing_city",
        "listing_community",
        "transaction_type",
        "closing_date",
        "created_by",
        "amount",
        "closing_checklist",
    }
)

DEALS = ResourceConfig(
    table="deals",
    alias="d",
    entity_name="Deal",
    select=["d.*"],
    filters={
        "closing_status": FilterField(column="d.closing_status"),
        "listing_type": FilterField(column="d.listing_type"),
        "lead_source": FilterField(column="d.lead_source"),
    },
    search_columns=["d.closing_ids", "d.listing", "d.buyers", "d.sellers"],
    sort_columns={
        "updated_at": "d.updated_at",
        "id": "d.id",
        "closing_status": "d.closing_status",
        "sales_price": "d.sales_price",
    },
    default_sort="updated_at",
    default_order=SortOrder.DESC,
    default_limit=20,
    columns=DEAL_COLUMNS,
    features=[TimestampFeature(created_column=None)],
)


class DealRepository(Repository):
    def __init__(self, db: DatabaseManager):
        super().__init__(db, DEALS)

    async def find_by_closing_id(self, closing_id: str) -> Record | None:
        return await self.find_one("closing_ids", closing_id)

    async def stats(self) -> dict[str, int]:
        completed, in_process, cancelled = CLOSING_STATUSES
        return await self.aggregate(
            {
                "completed_deals": f"closing_status = '{completed}'",
                "in_process_deals": f"closing_status = '{in_process}'",
                "cancelled_deals": f"closing_status = '{cancelled}'",
                "new_deals_week": "updated_at >= NOW() - INTERVAL '7 days'",
            },
            total_label="total_deals",
        )
