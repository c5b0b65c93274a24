"""
Pydantic schemas for deal endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class DealPayload(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    closing_ids: str | None = None
    listing: str | None = None
    buyers: str | None = None
    sellers: str | None = None
    sales_price: str | None = None
    target_closing: str | None = None
    closing: str | None = None
    closing_status: str | None = None
    client_type: str | None = None
    developer: str | None = None
    closing_broker: str | None = None
    commission: str | None = None
    lead_source: str | None = None
    listing_type: str | None = None
    listing_city: str | None = None
    listing_community: str | None = None
    transaction_type: str | None = None
    closing_date: str | None = None
    created_by: str | None = None
    amount: int | None = None
    closing_checklist: str | None = None
