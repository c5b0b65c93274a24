"""
Pydantic schemas for enquiry endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from backoffice.api.payloads import BulkIdsRequest


class EnquiryPayload(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    contact_id: int | None = None
    property_id: int | None = None
    project_item_id: int | None = None
    project_id: int | None = None
    item_type: str | None = None
    type: str | None = None
    source: str | None = None
    agent_id: int | None = None
    country: int | None = None
    priority: str | None = None
    quality: str | None = None
    contact_type: str | None = None
    agent_activity: str | None = None
    admin_activity: str | None = None
    listing_type: str | None = None
    exclusive_status: str | None = None
    construction_status: str | None = None
    state_id: int | None = None
    community_id: int | None = None
    sub_community_id: int | None = None
    building: str | None = None
    price_min: str | None = None
    price_max: str | None = None
    bedroom_min: str | None = None
    bedroom_max: str | None = None
    contact_source: str | None = None
    lead_source: str | None = None
    property_image: str | None = None
    message: str | None = None
    resume: str | None = None
    drip_marketing: str | None = None
    status: int | None = None
    contact_date: str | None = None
    lead_status: int | None = None
    lost_status: str | None = None


class StatusRequest(BaseModel):
    status: int


class LeadStatusRequest(BaseModel):
    lead_status: int
    lost_status: str | None = None


class PriorityRequest(BaseModel):
    priority: str = Field(..., min_length=1)


class QualityRequest(BaseModel):
    quality: str = Field(..., min_length=1)


class AssignAgentRequest(BaseModel):
    agent_id: int = Field(..., ge=1)


class ActivityRequest(BaseModel):
    activity: str = Field(..., min_length=1)


class DripMarketingRequest(BaseModel):
    enabled: bool


class BulkStatusRequest(BulkIdsRequest):
    status: int


class BulkAssignRequest(BulkIdsRequest):
    agent_id: int = Field(..., ge=1)


class BulkLeadStatusRequest(BulkIdsRequest):
    lead_status: int
