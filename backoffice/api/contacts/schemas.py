"""
Pydantic schemas for contact endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from backoffice.api.payloads import BulkIdsRequest


class ContactPayload(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    cuid: str | None = None
    property_id: int | None = None
    agent_id: int | None = None
    individualid: int | None = None
    compnayid: int | None = None
    developerid: int | None = None
    connected_agent: str | None = None
    connected_agency: str | None = None
    connected_employee: str | None = None
    sharing_with: str | None = None
    item_type: str | None = None
    sub_item_type: str | None = None
    type: str | None = None
    represent_type: str | None = None
    source: str | None = None
    name: str | None = None
    first_name: str | None = Field(default=None, max_length=70)
    last_name: str | None = Field(default=None, max_length=70)
    surname: str | None = None
    salutaion: str | None = None
    drip_marketing: str | None = None
    designation: str | None = None
    company: str | None = None
    nationality: str | None = None
    whats_app: str | None = None
    facebook: str | None = None
    insta: str | None = None
    linkedin: str | None = None
    brn_number: str | None = None
    mortgage: str | None = None
    landline: str | None = None
    profile: str | None = None
    priority: str | None = None
    contact_type: str | None = None
    agent_activity: str | None = None
    admin_activity: str | None = None
    email: str | None = None
    email_status: str | None = None
    phone: str | None = None
    cell_status: str | None = None
    verified: str | None = None
    property_type: str | None = None
    website: str | None = None
    message: str | None = None
    resume: str | None = None
    job_role: str | None = None
    status: int | None = None
    contact_date: str | None = None
    lead_status: int | None = None


class LeadStatusRequest(BaseModel):
    lead_status: int


class ActivityLogRequest(BaseModel):
    activity_log: str
    activity_date_time: str | None = None


class AssignAgentRequest(BaseModel):
    agent_id: int | None


class ConnectedAgentRequest(BaseModel):
    connected_agent: str | None


class ConnectedAgencyRequest(BaseModel):
    connected_agency: str | None


class ConnectedEmployeeRequest(BaseModel):
    connected_employee: str | None


class BulkStatusRequest(BulkIdsRequest):
    status: int


class BulkLeadStatusRequest(BulkIdsRequest):
    lead_status: int
