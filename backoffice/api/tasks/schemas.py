"""
Pydantic schemas for task endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from backoffice.api.payloads import BulkIdsRequest


class TaskPayload(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    commission: str | None = None
    assign: str | None = None
    date: str | None = None
    title: str | None = Field(default=None, max_length=100)
    slug: str | None = Field(default=None, max_length=100)
    descriptions: str | None = None
    heading: str | None = None
    seo_title: str | None = None
    seo_keywork: str | None = None
    seo_description: str | None = None


class AssignRequest(BaseModel):
    assign: str = Field(..., min_length=1)


class CommissionRequest(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    commission: str | None


class BulkAssignRequest(BulkIdsRequest):
    assign: str = Field(..., min_length=1)
