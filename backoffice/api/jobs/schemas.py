"""
Pydantic schemas for job and job-application endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class JobPayload(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    full_name: str | None = None
    title: str | None = Field(default=None, max_length=255)
    description: str | None = None
    sub_title: str | None = None
    sub_description: str | None = None
    about_team: str | None = None
    about_company: str | None = None
    job_title: str | None = None
    city_name: str | None = None
    responsibilities: str | None = None
    type: str | None = None
    link: str | None = None
    facilities: str | None = None
    social: str | None = None
    seo_title: str | None = None
    seo_description: str | None = None
    seo_keyword: str | None = None
    status: int | None = None
    slug: str | None = None


class ApplicationPayload(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    job_id: int | None = None
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    email: str | None = Field(default=None, max_length=100)
    phone: str | None = None
    message: str | None = None
    current_last_employer: str | None = None
    current_job_title: str | None = None
    employment_status: str | None = None
    term: int | None = None


class ApplicationStatusRequest(BaseModel):
    status: int = Field(..., ge=0)
