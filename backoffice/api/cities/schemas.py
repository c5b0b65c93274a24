"""
Pydantic schemas for city endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CityPayload(BaseModel):
    """Create/update body; every field optional so updates stay partial."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    country_id: int | None = None
    state_id: int | None = None
    city_data_id: int | None = None
    name: str | None = Field(default=None, max_length=100)
    slug: str | None = None
    latitude: str | None = None
    longitude: str | None = None
    img: str | None = None
    description: str | None = None
    seo_title: str | None = None
    seo_keywork: str | None = None
    seo_description: str | None = None
    status: int | None = None


class CityDataPayload(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    country_id: int | None = None
    name: str | None = None
    description: str | None = None
    status: int | None = None


class StatusUpdateRequest(BaseModel):
    status: int = Field(..., ge=0)
