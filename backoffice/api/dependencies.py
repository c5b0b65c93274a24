"""
FastAPI dependencies: repositories from app state, list query parsing and
the bearer-token guard for back-office routes.
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from typing import Any

from fastapi import Header, Request

from backoffice.config import Settings
from backoffice.errors import ApiError
from backoffice.resources import (
    CityRepository,
    ContactRepository,
    DealRepository,
    EnquiryRepository,
    JobRepository,
    TaskRepository,
)
from backoffice.utils.uploads import UploadStore


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_uploads(request: Request) -> UploadStore:
    return request.app.state.uploads


def get_city_repository(request: Request) -> CityRepository:
    return request.app.state.cities


def get_contact_repository(request: Request) -> ContactRepository:
    return request.app.state.contacts


def get_deal_repository(request: Request) -> DealRepository:
    return request.app.state.deals


def get_enquiry_repository(request: Request) -> EnquiryRepository:
    return request.app.state.enquiries


def get_job_repository(request: Request) -> JobRepository:
    return request.app.state.jobs


def get_task_repository(request: Request) -> TaskRepository:
    return request.app.state.tasks


def _extract_bearer_token(authorization: str | None) -> str:
    raw = (authorization or "").strip()
    if not raw:
        raise ApiError("Missing Authorization header.", 401)

    parts = raw.split(" ", 1)
    if len(parts) != 2:
        raise ApiError("Invalid Authorization header format.", 401)

    scheme, token = parts[0].strip().lower(), parts[1].strip()
    if scheme != "bearer" or not token:
        raise ApiError("Authorization must be: Bearer <token>.", 401)
    return token


async def require_auth(
    request: Request, authorization: str | None = Header(default=None)
) -> None:
    """Guard for back-office routes; open when no ADMIN_API_TOKEN is configured."""
    expected = request.app.state.settings.admin_api_token
    if not expected:
        return
    token = _extract_bearer_token(authorization)
    if not secrets.compare_digest(token.encode(), expected.encode()):
        raise ApiError("Invalid or expired token.", 401)


def _positive_int(raw: str | None, default: int | None) -> int | None:
    try:
        value = int(raw) if raw is not None else None
    except ValueError:
        return default
    return value if value is not None and value >= 1 else default


@dataclass
class ListParams:
    filters: dict[str, Any]
    page: int
    limit: int | None
    sort_by: str | None
    sort_order: str | None

    def query_kwargs(self) -> dict[str, Any]:
        return {
            "page": self.page,
            "limit": self.limit,
            "sort_by": self.sort_by,
            "sort_order": self.sort_order,
        }


def list_params(request: Request) -> ListParams:
    """Lenient list parsing: bad page/limit fall back to defaults, never 400."""
    query = request.query_params
    filters: dict[str, Any] = dict(query)
    if not filters.get("search") and query.get("q"):
        filters["search"] = query["q"]
    return ListParams(
        filters=filters,
        page=_positive_int(query.get("page"), 1) or 1,
        limit=_positive_int(query.get("limit"), None),
        sort_by=query.get("sortBy") or query.get("orderBy"),
        sort_order=query.get("sortOrder") or query.get("order"),
    )
