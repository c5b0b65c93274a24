"""
FastAPI router for contact / lead endpoints.
"""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query, Request

from backoffice.api.dependencies import (
    ListParams,
    get_app_settings,
    get_contact_repository,
    get_uploads,
    list_params,
    require_auth,
)
from backoffice.api.payloads import BulkIdsRequest, read_payload
from backoffice.config import Settings
from backoffice.resources import ContactRepository
from backoffice.utils.uploads import UploadStore

from . import schemas, service

router = APIRouter(prefix="/contacts")
guarded = [Depends(require_auth)]


@router.get("", dependencies=guarded)
async def list_contacts(
    params: ListParams = Depends(list_params),
    repo: ContactRepository = Depends(get_contact_repository),
    settings: Settings = Depends(get_app_settings),
) -> dict:
    return await service.list_contacts(repo, params, settings.public_base_url)


@router.get("/stats", dependencies=guarded)
async def stats(repo: ContactRepository = Depends(get_contact_repository)) -> dict:
    return await service.stats(repo)


@router.get("/date-range", dependencies=guarded)
async def date_range(
    start_date: date | None = Query(default=None, alias="startDate"),
    end_date: date | None = Query(default=None, alias="endDate"),
    repo: ContactRepository = Depends(get_contact_repository),
    settings: Settings = Depends(get_app_settings),
) -> dict:
    return await service.date_range(repo, start_date, end_date, settings.public_base_url)


@router.get("/source/{source}", dependencies=guarded)
async def by_source(
    source: str,
    repo: ContactRepository = Depends(get_contact_repository),
    settings: Settings = Depends(get_app_settings),
) -> dict:
    return await service.related(repo, "source", source, settings.public_base_url)


@router.get("/type/{contact_type}", dependencies=guarded)
async def by_type(
    contact_type: str,
    repo: ContactRepository = Depends(get_contact_repository),
    settings: Settings = Depends(get_app_settings),
) -> dict:
    return await service.related(repo, "type", contact_type, settings.public_base_url)


@router.get("/agent/{agent_id}", dependencies=guarded)
async def by_agent(
    agent_id: int,
    repo: ContactRepository = Depends(get_contact_repository),
    settings: Settings = Depends(get_app_settings),
) -> dict:
    return await service.related(repo, "agent", agent_id, settings.public_base_url)


@router.get("/property/{property_id}", dependencies=guarded)
async def by_property(
    property_id: int,
    repo: ContactRepository = Depends(get_contact_repository),
    settings: Settings = Depends(get_app_settings),
) -> dict:
    return await service.related(repo, "property", property_id, settings.public_base_url)


@router.get("/developer/{developer_id}", dependencies=guarded)
async def by_developer(
    developer_id: int,
    repo: ContactRepository = Depends(get_contact_repository),
    settings: Settings = Depends(get_app_settings),
) -> dict:
    return await service.related(repo, "developer", developer_id, settings.public_base_url)


@router.get("/individual/{individual_id}", dependencies=guarded)
async def by_individual(
    individual_id: int,
    repo: ContactRepository = Depends(get_contact_repository),
    settings: Settings = Depends(get_app_settings),
) -> dict:
    return await service.related(repo, "individual", individual_id, settings.public_base_url)


@router.get("/company/{company_id}", dependencies=guarded)
async def by_company(
    company_id: int,
    repo: ContactRepository = Depends(get_contact_repository),
    settings: Settings = Depends(get_app_settings),
) -> dict:
    return await service.related(repo, "company", company_id, settings.public_base_url)


@router.get("/cuid/{cuid}", dependencies=guarded)
async def by_cuid(
    cuid: str,
    repo: ContactRepository = Depends(get_contact_repository),
    settings: Settings = Depends(get_app_settings),
) -> dict:
    return await service.get_by_cuid(repo, cuid, settings.public_base_url)


# Bulk routes are registered before "/{contact_id}/..." so "bulk" is never read as an id.
@router.patch("/bulk/status", dependencies=guarded)
async def bulk_status(
    body: schemas.BulkStatusRequest,
    repo: ContactRepository = Depends(get_contact_repository),
) -> dict:
    return await service.bulk_status(repo, body.ids, body.status)


@router.patch("/bulk/lead-status", dependencies=guarded)
async def bulk_lead_status(
    body: schemas.BulkLeadStatusRequest,
    repo: ContactRepository = Depends(get_contact_repository),
) -> dict:
    return await service.bulk_lead_status(repo, body.ids, body.lead_status)


@router.post("/bulk/delete", dependencies=guarded)
async def bulk_delete(
    body: BulkIdsRequest, repo: ContactRepository = Depends(get_contact_repository)
) -> dict:
    return await service.bulk_delete(repo, body.ids)


@router.post("/bulk/hard-delete", dependencies=guarded)
async def bulk_hard_delete(
    body: BulkIdsRequest,
    repo: ContactRepository = Depends(get_contact_repository),
    uploads: UploadStore = Depends(get_uploads),
) -> dict:
    return await service.bulk_hard_delete(repo, uploads, body.ids)


@router.get("/{contact_id}", dependencies=guarded)
async def get_contact(
    contact_id: int,
    repo: ContactRepository = Depends(get_contact_repository),
    settings: Settings = Depends(get_app_settings),
) -> dict:
    return await service.get_contact(repo, contact_id, settings.public_base_url)


@router.post("", status_code=201)
async def create_contact(
    request: Request,
    repo: ContactRepository = Depends(get_contact_repository),
    uploads: UploadStore = Depends(get_uploads),
    settings: Settings = Depends(get_app_settings),
) -> dict:
    """Public contact form; optional `profile` image and `resume` document uploads."""
    payload = await read_payload(request)
    return await service.create_contact(repo, uploads, payload, settings.public_base_url)


@router.put("/{contact_id}", dependencies=guarded)
async def update_contact(
    contact_id: int,
    request: Request,
    repo: ContactRepository = Depends(get_contact_repository),
    uploads: UploadStore = Depends(get_uploads),
    settings: Settings = Depends(get_app_settings),
) -> dict:
    payload = await read_payload(request)
    return await service.update_contact(
        repo, uploads, contact_id, payload, settings.public_base_url
    )


@router.patch("/{contact_id}/lead-status", dependencies=guarded)
async def update_lead_status(
    contact_id: int,
    body: schemas.LeadStatusRequest,
    repo: ContactRepository = Depends(get_contact_repository),
    settings: Settings = Depends(get_app_settings),
) -> dict:
    return await service.set_lead_status(
        repo, contact_id, body.lead_status, settings.public_base_url
    )


@router.patch("/{contact_id}/activity-log", dependencies=guarded)
async def update_activity_log(
    contact_id: int,
    body: schemas.ActivityLogRequest,
    repo: ContactRepository = Depends(get_contact_repository),
    settings: Settings = Depends(get_app_settings),
) -> dict:
    return await service.log_activity(
        repo, contact_id, body.activity_log, body.activity_date_time, settings.public_base_url
    )


@router.patch("/{contact_id}/assign-agent", dependencies=guarded)
async def assign_agent(
    contact_id: int,
    body: schemas.AssignAgentRequest,
    repo: ContactRepository = Depends(get_contact_repository),
    settings: Settings = Depends(get_app_settings),
) -> dict:
    return await service.assign(
        repo, contact_id, "agent", body.agent_id, settings.public_base_url
    )


@router.patch("/{contact_id}/assign-connected-agent", dependencies=guarded)
async def assign_connected_agent(
    contact_id: int,
    body: schemas.ConnectedAgentRequest,
    repo: ContactRepository = Depends(get_contact_repository),
    settings: Settings = Depends(get_app_settings),
) -> dict:
    return await service.assign(
        repo, contact_id, "connected-agent", body.connected_agent, settings.public_base_url
    )


@router.patch("/{contact_id}/assign-connected-agency", dependencies=guarded)
async def assign_connected_agency(
    contact_id: int,
    body: schemas.ConnectedAgencyRequest,
    repo: ContactRepository = Depends(get_contact_repository),
    settings: Settings = Depends(get_app_settings),
) -> dict:
    return await service.assign(
        repo, contact_id, "connected-agency", body.connected_agency, settings.public_base_url
    )


@router.patch("/{contact_id}/assign-connected-employee", dependencies=guarded)
async def assign_connected_employee(
    contact_id: int,
    body: schemas.ConnectedEmployeeRequest,
    repo: ContactRepository = Depends(get_contact_repository),
    settings: Settings = Depends(get_app_settings),
) -> dict:
    return await service.assign(
        repo, contact_id, "connected-employee", body.connected_employee, settings.public_base_url
    )


@router.patch("/{contact_id}/restore", dependencies=guarded)
async def restore_contact(
    contact_id: int, repo: ContactRepository = Depends(get_contact_repository)
) -> dict:
    return await service.restore(repo, contact_id)


@router.delete("/{contact_id}", dependencies=guarded)
async def delete_contact(
    contact_id: int, repo: ContactRepository = Depends(get_contact_repository)
) -> dict:
    return await service.soft_delete(repo, contact_id)


@router.delete("/{contact_id}/permanent", dependencies=guarded)
async def delete_contact_permanently(
    contact_id: int,
    repo: ContactRepository = Depends(get_contact_repository),
    uploads: UploadStore = Depends(get_uploads),
) -> dict:
    return await service.hard_delete(repo, uploads, contact_id)
