"""
FastAPI router for enquiry endpoints (`/enquire`).
"""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query, Request

from backoffice.api.dependencies import (
    ListParams,
    get_app_settings,
    get_enquiry_repository,
    get_uploads,
    list_params,
    require_auth,
)
from backoffice.api.payloads import read_payload
from backoffice.config import Settings
from backoffice.resources import EnquiryRepository
from backoffice.utils.uploads import UploadStore

from . import schemas, service

router = APIRouter(prefix="/enquire")
guarded = [Depends(require_auth)]


@router.post("", status_code=201)
async def create_enquiry(
    request: Request,
    repo: EnquiryRepository = Depends(get_enquiry_repository),
    uploads: UploadStore = Depends(get_uploads),
) -> dict:
    """Public enquiry form; optional `property_image` and `resume` uploads."""
    payload = await read_payload(request)
    return await service.create_enquiry(repo, uploads, payload)


@router.get("", dependencies=guarded)
async def list_enquiries(
    params: ListParams = Depends(list_params),
    repo: EnquiryRepository = Depends(get_enquiry_repository),
    settings: Settings = Depends(get_app_settings),
) -> dict:
    return await service.list_enquiries(repo, params, settings.public_base_url)


@router.get("/search", dependencies=guarded)
async def search(
    q: str | None = Query(default=None),
    search: str | None = Query(default=None),
    limit: int = Query(default=50, ge=1, le=500),
    repo: EnquiryRepository = Depends(get_enquiry_repository),
    settings: Settings = Depends(get_app_settings),
) -> dict:
    return await service.search(repo, q or search, limit, settings.public_base_url)


@router.get("/recent", dependencies=guarded)
async def recent(
    limit: int = Query(default=10, ge=1, le=500),
    repo: EnquiryRepository = Depends(get_enquiry_repository),
    settings: Settings = Depends(get_app_settings),
) -> dict:
    return await service.recent(repo, limit, settings.public_base_url)


@router.get("/unassigned", dependencies=guarded)
async def unassigned(
    limit: int = Query(default=50, ge=1, le=500),
    repo: EnquiryRepository = Depends(get_enquiry_repository),
    settings: Settings = Depends(get_app_settings),
) -> dict:
    return await service.unassigned(repo, limit, settings.public_base_url)


@router.get("/high-priority", dependencies=guarded)
async def high_priority(
    limit: int = Query(default=20, ge=1, le=500),
    repo: EnquiryRepository = Depends(get_enquiry_repository),
    settings: Settings = Depends(get_app_settings),
) -> dict:
    return await service.high_priority(repo, limit, settings.public_base_url)


@router.get("/stats", dependencies=guarded)
async def stats(
    agent_id: int | None = Query(default=None),
    date_from: date | None = Query(default=None),
    date_to: date | None = Query(default=None),
    repo: EnquiryRepository = Depends(get_enquiry_repository),
) -> dict:
    return await service.stats(repo, agent_id, date_from, date_to)


@router.get("/property/{property_id}", dependencies=guarded)
async def by_property(
    property_id: int,
    repo: EnquiryRepository = Depends(get_enquiry_repository),
    settings: Settings = Depends(get_app_settings),
) -> dict:
    return await service.related(repo, "property_id", property_id, settings.public_base_url)


@router.get("/project/{project_id}", dependencies=guarded)
async def by_project(
    project_id: int,
    repo: EnquiryRepository = Depends(get_enquiry_repository),
    settings: Settings = Depends(get_app_settings),
) -> dict:
    return await service.related(repo, "project_id", project_id, settings.public_base_url)


@router.get("/contact/{contact_id}", dependencies=guarded)
async def by_contact(
    contact_id: int,
    repo: EnquiryRepository = Depends(get_enquiry_repository),
    settings: Settings = Depends(get_app_settings),
) -> dict:
    return await service.related(repo, "contact_id", contact_id, settings.public_base_url)


@router.get("/agent/{agent_id}", dependencies=guarded)
async def by_agent(
    agent_id: int,
    params: ListParams = Depends(list_params),
    repo: EnquiryRepository = Depends(get_enquiry_repository),
    settings: Settings = Depends(get_app_settings),
) -> dict:
    """Paginated enquiries assigned to one agent, newest first."""
    return await service.list_for_agent(repo, agent_id, params, settings.public_base_url)


@router.patch("/bulk-status", dependencies=guarded)
async def bulk_status(
    body: schemas.BulkStatusRequest,
    repo: EnquiryRepository = Depends(get_enquiry_repository),
) -> dict:
    return await service.bulk_action(repo, body.ids, "status", body.status)


@router.patch("/bulk-assign", dependencies=guarded)
async def bulk_assign(
    body: schemas.BulkAssignRequest,
    repo: EnquiryRepository = Depends(get_enquiry_repository),
) -> dict:
    return await service.bulk_action(repo, body.ids, "assign", body.agent_id)


@router.patch("/bulk-lead-status", dependencies=guarded)
async def bulk_lead_status(
    body: schemas.BulkLeadStatusRequest,
    repo: EnquiryRepository = Depends(get_enquiry_repository),
) -> dict:
    return await service.bulk_action(repo, body.ids, "lead-status", body.lead_status)


@router.get("/{enquiry_id}", dependencies=guarded)
async def get_enquiry(
    enquiry_id: int,
    repo: EnquiryRepository = Depends(get_enquiry_repository),
    settings: Settings = Depends(get_app_settings),
) -> dict:
    return await service.get_enquiry(repo, enquiry_id, settings.public_base_url)


@router.put("/{enquiry_id}", dependencies=guarded)
async def update_enquiry(
    enquiry_id: int,
    request: Request,
    repo: EnquiryRepository = Depends(get_enquiry_repository),
    uploads: UploadStore = Depends(get_uploads),
) -> dict:
    payload = await read_payload(request)
    return await service.update_enquiry(repo, uploads, enquiry_id, payload)


@router.delete("/delete/{enquiry_id}", dependencies=guarded)
async def delete_enquiry(
    enquiry_id: int, repo: EnquiryRepository = Depends(get_enquiry_repository)
) -> dict:
    return await service.soft_delete(repo, enquiry_id)


@router.delete("/hard-delete/{enquiry_id}", dependencies=guarded)
async def hard_delete_enquiry(
    enquiry_id: int,
    repo: EnquiryRepository = Depends(get_enquiry_repository),
    uploads: UploadStore = Depends(get_uploads),
) -> dict:
    return await service.hard_delete(repo, uploads, enquiry_id)


@router.patch("/status/{enquiry_id}", dependencies=guarded)
async def update_status(
    enquiry_id: int,
    body: schemas.StatusRequest,
    repo: EnquiryRepository = Depends(get_enquiry_repository),
) -> dict:
    return await service.set_field(repo, enquiry_id, "status", body.status)


@router.patch("/lead-status/{enquiry_id}", dependencies=guarded)
async def update_lead_status(
    enquiry_id: int,
    body: schemas.LeadStatusRequest,
    repo: EnquiryRepository = Depends(get_enquiry_repository),
) -> dict:
    return await service.set_lead_status(repo, enquiry_id, body.lead_status, body.lost_status)


@router.patch("/priority/{enquiry_id}", dependencies=guarded)
async def update_priority(
    enquiry_id: int,
    body: schemas.PriorityRequest,
    repo: EnquiryRepository = Depends(get_enquiry_repository),
) -> dict:
    return await service.set_field(repo, enquiry_id, "priority", body.priority)


@router.patch("/quality/{enquiry_id}", dependencies=guarded)
async def update_quality(
    enquiry_id: int,
    body: schemas.QualityRequest,
    repo: EnquiryRepository = Depends(get_enquiry_repository),
) -> dict:
    return await service.set_field(repo, enquiry_id, "quality", body.quality)


@router.patch("/assign-agent/{enquiry_id}", dependencies=guarded)
async def assign_agent(
    enquiry_id: int,
    body: schemas.AssignAgentRequest,
    repo: EnquiryRepository = Depends(get_enquiry_repository),
) -> dict:
    return await service.set_field(repo, enquiry_id, "assign-agent", body.agent_id)


@router.patch("/agent-activity/{enquiry_id}", dependencies=guarded)
async def update_agent_activity(
    enquiry_id: int,
    body: schemas.ActivityRequest,
    repo: EnquiryRepository = Depends(get_enquiry_repository),
) -> dict:
    return await service.set_field(repo, enquiry_id, "agent-activity", body.activity)


@router.patch("/admin-activity/{enquiry_id}", dependencies=guarded)
async def update_admin_activity(
    enquiry_id: int,
    body: schemas.ActivityRequest,
    repo: EnquiryRepository = Depends(get_enquiry_repository),
) -> dict:
    return await service.set_field(repo, enquiry_id, "admin-activity", body.activity)


@router.patch("/restore/{enquiry_id}", dependencies=guarded)
async def restore_enquiry(
    enquiry_id: int, repo: EnquiryRepository = Depends(get_enquiry_repository)
) -> dict:
    return await service.restore(repo, enquiry_id)


@router.patch("/drip-marketing/{enquiry_id}", dependencies=guarded)
async def update_drip_marketing(
    enquiry_id: int,
    body: schemas.DripMarketingRequest,
    repo: EnquiryRepository = Depends(get_enquiry_repository),
) -> dict:
    return await service.set_drip_marketing(repo, enquiry_id, body.enabled)
