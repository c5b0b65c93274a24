"""
FastAPI router for jobs and job applications.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request

from backoffice.api.dependencies import (
    ListParams,
    get_app_settings,
    get_job_repository,
    get_uploads,
    list_params,
    require_auth,
)
from backoffice.api.payloads import read_payload
from backoffice.config import Settings
from backoffice.resources import JobRepository
from backoffice.utils.uploads import UploadStore

from . import schemas, service

router = APIRouter(prefix="/jobs")
guarded = [Depends(require_auth)]


@router.get("")
async def list_jobs(
    params: ListParams = Depends(list_params),
    repo: JobRepository = Depends(get_job_repository),
) -> dict:
    """Active job postings."""
    return await service.list_jobs(repo, params)


@router.get("/admin/list", dependencies=guarded)
async def admin_list(
    params: ListParams = Depends(list_params),
    repo: JobRepository = Depends(get_job_repository),
) -> dict:
    return await service.list_admin(repo, params)


@router.get("/types")
async def job_types(repo: JobRepository = Depends(get_job_repository)) -> dict:
    return await service.types(repo)


@router.get("/locations")
async def job_locations(repo: JobRepository = Depends(get_job_repository)) -> dict:
    return await service.locations(repo)


@router.get("/slug/{slug}")
async def job_by_slug(slug: str, repo: JobRepository = Depends(get_job_repository)) -> dict:
    return await service.get_job_by_slug(repo, slug)


@router.get("/check-slug", dependencies=guarded)
async def check_slug(
    slug: str | None = Query(default=None),
    exclude_id: int | None = Query(default=None, alias="excludeId"),
    repo: JobRepository = Depends(get_job_repository),
) -> dict:
    return await service.check_slug(repo, slug, exclude_id)


@router.get("/stats", dependencies=guarded)
async def stats(repo: JobRepository = Depends(get_job_repository)) -> dict:
    return await service.stats(repo)


@router.get("/applications", dependencies=guarded)
async def list_applications(
    params: ListParams = Depends(list_params),
    repo: JobRepository = Depends(get_job_repository),
    settings: Settings = Depends(get_app_settings),
) -> dict:
    return await service.list_applications(repo, params, settings.public_base_url)


@router.post("/apply", status_code=201)
async def apply(
    request: Request,
    repo: JobRepository = Depends(get_job_repository),
    uploads: UploadStore = Depends(get_uploads),
) -> dict:
    """Public application form with an optional `resume` upload."""
    payload = await read_payload(request)
    return await service.apply(repo, uploads, payload)


@router.patch("/applications/{application_id}/status", dependencies=guarded)
async def update_application_status(
    application_id: int,
    body: schemas.ApplicationStatusRequest,
    repo: JobRepository = Depends(get_job_repository),
) -> dict:
    return await service.set_application_status(repo, application_id, body.status)


@router.delete("/applications/{application_id}", dependencies=guarded)
async def delete_application(
    application_id: int,
    repo: JobRepository = Depends(get_job_repository),
    uploads: UploadStore = Depends(get_uploads),
) -> dict:
    return await service.delete_application(repo, uploads, application_id)


@router.get("/{job_id}")
async def get_job(job_id: int, repo: JobRepository = Depends(get_job_repository)) -> dict:
    return await service.get_job(repo, job_id)


@router.post("", status_code=201, dependencies=guarded)
async def create_job(request: Request, repo: JobRepository = Depends(get_job_repository)) -> dict:
    payload = await read_payload(request)
    return await service.create_job(repo, payload.fields)


@router.put("/{job_id}", dependencies=guarded)
async def update_job(
    job_id: int, request: Request, repo: JobRepository = Depends(get_job_repository)
) -> dict:
    payload = await read_payload(request)
    return await service.update_job(repo, job_id, payload.fields)


@router.patch("/{job_id}/restore", dependencies=guarded)
async def restore_job(job_id: int, repo: JobRepository = Depends(get_job_repository)) -> dict:
    return await service.restore(repo, job_id)


@router.delete("/{job_id}", dependencies=guarded)
async def delete_job(job_id: int, repo: JobRepository = Depends(get_job_repository)) -> dict:
    return await service.soft_delete(repo, job_id)


@router.delete("/{job_id}/permanent", dependencies=guarded)
async def delete_job_permanently(
    job_id: int, repo: JobRepository = Depends(get_job_repository)
) -> dict:
    return await service.hard_delete(repo, job_id)
