"""
FastAPI router for task endpoints. Every route is back-office only.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request

from backoffice.api.dependencies import ListParams, get_task_repository, list_params, require_auth
from backoffice.api.payloads import BulkIdsRequest, read_payload
from backoffice.resources import TaskRepository

from . import schemas, service

router = APIRouter(prefix="/tasks", dependencies=[Depends(require_auth)])


@router.get("")
async def list_tasks(
    params: ListParams = Depends(list_params),
    repo: TaskRepository = Depends(get_task_repository),
) -> dict:
    return await service.list_tasks(repo, params)


@router.get("/stats")
async def stats(repo: TaskRepository = Depends(get_task_repository)) -> dict:
    return await service.stats(repo)


@router.get("/by-assignee")
async def assignee_counts(repo: TaskRepository = Depends(get_task_repository)) -> dict:
    return await service.assignee_counts(repo)


@router.get("/date-range")
async def date_range(
    start_date: str | None = Query(default=None, alias="startDate"),
    end_date: str | None = Query(default=None, alias="endDate"),
    repo: TaskRepository = Depends(get_task_repository),
) -> dict:
    return await service.date_range(repo, start_date, end_date)


@router.get("/assign/{assign}")
async def by_assignee(assign: str, repo: TaskRepository = Depends(get_task_repository)) -> dict:
    return await service.by_assignee(repo, assign)


@router.get("/date/{day}")
async def by_date(day: str, repo: TaskRepository = Depends(get_task_repository)) -> dict:
    return await service.by_date(repo, day)


@router.get("/slug/{slug}")
async def by_slug(slug: str, repo: TaskRepository = Depends(get_task_repository)) -> dict:
    return await service.get_by_slug(repo, slug)


@router.post("/bulk/delete")
async def bulk_delete(
    body: BulkIdsRequest, repo: TaskRepository = Depends(get_task_repository)
) -> dict:
    return await service.bulk_delete(repo, body.ids)


@router.patch("/bulk/assign")
async def bulk_assign(
    body: schemas.BulkAssignRequest, repo: TaskRepository = Depends(get_task_repository)
) -> dict:
    return await service.bulk_assign(repo, body.ids, body.assign)


@router.get("/{task_id}")
async def get_task(task_id: int, repo: TaskRepository = Depends(get_task_repository)) -> dict:
    return await service.get_task(repo, task_id)


@router.post("", status_code=201)
async def create_task(request: Request, repo: TaskRepository = Depends(get_task_repository)) -> dict:
    payload = await read_payload(request)
    return await service.create_task(repo, payload.fields)


@router.put("/{task_id}")
async def update_task(
    task_id: int, request: Request, repo: TaskRepository = Depends(get_task_repository)
) -> dict:
    """Partial update; a new title without an explicit slug re-derives the slug."""
    payload = await read_payload(request)
    return await service.update_task(repo, task_id, payload.fields)


@router.patch("/{task_id}/assign")
async def assign_task(
    task_id: int,
    body: schemas.AssignRequest,
    repo: TaskRepository = Depends(get_task_repository),
) -> dict:
    return await service.assign(repo, task_id, body.assign)


@router.patch("/{task_id}/commission")
async def update_commission(
    task_id: int,
    body: schemas.CommissionRequest,
    repo: TaskRepository = Depends(get_task_repository),
) -> dict:
    return await service.set_commission(repo, task_id, body.commission)


@router.delete("/{task_id}")
async def delete_task(task_id: int, repo: TaskRepository = Depends(get_task_repository)) -> dict:
    return await service.delete_task(repo, task_id)
