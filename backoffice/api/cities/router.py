"""
FastAPI router for city endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request

from backoffice.api.dependencies import (
    ListParams,
    get_app_settings,
    get_city_repository,
    get_uploads,
    list_params,
    require_auth,
)
from backoffice.api.payloads import read_payload
from backoffice.config import Settings
from backoffice.resources import CityRepository
from backoffice.utils.uploads import UploadStore

from . import schemas, service

router = APIRouter(prefix="/cities")
guarded = [Depends(require_auth)]


@router.get("")
async def list_cities(
    params: ListParams = Depends(list_params),
    repo: CityRepository = Depends(get_city_repository),
    settings: Settings = Depends(get_app_settings),
) -> dict:
    """Active cities with country/state names and property/project counts."""
    return await service.list_cities(repo, params, settings.public_base_url)


@router.get("/countries")
async def countries(repo: CityRepository = Depends(get_city_repository)) -> dict:
    return await service.countries(repo)


@router.get("/states")
async def states(
    country_id: int | None = Query(default=None, alias="countryId"),
    repo: CityRepository = Depends(get_city_repository),
) -> dict:
    return await service.states(repo, country_id)


@router.get("/check-slug")
async def check_slug(
    slug: str | None = Query(default=None),
    exclude_id: int | None = Query(default=None, alias="excludeId"),
    repo: CityRepository = Depends(get_city_repository),
) -> dict:
    return await service.check_slug(repo, slug, exclude_id)


@router.get("/data/{country_id}")
async def city_data(country_id: int, repo: CityRepository = Depends(get_city_repository)) -> dict:
    return await service.city_data(repo, country_id)


@router.get("/slug/{slug}")
async def city_by_slug(
    slug: str,
    repo: CityRepository = Depends(get_city_repository),
    settings: Settings = Depends(get_app_settings),
) -> dict:
    return await service.get_city_by_slug(repo, slug, settings.public_base_url)


@router.get("/admin/list", dependencies=guarded)
async def admin_list(
    params: ListParams = Depends(list_params),
    repo: CityRepository = Depends(get_city_repository),
    settings: Settings = Depends(get_app_settings),
) -> dict:
    """Every city regardless of status; `status` is available as a filter."""
    return await service.list_admin(repo, params, settings.public_base_url)


@router.get("/stats", dependencies=guarded)
async def stats(repo: CityRepository = Depends(get_city_repository)) -> dict:
    return await service.stats(repo)


@router.post("/data", status_code=201, dependencies=guarded)
async def create_city_data(
    request: Request, repo: CityRepository = Depends(get_city_repository)
) -> dict:
    payload = await read_payload(request)
    return await service.create_city_data(repo, payload.fields)


@router.put("/data/{data_id}", dependencies=guarded)
async def update_city_data(
    data_id: int, request: Request, repo: CityRepository = Depends(get_city_repository)
) -> dict:
    payload = await read_payload(request)
    return await service.update_city_data(repo, data_id, payload.fields)


@router.delete("/data/{data_id}", dependencies=guarded)
async def delete_city_data(
    data_id: int, repo: CityRepository = Depends(get_city_repository)
) -> dict:
    return await service.delete_city_data(repo, data_id)


@router.get("/{city_id}")
async def get_city(
    city_id: int,
    repo: CityRepository = Depends(get_city_repository),
    settings: Settings = Depends(get_app_settings),
) -> dict:
    return await service.get_city(repo, city_id, settings.public_base_url)


@router.post("", status_code=201, dependencies=guarded)
async def create_city(
    request: Request,
    repo: CityRepository = Depends(get_city_repository),
    uploads: UploadStore = Depends(get_uploads),
) -> dict:
    """Multipart or JSON; an `img` file replaces any `img` text field."""
    payload = await read_payload(request)
    return await service.create_city(repo, uploads, payload)


@router.put("/{city_id}", dependencies=guarded)
async def update_city(
    city_id: int,
    request: Request,
    repo: CityRepository = Depends(get_city_repository),
    uploads: UploadStore = Depends(get_uploads),
) -> dict:
    payload = await read_payload(request)
    return await service.update_city(repo, uploads, city_id, payload)


@router.patch("/{city_id}/status", dependencies=guarded)
async def update_status(
    city_id: int,
    body: schemas.StatusUpdateRequest,
    repo: CityRepository = Depends(get_city_repository),
) -> dict:
    return await service.update_status(repo, city_id, body.status)


@router.patch("/{city_id}/restore", dependencies=guarded)
async def restore_city(city_id: int, repo: CityRepository = Depends(get_city_repository)) -> dict:
    return await service.restore(repo, city_id)


@router.delete("/{city_id}", dependencies=guarded)
async def delete_city(city_id: int, repo: CityRepository = Depends(get_city_repository)) -> dict:
    return await service.soft_delete(repo, city_id)


@router.delete("/{city_id}/permanent", dependencies=guarded)
async def delete_city_permanently(
    city_id: int,
    repo: CityRepository = Depends(get_city_repository),
    uploads: UploadStore = Depends(get_uploads),
) -> dict:
    return await service.hard_delete(repo, uploads, city_id)
