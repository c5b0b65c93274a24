"""
FastAPI router for deal endpoints. Every route is back-office only.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from backoffice.api.dependencies import ListParams, get_deal_repository, list_params, require_auth
from backoffice.api.payloads import read_payload
from backoffice.resources import DealRepository

from . import service

router = APIRouter(prefix="/deals", dependencies=[Depends(require_auth)])


@router.get("")
async def list_deals(
    params: ListParams = Depends(list_params),
    repo: DealRepository = Depends(get_deal_repository),
) -> dict:
    return await service.list_deals(repo, params)


@router.get("/stats")
async def stats(repo: DealRepository = Depends(get_deal_repository)) -> dict:
    return await service.stats(repo)


@router.get("/closing/{closing_id}")
async def by_closing_id(
    closing_id: str, repo: DealRepository = Depends(get_deal_repository)
) -> dict:
    return await service.get_by_closing_id(repo, closing_id)


@router.get("/{deal_id}")
async def get_deal(deal_id: int, repo: DealRepository = Depends(get_deal_repository)) -> dict:
    return await service.get_deal(repo, deal_id)


@router.post("", status_code=201)
async def create_deal(
    request: Request, repo: DealRepository = Depends(get_deal_repository)
) -> dict:
    payload = await read_payload(request)
    return await service.create_deal(repo, payload.fields)


@router.put("/{deal_id}")
async def update_deal(
    deal_id: int, request: Request, repo: DealRepository = Depends(get_deal_repository)
) -> dict:
    payload = await read_payload(request)
    return await service.update_deal(repo, deal_id, payload.fields)


@router.delete("/{deal_id}")
async def delete_deal(deal_id: int, repo: DealRepository = Depends(get_deal_repository)) -> dict:
    return await service.delete_deal(repo, deal_id)
