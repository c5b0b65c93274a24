"""
Deal controller logic.
"""

from __future__ import annotations

from typing import Any

from backoffice.api.dependencies import ListParams
from backoffice.api.payloads import parse_payload
from backoffice.api.responses import envelope, page_envelope, raise_for_result, require_found
from backoffice.errors import ValidationError
from backoffice.resources import DealRepository

from .schemas import DealPayload


async def list_deals(repo: DealRepository, params: ListParams) -> dict:
    return page_envelope(await repo.list(params.filters, **params.query_kwargs()))


async def get_deal(repo: DealRepository, deal_id: int) -> dict:
    return envelope(require_found(await repo.find_by_id(deal_id), repo.config.not_found_message))


async def get_by_closing_id(repo: DealRepository, closing_id: str) -> dict:
    if not closing_id.strip():
        raise ValidationError("Closing ID is required")
    deal = await repo.find_by_closing_id(closing_id)
    return envelope(require_found(deal, repo.config.not_found_message))


async def create_deal(repo: DealRepository, fields: dict[str, Any]) -> dict:
    data = parse_payload(DealPayload, fields, drop_none=True)
    if not data:
        raise ValidationError("Deal details are required")
    result = raise_for_result(await repo.create(data))
    return envelope(message="Deal created successfully", dealId=result.data["id"])


async def update_deal(repo: DealRepository, deal_id: int, fields: dict[str, Any]) -> dict:
    data = parse_payload(DealPayload, fields)
    if not data:
        raise ValidationError("No fields to update")
    raise_for_result(await repo.update(deal_id, data))
    return envelope(message="Deal updated successfully")


async def delete_deal(repo: DealRepository, deal_id: int) -> dict:
    raise_for_result(await repo.hard_delete(deal_id))
    return envelope(message="Deal deleted successfully")


async def stats(repo: DealRepository) -> dict:
    return envelope(await repo.stats())
