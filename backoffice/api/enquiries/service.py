"""
Enquiry controller logic.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from backoffice.api.dependencies import ListParams
from backoffice.api.payloads import RequestPayload, parse_payload
from backoffice.api.responses import envelope, page_envelope, raise_for_result, require_found
from backoffice.entities import Record
from backoffice.errors import ValidationError
from backoffice.resources import EnquiryRepository
from backoffice.utils.uploads import DOCUMENT_EXTENSIONS, IMAGE_EXTENSIONS, UploadStore
from backoffice.utils.urls import build_asset_url

from .schemas import EnquiryPayload

FILE_FOLDER = "enquiries"
FILE_COLUMNS = ("property_image", "resume")

TRANSITION_MESSAGES = {
    "status": "Status updated successfully",
    "priority": "Priority updated successfully",
    "quality": "Quality updated successfully",
    "assign-agent": "Agent assigned successfully",
    "agent-activity": "Agent activity updated successfully",
    "admin-activity": "Admin activity updated successfully",
}


def shape_enquiry(enquiry: Record, base_url: str) -> Record:
    return {
        **enquiry,
        **{col: build_asset_url(base_url, FILE_FOLDER, enquiry.get(col)) for col in FILE_COLUMNS},
    }


def _shape_all(rows: list[Record], base_url: str) -> list[Record]:
    return [shape_enquiry(row, base_url) for row in rows]


async def _save_files(uploads: UploadStore, payload: RequestPayload) -> dict[str, str]:
    saved = await uploads.save_fields(
        payload.files, ["property_image"], FILE_FOLDER, IMAGE_EXTENSIONS
    )
    async with uploads.discard_on_error(saved, FILE_FOLDER):
        saved.update(
            await uploads.save_fields(payload.files, ["resume"], FILE_FOLDER, DOCUMENT_EXTENSIONS)
        )
    return saved


async def list_enquiries(repo: EnquiryRepository, params: ListParams, base_url: str) -> dict:
    page = await repo.list(params.filters, **params.query_kwargs())
    return page_envelope(page, lambda row: shape_enquiry(row, base_url))


async def list_for_agent(
    repo: EnquiryRepository, agent_id: int, params: ListParams, base_url: str
) -> dict:
    page = await repo.list_for_agent(agent_id, params.filters, params.page, params.limit)
    return page_envelope(page, lambda row: shape_enquiry(row, base_url))


async def get_enquiry(repo: EnquiryRepository, enquiry_id: int, base_url: str) -> dict:
    enquiry = require_found(await repo.find_by_id(enquiry_id), repo.config.not_found_message)
    return envelope(shape_enquiry(enquiry, base_url))


async def related(repo: EnquiryRepository, column: str, value: int, base_url: str) -> dict:
    return envelope(_shape_all(await repo.find_related(column, value), base_url))


async def search(repo: EnquiryRepository, term: str | None, limit: int, base_url: str) -> dict:
    if not term or not term.strip():
        return envelope([])
    return envelope(_shape_all(await repo.search(term.strip(), limit), base_url))


async def recent(repo: EnquiryRepository, limit: int, base_url: str) -> dict:
    return envelope(_shape_all(await repo.recent(limit), base_url))


async def unassigned(repo: EnquiryRepository, limit: int, base_url: str) -> dict:
    return envelope(_shape_all(await repo.unassigned(limit), base_url))


async def high_priority(repo: EnquiryRepository, limit: int, base_url: str) -> dict:
    return envelope(_shape_all(await repo.high_priority(limit), base_url))


async def stats(
    repo: EnquiryRepository,
    agent_id: int | None,
    date_from: date | None,
    date_to: date | None,
) -> dict:
    return envelope(await repo.stats(agent_id, date_from, date_to))


async def create_enquiry(
    repo: EnquiryRepository, uploads: UploadStore, payload: RequestPayload
) -> dict:
    """Public enquiry form. Unset workflow fields get their initial values."""
    fields = parse_payload(EnquiryPayload, payload.fields, drop_none=True)
    fields.setdefault("priority", "medium")
    fields.setdefault("drip_marketing", "no")
    fields.setdefault("status", 1)
    fields.setdefault("lead_status", 1)
    fields.setdefault("contact_date", date.today().isoformat())

    saved = await _save_files(uploads, payload)
    fields.update(saved)
    async with uploads.discard_on_error(saved, FILE_FOLDER):
        result = raise_for_result(await repo.create(fields))
    return envelope(message="Enquiry created successfully", enquiryId=result.data["id"])


async def update_enquiry(
    repo: EnquiryRepository, uploads: UploadStore, enquiry_id: int, payload: RequestPayload
) -> dict:
    fields = parse_payload(EnquiryPayload, payload.fields)
    existing = require_found(await repo.find_by_id(enquiry_id), repo.config.not_found_message)

    new_files = await _save_files(uploads, payload)
    fields.update(new_files)
    if not fields:
        raise ValidationError("No update data provided")

    async with uploads.discard_on_error(new_files, FILE_FOLDER):
        result = raise_for_result(await repo.update(enquiry_id, fields))
    await uploads.delete_fields(existing, FILE_FOLDER, new_files)
    return envelope(message="Enquiry updated successfully")


async def set_field(repo: EnquiryRepository, enquiry_id: int, transition: str, value: Any) -> dict:
    raise_for_result(await repo.set_field(enquiry_id, transition, value))
    return envelope(message=TRANSITION_MESSAGES[transition])


async def set_lead_status(
    repo: EnquiryRepository, enquiry_id: int, lead_status: int, lost_status: str | None
) -> dict:
    raise_for_result(await repo.set_lead_status(enquiry_id, lead_status, lost_status))
    return envelope(message="Lead status updated successfully")


async def set_drip_marketing(repo: EnquiryRepository, enquiry_id: int, enabled: bool) -> dict:
    raise_for_result(await repo.set_drip_marketing(enquiry_id, enabled))
    state = "enabled" if enabled else "disabled"
    return envelope(message=f"Drip marketing {state} successfully")


async def soft_delete(repo: EnquiryRepository, enquiry_id: int) -> dict:
    raise_for_result(await repo.soft_delete(enquiry_id))
    return envelope(message="Enquiry deleted successfully")


async def restore(repo: EnquiryRepository, enquiry_id: int) -> dict:
    raise_for_result(await repo.restore(enquiry_id))
    return envelope(message="Enquiry restored successfully")


async def hard_delete(repo: EnquiryRepository, uploads: UploadStore, enquiry_id: int) -> dict:
    result = raise_for_result(await repo.hard_delete(enquiry_id))
    await uploads.delete_fields(result.data, FILE_FOLDER, FILE_COLUMNS)
    return envelope(message="Enquiry permanently deleted")


async def bulk_action(repo: EnquiryRepository, ids: list[int], action: str, value: Any) -> dict:
    result = await repo.bulk_action(ids, action, value)
    return envelope(message=result.message, affectedRows=result.affected_rows)
