"""
Contact controller logic.
"""

from __future__ import annotations

from collections.abc import Awaitable
from datetime import UTC, date, datetime
from typing import Any

from backoffice.api.dependencies import ListParams
from backoffice.api.payloads import RequestPayload, parse_payload
from backoffice.api.responses import envelope, page_envelope, raise_for_result, require_found
from backoffice.entities import OperationResult, Record
from backoffice.errors import ValidationError
from backoffice.resources import ContactRepository
from backoffice.utils.uploads import DOCUMENT_EXTENSIONS, IMAGE_EXTENSIONS, UploadStore
from backoffice.utils.urls import build_asset_url

from .schemas import ContactPayload

FILE_FOLDER = "contacts"
FILE_COLUMNS = ("profile", "resume")


def shape_contact(contact: Record, base_url: str) -> Record:
    return {
        **contact,
        **{col: build_asset_url(base_url, FILE_FOLDER, contact.get(col)) for col in FILE_COLUMNS},
    }


async def _save_files(uploads: UploadStore, payload: RequestPayload) -> dict[str, str]:
    saved = await uploads.save_fields(payload.files, ["profile"], FILE_FOLDER, IMAGE_EXTENSIONS)
    async with uploads.discard_on_error(saved, FILE_FOLDER):
        saved.update(
            await uploads.save_fields(payload.files, ["resume"], FILE_FOLDER, DOCUMENT_EXTENSIONS)
        )
    return saved


async def list_contacts(repo: ContactRepository, params: ListParams, base_url: str) -> dict:
    page = await repo.list(params.filters, **params.query_kwargs())
    return page_envelope(page, lambda row: shape_contact(row, base_url))


async def get_contact(repo: ContactRepository, contact_id: int, base_url: str) -> dict:
    contact = require_found(await repo.find_by_id(contact_id), repo.config.not_found_message)
    return envelope(shape_contact(contact, base_url))


async def get_by_cuid(repo: ContactRepository, cuid: str, base_url: str) -> dict:
    contact = require_found(await repo.find_one("cuid", cuid), repo.config.not_found_message)
    return envelope(shape_contact(contact, base_url))


async def related(repo: ContactRepository, relation: str, value: Any, base_url: str) -> dict:
    rows = await repo.find_related(relation, value)
    return envelope([shape_contact(row, base_url) for row in rows])


async def date_range(
    repo: ContactRepository, start: date | None, end: date | None, base_url: str
) -> dict:
    if not start or not end:
        raise ValidationError("Start date and end date are required")
    rows = await repo.find_in_date_range(start, end)
    return envelope([shape_contact(row, base_url) for row in rows])


async def create_contact(
    repo: ContactRepository, uploads: UploadStore, payload: RequestPayload, base_url: str
) -> dict:
    fields = parse_payload(ContactPayload, payload.fields, drop_none=True)
    if not any(fields.get(key) for key in ("name", "first_name", "email", "phone")):
        raise ValidationError("At least name, first_name, email or phone is required")

    saved = await _save_files(uploads, payload)
    fields.update(saved)
    async with uploads.discard_on_error(saved, FILE_FOLDER):
        result = raise_for_result(await repo.create(fields))

    contact = await repo.find_by_id(result.data["id"])
    return envelope(
        shape_contact(contact or result.data, base_url),
        message="Contact created successfully",
    )


async def update_contact(
    repo: ContactRepository,
    uploads: UploadStore,
    contact_id: int,
    payload: RequestPayload,
    base_url: str,
) -> dict:
    fields = parse_payload(ContactPayload, payload.fields)
    existing = require_found(await repo.find_by_id(contact_id), repo.config.not_found_message)

    new_files = await _save_files(uploads, payload)
    fields.update(new_files)
    if not fields:
        raise ValidationError("No fields to update")

    async with uploads.discard_on_error(new_files, FILE_FOLDER):
        result = raise_for_result(await repo.update(contact_id, fields))
    await uploads.delete_fields(existing, FILE_FOLDER, new_files)

    contact = await repo.find_by_id(contact_id)
    return envelope(shape_contact(contact or {}, base_url), message="Contact updated successfully")


async def transition(
    repo: ContactRepository,
    pending: Awaitable[OperationResult],
    contact_id: int,
    message: str,
    base_url: str,
) -> dict:
    """Await a single-field transition and return the refreshed contact."""
    raise_for_result(await pending)
    contact = await repo.find_by_id(contact_id)
    return envelope(shape_contact(contact or {}, base_url), message=message)


async def set_lead_status(
    repo: ContactRepository, contact_id: int, lead_status: int, base_url: str
) -> dict:
    return await transition(
        repo,
        repo.set_lead_status(contact_id, lead_status),
        contact_id,
        "Lead status updated successfully",
        base_url,
    )


async def log_activity(
    repo: ContactRepository,
    contact_id: int,
    activity: str,
    activity_date_time: str | None,
    base_url: str,
) -> dict:
    when = activity_date_time or datetime.now(UTC).isoformat(timespec="milliseconds")
    return await transition(
        repo,
        repo.log_activity(contact_id, activity, when),
        contact_id,
        "Activity log updated successfully",
        base_url,
    )


async def assign(
    repo: ContactRepository, contact_id: int, target: str, value: Any, base_url: str
) -> dict:
    label = target.replace("-", " ").capitalize()
    return await transition(
        repo,
        repo.assign(contact_id, target, value),
        contact_id,
        f"{label} assigned successfully",
        base_url,
    )


async def soft_delete(repo: ContactRepository, contact_id: int) -> dict:
    raise_for_result(await repo.soft_delete(contact_id))
    return envelope(message="Contact deleted successfully")


async def restore(repo: ContactRepository, contact_id: int) -> dict:
    raise_for_result(await repo.restore(contact_id))
    return envelope(message="Contact restored successfully")


async def hard_delete(repo: ContactRepository, uploads: UploadStore, contact_id: int) -> dict:
    result = raise_for_result(await repo.hard_delete(contact_id))
    await uploads.delete_fields(result.data, FILE_FOLDER, FILE_COLUMNS)
    return envelope(message="Contact permanently deleted")


async def bulk_status(repo: ContactRepository, ids: list[int], status: int) -> dict:
    count = await repo.bulk_update(ids, {"status": status})
    return envelope(message="Status updated successfully", affectedRows=count)


async def bulk_lead_status(repo: ContactRepository, ids: list[int], lead_status: int) -> dict:
    count = await repo.bulk_update(ids, {"lead_status": lead_status})
    return envelope(message="Lead status updated successfully", affectedRows=count)


async def bulk_delete(repo: ContactRepository, ids: list[int]) -> dict:
    count = await repo.bulk_soft_delete(ids)
    return envelope(message=f"{count} contacts deleted successfully", affectedRows=count)


async def bulk_hard_delete(repo: ContactRepository, uploads: UploadStore, ids: list[int]) -> dict:
    rows = await repo.bulk_hard_delete(ids)
    for row in rows:
        await uploads.delete_fields(row, FILE_FOLDER, FILE_COLUMNS)
    return envelope(
        message=f"{len(rows)} contacts permanently deleted", affectedRows=len(rows)
    )


async def stats(repo: ContactRepository) -> dict:
    return envelope(await repo.stats())
