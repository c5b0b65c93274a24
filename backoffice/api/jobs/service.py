"""
Job and job-application controller logic.
"""

from __future__ import annotations

from typing import Any

from backoffice.api.dependencies import ListParams
from backoffice.api.payloads import RequestPayload, parse_payload
from backoffice.api.responses import envelope, page_envelope, raise_for_result, require_found
from backoffice.entities import Record
from backoffice.errors import ValidationError
from backoffice.resources import JobRepository
from backoffice.utils.slugs import slugify
from backoffice.utils.uploads import DOCUMENT_EXTENSIONS, UploadStore
from backoffice.utils.urls import build_asset_url

from .schemas import ApplicationPayload, JobPayload

RESUME_FOLDER = "jobs/resumes"


def shape_application(application: Record, base_url: str) -> Record:
    return {
        **application,
        "resumeUrl": build_asset_url(base_url, RESUME_FOLDER, application.get("resume")),
    }


async def list_jobs(repo: JobRepository, params: ListParams) -> dict:
    return page_envelope(await repo.list(params.filters, **params.query_kwargs()))


async def list_admin(repo: JobRepository, params: ListParams) -> dict:
    return page_envelope(await repo.list_admin(params.filters, **params.query_kwargs()))


async def get_job(repo: JobRepository, job_id: int) -> dict:
    return envelope(require_found(await repo.find_by_id(job_id), repo.config.not_found_message))


async def get_job_by_slug(repo: JobRepository, slug: str) -> dict:
    job = await repo.find_one("slug", slug, active_only=True)
    return envelope(require_found(job, repo.config.not_found_message))


async def check_slug(repo: JobRepository, slug: str | None, exclude_id: int | None) -> dict:
    if not slug or not slugify(slug):
        raise ValidationError("Slug is required")
    available = await repo.slug_available(slug, exclude_id)
    return envelope({"slug": slugify(slug), "available": available})


async def types(repo: JobRepository) -> dict:
    return envelope(await repo.types())


async def locations(repo: JobRepository) -> dict:
    return envelope(await repo.locations())


async def stats(repo: JobRepository) -> dict:
    return envelope(await repo.stats())


async def create_job(repo: JobRepository, fields: dict[str, Any]) -> dict:
    data = parse_payload(JobPayload, fields, drop_none=True)
    if not data.get("title"):
        raise ValidationError("Job title is required")
    result = raise_for_result(await repo.create(data))
    return envelope(
        message="Job created successfully",
        jobId=result.data["id"],
        slug=result.data.get("slug"),
    )


async def update_job(repo: JobRepository, job_id: int, fields: dict[str, Any]) -> dict:
    data = parse_payload(JobPayload, fields)
    if not data:
        raise ValidationError("No fields to update")
    result = raise_for_result(await repo.update(job_id, data))
    return envelope(message="Job updated successfully", slug=result.data.get("slug"))


async def soft_delete(repo: JobRepository, job_id: int) -> dict:
    raise_for_result(await repo.soft_delete(job_id))
    return envelope(message="Job deleted successfully")


async def restore(repo: JobRepository, job_id: int) -> dict:
    raise_for_result(await repo.restore(job_id))
    return envelope(message="Job restored successfully")


async def hard_delete(repo: JobRepository, job_id: int) -> dict:
    raise_for_result(await repo.hard_delete(job_id))
    return envelope(message="Job permanently deleted")


async def apply(repo: JobRepository, uploads: UploadStore, payload: RequestPayload) -> dict:
    fields = parse_payload(ApplicationPayload, payload.fields, drop_none=True)
    if not all(fields.get(key) for key in ("first_name", "last_name", "email")):
        raise ValidationError("Name and email are required")

    saved = await uploads.save_fields(
        payload.files, ["resume"], RESUME_FOLDER, DOCUMENT_EXTENSIONS
    )
    fields.update(saved)
    async with uploads.discard_on_error(saved, RESUME_FOLDER):
        result = raise_for_result(await repo.apply(fields))
    return envelope(
        message="Application submitted successfully", applicationId=result.data["id"]
    )


async def list_applications(repo: JobRepository, params: ListParams, base_url: str) -> dict:
    page = await repo.applications.list(params.filters, **params.query_kwargs())
    return page_envelope(page, lambda row: shape_application(row, base_url))


async def set_application_status(repo: JobRepository, application_id: int, status: int) -> dict:
    raise_for_result(await repo.set_application_status(application_id, status))
    return envelope(message="Status updated successfully")


async def delete_application(
    repo: JobRepository, uploads: UploadStore, application_id: int
) -> dict:
    result = raise_for_result(await repo.delete_application(application_id))
    await uploads.delete_fields(result.data, RESUME_FOLDER, ["resume"])
    return envelope(message="Application deleted successfully")
