"""
Task controller logic.
"""

from __future__ import annotations

from typing import Any

from backoffice.api.dependencies import ListParams
from backoffice.api.payloads import parse_payload
from backoffice.api.responses import envelope, page_envelope, raise_for_result, require_found
from backoffice.errors import ValidationError
from backoffice.resources import TaskRepository

from .schemas import TaskPayload


async def list_tasks(repo: TaskRepository, params: ListParams) -> dict:
    return page_envelope(await repo.list(params.filters, **params.query_kwargs()))


async def get_task(repo: TaskRepository, task_id: int) -> dict:
    return envelope(require_found(await repo.find_by_id(task_id), repo.config.not_found_message))


async def get_by_slug(repo: TaskRepository, slug: str) -> dict:
    return envelope(require_found(await repo.find_by_slug(slug), repo.config.not_found_message))


async def by_assignee(repo: TaskRepository, assign: str) -> dict:
    return envelope(await repo.find_by_assignee(assign))


async def by_date(repo: TaskRepository, day: str) -> dict:
    return envelope(await repo.find_by_date(day))


async def date_range(repo: TaskRepository, start: str | None, end: str | None) -> dict:
    if not start or not end:
        raise ValidationError("Start date and end date are required")
    return envelope(await repo.find_in_date_range(start, end))


async def assignee_counts(repo: TaskRepository) -> dict:
    return envelope(await repo.by_assignee())


async def stats(repo: TaskRepository) -> dict:
    return envelope(await repo.stats())


async def create_task(repo: TaskRepository, fields: dict[str, Any]) -> dict:
    data = parse_payload(TaskPayload, fields, drop_none=True)
    if not data.get("title"):
        raise ValidationError("Title is required")
    result = raise_for_result(await repo.create(data))
    return envelope(
        result.data,
        message="Task created successfully",
        taskId=result.data["id"],
        slug=result.data.get("slug"),
    )


async def update_task(repo: TaskRepository, task_id: int, fields: dict[str, Any]) -> dict:
    data = parse_payload(TaskPayload, fields)
    if not data:
        raise ValidationError("No fields to update")
    raise_for_result(await repo.update(task_id, data))
    task = await repo.find_by_id(task_id)
    return envelope(task, message="Task updated successfully")


async def delete_task(repo: TaskRepository, task_id: int) -> dict:
    raise_for_result(await repo.hard_delete(task_id))
    return envelope(message="Task deleted successfully")


async def assign(repo: TaskRepository, task_id: int, assignee: str) -> dict:
    raise_for_result(await repo.assign(task_id, assignee))
    return envelope(await repo.find_by_id(task_id), message="Task assigned successfully")


async def set_commission(repo: TaskRepository, task_id: int, commission: str | None) -> dict:
    raise_for_result(await repo.set_commission(task_id, commission))
    return envelope(await repo.find_by_id(task_id), message="Commission updated successfully")


async def bulk_delete(repo: TaskRepository, ids: list[int]) -> dict:
    rows = await repo.bulk_hard_delete(ids)
    return envelope(message="Tasks deleted successfully", affectedRows=len(rows))


async def bulk_assign(repo: TaskRepository, ids: list[int], assignee: str) -> dict:
    count = await repo.bulk_assign(ids, assignee)
    return envelope(message="Tasks assigned successfully", affectedRows=count)
