"""
Response envelopes shared by every resource.

All endpoints answer `{"success": bool, ...}`; lists add a `pagination`
block, creates add the new id under a resource-specific key and bulk
operations add `affectedRows`.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from backoffice.entities import OperationResult, PageResult, Record
from backoffice.errors import ConflictError, NotFoundError


def envelope(data: Any = None, message: str | None = None, **extra: Any) -> dict:
    body: dict[str, Any] = {"success": True}
    if data is not None:
        body["data"] = data
    if message:
        body["message"] = message
    body.update(extra)
    return body


def page_envelope(page: PageResult, shape: Callable[[Record], Record] | None = None) -> dict:
    rows = [shape(row) for row in page.rows] if shape else page.rows
    return {"success": True, "data": rows, "pagination": page.pagination.to_response()}


def raise_for_result(result: OperationResult) -> OperationResult:
    """Turn an expected repository failure into the matching HTTP error."""
    if result.success:
        return result
    if result.reason == "conflict":
        raise ConflictError(result.message or "Conflict")
    raise NotFoundError(result.message or "Not found")


def require_found(row: Record | None, message: str) -> Record:
    if row is None:
        raise NotFoundError(message)
    return row
