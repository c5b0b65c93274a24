"""
Request body handling shared by the resource routers.

Create and update endpoints accept either JSON or multipart/url-encoded
forms (the back-office front-end posts forms whenever a file is attached).
Bodies are read into plain field/file dicts here and validated against the
resource schema by `parse_payload`.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, TypeVar

from fastapi import Request
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError
from starlette.datastructures import UploadFile

from backoffice.errors import ValidationError

SchemaT = TypeVar("SchemaT", bound=BaseModel)

_FORM_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


@dataclass
class RequestPayload:
    fields: dict[str, Any] = field(default_factory=dict)
    files: dict[str, UploadFile] = field(default_factory=dict)


async def read_payload(request: Request) -> RequestPayload:
    """Split a JSON or form body into scalar fields and uploaded files."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(_FORM_TYPES):
        form = await request.form()
        payload = RequestPayload()
        for key, value in form.multi_items():
            if isinstance(value, UploadFile):
                payload.files[key] = value
            else:
                payload.fields[key] = value
        return payload

    if not await request.body():
        return RequestPayload()
    try:
        data = await request.json()
    except ValueError as exc:
        raise ValidationError("Malformed JSON body") from exc
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return RequestPayload(fields=data)


def format_validation_errors(errors: Sequence[Mapping[str, Any]]) -> str:
    """Render the first pydantic error as `field: message`."""
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    message = first.get("msg", "Invalid value")
    return f"{'.'.join(location)}: {message}" if location else message


def parse_payload(
    schema: type[SchemaT], fields: Mapping[str, Any], drop_none: bool = False
) -> dict[str, Any]:
    """Validate `fields` and return only the keys the caller actually sent.

    Empty strings are treated as "not sent" since forms cannot express null;
    an explicit JSON null is kept (sets the column to NULL) unless `drop_none`.
    """
    cleaned = {
        key: value
        for key, value in fields.items()
        if value != "" and not (drop_none and value is None)
    }
    try:
        model = schema.model_validate(cleaned)
    except PydanticValidationError as exc:
        raise ValidationError(format_validation_errors(exc.errors())) from exc
    return model.model_dump(exclude_unset=True)


class BulkIdsRequest(BaseModel):
    ids: list[int] = Field(..., min_length=1)
