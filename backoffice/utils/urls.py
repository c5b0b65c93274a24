"""Public links for files stored under the upload directory."""

from typing import Any

_EMPTY_MARKERS = {"", "null", "undefined"}


def clean_asset_path(value: Any, folder: str) -> str | None:
    """Reduce a stored image/file reference to the bare file name.

    Absolute http(s) URLs are kept as they are. Placeholder strings that
    front-ends post for "no file" ("null", "undefined") become None.
    """
    if value is None:
        return None
    text = str(value).strip()
    if text.lower() in _EMPTY_MARKERS:
        return None
    if text.startswith(("http://", "https://")):
        return text

    text = text.lstrip("/")
    for prefix in ("uploads/", f"{folder}/"):
        if text.startswith(prefix):
            text = text[len(prefix) :]
    return text or None


def build_asset_url(base_url: str, folder: str, value: Any) -> str | None:
    """`<base_url>/uploads/<folder>/<file>` for a stored reference, or None."""
    cleaned = clean_asset_path(value, folder)
    if cleaned is None:
        return None
    if cleaned.startswith(("http://", "https://")):
        return cleaned
    return f"{base_url.rstrip('/')}/uploads/{folder}/{cleaned}"
