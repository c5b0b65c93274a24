"""URL slugs for cities, jobs and tasks."""

import re
import time

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(text: str, max_length: int | None = None) -> str:
    """Lowercase, collapse every run of non-alphanumerics to '-', trim '-' at both ends.

    >>> slugify("  Backend Engineer (Remote) ")
    'backend-engineer-remote'
    """
    slug = _NON_ALNUM.sub("-", (text or "").lower()).strip("-")
    if max_length is not None:
        slug = slug[:max_length].rstrip("-")
    return slug


def with_timestamp_suffix(
    slug: str, now_ms: int | None = None, max_length: int | None = None
) -> str:
    """Disambiguate a derived slug: `dubai` -> `dubai-1718000000000`.

    The base is cut so the result fits in `max_length`.
    """
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    suffix = f"-{now_ms}"
    if max_length is not None:
        slug = slug[: max(max_length - len(suffix), 0)].rstrip("-")
    return f"{slug}{suffix}"
