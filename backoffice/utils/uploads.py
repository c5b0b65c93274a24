"""
Disk storage for multipart uploads (city images, contact profiles, resumes).

Files land in `<upload_dir>/<folder>/<epoch-ms>-<16 hex>.<ext>`; only the
bare file name is stored in the database and rendered to a public URL by
`backoffice.utils.urls`.
"""

from __future__ import annotations

import asyncio
import secrets
import time
from collections.abc import AsyncIterator, Iterable, Mapping
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import UploadFile

from backoffice.errors import ApiError, ValidationError
from backoffice.utils.logging import get_logger

logger = get_logger(__name__)

IMAGE_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".webp", ".gif"})
DOCUMENT_EXTENSIONS = frozenset({".pdf", ".doc", ".docx"}) | IMAGE_EXTENSIONS


def _file_ext(filename: str) -> str:
    return Path(filename).suffix.lower()


def generate_filename(original_name: str) -> str:
    return f"{int(time.time() * 1000)}-{secrets.token_hex(8)}{_file_ext(original_name)}"


def _write_file(target: Path, content: bytes) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(content)


class UploadStore:
    """Saves and removes uploaded files below one root directory."""

    def __init__(self, root: str | Path, max_bytes: int):
        self.root = Path(root)
        self.max_bytes = max_bytes

    def path_for(self, folder: str, filename: str) -> Path:
        name = filename.removeprefix("uploads/").removeprefix(f"{folder}/")
        return self.root / folder / Path(name).name

    async def read_upload_bytes(self, file: UploadFile) -> bytes:
        chunk_size = 1024 * 1024
        buf = bytearray()

        while True:
            chunk = await file.read(chunk_size)
            if not chunk:
                break
            buf.extend(chunk)
            if len(buf) > self.max_bytes:
                raise ApiError(f"File too large. Max is {self.max_bytes} bytes.", 413)

        return bytes(buf)

    async def save(
        self,
        file: UploadFile | None,
        folder: str,
        allowed: frozenset[str] = IMAGE_EXTENSIONS,
    ) -> str | None:
        """Persist an optional upload; returns the stored file name or None."""
        if file is None or not file.filename:
            return None

        ext = _file_ext(file.filename)
        if ext not in allowed:
            raise ValidationError(
                f"Invalid file type '{ext}'. Allowed types: {', '.join(sorted(allowed))}"
            )

        content = await self.read_upload_bytes(file)
        filename = generate_filename(file.filename)
        target = self.root / folder / filename
        await asyncio.to_thread(_write_file, target, content)
        logger.info("stored upload", extra={"folder": folder, "file_name": filename})
        return filename

    async def save_fields(
        self,
        files: Mapping[str, UploadFile],
        columns: Iterable[str],
        folder: str,
        allowed: frozenset[str] = IMAGE_EXTENSIONS,
    ) -> dict[str, str]:
        """Save every supplied file among `columns`; returns column -> stored name."""
        saved: dict[str, str] = {}
        async with self.discard_on_error(saved, folder):
            for column in columns:
                filename = await self.save(files.get(column), folder, allowed)
                if filename:
                    saved[column] = filename
        return saved

    @asynccontextmanager
    async def discard_on_error(
        self, saved: Mapping[str, str], folder: str
    ) -> AsyncIterator[None]:
        """Remove the files in `saved` when the block raises, then re-raise."""
        try:
            yield
        except BaseException:
            await self.delete_fields(saved, folder)
            raise

    async def delete_fields(
        self, row: Mapping[str, object], folder: str, columns: Iterable[str] | None = None
    ) -> None:
        """Remove the files referenced by `row[column]` for each column (all keys by default)."""
        for column in columns if columns is not None else row.keys():
            value = row.get(column)
            if isinstance(value, str):
                await self.delete(folder, value)

    async def delete(self, folder: str, filename: str | None) -> bool:
        """Best-effort removal; a missing or locked file is logged, never raised."""
        if not filename or filename.startswith(("http://", "https://")):
            return False

        path = self.path_for(folder, filename)
        try:
            await asyncio.to_thread(path.unlink)
        except FileNotFoundError:
            return False
        except OSError as exc:
            logger.warning(
                "could not delete upload", extra={"path": str(path), "error": str(exc)}
            )
            return False
        return True
