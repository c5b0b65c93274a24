"""
Tests for upload storage: type and size checks, cleanup and deletion.
"""

import asyncio
import io

import pytest
from fastapi import UploadFile

from backoffice.errors import ApiError, ValidationError
from backoffice.utils import uploads
from backoffice.utils.uploads import DOCUMENT_EXTENSIONS, UploadStore


def upload(name: str, content: bytes = b"data") -> UploadFile:
    return UploadFile(file=io.BytesIO(content), filename=name)


@pytest.mark.asyncio
class TestUploadStore:
    async def test_save_and_delete(self, tmp_path):
        """Test a stored file is renamed, written under its folder and removable"""
        store = UploadStore(tmp_path, max_bytes=1024)

        name = await store.save(upload("Photo.PNG", b"png"), "cities")

        assert name.endswith(".png")
        assert (tmp_path / "cities" / name).read_bytes() == b"png"
        assert await store.delete("cities", f"uploads/cities/{name}") is True
        assert not (tmp_path / "cities" / name).exists()

    async def test_missing_file_is_none(self, tmp_path):
        store = UploadStore(tmp_path, max_bytes=1024)

        assert await store.save(None, "cities") is None
        assert await store.save(upload(""), "cities") is None

    async def test_rejects_extension(self, tmp_path):
        store = UploadStore(tmp_path, max_bytes=1024)

        with pytest.raises(ValidationError):
            await store.save(upload("run.exe"), "cities")

    async def test_rejects_oversized_file(self, tmp_path):
        """Test files above the limit are refused with 413"""
        store = UploadStore(tmp_path, max_bytes=4)

        with pytest.raises(ApiError) as exc_info:
            await store.save(upload("a.png", b"12345"), "cities")

        assert exc_info.value.status_code == 413
        assert not (tmp_path / "cities").exists()

    async def test_save_fields_rolls_back_earlier_files(self, tmp_path):
        """Test a failing second file removes the first one already written"""
        store = UploadStore(tmp_path, max_bytes=1024)
        files = {"profile": upload("me.jpg"), "resume": upload("cv.exe")}

        with pytest.raises(ValidationError):
            await store.save_fields(files, ["profile", "resume"], "contacts", DOCUMENT_EXTENSIONS)

        assert list((tmp_path / "contacts").iterdir()) == []

    async def test_delete_ignores_missing_and_remote(self, tmp_path):
        store = UploadStore(tmp_path, max_bytes=1024)

        assert await store.delete("cities", "nope.png") is False
        assert await store.delete("cities", "https://cdn.example.com/a.png") is False
        assert await store.delete("cities", None) is False

    async def test_discard_on_error_removes_saved_files(self, tmp_path):
        """Test files saved before a failing write are removed and the error propagates"""
        store = UploadStore(tmp_path, max_bytes=1024)
        saved = await store.save_fields({"img": upload("a.png")}, ["img"], "cities")

        with pytest.raises(RuntimeError):
            async with store.discard_on_error(saved, "cities"):
                raise RuntimeError("insert failed")

        assert list((tmp_path / "cities").iterdir()) == []

    async def test_discard_on_error_keeps_files_on_success(self, tmp_path):
        store = UploadStore(tmp_path, max_bytes=1024)
        saved = await store.save_fields({"img": upload("a.png")}, ["img"], "cities")

        async with store.discard_on_error(saved, "cities"):
            pass

        assert (tmp_path / "cities" / saved["img"]).is_file()

    async def test_disk_io_runs_in_worker_threads(self, tmp_path, monkeypatch):
        """Test writes and unlinks are handed to asyncio.to_thread"""
        calls = []
        real_to_thread = asyncio.to_thread

        async def recording_to_thread(func, *args):
            calls.append(getattr(func, "__name__", repr(func)))
            return await real_to_thread(func, *args)

        monkeypatch.setattr(uploads.asyncio, "to_thread", recording_to_thread)
        store = UploadStore(tmp_path, max_bytes=1024)

        name = await store.save(upload("a.png"), "cities")
        await store.delete("cities", name)

        assert calls == ["_write_file", "unlink"]
