"""
Uploaded files are removed again when the row that would reference them is not written.
"""

from pathlib import Path

import asyncpg
import pytest

from backoffice.resources import CityRepository, JobRepository

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


def stored_files(settings, folder: str) -> list[Path]:
    directory = Path(settings.upload_dir) / folder
    return list(directory.iterdir()) if directory.exists() else []


async def raise_duplicate(*args, **kwargs):
    raise asyncpg.UniqueViolationError("duplicate key value violates unique constraint")


@pytest.mark.asyncio
class TestUploadCleanup:
    async def test_create_error_removes_new_image(self, offline_client, settings, monkeypatch):
        """Test a unique violation raised by the insert leaves no image behind"""
        monkeypatch.setattr(CityRepository, "create", raise_duplicate)

        response = await offline_client.post(
            "/cities", data={"name": "Dubai"}, files={"img": ("dubai.png", PNG, "image/png")}
        )

        assert response.status_code == 409
        assert response.json() == {"success": False, "message": "Duplicate entry"}
        assert stored_files(settings, "cities") == []

    async def test_update_error_keeps_old_image(self, offline_client, settings, monkeypatch):
        """Test a failed update drops the replacement and leaves the stored image alone"""
        old = Path(settings.upload_dir) / "cities" / "old.png"
        old.parent.mkdir(parents=True)
        old.write_bytes(PNG)

        async def find_by_id(self, entity_id):
            return {"id": entity_id, "name": "Dubai", "img": "old.png"}

        monkeypatch.setattr(CityRepository, "find_by_id", find_by_id)
        monkeypatch.setattr(CityRepository, "update", raise_duplicate)

        response = await offline_client.put(
            "/cities/7", data={"name": "Dubai"}, files={"img": ("new.png", PNG, "image/png")}
        )

        assert response.status_code == 409
        assert stored_files(settings, "cities") == [old]

    async def test_application_error_removes_resume(self, offline_client, settings, monkeypatch):
        monkeypatch.setattr(JobRepository, "apply", raise_duplicate)

        response = await offline_client.post(
            "/jobs/apply",
            data={"job_id": "1", "first_name": "Lina", "last_name": "H", "email": "l@x.com"},
            files={"resume": ("cv.pdf", b"%PDF-1.4", "application/pdf")},
        )

        assert response.status_code == 409
        assert stored_files(settings, "jobs/resumes") == []
