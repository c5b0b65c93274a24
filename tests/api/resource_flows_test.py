"""
End-to-end HTTP flows through the FastAPI app against the test database.
"""

from pathlib import Path

import pytest

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


@pytest.mark.asyncio
class TestJobs:
    async def test_create_job_returns_slug(self, client):
        """Test POST /jobs answers 201 with the new id and derived slug"""
        response = await client.post("/jobs", json={"title": "Backend Engineer", "type": "Full Time"})

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["slug"] == "backend-engineer"
        assert isinstance(body["jobId"], int)

        found = await client.get("/jobs/slug/backend-engineer")
        assert found.status_code == 200
        assert found.json()["data"]["title"] == "Backend Engineer"

    async def test_explicit_duplicate_slug_is_409(self, client):
        await client.post("/jobs", json={"title": "Backend Engineer"})

        response = await client.post("/jobs", json={"title": "Other", "slug": "backend-engineer"})

        assert response.status_code == 409
        assert response.json() == {"success": False, "message": "Slug already exists"}

    async def test_soft_deleted_job_leaves_public_list(self, client):
        job_id = (await client.post("/jobs", json={"title": "Analyst"})).json()["jobId"]

        deleted = await client.delete(f"/jobs/{job_id}")
        public = await client.get("/jobs")
        admin = await client.get("/jobs/admin/list")
        restored = await client.patch(f"/jobs/{job_id}/restore")

        assert deleted.status_code == 200
        assert public.json()["data"] == []
        assert admin.json()["pagination"]["totalItems"] == 1
        assert restored.status_code == 200
        assert (await client.get("/jobs")).json()["pagination"]["totalItems"] == 1

    async def test_application_with_resume(self, client, settings):
        """Test the public form stores the resume and lists it with a public URL"""
        job_id = (await client.post("/jobs", json={"title": "Analyst"})).json()["jobId"]

        response = await client.post(
            "/jobs/apply",
            data={"job_id": str(job_id), "first_name": "Lina", "last_name": "H", "email": "l@x.com"},
            files={"resume": ("cv.pdf", b"%PDF-1.4", "application/pdf")},
        )

        assert response.status_code == 201
        listed = (await client.get("/jobs/applications")).json()["data"]
        assert len(listed) == 1
        stored = listed[0]["resume"]
        assert (Path(settings.upload_dir) / "jobs/resumes" / stored).is_file()
        assert listed[0]["resumeUrl"] == f"http://test/uploads/jobs/resumes/{stored}"


@pytest.mark.asyncio
class TestEnquiries:
    async def test_transition_on_missing_enquiry_is_404(self, client):
        """Test PATCH /enquire/status/999 reports the missing row"""
        response = await client.patch("/enquire/status/999", json={"status": 2})

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Enquiry not found"}

    async def test_public_create_applies_defaults(self, client):
        response = await client.post("/enquire", json={"message": "Interested in a villa", "property_id": 4})

        assert response.status_code == 201
        enquiry_id = response.json()["enquiryId"]
        enquiry = (await client.get(f"/enquire/{enquiry_id}")).json()["data"]
        assert enquiry["priority"] == "medium"
        assert enquiry["drip_marketing"] == "no"
        assert enquiry["status"] == 1
        assert enquiry["lead_status"] == 1

    async def test_bulk_assign_counts_existing_ids(self, client):
        first = (await client.post("/enquire", json={"message": "a"})).json()["enquiryId"]
        second = (await client.post("/enquire", json={"message": "b"})).json()["enquiryId"]

        response = await client.patch(
            "/enquire/bulk-assign", json={"ids": [first, second, 999999], "agent_id": 3}
        )

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "2 enquiries assigned",
            "affectedRows": 2,
        }

    async def test_drip_marketing_toggle(self, client):
        enquiry_id = (await client.post("/enquire", json={"message": "a"})).json()["enquiryId"]

        response = await client.patch(f"/enquire/drip-marketing/{enquiry_id}", json={"enabled": True})

        assert response.json()["message"] == "Drip marketing enabled successfully"
        enquiry = (await client.get(f"/enquire/{enquiry_id}")).json()["data"]
        assert enquiry["drip_marketing"] == "yes"


@pytest.mark.asyncio
class TestCities:
    async def test_filtered_page(self, client):
        """Test GET /cities?country_id=5&page=2&limit=10"""
        for i in range(1, 26):
            await client.post("/cities", json={"name": f"City {i:02d}", "country_id": 5})
        await client.post("/cities", json={"name": "Doha", "country_id": 7})

        response = await client.get("/cities", params={"country_id": 5, "page": 2, "limit": 10})

        body = response.json()
        assert response.status_code == 200
        assert body["pagination"] == {
            "currentPage": 2,
            "totalPages": 3,
            "totalItems": 25,
            "itemsPerPage": 10,
        }
        assert len(body["data"]) == 10
        assert all(row["country_id"] == 5 for row in body["data"])

    async def test_bad_filter_value_is_400(self, client):
        response = await client.get("/cities", params={"country_id": "five"})

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid value for country_id"

    async def test_multipart_create_stores_image(self, client, settings):
        """Test an uploaded image is saved and rendered as a public URL"""
        response = await client.post(
            "/cities", data={"name": "Dubai"}, files={"img": ("dubai.png", PNG, "image/png")}
        )

        assert response.status_code == 201
        city = (await client.get(f"/cities/{response.json()['cityId']}")).json()["data"]
        stored = city["img"].rsplit("/", 1)[-1]
        assert city["img"] == f"http://test/uploads/cities/{stored}"
        assert (Path(settings.upload_dir) / "cities" / stored).read_bytes() == PNG

    async def test_rejected_upload_type(self, client):
        response = await client.post(
            "/cities", data={"name": "Dubai"}, files={"img": ("dubai.exe", b"MZ", "application/octet-stream")}
        )

        assert response.status_code == 400
        assert response.json()["message"].startswith("Invalid file type '.exe'")
        assert (await client.get("/cities")).json()["data"] == []

    async def test_partial_update(self, client):
        city_id = (
            await client.post("/cities", json={"name": "Sharjah", "description": "old", "country_id": 5})
        ).json()["cityId"]

        response = await client.put(f"/cities/{city_id}", json={"description": "new"})

        assert response.status_code == 200
        city = (await client.get(f"/cities/{city_id}")).json()["data"]
        assert city["description"] == "new"
        assert city["name"] == "Sharjah"
        assert city["country_id"] == 5

    async def test_check_slug(self, client):
        await client.post("/cities", json={"name": "Dubai"})

        taken = await client.get("/cities/check-slug", params={"slug": "Dubai"})
        free = await client.get("/cities/check-slug", params={"slug": "Abu Dhabi"})

        assert taken.json()["data"] == {"slug": "dubai", "available": False}
        assert free.json()["data"] == {"slug": "abu-dhabi", "available": True}


@pytest.mark.asyncio
class TestTasksAndDeals:
    async def test_duplicate_task_title_is_409(self, client):
        first = await client.post("/tasks", json={"title": "Call landlord"})
        second = await client.post("/tasks", json={"title": "Call landlord"})

        assert first.status_code == 201
        assert first.json()["slug"] == "call-landlord"
        assert second.status_code == 409
        assert (await client.get("/tasks")).json()["pagination"]["totalItems"] == 1

    async def test_bulk_delete_tasks(self, client):
        ids = [(await client.post("/tasks", json={"title": f"Task {i}"})).json()["taskId"] for i in range(2)]

        response = await client.post("/tasks/bulk/delete", json={"ids": ids + [999999]})

        assert response.json()["affectedRows"] == 2

    async def test_deal_delete_is_hard(self, client):
        deal_id = (await client.post("/deals", json={"closing_ids": "CL-9", "buyers": "A"})).json()["dealId"]

        first = await client.delete(f"/deals/{deal_id}")
        second = await client.delete(f"/deals/{deal_id}")

        assert first.status_code == 200
        assert second.status_code == 404
        assert second.json()["message"] == "Deal not found"

    async def test_contact_duplicate_email_is_409(self, client):
        await client.post("/contacts", json={"name": "Lina", "email": "lina@example.com"})

        response = await client.post("/contacts", json={"name": "L", "email": "lina@example.com"})

        assert response.status_code == 409
        assert response.json()["message"] == "Email already exists"
