"""
Tests for slug and asset URL helpers.
"""

import pytest

from backoffice.utils.slugs import slugify, with_timestamp_suffix
from backoffice.utils.urls import build_asset_url, clean_asset_path

BASE = "https://api.example.com"


class TestSlugify:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Backend Engineer", "backend-engineer"),
            ("  Dubai Marina!! ", "dubai-marina"),
            ("Abu--Dhabi__City", "abu-dhabi-city"),
            ("Café Royale", "caf-royale"),
            ("2024 Q1 Review", "2024-q1-review"),
            ("!!!", ""),
            ("", ""),
        ],
    )
    def test_slugify(self, text, expected):
        """Test lowercasing, collapsing separators and trimming hyphens"""
        assert slugify(text) == expected

    def test_slugify_is_idempotent(self):
        """Test slugifying a slug changes nothing"""
        slug = slugify("Senior Sales Agent (Remote)")

        assert slugify(slug) == slug

    def test_timestamp_suffix(self):
        """Test collision suffix format"""
        assert with_timestamp_suffix("dubai", 1718000000000) == "dubai-1718000000000"

    def test_slugify_max_length(self):
        """Test a cut slug never ends with a hyphen"""
        assert slugify("Dubai Marina Towers", 6) == "dubai"
        assert len(slugify("x" * 300, 100)) == 100

    def test_timestamp_suffix_fits_max_length(self):
        slug = with_timestamp_suffix("a" * 100, 1718000000000, max_length=100)

        assert len(slug) == 100
        assert slug.endswith("a-1718000000000")


class TestAssetUrls:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("dubai.jpg", f"{BASE}/uploads/cities/dubai.jpg"),
            ("/uploads/cities/dubai.jpg", f"{BASE}/uploads/cities/dubai.jpg"),
            ("cities/dubai.jpg", f"{BASE}/uploads/cities/dubai.jpg"),
            ("https://cdn.example.com/a.jpg", "https://cdn.example.com/a.jpg"),
            (None, None),
            ("", None),
            ("null", None),
            ("undefined", None),
        ],
    )
    def test_build_asset_url(self, value, expected):
        """Test stored references render to one public URL shape"""
        assert build_asset_url(BASE, "cities", value) == expected

    def test_trailing_slash_on_base_url(self):
        """Test the base URL never doubles the slash"""
        assert build_asset_url(f"{BASE}/", "jobs/resumes", "cv.pdf") == f"{BASE}/uploads/jobs/resumes/cv.pdf"

    def test_clean_asset_path_keeps_other_folders(self):
        """Test only the uploads and own-folder prefixes are stripped"""
        assert clean_asset_path("communities/marina.png", "cities") == "communities/marina.png"
