"""
Tests for settings parsing and the JSON log formatter.
"""

import json
import logging
import sys

from backoffice.config import Settings, sanitize_database_url
from backoffice.utils.logging import JsonFormatter


class TestSettings:
    def test_sslmode_is_dropped(self):
        """Test asyncpg-incompatible sslmode is stripped from the DSN"""
        url = "postgresql://u:p@db:5432/app?sslmode=require&application_name=api"

        assert sanitize_database_url(url) == "postgresql://u:p@db:5432/app?application_name=api"

    def test_url_without_query_is_unchanged(self):
        url = "postgresql://u:p@db:5432/app"

        assert sanitize_database_url(url) == url

    def test_public_base_url_strips_trailing_slash(self):
        """Test asset links are built from API_URL without a trailing slash"""
        settings = Settings(api_url="https://api.example.com/")

        assert settings.public_base_url == "https://api.example.com"

    def test_public_base_url_defaults_to_localhost(self):
        settings = Settings(api_url=None, port=9000)

        assert settings.public_base_url == "http://localhost:9000"


class TestJsonFormatter:
    def _record(self, **extra) -> logging.LogRecord:
        record = logging.LogRecord(
            "backoffice.repository", logging.INFO, __file__, 1, "%s created", ("City",), None
        )
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_extra_fields_are_promoted(self):
        """Test fields passed through `extra` become top-level JSON keys"""
        payload = json.loads(JsonFormatter().format(self._record(table="cities", id=12)))

        assert payload["message"] == "City created"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "backoffice.repository"
        assert payload["table"] == "cities"
        assert payload["id"] == 12

    def test_nested_extra_dict_is_merged(self):
        payload = json.loads(JsonFormatter().format(self._record(extra={"path": "/cities"})))

        assert payload["path"] == "/cities"
        assert "extra" not in payload

    def test_exception_is_rendered(self):
        """Test tracebacks are included as text"""
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = self._record()
            record.exc_info = sys.exc_info()

        payload = json.loads(JsonFormatter().format(record))

        assert "RuntimeError: boom" in payload["exc_info"]
