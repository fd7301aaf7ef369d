"""
Abacus Backend — Application Shell Tests
==========================================

What:  Tests for the pieces around the two resources: settings validation,
       request ID propagation, health check and access logging levels.
"""

import logging

import pytest
from pydantic import ValidationError

from app.config import DEFAULT_DATABASE_URL, Settings
from app.middleware.logging import level_for_status
from app.routes.calculate import to_json_number


class TestSettings:

    def test_log_level_is_normalized(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(ValidationError):
            Settings(log_level="chatty")

    def test_comments_prefix_trailing_slash_stripped(self):
        assert Settings(comments_prefix="/v2/comments/").comments_prefix == "/v2/comments"

    @pytest.mark.parametrize("prefix", ["comments", "/"])
    def test_comments_prefix_must_be_rooted_path(self, prefix):
        with pytest.raises(ValidationError):
            Settings(comments_prefix=prefix)

    def test_cors_origins_list(self):
        settings = Settings(cors_origins="http://a.test, http://b.test,")
        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]

    def test_default_database_url_flagged(self):
        with pytest.raises(ValueError, match="DATABASE_URL"):
            Settings(database_url=DEFAULT_DATABASE_URL).validate_required_for_production()

    def test_sqlite_detection(self):
        assert Settings(database_url="sqlite+aiosqlite:///x.db").is_sqlite
        assert not Settings(database_url=DEFAULT_DATABASE_URL).is_sqlite


class TestHelpers:

    @pytest.mark.parametrize(
        "status, level",
        [(200, logging.INFO), (201, logging.INFO), (404, logging.WARNING), (500, logging.ERROR)],
    )
    def test_level_for_status(self, status, level):
        assert level_for_status(status) == level

    def test_whole_numbers_render_as_int(self):
        assert to_json_number(5.0) == 5
        assert isinstance(to_json_number(5.0), int)

    def test_fractions_and_huge_values_stay_float(self):
        assert isinstance(to_json_number(0.5), float)
        assert isinstance(to_json_number(1e300), float)
        assert isinstance(to_json_number(float("inf")), float)


class TestRequestId:

    @pytest.mark.asyncio
    async def test_generated_when_absent(self, test_client):
        response = await test_client.get("/api/calculate", params={"operation": "add"})
        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_client_value_echoed(self, test_client):
        response = await test_client.get(
            "/api/comments/not-an-id",
            headers={"X-Request-ID": "trace-123"},
        )
        assert response.status_code == 500
        assert response.headers["X-Request-ID"] == "trace-123"


class TestHealth:

    @pytest.mark.asyncio
    async def test_healthy(self, test_client):
        response = await test_client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert body["uptime_seconds"] >= 0
