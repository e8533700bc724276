"""
Tests for logging middleware.
Tests secret and contact-detail masking and request event logging.
"""

import json
import logging
import sys

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from core.middleware.logging import (
    StructuredFormatter,
    StructuredLoggingMiddleware,
    is_sensitive_field,
    mask_headers,
    mask_sensitive_data,
    setup_logging,
    should_log_request,
)


class TestSensitiveFieldDetection:
    """Test sensitive field name detection."""

    @pytest.mark.parametrize("field", [
        "password", "new_password", "PASSWORD", "access_token", "api_key",
        "apiKey", "client_secret", "Authorization", "cookie",
    ])
    def test_sensitive_fields(self, field):
        assert is_sensitive_field(field)

    @pytest.mark.parametrize("field", ["status", "first_name", "job_id", "expected_version"])
    def test_regular_fields(self, field):
        assert not is_sensitive_field(field)


class TestMasking:
    """Test recursive masking of request data."""

    def test_masks_sensitive_keys(self):
        masked = mask_sensitive_data({"email": "a@b.com", "password": "hunter2", "status": "hired"})

        assert masked["password"] == "[REDACTED]"
        assert masked["status"] == "hired"

    def test_masks_contact_details_in_values(self):
        masked = mask_sensitive_data({"note": "Reach Ada at ada@example.com or +1 555-123-4567"})

        assert "ada@example.com" not in masked["note"]
        assert "[EMAIL]" in masked["note"]
        assert "[PHONE]" in masked["note"]

    def test_nested_structures(self):
        data = {"candidate": {"profile": {"token": "x"}, "skills": ["python", "a@b.io"]}}
        masked = mask_sensitive_data(data)

        assert masked["candidate"]["profile"]["token"] == "[REDACTED]"
        assert masked["candidate"]["skills"] == ["python", "[EMAIL]"]

    def test_depth_limit(self):
        data = current = {}
        for _ in range(20):
            current["next"] = {}
            current = current["next"]

        masked = mask_sensitive_data(data, max_depth=3)
        assert masked["next"]["next"]["next"]["next"] == "[MAX_DEPTH_EXCEEDED]"

    def test_non_string_values_pass_through(self):
        assert mask_sensitive_data({"score": 87, "active": True}) == {"score": 87, "active": True}

    def test_authorization_header_keeps_scheme(self):
        masked = mask_headers({"Authorization": "Bearer abc.def.ghi", "Accept": "application/json"})

        assert masked["Authorization"] == "Bearer [REDACTED]"
        assert masked["Accept"] == "application/json"

    def test_cookie_header_redacted(self):
        assert mask_headers({"cookie": "session=1"})["cookie"] == "[REDACTED]"


class TestShouldLog:

    @pytest.mark.parametrize("path,expected", [
        ("/health", False),
        ("/ready", False),
        ("/api/dashboard/pipeline", True),
        ("/api/applications/1/status", True),
    ])
    def test_health_probes_skipped(self, path, expected):
        assert should_log_request(path) is expected


class TestStructuredLoggingMiddleware:
    """Test request events emitted by the middleware."""

    @pytest.fixture
    def client(self):
        app = FastAPI()
        app.add_middleware(StructuredLoggingMiddleware, log_request_body=True)

        @app.post("/api/items")
        async def create(payload: dict):
            return payload

        @app.get("/health")
        async def health():
            return {"status": "healthy"}

        return TestClient(app)

    def _events(self, caplog):
        events = []
        for record in caplog.records:
            if record.name != "core.middleware.logging":
                continue
            try:
                events.append(json.loads(record.getMessage()))
            except ValueError:
                continue
        return events

    def test_request_events_logged(self, client, caplog):
        with caplog.at_level(logging.INFO, logger="core.middleware.logging"):
            response = client.post("/api/items", json={"name": "x", "password": "hunter2"})

        assert response.status_code == 200
        events = self._events(caplog)
        started = next(e for e in events if e["event"] == "request_started")
        completed = next(e for e in events if e["event"] == "request_completed")

        assert started["body"]["password"] == "[REDACTED]"
        assert completed["status_code"] == 200
        assert completed["request_id"] == started["request_id"]
        assert response.headers["x-request-id"] == started["request_id"]

    def test_request_id_is_propagated(self, client):
        response = client.post("/api/items", json={}, headers={"x-request-id": "req-7"})

        assert response.headers["x-request-id"] == "req-7"

    def test_health_not_logged(self, client, caplog):
        with caplog.at_level(logging.INFO, logger="core.middleware.logging"):
            response = client.get("/health")

        assert response.status_code == 200
        assert "x-request-id" in response.headers
        assert self._events(caplog) == []


class TestFormatter:

    def test_json_output(self):
        record = logging.LogRecord("api", logging.INFO, __file__, 1, "moved %s", ("A1",), None)
        record.request_id = "req-1"

        data = json.loads(StructuredFormatter().format(record))

        assert data["message"] == "moved A1"
        assert data["level"] == "INFO"
        assert data["request_id"] == "req-1"

    def test_exception_info(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = logging.LogRecord("api", logging.ERROR, __file__, 1, "failed", (), sys.exc_info())

        data = json.loads(StructuredFormatter().format(record))
        assert data["exception"]["type"] == "ValueError"

    def test_setup_logging_installs_single_handler(self):
        root = logging.getLogger()
        original = root.handlers[:]
        original_level = root.level
        try:
            setup_logging("DEBUG", json_logs=True)
            setup_logging("DEBUG", json_logs=True)

            assert len(root.handlers) == 1
            assert isinstance(root.handlers[0].formatter, StructuredFormatter)
        finally:
            root.handlers[:] = original
            root.setLevel(original_level)
