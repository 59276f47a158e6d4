"""Tests for the validation API."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from docschema.exceptions import FetchError
from docschema.schemas import Schema
from server.main import app

SCHEMA = {
    "enforceOrder": True,
    "sections": [
        {"title": "Overview", "required": True, "nonEmpty": True},
        {"title": "Procedure", "required": True},
    ],
}


def allow_hosts(*hosts: str):
    """Patch the schema_url host allowlist."""
    return patch("server.routers.validate.SCHEMA_URL_ALLOWLIST", frozenset(hosts))


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


class TestValidateEndpoint:
    """Tests for POST /api/validate."""

    def test_conforming_document(self, client: TestClient) -> None:
        response = client.post(
            "/api/validate",
            json={"markdown": "# Overview\n\nText.\n\n# Procedure\n", "schema": SCHEMA},
        )

        assert response.status_code == 200
        assert response.json() == {"ok": True, "sections": 2, "diagnostics": []}

    def test_reports_diagnostics(self, client: TestClient) -> None:
        response = client.post(
            "/api/validate",
            json={"markdown": "# Overview\n", "schema": SCHEMA, "rule_id": "api"},
        )

        body = response.json()
        assert response.status_code == 200
        assert body["ok"] is False
        assert body["diagnostics"][0] == {
            "message": 'Section "Overview" must not be empty.',
            "position": {"line": 1, "column": 1},
            "ruleId": "api",
        }
        assert body["diagnostics"][1]["message"] == "Missing required section: Procedure"
        assert body["diagnostics"][1]["position"] is None

    def test_invalid_pattern_is_bad_request(self, client: TestClient) -> None:
        response = client.post(
            "/api/validate",
            json={"markdown": "# A\n", "schema": {"sections": [{"titlePattern": "("}]}},
        )

        assert response.status_code == 400
        assert "Invalid titlePattern" in response.json()["error"]

    def test_schema_without_sections_is_bad_request(self, client: TestClient) -> None:
        response = client.post("/api/validate", json={"markdown": "# A\n", "schema": {}})

        assert response.status_code == 400
        assert "sections" in response.json()["error"]

    def test_requires_exactly_one_schema(self, client: TestClient) -> None:
        response = client.post("/api/validate", json={"markdown": "# A\n"})

        assert response.status_code == 422

    def test_schema_url(self, client: TestClient) -> None:
        schema = Schema.model_validate({"sections": [{"title": "A", "required": True}]})
        mock_fetch = AsyncMock(return_value=schema)

        with allow_hosts("example.com"), patch("server.routers.validate.fetch_schema", new=mock_fetch):
            response = client.post(
                "/api/validate",
                json={"markdown": "# A\n", "schema_url": "https://example.com/s.yaml"},
            )

        assert response.status_code == 200
        assert response.json()["ok"] is True
        mock_fetch.assert_awaited_once_with("https://example.com/s.yaml", follow_redirects=False)

    def test_schema_url_fetch_failure(self, client: TestClient) -> None:
        with allow_hosts("example.com"), patch(
            "server.routers.validate.fetch_schema",
            new=AsyncMock(side_effect=FetchError("Schema not found at https://example.com/s.yaml")),
        ):
            response = client.post(
                "/api/validate",
                json={"markdown": "# A\n", "schema_url": "https://example.com/s.yaml"},
            )

        assert response.status_code == 502
        assert "Schema not found" in response.json()["error"]

    def test_rejects_non_http_schema_url(self, client: TestClient) -> None:
        response = client.post(
            "/api/validate",
            json={"markdown": "# A\n", "schema_url": "file:///etc/passwd"},
        )

        assert response.status_code == 422

    def test_rejects_schema_url_host_not_allowed(self, client: TestClient) -> None:
        mock_fetch = AsyncMock()

        with allow_hosts("example.com"), patch("server.routers.validate.fetch_schema", new=mock_fetch):
            response = client.post(
                "/api/validate",
                json={"markdown": "# A\n", "schema_url": "http://169.254.169.254/latest/"},
            )

        assert response.status_code == 400
        assert response.json() == {"error": "schema_url host is not allowed"}
        mock_fetch.assert_not_awaited()

    def test_schema_url_disabled_without_allowlist(self, client: TestClient) -> None:
        with allow_hosts():
            response = client.post(
                "/api/validate",
                json={"markdown": "# A\n", "schema_url": "https://example.com/s.yaml"},
            )

        assert response.status_code == 400


def test_health(client: TestClient) -> None:
    response = client.get("/health")

    assert response.json() == {"status": "ok"}
