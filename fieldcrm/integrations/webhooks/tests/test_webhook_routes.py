"""Tests for the lead-source webhook endpoints."""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from fieldcrm.db.leads.dependencies import get_lead_service
from fieldcrm.integrations.webhooks.config import WebhookSettings, get_webhook_settings
from fieldcrm.main import app


@pytest.fixture
def lead_service():
    service = AsyncMock()
    service.create_lead.return_value = (SimpleNamespace(id="lead-123"), False)
    service.session = AsyncMock()
    return service


@pytest.fixture
def webhook_settings():
    return WebhookSettings(
        angi_api_key="angi-secret",
        zapier_api_key="zapier-secret",
        thumbtack_username="thumbtack",
        thumbtack_password="tt-pass",
    )


@pytest.fixture
def client(lead_service, webhook_settings):
    app.dependency_overrides[get_lead_service] = lambda: lead_service
    app.dependency_overrides[get_webhook_settings] = lambda: webhook_settings

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


class TestOpenSources:
    def test_elocal_creates_lead(self, client, lead_service):
        response = client.post(
            "/api/webhooks/elocal",
            json={"first_name": "Maria", "last_name": "Gomez", "phone": "312-555-0100"},
        )

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "lead_id": "lead-123",
            "external_lead_id": None,
        }
        created = lead_service.create_lead.await_args.args[0]
        assert created.source == "eLocal"
        lead_service.session.commit.assert_awaited_once()

    def test_missing_phone_is_bad_request(self, client, lead_service):
        response = client.post("/api/webhooks/networx", json={"customer_name": "Dan"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Phone number is required"
        lead_service.create_lead.assert_not_awaited()
        lead_service.session.rollback.assert_awaited_once()

    def test_inquirly_urgent(self, client, lead_service):
        response = client.post(
            "/api/webhooks/inquirly",
            json={"contact_phone": "312-555-0190", "urgency": "emergency"},
        )

        assert response.status_code == 200
        assert lead_service.create_lead.await_args.args[0].priority.value == "urgent"


class TestAngi:
    def test_requires_api_key(self, client):
        response = client.post("/api/webhooks/angi", json={"phone": "773-555-0142"})

        assert response.status_code == 401

    def test_wrong_api_key(self, client):
        response = client.post(
            "/api/webhooks/angi",
            json={"phone": "773-555-0142"},
            headers={"X-API-Key": "nope"},
        )

        assert response.status_code == 401

    def test_valid_api_key(self, client):
        response = client.post(
            "/api/webhooks/angi",
            json={"phone": "773-555-0142"},
            headers={"X-API-Key": "angi-secret"},
        )

        assert response.status_code == 200

    def test_unconfigured_key_is_open(self, client):
        app.dependency_overrides[get_webhook_settings] = lambda: WebhookSettings()

        response = client.post("/api/webhooks/angi", json={"phone": "773-555-0142"})

        assert response.status_code == 200


class TestThumbtack:
    def test_basic_auth_and_external_id(self, client):
        response = client.post(
            "/api/webhooks/thumbtack",
            json={"leadID": "tt-9001", "customer": {"phone": "312-555-0177"}},
            auth=("thumbtack", "tt-pass"),
        )

        assert response.status_code == 200
        assert response.json()["external_lead_id"] == "tt-9001"

    def test_bad_password(self, client):
        response = client.post(
            "/api/webhooks/thumbtack",
            json={"customer": {"phone": "312-555-0177"}},
            auth=("thumbtack", "wrong"),
        )

        assert response.status_code == 401


class TestZapier:
    def test_lead_without_phone(self, client, lead_service):
        response = client.post(
            "/api/webhooks/zapier/lead",
            json={"name": "Chris Wu"},
            headers={"X-API-Key": "zapier-secret"},
        )

        assert response.status_code == 200
        created = lead_service.create_lead.await_args.args[0]
        assert created.customer_phone == "No phone provided"
        assert created.source == "Zapier"

    def test_service_failure_is_server_error(self, client, lead_service):
        lead_service.create_lead.side_effect = RuntimeError("database unavailable")

        response = client.post(
            "/api/webhooks/zapier/lead",
            json={"phone": "312-555-0155"},
            headers={"X-API-Key": "zapier-secret"},
        )

        assert response.status_code == 500
        assert "process Zapier lead" in response.json()["detail"]
