"""Tests for routing, role gates and error mapping at the HTTP layer."""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from fieldcrm.auth.constants import Role
from fieldcrm.auth.dataclasses import EffectiveIdentity
from fieldcrm.auth.dependencies import get_effective_identity
from fieldcrm.auth.schemas import User
from fieldcrm.db.jobs.dependencies import get_job_service
from fieldcrm.db.quotes.dependencies import get_quote_service
from fieldcrm.exceptions import (
    InvalidTransitionError,
    JobUnavailableError,
    NotFoundError,
    QuoteNotAcceptableError,
)
from fieldcrm.main import app

DISPATCHER = User(id="user-dispatch", username="dispatch", role=Role.DISPATCHER)
TECHNICIAN = User(id="user-tech", username="tech", role=Role.TECHNICIAN)


def _service():
    service = AsyncMock()
    service.session = AsyncMock()
    return service


@pytest.fixture
def job_service():
    service = _service()
    service.technicians.get_by_user_id.return_value = SimpleNamespace(id="tech-1")
    return service


@pytest.fixture
def quote_service():
    return _service()


@pytest.fixture
def client(job_service, quote_service):
    app.dependency_overrides[get_job_service] = lambda: job_service
    app.dependency_overrides[get_quote_service] = lambda: quote_service

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def act_as(user: User) -> None:
    app.dependency_overrides[get_effective_identity] = lambda: EffectiveIdentity(
        real=user
    )


class TestHealth:
    def test_healthcheck(self, client):
        response = client.get("/healthcheck")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"


class TestJobRoutes:
    def test_requires_authentication(self, client):
        response = client.get("/api/jobs/job-1")

        assert response.status_code == 401

    def test_technician_cannot_create_jobs(self, client, job_service):
        act_as(TECHNICIAN)

        response = client.post(
            "/api/jobs",
            json={
                "customer_name": "Maria Gomez",
                "customer_phone": "312-555-0100",
                "address": "1200 W Addison St",
            },
        )

        assert response.status_code == 403
        job_service.create_job.assert_not_awaited()

    def test_missing_job_is_404(self, client, job_service):
        act_as(DISPATCHER)
        job_service.get_job.side_effect = NotFoundError("Job job-9 not found")

        response = client.get("/api/jobs/job-9")

        assert response.status_code == 404
        assert response.json()["detail"] == "Job job-9 not found"

    def test_invalid_transition_is_400(self, client, job_service):
        act_as(DISPATCHER)
        job_service.assign.side_effect = InvalidTransitionError(
            "job", "completed", "scheduled"
        )

        response = client.post("/api/jobs/job-1/assign", json={"technician_id": "tech-1"})

        assert response.status_code == 400
        assert "completed" in response.json()["detail"]
        job_service.session.rollback.assert_awaited_once()

    def test_lost_claim_is_409(self, client, job_service):
        act_as(TECHNICIAN)
        job_service.claim.side_effect = JobUnavailableError()

        response = client.post("/api/jobs/job-1/claim", json={})

        assert response.status_code == 409
        job_service.claim.assert_awaited_once_with("job-1", "tech-1")

    def test_technician_cannot_claim_for_someone_else(self, client, job_service):
        act_as(TECHNICIAN)

        response = client.post(
            "/api/jobs/job-1/claim", json={"technician_id": "tech-2"}
        )

        assert response.status_code == 403
        job_service.claim.assert_not_awaited()


class TestPublicQuoteRoutes:
    def test_opt_in_without_ownership_is_422(self, client, quote_service):
        response = client.post(
            "/api/public/quote/tok-123/accept", json={"sms_opt_in": True}
        )

        assert response.status_code == 422
        quote_service.accept_public.assert_not_awaited()

    def test_expired_quote_is_400(self, client, quote_service):
        quote_service.accept_public.side_effect = QuoteNotAcceptableError(
            "Quote has expired"
        )

        response = client.post(
            "/api/public/quote/tok-123/accept",
            json={"email_opt_in": True, "email_ownership_confirmed": True},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Quote has expired"

    def test_unknown_token_is_404(self, client, quote_service):
        quote_service.get_public.side_effect = NotFoundError("Quote not found")

        response = client.get("/api/public/quote/nope")

        assert response.status_code == 404
