"""
Tests for the HTTP surface, with the CRM replaced by in-memory doubles.
"""

from __future__ import annotations

from typing import Any

import pytest
from fastapi.testclient import TestClient

from estimator.application.exceptions import CrmConfigurationError, CrmTransportError, CrmUpstreamError
from estimator.application.use_cases.inspect_crm import InspectCrmUseCase
from estimator.application.use_cases.submit_quote import SubmitQuoteUseCase
from estimator.infrastructure.ghl.mock_crm import MockCrm
from estimator.infrastructure.store.memory_outbox import MemorySubmissionOutbox
from estimator.main import app
from estimator.wiring.dependencies import get_inspect_crm_use_case, get_submit_quote_use_case


CONTACT = {"email": "jane@example.com", "first_name": "Jane", "last_name": "Doe"}
SETUP_ONLY = {"selected_services": ["new_ghl_setup"]}


class DownCrm(MockCrm):
    def upsert_contact(self, payload: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        raise CrmTransportError("Contact upsert: timed out")

    def list_custom_fields(self) -> list[dict[str, Any]]:
        raise CrmTransportError("List custom fields: timed out")


class UnauthorizedCrm(MockCrm):
    def list_custom_fields(self) -> list[dict[str, Any]]:
        raise CrmUpstreamError("List custom fields failed", status=401, body={"message": "Invalid JWT"})


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _submit_with(crm, outbox=None) -> SubmitQuoteUseCase:
    use_case = SubmitQuoteUseCase(crm=crm, outbox=outbox or MemorySubmissionOutbox(), sleep=lambda _: None)
    app.dependency_overrides[get_submit_quote_use_case] = lambda: use_case
    return use_case


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_estimate_single_service(client):
    """Default configuration for a new setup prices at its base."""
    response = client.post("/api/estimate", json=SETUP_ONLY)

    assert response.status_code == 200
    data = response.json()
    assert data["quote"]["final_total"] == 297
    assert data["final_total_display"] == "$297"
    assert data["final_total_range_display"] == "$97 - $297"
    assert data["timeline_days"] == 7
    assert data["active_bundles"] == []
    assert all(line["included"] for line in data["quote"]["services"][0]["breakdown"])


def test_estimate_with_scope_and_bundle(client):
    payload = {
        "selected_services": ["new_ghl_setup", "fix_optimize"],
        "service_configs": {
            "new_ghl_setup": {"addons": ["ab_testing", "email_audit", "zoom_handoff"], "service_level": "premium"},
        },
        "common_config": {"industry": "legal_firms", "scale": "growing"},
    }

    data = client.post("/api/estimate", json=payload).json()

    assert data["active_bundles"] == ["The Performance Pro"]
    assert data["quote"]["bundle_discount"] == 94
    assert data["quote"]["multi_service_discount"] == 0
    assert data["timeline_days"] == 7 - 1 + 3


def test_estimate_ignores_duplicate_services(client):
    payload = {"selected_services": ["new_ghl_setup", "new_ghl_setup"]}

    data = client.post("/api/estimate", json=payload).json()

    assert len(data["quote"]["services"]) == 1
    assert data["quote"]["final_total"] == 297


def test_submit_quote(client):
    crm = MockCrm()
    _submit_with(crm)

    response = client.post("/api/submit-quote", json={"contact": CONTACT, "selection": SETUP_ONLY})

    assert response.status_code == 200
    data = response.json()
    assert data["ok"] is True
    assert data["contact_id"] == "mock_contact_1"
    assert data["final_total"] == 297
    assert data["opportunity"]["skipped"] is True
    assert crm.contacts["mock_contact_1"]["payload"]["pipelineStage"] == "setup"


def test_submit_quote_rejects_bad_contact(client):
    crm = MockCrm()
    _submit_with(crm)

    response = client.post(
        "/api/submit-quote",
        json={"contact": {"email": "not-an-email", "first_name": "Jane"}, "selection": SETUP_ONLY},
    )

    assert response.status_code == 400
    assert "Valid email is required" in response.json()["detail"]
    assert crm.contacts == {}


def test_submit_quote_requires_a_service(client):
    _submit_with(MockCrm())

    response = client.post("/api/submit-quote", json={"contact": CONTACT, "selection": {}})

    assert response.status_code == 400


def test_failed_submission_is_saved_and_retried(client):
    """A CRM outage returns 502 and queues the payload; the retry endpoint drains it."""
    outbox = MemorySubmissionOutbox()
    _submit_with(DownCrm(), outbox)

    response = client.post("/api/submit-quote", json={"contact": CONTACT, "selection": SETUP_ONLY})

    assert response.status_code == 502
    assert len(outbox.list_pending()) == 1

    _submit_with(MockCrm(), outbox)
    retry = client.post("/api/submissions/retry")

    assert retry.status_code == 200
    assert retry.json() == {"ok": True, "retried": 1}
    assert outbox.list_pending() == []


def test_ghl_health(client):
    crm = MockCrm(custom_fields=[{"id": "f1", "name": "Estimate Min", "fieldKey": "contact.estimate_min"}])
    app.dependency_overrides[get_inspect_crm_use_case] = lambda: InspectCrmUseCase(crm, location_id="loc_1")

    response = client.get("/api/ghl-health")

    assert response.status_code == 200
    assert response.json()["customFieldsCount"] == 1


def test_ghl_range_fields_are_not_cached(client):
    app.dependency_overrides[get_inspect_crm_use_case] = lambda: InspectCrmUseCase(MockCrm())

    response = client.get("/api/ghl-estimate-range-fields")

    assert response.status_code == 200
    assert response.headers["cache-control"] == "no-store"
    assert response.json()["missing"] == ["estimate_min", "estimate_max", "estimate_range"]


def test_ghl_upstream_status_is_mirrored(client):
    app.dependency_overrides[get_inspect_crm_use_case] = lambda: InspectCrmUseCase(UnauthorizedCrm())

    response = client.get("/api/ghl-estimator-fields")

    assert response.status_code == 401
    assert response.json() == {"ok": False, "status": 401, "body": {"message": "Invalid JWT"}}


def test_ghl_unreachable_is_bad_gateway(client):
    app.dependency_overrides[get_inspect_crm_use_case] = lambda: InspectCrmUseCase(DownCrm())

    response = client.get("/api/ghl-health")

    assert response.status_code == 502
    assert response.json()["ok"] is False


def test_missing_crm_configuration(client):
    def not_configured():
        raise CrmConfigurationError("Missing GHL_ACCESS_TOKEN")

    app.dependency_overrides[get_inspect_crm_use_case] = not_configured

    response = client.get("/api/ghl-pipelines")

    assert response.status_code == 500
    assert response.json() == {"ok": False, "error": "Missing GHL_ACCESS_TOKEN"}
