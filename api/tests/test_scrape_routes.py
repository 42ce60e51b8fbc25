"""
Endpoint tests for the scrape and register routes.

The module-level ScrapeService instances are patched so no upstream
request is made.
"""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from exceptions import CarrierNotFoundError, UpstreamUnavailableError
from main import app
from models.carrier_profile import CarrierProfile
from models.insurance_policy import InsuranceLookup, InsurancePolicy
from models.register_entry import RegisterEntry, RegisterResponse
from models.safety_profile import BasicScore, SafetyProfile

client = TestClient(app)

# Test API key for authenticated requests
headers = {"X-API-Key": "test-api-key"}


@pytest.fixture
def scrape_service():
    with patch("routes.scrape_routes.scrape_service") as service:
        yield service


@pytest.fixture
def register_service():
    with patch("routes.register_routes.scrape_service") as service:
        yield service


def test_health_check_needs_no_key():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "message": "FMCSA Scraper Backend is running"}


def test_missing_api_key_is_rejected(scrape_service):
    response = client.get("/api/scrape/carrier/123456")
    assert response.status_code == 401
    scrape_service.scrape_carrier.assert_not_called()


def test_scrape_carrier_success(scrape_service):
    scrape_service.scrape_carrier.return_value = CarrierProfile(
        mc_number="123456",
        dot_number="3487141",
        legal_name="ABC TRUCKING LLC",
        cargo_carried=["General Freight"]
    )

    response = client.get("/api/scrape/carrier/123456?useProxy=true", headers=headers)

    assert response.status_code == 200
    data = response.json()
    assert data["mcNumber"] == "123456"
    assert data["dotNumber"] == "3487141"
    assert data["legalName"] == "ABC TRUCKING LLC"
    assert data["cargoCarried"] == ["General Freight"]
    assert data["email"] == ""
    scrape_service.scrape_carrier.assert_called_once_with("123456")


def test_scrape_carrier_not_found(scrape_service):
    scrape_service.scrape_carrier.side_effect = CarrierNotFoundError("999")

    response = client.get("/api/scrape/carrier/999", headers=headers)

    assert response.status_code == 404
    assert response.json() == {"error": "Carrier not found"}


def test_scrape_carrier_upstream_failure(scrape_service):
    scrape_service.scrape_carrier.side_effect = UpstreamUnavailableError("Timed out fetching query.asp", "read timeout")

    response = client.get("/api/scrape/carrier/123456", headers=headers)

    assert response.status_code == 500
    assert response.json() == {
        "error": "Failed to scrape carrier data",
        "details": "Timed out fetching query.asp: read timeout"
    }


def test_scrape_carrier_unexpected_failure(scrape_service):
    scrape_service.scrape_carrier.side_effect = RuntimeError("parser exploded")

    response = client.get("/api/scrape/carrier/123456", headers=headers)

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to scrape carrier data", "details": "parser exploded"}


def test_scrape_safety_success(scrape_service):
    scrape_service.scrape_safety.return_value = SafetyProfile(
        rating="Satisfactory",
        rating_date="06/12/2019",
        basic_scores=[BasicScore(category="Unsafe Driving", measure="45.2")]
    )

    response = client.get("/api/scrape/safety/3487141", headers=headers)

    assert response.status_code == 200
    data = response.json()
    assert data["rating"] == "Satisfactory"
    assert data["ratingDate"] == "06/12/2019"
    assert data["basicScores"] == [{"category": "Unsafe Driving", "measure": "45.2"}]
    assert data["oosRates"] == []


def test_scrape_safety_failure(scrape_service):
    scrape_service.scrape_safety.side_effect = UpstreamUnavailableError("Failed to fetch", "503 Server Error")

    response = client.get("/api/scrape/safety/3487141", headers=headers)

    assert response.status_code == 500
    assert response.json()["error"] == "Failed to scrape safety data"


def test_scrape_insurance_success(scrape_service):
    raw = {"data": [{"name_company": "Acme", "ins_type_code": "1"}]}
    scrape_service.scrape_insurance.return_value = InsuranceLookup(
        policies=[InsurancePolicy(dot="3487141", carrier="ACME", policy_type="BI&PD")],
        raw=raw
    )

    response = client.get("/api/scrape/insurance/3487141", headers=headers)

    assert response.status_code == 200
    data = response.json()
    assert data["raw"] == raw
    assert data["policies"][0]["carrier"] == "ACME"
    assert data["policies"][0]["type"] == "BI&PD"
    assert data["policies"][0]["policyNumber"] == "N/A"


def test_scrape_insurance_failure(scrape_service):
    scrape_service.scrape_insurance.side_effect = UpstreamUnavailableError("Invalid JSON", "Expecting value")

    response = client.get("/api/scrape/insurance/3487141", headers=headers)

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to scrape insurance data", "details": "Invalid JSON: Expecting value"}


def test_register_success(register_service):
    register_service.scrape_register.return_value = RegisterResponse(
        success=True,
        count=1,
        last_updated="2026-01-05T12:00:00+00:00",
        entries=[RegisterEntry(number="MC-1", title="A", decided="01/01/2026", category="REVOCATION")]
    )

    response = client.get("/api/fmcsa-register", headers=headers)

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "count": 1,
        "lastUpdated": "2026-01-05T12:00:00+00:00",
        "entries": [{"number": "MC-1", "title": "A", "decided": "01/01/2026", "category": "REVOCATION"}]
    }


def test_register_empty_is_success(register_service):
    register_service.scrape_register.return_value = RegisterResponse(
        success=True, count=0, last_updated="2026-01-05T12:00:00+00:00", entries=[]
    )

    response = client.get("/api/fmcsa-register", headers=headers)

    assert response.status_code == 200
    assert response.json()["success"] is True
    assert response.json()["entries"] == []


def test_register_failure_shape(register_service):
    register_service.scrape_register.side_effect = UpstreamUnavailableError("Timed out", "read timeout")

    response = client.get("/api/fmcsa-register", headers=headers)

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "error": "Failed to scrape FMCSA register data",
        "details": "Timed out: read timeout",
        "entries": []
    }
