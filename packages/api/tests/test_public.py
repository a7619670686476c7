# This project was developed with assistance from AI tools.
"""Tests for public API endpoints (campaign landing + self-registration)."""


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert "Bank Verification Platform" in response.json()["message"]


def test_health_reports_seeded_store(client):
    response = client.get("/health/")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["seeded"] is True


def test_campaign_landing_page(client, seeded_store):
    response = client.get("/api/public/campaigns/1247856390")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Facebook Community Group"
    assert data["branding"]["bank_name"] == "SpringFin Credit Union"
    assert "clicks" not in data
    assert seeded_store.campaigns["camp_001"].clicks == 157


def test_paused_campaign_not_found(client):
    response = client.get("/api/public/campaigns/5672891043")
    assert response.status_code == 404
    body = response.json()
    assert body["title"] == "Not Found"
    assert body["detail"] == "Campaign not found"
    assert body["instance"] == "/api/public/campaigns/5672891043"


def test_register(client, seeded_store, notifier):
    response = client.post(
        "/api/public/campaigns/9384756210/register",
        json={"first_name": "Levan", "last_name": "Gelashvili", "email": "Levan@Example.com"},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["success"] is True
    assert data["email"] == "levan@example.com"
    assert data["redirect"] == "/verify/public/9384756210/email-sent"

    created = [v for v in seeded_store.verifications.values() if v.campaign_id == "camp_002"]
    assert len(created) == 1
    notifier.send_verification_link.assert_called_once_with(created[0])


def test_register_paused_campaign_conflict(client):
    response = client.post(
        "/api/public/campaigns/5672891043/register",
        json={"first_name": "Levan", "last_name": "G", "email": "levan@example.com"},
    )
    assert response.status_code == 409
    assert response.json()["status"] == 409


def test_register_unknown_campaign(client):
    response = client.post(
        "/api/public/campaigns/0000000000/register",
        json={"first_name": "Levan", "last_name": "G", "email": "levan@example.com"},
    )
    assert response.status_code == 404


def test_register_validation_error(client):
    response = client.post(
        "/api/public/campaigns/1247856390/register",
        json={"first_name": "", "last_name": "G", "email": "not-an-email"},
    )
    assert response.status_code == 422
    assert response.json()["title"] == "Unprocessable Entity"
