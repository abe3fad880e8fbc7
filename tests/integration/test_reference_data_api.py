"""Test insurance, assistance program, and admin endpoints."""
from fastapi.testclient import TestClient

from portal.api_server import create_app


def test_list_insurance_options(client):
    response = client.get("/api/insurance")

    assert response.status_code == 200
    options = response.json()
    assert [o["name"] for o in options] == ["Blue Cross Blue Shield", "Aetna Health"]
    assert "coverageDetails" in options[0]
    assert "contactInfo" in options[0]


def test_get_insurance_option(client):
    response = client.get("/api/insurance/2")

    assert response.status_code == 200
    assert response.json()["type"] == "Private"


def test_insurance_not_found_and_invalid(client):
    missing = client.get("/api/insurance/10")
    invalid = client.get("/api/insurance/abc")

    assert missing.status_code == 404
    assert missing.json()["message"] == "Insurance option not found"
    assert invalid.status_code == 400
    assert invalid.json()["message"] == "Invalid insurance ID"


def test_list_assistance_programs(client):
    response = client.get("/api/assistance-programs")

    assert response.status_code == 200
    programs = response.json()
    assert len(programs) == 3
    assert programs[0]["name"] == "Medicaid"
    assert "eligibilityCriteria" in programs[0]
    assert "applicationProcess" in programs[0]


def test_get_assistance_program(client):
    response = client.get("/api/assistance-programs/2")

    assert response.status_code == 200
    assert response.json()["name"] == "Medicare"


def test_assistance_program_not_found_and_invalid(client):
    assert client.get("/api/assistance-programs/4").status_code == 404
    invalid = client.get("/api/assistance-programs/x")
    assert invalid.status_code == 400
    assert invalid.json()["message"] == "Invalid program ID"


def test_admin_stats(client, registered_user):
    client.post("/api/appointments", json={
        "patientId": registered_user["id"],
        "doctorId": 1,
        "date": "2030-05-06T09:00:00",
        "type": "virtual",
    })
    second = client.post("/api/appointments", json={
        "patientId": registered_user["id"],
        "doctorId": 2,
        "date": "2030-05-07T10:30:00",
        "type": "in-person",
    }).json()
    client.patch(f"/api/appointments/{second['id']}", json={"status": "completed"})

    response = client.get("/api/admin/stats")

    assert response.status_code == 200
    assert response.json() == {
        "doctors": 4,
        "users": 1,
        "appointments": 2,
        "appointmentsByStatus": {"scheduled": 1, "completed": 1},
    }


class BrokenStorage:
    """Store whose reads fail, to exercise the catch-all handler."""

    def get_doctors(self):
        raise RuntimeError("storage exploded")

    def get_insurance_options(self):
        return []

    def get_assistance_programs(self):
        return []


def test_unexpected_error_returns_generic_500(hasher):
    app = create_app(storage=BrokenStorage(), password_hasher=hasher)
    client = TestClient(app)

    response = client.get("/api/doctors")

    assert response.status_code == 500
    body = response.json()
    assert body["message"] == "Server error"
    assert body["code"] == "INTERNAL_ERROR"
    assert "exploded" not in response.text


def test_unexpected_error_keeps_request_id_and_cors_headers(hasher):
    app = create_app(storage=BrokenStorage(), password_hasher=hasher)
    client = TestClient(app)

    response = client.get("/api/doctors", headers={"Origin": "http://localhost:3000"})

    assert response.status_code == 500
    assert response.headers["X-Request-ID"].startswith("req-")
    assert response.headers["access-control-allow-origin"] == "*"
