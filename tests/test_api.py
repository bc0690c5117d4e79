"""
HTTP tests for the FastAPI application.

Covers:
- Lead submission (201), full validation error list (400), store failure (500).
- Admin lead listing, status updates and 404 for unknown leads.
- Fire-and-forget activity tracking that never fails the request.
- Guest session continuity and user identity after login.
"""

from __future__ import annotations

import uuid

import pytest
from fastapi.testclient import TestClient

from api.main import app


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def _submit(client: TestClient, payload) -> dict:
    response = client.post("/api/v1/leads", json=payload)
    assert response.status_code == 201, response.text
    return response.json()["lead"]


class TestLeads:
    def test_guest_submission_records_inquiry(self, client, lead_payload, fake_db) -> None:
        lead = _submit(client, lead_payload)

        assert lead["status"] == "new"
        assert lead["user_id"] is None
        assert lead["budget"] == "₹25,000 - ₹50,000"

        [activity] = fake_db.rows("activities")
        assert activity["activity_type"] == "service_inquiry"
        assert activity["service_id"] == "android-native"
        assert activity["metadata"] == {"lead_id": lead["lead_id"]}
        assert activity["session_id"]
        assert activity["user_id"] is None

    def test_invalid_submission_lists_every_field(self, client, fake_db) -> None:
        response = client.post("/api/v1/leads", json={"name": "A", "email": "bad"})

        assert response.status_code == 400
        body = response.json()
        assert {e["field"] for e in body["errors"]} == {
            "name", "email", "phone", "project_brief", "budget", "service_id", "service_name",
        }
        assert fake_db.rows("leads") == []

    def test_numeric_fields_still_report_every_invalid_field(self, client, fake_db) -> None:
        response = client.post("/api/v1/leads", json={"phone": 9876543210, "name": "A"})

        assert response.status_code == 400
        assert [e["field"] for e in response.json()["errors"]] == [
            "name", "email", "project_brief", "budget", "service_id", "service_name",
        ]
        assert fake_db.rows("leads") == []

    def test_numeric_phone_is_accepted(self, client, lead_payload) -> None:
        lead_payload["phone"] = 9876543210

        lead = _submit(client, lead_payload)

        assert lead["phone"] == "9876543210"

    def test_store_failure_is_generic_500(self, client, lead_payload, fake_db) -> None:
        fake_db.failing_tables.add("leads")

        response = client.post("/api/v1/leads", json=lead_payload)

        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to create lead"

    def test_inquiry_tracking_failure_does_not_affect_submission(self, client, lead_payload, fake_db) -> None:
        fake_db.failing_tables.add("activities")

        lead = _submit(client, lead_payload)

        assert lead["status"] == "new"
        assert len(fake_db.rows("leads")) == 1


class TestAdmin:
    def test_status_workflow(self, client, lead_payload) -> None:
        lead = _submit(client, lead_payload)

        response = client.patch(f"/api/v1/admin/leads/{lead['lead_id']}", json={"status": "contacted"})
        assert response.status_code == 200
        assert response.json()["status"] == "contacted"

        contacted = client.get("/api/v1/admin/leads", params={"status": "contacted"}).json()
        assert [l["lead_id"] for l in contacted] == [lead["lead_id"]]
        assert client.get("/api/v1/admin/leads", params={"status": "new"}).json() == []
        assert len(client.get("/api/v1/admin/leads", params={"status": "all"}).json()) == 1

    def test_unknown_lead_is_404(self, client) -> None:
        response = client.patch(f"/api/v1/admin/leads/{uuid.uuid4()}", json={"status": "contacted"})
        assert response.status_code == 404

    def test_invalid_status_is_rejected(self, client, lead_payload) -> None:
        lead = _submit(client, lead_payload)

        assert client.patch(f"/api/v1/admin/leads/{lead['lead_id']}", json={"status": "archived"}).status_code == 422
        assert client.get("/api/v1/admin/leads", params={"status": "archived"}).status_code == 400

    def test_analytics(self, client, lead_payload) -> None:
        client.get("/api/v1/services/android-native")
        _submit(client, lead_payload)

        body = client.get("/api/v1/admin/analytics").json()

        assert body["lead_counts"]["total"] == 1
        assert body["lead_counts"]["by_status"]["new"] == 1
        assert body["lead_counts"]["by_status"]["in-progress"] == 0
        assert body["service_metrics"]["android-native"] == {
            "service_id": "android-native",
            "service_name": "Android Native App",
            "views": 1,
            "leads": 1,
        }
        assert body["activity_summary"]["by_type"]["service_inquiry"] == 1
        assert body["activity_summary"]["total_activities"] == 2

    def test_csv_export(self, client, lead_payload) -> None:
        lead = _submit(client, lead_payload)

        response = client.get("/api/v1/admin/leads/export", params={"status": "new"})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert lead["lead_id"] in response.text
        assert client.get("/api/v1/admin/leads/export", params={"status": "archived"}).status_code == 400

    def test_analytics_tolerates_unknown_stored_activity_types(self, client, fake_db) -> None:
        fake_db.tables["activities"] = [{
            "activity_id": str(uuid.uuid4()),
            "activity_type": "legacy_click",
            "session_id": "old-session",
            "metadata": {},
            "created_at_utc": "2024-01-01T00:00:00+00:00",
        }]

        response = client.get("/api/v1/admin/analytics")

        assert response.status_code == 200
        assert response.json()["activity_summary"]["total_activities"] == 1
        assert response.json()["activity_summary"]["recent_activities"] == []

    def test_activities_listing(self, client) -> None:
        client.post("/api/v1/activities", json={"activity_type": "page_view"})

        activities = client.get("/api/v1/admin/activities").json()

        assert len(activities) == 1
        assert activities[0]["activity_type"] == "page_view"


class TestTracking:
    def test_activity_is_accepted_and_recorded(self, client, fake_db) -> None:
        response = client.post(
            "/api/v1/activities",
            json={"activity_type": "category_browse", "category_id": "devops", "metadata": {"source": "home"}},
        )

        assert response.status_code == 202
        [row] = fake_db.rows("activities")
        assert row["category_id"] == "devops"
        assert row["metadata"] == {"source": "home"}

    def test_unknown_activity_type_is_422(self, client, fake_db) -> None:
        response = client.post("/api/v1/activities", json={"activity_type": "checkout"})

        assert response.status_code == 422
        assert fake_db.rows("activities") == []

    def test_tracking_failure_never_fails_the_request(self, client, fake_db) -> None:
        fake_db.failing_tables.add("activities")

        assert client.post("/api/v1/activities", json={"activity_type": "page_view"}).status_code == 202
        response = client.get("/api/v1/services/android-native")
        assert response.status_code == 200
        assert response.json()["title"] == "Android Native App"

    def test_guest_keeps_session_across_requests(self, client, fake_db) -> None:
        client.get("/api/v1/categories/mobile-app-dev")
        client.get("/api/v1/search", params={"query": "flutter"})

        first, second = fake_db.rows("activities")
        assert first["session_id"] == second["session_id"]
        assert second["metadata"] == {"query": "flutter"}


class TestAuth:
    def test_login_switches_to_user_identity_and_logout_restores_guest(self, client, fake_db) -> None:
        client.post("/api/v1/activities", json={"activity_type": "page_view"})
        guest_session = fake_db.rows("activities")[0]["session_id"]

        registered = client.post("/api/v1/auth/register", json={"email": "dev@example.com", "first_name": "Dev"})
        assert registered.status_code == 200
        user_id = registered.json()["user_id"]
        assert client.get("/api/v1/auth/user").json()["user_id"] == user_id

        client.post("/api/v1/activities", json={"activity_type": "page_view"})
        assert fake_db.rows("activities")[1]["user_id"] == user_id
        assert fake_db.rows("activities")[1]["session_id"] is None

        client.post("/api/v1/auth/logout")
        assert client.get("/api/v1/auth/user").json() is None
        client.post("/api/v1/activities", json={"activity_type": "page_view"})
        assert fake_db.rows("activities")[2]["session_id"] == guest_session

        login = client.post("/api/v1/auth/login", json={"email": "DEV@example.com"})
        assert login.status_code == 200
        assert login.json()["user_id"] == user_id

    def test_duplicate_registration_and_unknown_login(self, client) -> None:
        client.post("/api/v1/auth/register", json={"email": "dev@example.com", "first_name": "Dev"})

        duplicate = client.post("/api/v1/auth/register", json={"email": "dev@example.com", "first_name": "Dev"})
        assert duplicate.status_code == 400
        assert client.post("/api/v1/auth/login", json={"email": "nobody@example.com"}).status_code == 404

    def test_user_lead_is_attributed(self, client, lead_payload) -> None:
        user_id = client.post(
            "/api/v1/auth/register", json={"email": "dev@example.com", "first_name": "Dev"}
        ).json()["user_id"]

        lead = _submit(client, lead_payload)

        assert lead["user_id"] == user_id


class TestCatalog:
    def test_browse(self, client) -> None:
        assert len(client.get("/api/v1/categories").json()) == 6
        assert client.get("/api/v1/categories/unknown").status_code == 404
        assert len(client.get("/api/v1/services", params={"category": "mobile-app-dev"}).json()) == 6
        assert client.get("/api/v1/services", params={"category": "unknown"}).status_code == 404
        assert client.get("/api/v1/services/missing").status_code == 404

    def test_blank_search_is_not_tracked(self, client, fake_db) -> None:
        body = client.get("/api/v1/search", params={"query": " "}).json()

        assert body == {"categories": [], "services": []}
        assert fake_db.rows("activities") == []
