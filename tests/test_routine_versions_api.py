"""Tests for the routine version endpoints."""

from datetime import datetime

from fastapi.testclient import TestClient

from protocol_tracker.api.app import create_app
from protocol_tracker.config import Settings
from protocol_tracker.containers import AppContainer
from protocol_tracker.errors import DatastoreError
from tests.conftest import (
    USER_ID,
    InMemoryRoutineSourceRepository,
    supplement_row,
)

BASE = "/api/v1/routine-versions"


def test_health_needs_no_auth(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_create_returns_201_with_envelope(
    client: TestClient,
    auth_headers: dict[str, str],
    source_repository: InMemoryRoutineSourceRepository,
) -> None:
    source_repository.supplements.append(supplement_row())

    response = client.post(BASE, json={"reason": "baseline"}, headers=auth_headers)

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    datetime.fromisoformat(body["timestamp"])
    version = body["data"]
    assert version["version_number"] == 1
    assert version["user_id"] == USER_ID
    assert version["reason"] == "baseline"
    assert version["changes"]["started"][0]["id"] == "supplement-supp-1"
    assert version["changes"]["started"][0]["timings"] == ["am"]
    assert version["changes"]["diet_changed"] is None
    assert version["snapshot"]["diet"]["type"] == "untracked"


def test_create_without_body(
    client: TestClient,
    auth_headers: dict[str, str],
    source_repository: InMemoryRoutineSourceRepository,
) -> None:
    source_repository.supplements.append(supplement_row())

    response = client.post(BASE, headers=auth_headers)

    assert response.status_code == 201
    assert response.json()["data"]["reason"] is None


def test_create_without_changes_returns_400(
    client: TestClient,
    auth_headers: dict[str, str],
    source_repository: InMemoryRoutineSourceRepository,
) -> None:
    source_repository.supplements.append(supplement_row())
    client.post(BASE, json={}, headers=auth_headers)

    response = client.post(BASE, json={}, headers=auth_headers)

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "No changes to save"
    assert body["error_type"] == "NO_CHANGES"
    assert "timestamp" in body


def test_latest_is_null_before_first_save(
    client: TestClient, auth_headers: dict[str, str]
) -> None:
    response = client.get(f"{BASE}/latest", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["data"] is None


def test_list_latest_and_get(
    client: TestClient,
    auth_headers: dict[str, str],
    source_repository: InMemoryRoutineSourceRepository,
) -> None:
    source_repository.supplements.append(supplement_row("s1"))
    first = client.post(BASE, headers=auth_headers).json()["data"]
    source_repository.supplements.append(supplement_row("s2"))
    client.post(BASE, headers=auth_headers)

    listed = client.get(BASE, headers=auth_headers).json()["data"]
    paged = client.get(
        BASE, params={"limit": 1, "offset": 1}, headers=auth_headers
    ).json()["data"]
    latest = client.get(f"{BASE}/latest", headers=auth_headers).json()["data"]
    fetched = client.get(f"{BASE}/{first['id']}", headers=auth_headers).json()["data"]

    assert [version["version_number"] for version in listed] == [2, 1]
    assert [version["version_number"] for version in paged] == [1]
    assert latest["version_number"] == 2
    assert fetched == first


def test_get_other_users_version_returns_404(
    client: TestClient,
    auth_headers: dict[str, str],
    source_repository: InMemoryRoutineSourceRepository,
) -> None:
    source_repository.supplements.append(supplement_row())
    version_id = client.post(BASE, headers=auth_headers).json()["data"]["id"]

    response = client.get(
        f"{BASE}/{version_id}", headers={"Authorization": "Bearer other-token"}
    )

    assert response.status_code == 404
    assert response.json()["error_type"] == "NOT_FOUND"


def test_get_malformed_id_returns_404(
    client: TestClient, auth_headers: dict[str, str]
) -> None:
    response = client.get(f"{BASE}/not-a-uuid", headers=auth_headers)

    assert response.status_code == 404


def test_current_snapshot_previews_without_saving(
    client: TestClient,
    auth_headers: dict[str, str],
    source_repository: InMemoryRoutineSourceRepository,
) -> None:
    source_repository.supplements.append(supplement_row())

    snapshot = client.get(f"{BASE}/current-snapshot", headers=auth_headers).json()
    latest = client.get(f"{BASE}/latest", headers=auth_headers).json()

    assert snapshot["data"]["items"][0]["source"] == "supplement"
    assert snapshot["data"]["diet"]["macros"] == {
        "protein_g": None,
        "carbs_g": None,
        "fat_g": None,
    }
    assert latest["data"] is None


def test_invalid_limit_returns_validation_error(
    client: TestClient, auth_headers: dict[str, str]
) -> None:
    response = client.get(BASE, params={"limit": 0}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["error_type"] == "VALIDATION_ERROR"


def test_missing_token_returns_401(client: TestClient) -> None:
    response = client.get(f"{BASE}/latest")

    assert response.status_code == 401
    assert response.json()["error_type"] == "AUTHENTICATION_REQUIRED"


def test_unknown_token_returns_401(client: TestClient) -> None:
    response = client.get(
        f"{BASE}/latest", headers={"Authorization": "Bearer expired"}
    )

    assert response.status_code == 401
    assert response.json()["error_type"] == "INVALID_TOKEN"


def test_dev_bypass_ignored_outside_development(client: TestClient) -> None:
    response = client.get(f"{BASE}/latest", headers={"X-Dev-Bypass": "true"})

    assert response.status_code == 401


def test_dev_bypass_in_development(container: AppContainer) -> None:
    container.settings = Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        environment="development",
    )
    client = TestClient(create_app(container))

    response = client.get(f"{BASE}/latest", headers={"X-Dev-Bypass": "true"})

    assert response.status_code == 200
    assert response.json()["data"] is None


def test_datastore_failure_returns_500(
    container: AppContainer, auth_headers: dict[str, str]
) -> None:
    class BrokenSources(InMemoryRoutineSourceRepository):
        def list_routines(self, user_id: str) -> list[dict[str, object]]:
            raise DatastoreError("routines unavailable")

    container.routine_version_service.snapshot_builder.repository = BrokenSources()
    client = TestClient(create_app(container))

    response = client.post(BASE, headers=auth_headers)

    assert response.status_code == 500
    assert response.json()["error_type"] == "DATASTORE_ERROR"


def test_unexpected_error_returns_internal_error(
    container: AppContainer, auth_headers: dict[str, str]
) -> None:
    class ExplodingSources(InMemoryRoutineSourceRepository):
        def get_diet(self, user_id: str) -> dict[str, object] | None:
            raise RuntimeError("boom")

    container.routine_version_service.snapshot_builder.repository = ExplodingSources()
    client = TestClient(create_app(container), raise_server_exceptions=False)

    response = client.get(f"{BASE}/current-snapshot", headers=auth_headers)

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "error": "Internal server error",
        "error_type": "INTERNAL_ERROR",
        "timestamp": response.json()["timestamp"],
    }
