"""Unit tests for enrollment and health routes."""

from datetime import time

import pytest
from fastapi.testclient import TestClient

from courseportal.catalog_store import CatalogStore

ANA = {"X-User-Id": "ana"}


@pytest.mark.unit
class TestEnroll:
    """Tests for POST /enrollments."""

    def test_enroll(self, client: TestClient) -> None:
        response = client.post("/api/v1/enrollments", json={"course_id": 1}, headers=ANA)

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["state"] == "pending"
        assert data["user_id"] == "ana"
        assert data["course"]["code"] == "BD101"
        assert data["message"] == "You have enrolled in 'Base de Datos'. Your enrollment is pending."

    def test_anonymous(self, client: TestClient) -> None:
        response = client.post("/api/v1/enrollments", json={"course_id": 1})

        assert response.status_code == 401
        assert response.json()["code"] == "not_authenticated"
        assert response.json()["error"] == "You must sign in to enroll in a course."

    def test_blank_user_header_is_anonymous(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/enrollments", json={"course_id": 1}, headers={"X-User-Id": "  "}
        )

        assert response.status_code == 401

    def test_unknown_course(self, client: TestClient) -> None:
        response = client.post("/api/v1/enrollments", json={"course_id": 77}, headers=ANA)

        assert response.status_code == 404
        assert response.json()["code"] == "course_unavailable"

    def test_already_enrolled(self, client: TestClient) -> None:
        client.post("/api/v1/enrollments", json={"course_id": 1}, headers=ANA)

        response = client.post("/api/v1/enrollments", json={"course_id": 1}, headers=ANA)

        assert response.status_code == 409
        assert response.json()["code"] == "already_enrolled"

    def test_no_capacity(self, client: TestClient, seeded_store: CatalogStore) -> None:
        seeded_store.update_course(3, capacity=1)
        client.post("/api/v1/enrollments", json={"course_id": 3}, headers={"X-User-Id": "ben"})

        response = client.post("/api/v1/enrollments", json={"course_id": 3}, headers=ANA)

        assert response.status_code == 409
        assert response.json()["code"] == "no_capacity"

    def test_schedule_conflict(self, client: TestClient, seeded_store: CatalogStore) -> None:
        clash = seeded_store.create_course(
            code="EST1",
            name="Estadística",
            credits=4,
            capacity=10,
            start_time=time(9, 0),
            end_time=time(11, 0),
        )
        client.post("/api/v1/enrollments", json={"course_id": 1}, headers=ANA)

        response = client.post("/api/v1/enrollments", json={"course_id": clash.id}, headers=ANA)

        assert response.status_code == 409
        assert response.json()["code"] == "schedule_conflict"
        assert "'Base de Datos' (08:00 - 10:00)" in response.json()["error"]

    def test_missing_body(self, client: TestClient) -> None:
        response = client.post("/api/v1/enrollments", json={}, headers=ANA)

        assert response.status_code == 422


@pytest.mark.unit
class TestMyEnrollments:
    """Tests for GET /enrollments/mine."""

    def test_lists_own_enrollments(self, client: TestClient) -> None:
        client.post("/api/v1/enrollments", json={"course_id": 1}, headers=ANA)
        client.post("/api/v1/enrollments", json={"course_id": 3}, headers=ANA)
        client.post("/api/v1/enrollments", json={"course_id": 2}, headers={"X-User-Id": "ben"})

        response = client.get("/api/v1/enrollments/mine", headers=ANA)

        assert response.status_code == 200
        codes = sorted(e["course"]["code"] for e in response.json()["data"])
        assert codes == ["BD101", "PROG101"]

    def test_anonymous(self, client: TestClient) -> None:
        response = client.get("/api/v1/enrollments/mine")

        assert response.status_code == 401


@pytest.mark.unit
class TestHealth:
    """Tests for GET /health."""

    def test_healthy(self, client: TestClient) -> None:
        response = client.get("/api/v1/health")

        assert response.status_code == 200
        assert response.json()["data"] == {"status": "ok", "database": True, "cache": True}

    def test_cache_down(self, client: TestClient, fake_cache) -> None:
        fake_cache.available = False

        data = client.get("/api/v1/health").json()["data"]

        assert data["status"] == "ok"
        assert data["cache"] is False
