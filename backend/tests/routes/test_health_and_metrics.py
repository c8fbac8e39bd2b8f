from fastapi import status
from fastapi.testclient import TestClient


def test_health_is_public(client: TestClient):
    response = client.get("/health")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["status"] == "healthy"
    assert data["service"] == "eventhub-booking-api"
    assert data["timestamp"].endswith("Z")


def test_metrics_expose_booking_counters(client: TestClient, auth_headers):
    client.get("/booking", headers=auth_headers)

    response = client.get("/metrics")

    assert response.status_code == status.HTTP_200_OK
    assert response.headers["content-type"].startswith("text/plain")
    body = response.text
    assert "eventhub_service_operations_total" in body
    assert 'eventhub_booking_rejections_total{operation="get_booking",reason="BOOKING_NOT_FOUND"}' in body


def test_unknown_path_uses_problem_envelope(client: TestClient):
    response = client.get("/does-not-exist")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    data = response.json()
    assert data["status"] == 404
    assert data["title"] == "Not Found"
    assert data["instance"] == "/does-not-exist"
