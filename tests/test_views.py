from unittest.mock import AsyncMock, patch

import pytest
from rest_framework.test import APIClient

from pulse.interpreter import QueryInterpreter
from pulse.services import MetricsService


@pytest.fixture
def client():
    return APIClient()


@pytest.fixture
def service(store):
    service = MetricsService(store)
    with patch("pulse.views.MetricsService", return_value=service):
        yield service


def test_health_check(client):
    response = client.get("/api/health/")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_velocity_metrics(client, service):
    response = client.get("/api/metrics/velocity/", {"team": "Frontend Team"})
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["averageVelocity"] == 20.0


def test_velocity_with_sprint(client, service):
    response = client.get("/api/metrics/velocity/", {"team": "all", "sprintId": 12})
    assert response.json()["data"]["totalStoryPoints"] == 5


def test_missing_team_is_a_validation_error(client, service):
    response = client.get("/api/metrics/bug-rate/")
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Validation error"
    assert "team" in body["details"]


def test_days_out_of_range(client, service):
    response = client.get("/api/metrics/mean-resolution/", {"team": "all", "days": 400})
    assert response.status_code == 400
    assert "days" in response.json()["details"]


def test_unknown_team_is_404(client, service):
    response = client.get("/api/metrics/bug-rate/", {"team": "Mobile Team"})
    assert response.status_code == 404
    assert response.json() == {"success": False, "error": 'Team "Mobile Team" not found'}


def test_bug_rate_days(client, service):
    response = client.get("/api/metrics/bug-rate/", {"team": "all", "days": 25})
    data = response.json()["data"]
    assert data["period"] == "25 days"
    assert data["bugRate"] == 33.33


def test_resolution_time(client, service):
    response = client.get("/api/metrics/mean-resolution/", {"team": "all", "days": 90})
    assert response.json()["data"]["maxResolutionTime"] == 6


def test_team_performance(client, service):
    response = client.get("/api/metrics/performance/")
    assert response.status_code == 200
    assert len(response.json()["data"]) == 3


def test_all_metrics(client, service):
    response = client.get("/api/metrics/all/", {"team": "Backend Team"})
    data = response.json()["data"]
    assert set(data) == {"velocity", "bugRate", "resolutionTime", "generatedAt"}


def test_service_failure_is_500(client, service):
    service.get_team_performance = AsyncMock(side_effect=RuntimeError("db down"))
    response = client.get("/api/metrics/performance/")
    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Failed to fetch team performance metrics"}


def test_text_query(client, store):
    with patch("pulse.interpreter.get_interpreter", return_value=QueryInterpreter(store)):
        response = client.post(
            "/api/metrics/text-query/", {"query": "Show velocity for Frontend Team"}, format="json",
        )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["query"] == "Show velocity for Frontend Team"
    assert data["result"]["averageVelocity"] == 20.0
    assert data["interpretation"].startswith("Average velocity for Frontend Team")


def test_unclassified_text_query_still_succeeds(client, store):
    with patch("pulse.interpreter.get_interpreter", return_value=QueryInterpreter(store)):
        response = client.post("/api/metrics/text-query/", {"query": "xyz"}, format="json")
    assert response.status_code == 200
    assert response.json()["data"]["result"] is None


@pytest.mark.parametrize("payload", [{}, {"query": ""}, {"query": "x" * 501}])
def test_text_query_validation(client, payload):
    response = client.post("/api/metrics/text-query/", payload, format="json")
    assert response.status_code == 400
    assert response.json()["error"] == "Validation error"


def test_text_query_failure_is_500(client):
    with patch("pulse.views.process_text_query", AsyncMock(side_effect=RuntimeError("boom"))):
        response = client.post("/api/metrics/text-query/", {"query": "velocity"}, format="json")
    assert response.status_code == 500
    assert response.json()["error"] == "Failed to process text query"
