import pytest
from fakes import FakeSurveyDataSource
from fastapi.testclient import TestClient

from surveyapp.apps.api.app import create_app
from surveyapp.apps.api.container import Container
from surveyapp.core.db import Database
from surveyapp.core.settings import get_settings

SUBMISSION = {
    "firstName": "Sipho",
    "lastName": "Dlamini",
    "email": "sipho@example.com",
    "contactNumber": "0821234567",
    "dateOfBirth": "1995-03-10",
    "foods": ["Pizza", "Pap and Wors"],
    "ratingMovies": 4,
    "ratingRadio": 3,
    "ratingEatOut": 5,
    "ratingTV": 2,
}


def _container(tmp_path, **kwargs) -> Container:
    settings = get_settings()
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'api.db'}")
    return Container.build(settings, database=database, **kwargs)


@pytest.fixture
def client(tmp_path):
    app = create_app(get_settings(), _container(tmp_path))
    with TestClient(app) as test_client:
        yield test_client


def test_results_are_empty_before_any_submission(client):
    response = client.get("/api/results")

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "data": {
            "totalCount": 0,
            "age": {"avg": None, "min": None, "max": None},
            "foodPercentages": {"pizza": None, "pasta": None, "papAndWors": None},
            "avgRatings": {"movies": 0.0, "radio": 0.0, "eatOut": 0.0, "tv": 0.0},
        },
    }


def test_submission_is_reflected_in_results(client):
    assert client.get("/api/results").json()["data"]["totalCount"] == 0

    created = client.post("/api/survey", json=SUBMISSION)
    assert created.status_code == 201
    assert created.json()["success"] is True
    assert isinstance(created.json()["data"]["id"], int)

    data = client.get("/api/results", headers={"X-Request-ID": "req-42"}).json()["data"]
    assert data["totalCount"] == 1
    assert data["foodPercentages"] == {"pizza": 100.0, "pasta": 0.0, "papAndWors": 100.0}
    assert data["avgRatings"] == {"movies": 4.0, "radio": 3.0, "eatOut": 5.0, "tv": 2.0}


def test_invalid_submission_returns_422(client):
    response = client.post("/api/survey", json={**SUBMISSION, "ratingTV": 9})

    assert response.status_code == 422


def test_health_without_distributed_cache(client):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["checks"]["database"] == {"ok": True}
    assert body["checks"]["cache"] == {"distributed": False, "local": True, "overall": True}
    assert body["cache_stats"]["distributed"]["configured"] is False


def test_metrics_endpoint_exposes_cache_counters(client):
    client.get("/api/results")

    response = client.get("/metrics")

    assert response.status_code == 200
    assert "survey_cache_requests_total" in response.text
    assert "survey_results_duration_seconds" in response.text


def test_failing_statistic_returns_generic_500(tmp_path):
    data_source = FakeSurveyDataSource()
    data_source.fail_with = RuntimeError("connection reset")
    app = create_app(get_settings(), _container(tmp_path, data_source=data_source))

    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/api/results")

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Internal server error"}
    assert "connection reset" not in response.text
