from __future__ import annotations

# ruff: noqa: S101
from datetime import timedelta
from typing import Any

import pytest
from django.core.cache import caches
from django.test import override_settings
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework.throttling import ScopedRateThrottle

PREDICT_URL = "/api/v1/ndvi/predict/"
FORECAST_URL = "/api/v1/ndvi/forecast/"
ANALYSIS_URL = "/api/v1/ndvi/analysis/"


@pytest.fixture(autouse=True)
def _clear_cache() -> None:
    caches["default"].clear()


@pytest.fixture
def client() -> APIClient:
    return APIClient()


def _predict_body(days_ahead: int, **extra: Any) -> dict[str, Any]:
    target = timezone.localdate() + timedelta(days=days_ahead)
    return {
        "lat": -1.29,
        "lon": 36.82,
        "target_date": target.isoformat(),
        **extra,
    }


def test_predict_returns_result_and_recommendations(
    client: APIClient,
) -> None:
    resp = client.post(
        PREDICT_URL,
        _predict_body(14, crop_type="Wheat", current_ndvi=0.5),
        format="json",
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == 0
    assert body["message"] == "NDVI prediction"
    assert body["errors"] is None

    result = body["data"]["result"]
    prediction = result["prediction"]
    assert prediction["days_ahead"] == 14
    assert (
        0
        <= prediction["lower_bound"]
        <= prediction["value"]
        <= prediction["upper_bound"]
        <= 1
    )
    assert result["confidence"]["level"] in {
        "very_low",
        "low",
        "medium",
        "high",
    }
    assert set(result["confidence"]["factors"]) == {
        "seasonal_stability",
        "trend_reliability",
        "data_quality",
        "temporal_reliability",
        "variability_score",
    }
    assert result["years_analyzed"] == 3
    assert result["data_points"] == 36

    recommendations = body["data"]["recommendations"]
    assert recommendations["crop_specific"]["crop_type"] == "wheat"
    assert "summary" in recommendations


def test_predict_can_skip_recommendations(client: APIClient) -> None:
    resp = client.post(
        PREDICT_URL,
        _predict_body(5, include_recommendations=False),
        format="json",
    )

    assert resp.status_code == 200
    assert resp.json()["data"]["recommendations"] is None


def test_predict_is_stable_across_requests(client: APIClient) -> None:
    body = _predict_body(30, include_recommendations=False)

    first = client.post(PREDICT_URL, body, format="json").json()
    second = client.post(PREDICT_URL, body, format="json").json()

    assert (
        first["data"]["result"]["prediction"]
        == second["data"]["result"]["prediction"]
    )


@pytest.mark.parametrize("days_ahead", [0, -5, 91])
def test_predict_rejects_dates_outside_window(
    client: APIClient, days_ahead: int
) -> None:
    resp = client.post(PREDICT_URL, _predict_body(days_ahead), format="json")

    assert resp.status_code == 400
    body = resp.json()
    assert body["status"] == 1
    assert body["data"] is None
    assert "target_date" in body["errors"]


def test_predict_rejects_invalid_coordinates(client: APIClient) -> None:
    resp = client.post(
        PREDICT_URL, _predict_body(10, lat=95.0), format="json"
    )

    assert resp.status_code == 400
    assert resp.json()["message"] == "Invalid request"
    assert "lat" in resp.json()["errors"]


def test_predict_requires_target_date(client: APIClient) -> None:
    resp = client.post(
        PREDICT_URL, {"lat": 10.0, "lon": 10.0}, format="json"
    )

    assert resp.status_code == 400
    assert "target_date" in resp.json()["errors"]


def test_forecast_defaults(client: APIClient) -> None:
    resp = client.get(FORECAST_URL, {"lat": "48.85", "lon": "2.35"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "NDVI forecast"
    data = body["data"]
    today = timezone.localdate()
    assert data["days"] == 30
    assert data["interval"] == 7
    assert data["start_date"] == today.isoformat()
    assert data["end_date"] == (today + timedelta(days=28)).isoformat()
    assert [p["target_date"] for p in data["predictions"]] == [
        (today + timedelta(days=step)).isoformat() for step in (7, 14, 21, 28)
    ]
    assert all(p["error"] is None for p in data["predictions"])
    assert data["summary"]["total_predictions"] == 4
    assert data["summary"]["valid_predictions"] == 4
    assert isinstance(data["summary"]["average_confidence"], int)


def test_forecast_rejects_interval_longer_than_period(
    client: APIClient,
) -> None:
    resp = client.get(
        FORECAST_URL,
        {"lat": "10", "lon": "10", "days": "10", "interval": "14"},
    )

    assert resp.status_code == 400
    assert "interval" in resp.json()["errors"]


def test_forecast_rejects_period_beyond_horizon(client: APIClient) -> None:
    resp = client.get(FORECAST_URL, {"lat": "10", "lon": "10", "days": "91"})

    assert resp.status_code == 400
    assert "days" in resp.json()["errors"]


def test_analysis_returns_monthly_pattern(client: APIClient) -> None:
    resp = client.get(
        ANALYSIS_URL, {"lat": "35.0", "lon": "-100.0", "years_history": "2"}
    )

    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["data_range"]["points"] == 24
    assert [row["month"] for row in data["seasonal_pattern"]] == list(
        range(1, 13)
    )
    assert all(row["count"] == 2 for row in data["seasonal_pattern"])
    assert set(data["trend"]) == {
        "slope",
        "intercept",
        "r2",
        "slope_per_year",
    }
    assert data["variability"]["count"] == 24


def test_analysis_rejects_too_many_years(client: APIClient) -> None:
    resp = client.get(
        ANALYSIS_URL, {"lat": "0", "lon": "0", "years_history": "11"}
    )

    assert resp.status_code == 400
    assert "years_history" in resp.json()["errors"]


def test_analysis_is_throttled(
    client: APIClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(
        ScopedRateThrottle,
        "THROTTLE_RATES",
        {"ndvi_analysis": "1/min"},
    )
    params = {"lat": "0", "lon": "0"}

    assert client.get(ANALYSIS_URL, params).status_code == 200
    resp = client.get(ANALYSIS_URL, params)

    assert resp.status_code == 429
    body = resp.json()
    assert body["status"] == 1
    assert body["message"] == "Too Many Requests"
    assert "wait" in body["errors"]


def test_analysis_serves_configured_static_source(client: APIClient) -> None:
    with override_settings(NDVI_HISTORY_SOURCE="static"):
        resp = client.get(ANALYSIS_URL, {"lat": "0", "lon": "0"})

    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["data_range"] == {"start": None, "end": None, "points": 0}
    assert all(row["count"] == 0 for row in data["seasonal_pattern"])
