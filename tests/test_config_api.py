from __future__ import annotations

# ruff: noqa: S101
import json
from decimal import Decimal
from unittest.mock import patch

from django.test import Client
from rest_framework.exceptions import NotFound, Throttled, ValidationError
from rest_framework.response import Response

from config.api.exceptions import _to_json_value, custom_exception_handler
from config.api.responses import error_payload, error_response
from prediction.errors import ForecastParameterError


def test_error_response_payload() -> None:
    resp = error_response(
        "Bad request",
        errors={"field": ["missing"]},
        status_code=418,
    )
    assert resp.status_code == 418
    assert resp.data == error_payload("Bad request", {"field": ["missing"]})
    assert resp.data["status"] == 1
    assert resp.data["data"] is None


def test_custom_exception_handler_returns_500_on_unhandled() -> None:
    with patch("rest_framework.views.exception_handler", return_value=None):
        resp = custom_exception_handler(Exception("boom"), {})
    assert resp.status_code == 500
    assert resp.data["status"] == 1
    assert resp.data["message"] == "Internal server error"


def test_custom_exception_handler_maps_prediction_errors() -> None:
    resp = custom_exception_handler(
        ForecastParameterError("Interval must be between 1 and 30."), {}
    )
    assert resp.status_code == 400
    assert resp.data["message"] == "Interval must be between 1 and 30."
    assert resp.data["errors"] == {
        "detail": "Interval must be between 1 and 30."
    }


def test_custom_exception_handler_field_errors_use_default_message() -> None:
    resp = custom_exception_handler(
        ValidationError({"lat": ["Ensure this value is less than 90."]}), {}
    )
    assert resp.status_code == 400
    assert resp.data["message"] == "Invalid request"
    assert resp.data["errors"] == {
        "lat": ["Ensure this value is less than 90."]
    }


def test_custom_exception_handler_uses_first_list_message() -> None:
    resp = custom_exception_handler(
        ValidationError("years_history must be between 1 and 10."), {}
    )
    assert resp.data["message"] == "years_history must be between 1 and 10."


def test_custom_exception_handler_not_found_detail() -> None:
    resp = custom_exception_handler(NotFound(), {})
    assert resp.status_code == 404
    assert resp.data["message"] == "Not found."


def test_custom_exception_handler_throttled_non_dict_detail() -> None:
    exc = Throttled(wait=12)
    with patch(
        "rest_framework.views.exception_handler",
        return_value=Response("slow down", status=429),
    ):
        resp = custom_exception_handler(exc, {})
    assert resp.status_code == 429
    assert resp.data["message"] == "Too Many Requests"
    assert resp.data["errors"]["detail"] == "slow down"
    assert resp.data["errors"]["wait"] == 12


def test_to_json_value_handles_sequences() -> None:
    payload = ("ok", {"value": Decimal("1.25")})
    assert _to_json_value(payload) == ["ok", {"value": "1.25"}]


def test_home_view_returns_metadata() -> None:
    client = Client()
    resp = client.get("/")
    assert resp.status_code == 200
    body = resp.json()
    assert body["ok"] is True
    assert body["service"] == "bloom-forecast"
    assert body["docs"] == "/api/docs/"
    assert body["endpoints"]["predict"] == "/api/v1/ndvi/predict/"
    assert body["endpoints"]["analysis"] == "/api/v1/ndvi/analysis/"


def test_openapi_schema_lists_prediction_paths() -> None:
    client = Client()
    resp = client.get("/api/schema/", {"format": "json"})
    assert resp.status_code == 200
    paths = json.loads(resp.content)["paths"]
    assert "/api/v1/ndvi/predict/" in paths
    assert "/api/v1/ndvi/forecast/" in paths
    assert "/api/v1/ndvi/analysis/" in paths
