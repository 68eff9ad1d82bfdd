"""NDVI prediction API endpoints.

Authentication: none; the endpoints are public and scope-throttled.
All successful responses use `config.api.responses.success_response`
with the standard envelope:

    {"status": 0, "message": "<str>", "data": <object|null>, "errors": null}
"""

from __future__ import annotations

from typing import Any

from drf_spectacular.utils import (
    OpenApiParameter,
    OpenApiTypes,
    extend_schema,
    inline_serializer,
)
from rest_framework import serializers
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework.views import APIView

from config.api.openapi import (
    error_envelope_serializer,
    success_envelope_serializer,
)
from config.api.responses import success_response

from .recommendations import build_recommendations
from .serializers import (
    ForecastRequestSerializer,
    ForecastSerializer,
    HistoricalAnalysisSerializer,
    LocationParamsSerializer,
    PredictionResultSerializer,
    PredictRequestSerializer,
)
from .services import run_analysis, run_forecast, run_prediction
from .types import Location

prediction_error_response = error_envelope_serializer("NdviPredictionError")

predict_success_response = success_envelope_serializer(
    "NdviPredictSuccess",
    data=inline_serializer(
        name="NdviPredictData",
        fields={
            "result": PredictionResultSerializer(),
            "recommendations": serializers.JSONField(allow_null=True),
        },
    ),
)

forecast_success_response = success_envelope_serializer(
    "NdviForecastSuccess", data=ForecastSerializer()
)

analysis_success_response = success_envelope_serializer(
    "NdviAnalysisSuccess", data=HistoricalAnalysisSerializer()
)

location_query_params = [
    OpenApiParameter(
        name="lat",
        type=OpenApiTypes.FLOAT,
        location=OpenApiParameter.QUERY,
        required=True,
    ),
    OpenApiParameter(
        name="lon",
        type=OpenApiTypes.FLOAT,
        location=OpenApiParameter.QUERY,
        required=True,
    ),
    OpenApiParameter(
        name="years_history",
        type=OpenApiTypes.INT,
        location=OpenApiParameter.QUERY,
        required=False,
        description="Years of history to analyse (default 3)",
    ),
]

forecast_query_params = [
    *location_query_params,
    OpenApiParameter(
        name="days",
        type=OpenApiTypes.INT,
        location=OpenApiParameter.QUERY,
        required=False,
        description="Forecast period in days (1-90, default 30)",
    ),
    OpenApiParameter(
        name="interval",
        type=OpenApiTypes.INT,
        location=OpenApiParameter.QUERY,
        required=False,
        description="Days between predictions (1-days, default 7)",
    ),
]


class BasePredictionView(APIView):
    """Shared configuration for the public prediction endpoints."""

    permission_classes = [AllowAny]
    throttle_classes = [ScopedRateThrottle]

    def _location(self, params: dict[str, Any]) -> Location:
        return Location(lat=float(params["lat"]), lon=float(params["lon"]))


class NdviPredictView(BasePredictionView):
    """Predict NDVI for a single future date."""

    throttle_scope = "ndvi_predict"

    @extend_schema(
        request=PredictRequestSerializer,
        responses={
            200: predict_success_response,
            400: prediction_error_response,
            429: prediction_error_response,
        },
    )
    def post(self, request: Request) -> Response:
        """Return a prediction with confidence and optional guidance.

        Body: lat, lon, target_date (1-90 days ahead), optional
        years_history, crop_type, current_ndvi, include_recommendations.
        """

        serializer = PredictRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        params = serializer.validated_data

        result = run_prediction(
            self._location(params),
            params["target_date"],
            years_of_history=params["years_history"],
        )
        recommendations = None
        if params["include_recommendations"]:
            recommendations = build_recommendations(
                result,
                crop_type=params["crop_type"],
                current_ndvi=params["current_ndvi"],
            )

        payload = {
            "result": PredictionResultSerializer(result).data,
            "recommendations": recommendations,
        }
        return success_response(payload, message="NDVI prediction")


class NdviForecastView(BasePredictionView):
    """Predict NDVI at a fixed interval over the coming days."""

    throttle_scope = "ndvi_forecast"

    @extend_schema(
        parameters=forecast_query_params,
        responses={
            200: forecast_success_response,
            400: prediction_error_response,
            429: prediction_error_response,
        },
    )
    def get(self, request: Request) -> Response:
        """Return one prediction per interval step plus a summary.

        Steps that fail are reported with an `error` and left out of the
        summary averages.
        """

        serializer = ForecastRequestSerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        params = serializer.validated_data

        forecast = run_forecast(
            self._location(params),
            days=params["days"],
            interval=params["interval"],
            years_of_history=params["years_history"],
        )
        return success_response(
            ForecastSerializer(forecast).data, message="NDVI forecast"
        )


class NdviAnalysisView(BasePredictionView):
    """Expose the historical statistics behind predictions."""

    throttle_scope = "ndvi_analysis"

    @extend_schema(
        parameters=location_query_params,
        responses={
            200: analysis_success_response,
            400: prediction_error_response,
            429: prediction_error_response,
        },
    )
    def get(self, request: Request) -> Response:
        serializer = LocationParamsSerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        params = serializer.validated_data

        analysis = run_analysis(
            self._location(params),
            years_of_history=params["years_history"],
        )
        return success_response(
            HistoricalAnalysisSerializer(analysis).data,
            message="NDVI historical analysis",
        )
