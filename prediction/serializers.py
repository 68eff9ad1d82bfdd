from __future__ import annotations

import math
from datetime import date
from typing import Any, cast

from django.utils import timezone
from rest_framework import serializers

from .confidence import MAX_DAYS_AHEAD
from .errors import PredictionRangeError
from .predictor import validate_target_date
from .services import (
    DEFAULT_FORECAST_DAYS,
    DEFAULT_FORECAST_INTERVAL,
    DEFAULT_YEARS_HISTORY,
    MAX_YEARS_HISTORY,
)
from .types import ForecastSummary, HistoricalAnalysis


class RoundedFloatField(serializers.FloatField):
    """Float output rounded for presentation; engine values stay exact."""

    def __init__(self, *, places: int = 3, **kwargs: Any) -> None:
        self.places = places
        super().__init__(**kwargs)

    def to_representation(self, value: Any) -> float:
        return round(float(value), self.places)


class LocationParamsSerializer(serializers.Serializer):
    lat = serializers.FloatField(min_value=-90.0, max_value=90.0)
    lon = serializers.FloatField(min_value=-180.0, max_value=180.0)
    years_history = serializers.IntegerField(
        required=False,
        default=DEFAULT_YEARS_HISTORY,
        min_value=1,
        max_value=MAX_YEARS_HISTORY,
    )


class PredictRequestSerializer(LocationParamsSerializer):
    target_date = serializers.DateField()
    crop_type = serializers.CharField(
        required=False, default="general", max_length=32
    )
    current_ndvi = serializers.FloatField(
        required=False,
        allow_null=True,
        default=None,
        min_value=0.0,
        max_value=1.0,
    )
    include_recommendations = serializers.BooleanField(
        required=False, default=True
    )

    def validate_target_date(self, value: date) -> date:
        try:
            validate_target_date(value, timezone.localdate())
        except PredictionRangeError as exc:
            raise serializers.ValidationError(str(exc)) from exc
        return value

    def validate_crop_type(self, value: str) -> str:
        return value.strip().lower() or "general"


class ForecastRequestSerializer(LocationParamsSerializer):
    days = serializers.IntegerField(
        required=False,
        default=DEFAULT_FORECAST_DAYS,
        min_value=1,
        max_value=MAX_DAYS_AHEAD,
    )
    interval = serializers.IntegerField(
        required=False, default=DEFAULT_FORECAST_INTERVAL, min_value=1
    )

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:
        attrs = super().validate(attrs)
        days = cast(int, attrs["days"])
        interval = cast(int, attrs["interval"])
        if interval > days:
            raise serializers.ValidationError(
                {"interval": "Interval must not exceed the forecast period."}
            )
        return attrs


class LocationSerializer(serializers.Serializer):
    lat = serializers.FloatField()
    lon = serializers.FloatField()


class PredictionSerializer(serializers.Serializer):
    value = RoundedFloatField()
    lower_bound = RoundedFloatField()
    upper_bound = RoundedFloatField()
    target_date = serializers.DateField()
    days_ahead = serializers.IntegerField()


class ConfidenceFactorsSerializer(serializers.Serializer):
    seasonal_stability = RoundedFloatField()
    trend_reliability = RoundedFloatField()
    data_quality = RoundedFloatField()
    temporal_reliability = RoundedFloatField()
    variability_score = RoundedFloatField()


class ConfidenceScoreSerializer(serializers.Serializer):
    percentage = serializers.IntegerField()
    level = serializers.CharField()
    factors = ConfidenceFactorsSerializer()


class PredictionDetailSerializer(serializers.Serializer):
    seasonal_baseline = RoundedFloatField()
    trend_adjustment = RoundedFloatField(places=4)
    historical_mean = RoundedFloatField()
    historical_min = RoundedFloatField()
    historical_max = RoundedFloatField()


class PredictionResultSerializer(serializers.Serializer):
    location = LocationSerializer()
    prediction = PredictionSerializer()
    confidence = ConfidenceScoreSerializer()
    analysis = PredictionDetailSerializer()
    years_analyzed = serializers.IntegerField()
    data_points = serializers.IntegerField()
    generated_at = serializers.DateTimeField()


class ForecastEntrySerializer(serializers.Serializer):
    target_date = serializers.DateField()
    result = PredictionResultSerializer(allow_null=True)
    error = serializers.CharField(allow_null=True)


class ForecastSummarySerializer(serializers.Serializer):
    average_value = RoundedFloatField()
    average_confidence = serializers.SerializerMethodField()
    total_predictions = serializers.IntegerField()
    valid_predictions = serializers.IntegerField()

    def get_average_confidence(self, obj: ForecastSummary) -> int:
        return math.floor(obj.average_confidence + 0.5)


class ForecastSerializer(serializers.Serializer):
    location = LocationSerializer()
    days = serializers.IntegerField()
    interval = serializers.IntegerField()
    start_date = serializers.DateField()
    end_date = serializers.DateField(allow_null=True)
    summary = ForecastSummarySerializer()
    predictions = ForecastEntrySerializer(many=True, source="entries")


class DataRangeSerializer(serializers.Serializer):
    start = serializers.DateField(allow_null=True)
    end = serializers.DateField(allow_null=True)
    points = serializers.IntegerField()


class MonthlyStatsSerializer(serializers.Serializer):
    month = serializers.IntegerField()
    average = RoundedFloatField()
    std_dev = RoundedFloatField()
    min = RoundedFloatField()
    max = RoundedFloatField()
    count = serializers.IntegerField()


class TrendModelSerializer(serializers.Serializer):
    slope = RoundedFloatField(places=6)
    intercept = RoundedFloatField()
    r2 = RoundedFloatField()
    slope_per_year = RoundedFloatField(places=6)


class VariabilityStatsSerializer(serializers.Serializer):
    mean = RoundedFloatField()
    std_dev = RoundedFloatField()
    min = RoundedFloatField()
    max = RoundedFloatField()
    range = RoundedFloatField()
    cv = RoundedFloatField()
    count = serializers.IntegerField()


class HistoricalAnalysisSerializer(serializers.Serializer):
    data_range = DataRangeSerializer()
    seasonal_pattern = serializers.SerializerMethodField()
    trend = TrendModelSerializer()
    variability = VariabilityStatsSerializer()

    def get_seasonal_pattern(
        self, obj: HistoricalAnalysis
    ) -> list[dict[str, Any]]:
        rows = [
            {
                "month": month,
                "average": stats.average,
                "std_dev": stats.std_dev,
                "min": stats.min,
                "max": stats.max,
                "count": stats.count,
            }
            for month, stats in sorted(obj.seasonal_pattern.items())
        ]
        return list(MonthlyStatsSerializer(rows, many=True).data)
