from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import date

from django.conf import settings
from django.core.cache import caches
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from .analysis import analyze_history
from .errors import PredictionError
from .forecast import generate_forecast
from .history.base import HistoricalSource
from .history.registry import build_registry, validate_source
from .metrics import (
    ndvi_forecast_entries_total,
    ndvi_history_cache_hit_total,
    ndvi_prediction_confidence_total,
    ndvi_prediction_latency_seconds,
    ndvi_predictions_total,
)
from .predictor import predict_ndvi
from .types import (
    Forecast,
    HistoricalAnalysis,
    Location,
    Observation,
    PredictionResult,
)

logger = logging.getLogger(__name__)

DEFAULT_YEARS_HISTORY = int(
    getattr(settings, "NDVI_DEFAULT_YEARS_HISTORY", 3)
)
MAX_YEARS_HISTORY = int(getattr(settings, "NDVI_MAX_YEARS_HISTORY", 10))
DEFAULT_FORECAST_DAYS = int(
    getattr(settings, "NDVI_DEFAULT_FORECAST_DAYS", 30)
)
DEFAULT_FORECAST_INTERVAL = int(
    getattr(settings, "NDVI_DEFAULT_FORECAST_INTERVAL", 7)
)
CACHE_TTL_HISTORY = int(
    getattr(settings, "NDVI_CACHE_TTL_HISTORY_SECONDS", 3600)
)

SOURCE_REGISTRY = build_registry()


@dataclass(frozen=True)
class HistoryCacheKey:
    source: str
    lat: float
    lon: float
    years: int
    end: date

    def as_string(self) -> str:
        return (
            f"ndvi:history:{self.source}:{self.lat:.4f}:{self.lon:.4f}:"
            f"{self.years}:{self.end.isoformat()}"
        )


def resolve_source(
    source: str | HistoricalSource | None = None,
) -> HistoricalSource:
    if source is not None and not isinstance(source, str):
        return source
    try:
        name = validate_source(source, SOURCE_REGISTRY)
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc
    return SOURCE_REGISTRY[name]


def get_history(
    location: Location,
    *,
    years: int,
    end: date | None = None,
    source: str | HistoricalSource | None = None,
) -> list[Observation]:
    if years < 1 or years > MAX_YEARS_HISTORY:
        raise ValidationError(
            f"years_history must be between 1 and {MAX_YEARS_HISTORY}."
        )
    impl = resolve_source(source)
    reference = end or timezone.localdate()
    key = HistoryCacheKey(
        source=impl.name,
        lat=location.lat,
        lon=location.lon,
        years=years,
        end=reference,
    ).as_string()

    cache = caches["default"]
    cached = cache.get(key)
    if cached is not None:
        ndvi_history_cache_hit_total.labels(source=impl.name).inc()
        return cached

    history = impl.get_history(location, years=years, end=reference)
    logger.debug(
        "ndvi.history.loaded source=%s points=%s", impl.name, len(history)
    )
    cache.set(key, history, CACHE_TTL_HISTORY)
    return history


def run_prediction(
    location: Location,
    target_date: date,
    *,
    years_of_history: int | None = None,
    source: str | HistoricalSource | None = None,
    today: date | None = None,
) -> PredictionResult:
    reference = today or timezone.localdate()
    years = (
        DEFAULT_YEARS_HISTORY if years_of_history is None else years_of_history
    )
    history = get_history(
        location, years=years, end=reference, source=source
    )

    start_time = time.perf_counter()
    try:
        result = predict_ndvi(
            location, target_date, history, years, today=reference
        )
    except PredictionError as exc:
        ndvi_predictions_total.labels(
            endpoint="predict", outcome="rejected"
        ).inc()
        logger.info(
            "ndvi.predict.rejected target=%s reason=%s", target_date, exc
        )
        raise ValidationError(str(exc)) from exc
    finally:
        ndvi_prediction_latency_seconds.labels(endpoint="predict").observe(
            time.perf_counter() - start_time
        )

    ndvi_predictions_total.labels(endpoint="predict", outcome="ok").inc()
    ndvi_prediction_confidence_total.labels(
        level=result.confidence.level
    ).inc()
    return result


def run_forecast(
    location: Location,
    *,
    days: int | None = None,
    interval: int | None = None,
    years_of_history: int | None = None,
    source: str | HistoricalSource | None = None,
    today: date | None = None,
) -> Forecast:
    reference = today or timezone.localdate()
    years = (
        DEFAULT_YEARS_HISTORY if years_of_history is None else years_of_history
    )
    history = get_history(
        location, years=years, end=reference, source=source
    )

    start_time = time.perf_counter()
    try:
        forecast = generate_forecast(
            location,
            history,
            total_days=DEFAULT_FORECAST_DAYS if days is None else days,
            interval=(
                DEFAULT_FORECAST_INTERVAL if interval is None else interval
            ),
            years_of_history=years,
            today=reference,
        )
    except PredictionError as exc:
        ndvi_predictions_total.labels(
            endpoint="forecast", outcome="rejected"
        ).inc()
        raise ValidationError(str(exc)) from exc
    finally:
        ndvi_prediction_latency_seconds.labels(endpoint="forecast").observe(
            time.perf_counter() - start_time
        )

    ndvi_predictions_total.labels(endpoint="forecast", outcome="ok").inc()
    for entry in forecast.entries:
        ndvi_forecast_entries_total.labels(
            outcome="ok" if entry.ok else "failed"
        ).inc()
    summary = forecast.summary
    if summary.valid_predictions < summary.total_predictions:
        logger.warning(
            "ndvi.forecast.partial valid=%s total=%s",
            summary.valid_predictions,
            summary.total_predictions,
        )
    return forecast


def run_analysis(
    location: Location,
    *,
    years_of_history: int | None = None,
    source: str | HistoricalSource | None = None,
    today: date | None = None,
) -> HistoricalAnalysis:
    years = (
        DEFAULT_YEARS_HISTORY if years_of_history is None else years_of_history
    )
    history = get_history(location, years=years, end=today, source=source)
    return analyze_history(history)
