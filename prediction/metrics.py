from __future__ import annotations

from prometheus_client import Counter, Histogram

ndvi_predictions_total = Counter(
    "ndvi_predictions_total",
    "Total NDVI predictions requested",
    labelnames=["endpoint", "outcome"],
)

ndvi_prediction_confidence_total = Counter(
    "ndvi_prediction_confidence_total",
    "Successful NDVI predictions by confidence level",
    labelnames=["level"],
)

ndvi_forecast_entries_total = Counter(
    "ndvi_forecast_entries_total",
    "Forecast steps computed, by outcome",
    labelnames=["outcome"],
)

ndvi_prediction_latency_seconds = Histogram(
    "ndvi_prediction_latency_seconds",
    "Latency of NDVI prediction computations",
    labelnames=["endpoint"],
    buckets=(0.001, 0.005, 0.01, 0.05, 0.1, 0.3, 0.5, 1, 2),
)

ndvi_history_cache_hit_total = Counter(
    "ndvi_history_cache_hit_total",
    "Cache hits for historical NDVI series",
    labelnames=["source"],
)
