from __future__ import annotations

import math

from .types import (
    ConfidenceFactors,
    ConfidenceLevel,
    ConfidenceScore,
    SeasonalPattern,
    TrendModel,
    VariabilityStats,
)

MAX_DAYS_AHEAD = 90

# Empirical weights; must sum to 1.
WEIGHT_SEASONAL = 0.30
WEIGHT_TREND = 0.20
WEIGHT_DATA = 0.20
WEIGHT_TEMPORAL = 0.20
WEIGHT_VARIABILITY = 0.10

SEASONAL_EPSILON = 0.1
NO_SEASONAL_DATA_STABILITY = 0.5


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def uncertainty_factor(days_ahead: int) -> float:
    """Scale from 0 (today) to 1 (at or beyond the horizon)."""

    return min(days_ahead / MAX_DAYS_AHEAD, 1.0)


def confidence_level(percentage: int) -> ConfidenceLevel:
    if percentage >= 80:
        return "high"
    if percentage >= 60:
        return "medium"
    if percentage >= 40:
        return "low"
    return "very_low"


def calculate_confidence(
    *,
    seasonal_pattern: SeasonalPattern,
    trend: TrendModel,
    variability: VariabilityStats,
    target_month: int,
    days_ahead: int,
    total_observations: int,
    years_of_history: int,
) -> ConfidenceScore:
    month_stats = seasonal_pattern.get(target_month)
    if month_stats is None or month_stats.count == 0:
        seasonal_stability = NO_SEASONAL_DATA_STABILITY
    else:
        seasonal_stability = 1 - month_stats.std_dev / (
            month_stats.average + SEASONAL_EPSILON
        )

    expected_points = max(years_of_history * 12, 1)
    factors = ConfidenceFactors(
        seasonal_stability=_clamp(seasonal_stability),
        trend_reliability=_clamp(trend.r2),
        data_quality=_clamp(total_observations / expected_points),
        temporal_reliability=_clamp(1 - uncertainty_factor(days_ahead)),
        variability_score=_clamp(1 - variability.cv),
    )

    weighted = (
        factors.seasonal_stability * WEIGHT_SEASONAL
        + factors.trend_reliability * WEIGHT_TREND
        + factors.data_quality * WEIGHT_DATA
        + factors.temporal_reliability * WEIGHT_TEMPORAL
        + factors.variability_score * WEIGHT_VARIABILITY
    )
    # Half-up: 72.5 -> 73.
    percentage = math.floor(_clamp(weighted) * 100 + 0.5)
    return ConfidenceScore(
        percentage=percentage,
        level=confidence_level(percentage),
        factors=factors,
    )
