"""Historical NDVI statistics: seasonal pattern, trend and variability.

Every function here is pure and total: degenerate input (empty series,
missing months, a single point) yields zeroed records instead of errors.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from .types import (
    DataRange,
    HistoricalAnalysis,
    MonthlyStats,
    Observation,
    SeasonalPattern,
    TrendModel,
    VariabilityStats,
)

MONTHS = range(1, 13)


def _valid_values(observations: Sequence[Observation]) -> list[float]:
    return [obs.value for obs in observations if obs.value is not None]


def _mean_and_std(values: Sequence[float]) -> tuple[float, float]:
    # Population standard deviation (divide by n).
    mean = sum(values) / len(values)
    variance = sum((v - mean) ** 2 for v in values) / len(values)
    return mean, math.sqrt(variance)


def calculate_seasonal_pattern(
    observations: Sequence[Observation],
) -> SeasonalPattern:
    buckets: dict[int, list[float]] = {month: [] for month in MONTHS}
    for obs in observations:
        if obs.value is None:
            continue
        buckets[obs.month].append(obs.value)

    pattern: dict[int, MonthlyStats] = {}
    for month, values in buckets.items():
        if not values:
            pattern[month] = MonthlyStats()
            continue
        average, std_dev = _mean_and_std(values)
        pattern[month] = MonthlyStats(
            average=average,
            std_dev=std_dev,
            min=min(values),
            max=max(values),
            count=len(values),
        )
    return pattern


def calculate_trend(observations: Sequence[Observation]) -> TrendModel:
    """Least-squares fit of value against days since the first observation.

    The series must already be sorted by date; offsets are measured from
    ``observations[0].date`` even when that entry has no value.
    """

    if len(observations) < 2:
        return TrendModel()

    first_date = observations[0].date
    points = [
        ((obs.date - first_date).days, obs.value)
        for obs in observations
        if obs.value is not None
    ]
    n = len(points)
    if n < 2:
        return TrendModel()

    x_mean = sum(x for x, _ in points) / n
    y_mean = sum(y for _, y in points) / n

    numerator = 0.0
    denominator = 0.0
    ss_total = 0.0
    for x, y in points:
        numerator += (x - x_mean) * (y - y_mean)
        denominator += (x - x_mean) ** 2
        ss_total += (y - y_mean) ** 2

    slope = numerator / denominator if denominator != 0 else 0.0
    intercept = y_mean - slope * x_mean

    ss_residual = sum((y - (slope * x + intercept)) ** 2 for x, y in points)
    r2 = 1 - ss_residual / ss_total if ss_total != 0 else 0.0

    return TrendModel(
        slope=slope,
        intercept=intercept,
        r2=r2,
        slope_per_year=slope * 365,
    )


def calculate_variability(
    observations: Sequence[Observation],
) -> VariabilityStats:
    values = _valid_values(observations)
    if not values:
        return VariabilityStats()

    mean, std_dev = _mean_and_std(values)
    low = min(values)
    high = max(values)
    return VariabilityStats(
        mean=mean,
        std_dev=std_dev,
        min=low,
        max=high,
        range=high - low,
        cv=std_dev / mean if mean != 0 else 0.0,
        count=len(values),
    )


def analyze_history(observations: Sequence[Observation]) -> HistoricalAnalysis:
    """Run all three analyses over the same series."""

    data_range = DataRange(
        start=observations[0].date if observations else None,
        end=observations[-1].date if observations else None,
        points=len(observations),
    )
    return HistoricalAnalysis(
        data_range=data_range,
        seasonal_pattern=calculate_seasonal_pattern(observations),
        trend=calculate_trend(observations),
        variability=calculate_variability(observations),
    )
