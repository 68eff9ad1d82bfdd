"""NDVI point prediction with an uncertainty band.

predicted = clamp(seasonal_baseline + slope * days_from_start, 0, 1)

The band widens linearly with the horizon up to half the historical
standard deviation at MAX_DAYS_AHEAD.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, date, datetime

from .analysis import analyze_history
from .confidence import (
    MAX_DAYS_AHEAD,
    calculate_confidence,
    uncertainty_factor,
)
from .errors import PredictionRangeError
from .types import (
    HistoricalAnalysis,
    Location,
    Observation,
    Prediction,
    PredictionDetail,
    PredictionResult,
)

BAND_SCALE = 0.5


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


def validate_target_date(target_date: date, today: date | None = None) -> int:
    """Return days ahead of `today`, or raise for dates outside the window."""

    reference = today or date.today()
    if target_date <= reference:
        raise PredictionRangeError("Target date must be in the future.")
    days_ahead = (target_date - reference).days
    if days_ahead > MAX_DAYS_AHEAD:
        raise PredictionRangeError(
            f"Predictions are only available up to {MAX_DAYS_AHEAD} days "
            "in advance."
        )
    return days_ahead


def predict_from_analysis(
    location: Location,
    target_date: date,
    analysis: HistoricalAnalysis,
    years_of_history: int,
    *,
    today: date | None = None,
) -> PredictionResult:
    days_ahead = validate_target_date(target_date, today)

    month_stats = analysis.seasonal_pattern.get(target_date.month)
    seasonal_baseline = month_stats.average if month_stats else 0.0

    start = analysis.data_range.start
    days_from_start = (target_date - start).days if start else 0
    trend_adjustment = analysis.trend.slope * days_from_start

    value = _clamp(seasonal_baseline + trend_adjustment)
    uncertainty = uncertainty_factor(days_ahead)
    band = analysis.variability.std_dev * uncertainty * BAND_SCALE

    prediction = Prediction(
        value=value,
        lower_bound=_clamp(value - band),
        upper_bound=_clamp(value + band),
        target_date=target_date,
        days_ahead=days_ahead,
    )
    confidence = calculate_confidence(
        seasonal_pattern=analysis.seasonal_pattern,
        trend=analysis.trend,
        variability=analysis.variability,
        target_month=target_date.month,
        days_ahead=days_ahead,
        total_observations=analysis.data_range.points,
        years_of_history=years_of_history,
    )
    detail = PredictionDetail(
        seasonal_baseline=seasonal_baseline,
        trend_adjustment=trend_adjustment,
        historical_mean=analysis.variability.mean,
        historical_min=analysis.variability.min,
        historical_max=analysis.variability.max,
    )
    return PredictionResult(
        location=location,
        prediction=prediction,
        confidence=confidence,
        analysis=detail,
        years_analyzed=years_of_history,
        data_points=analysis.data_range.points,
        generated_at=datetime.now(UTC),
    )


def predict_ndvi(
    location: Location,
    target_date: date,
    history: Sequence[Observation],
    years_of_history: int,
    *,
    today: date | None = None,
) -> PredictionResult:
    # Reject the date before doing any statistics on the series.
    validate_target_date(target_date, today)
    return predict_from_analysis(
        location,
        target_date,
        analyze_history(history),
        years_of_history,
        today=today,
    )
