from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date, timedelta

from .analysis import analyze_history
from .confidence import MAX_DAYS_AHEAD
from .errors import ForecastParameterError, PredictionError
from .predictor import predict_from_analysis
from .types import (
    Forecast,
    ForecastEntry,
    ForecastSummary,
    Location,
    Observation,
)

logger = logging.getLogger(__name__)


def validate_forecast_window(total_days: int, interval: int) -> None:
    if total_days < 1 or total_days > MAX_DAYS_AHEAD:
        raise ForecastParameterError(
            f"Forecast period must be between 1 and {MAX_DAYS_AHEAD} days."
        )
    if interval < 1 or interval > total_days:
        raise ForecastParameterError(
            "Interval must be between 1 and the forecast period."
        )


def forecast_dates(today: date, total_days: int, interval: int) -> list[date]:
    return [
        today + timedelta(days=step)
        for step in range(interval, total_days + 1, interval)
    ]


def _summarize(entries: Sequence[ForecastEntry]) -> ForecastSummary:
    results = [entry.result for entry in entries if entry.result is not None]
    if not results:
        return ForecastSummary(
            average_value=0.0,
            average_confidence=0.0,
            total_predictions=len(entries),
            valid_predictions=0,
        )
    return ForecastSummary(
        average_value=sum(r.prediction.value for r in results) / len(results),
        average_confidence=(
            sum(r.confidence.percentage for r in results) / len(results)
        ),
        total_predictions=len(entries),
        valid_predictions=len(results),
    )


def generate_forecast(
    location: Location,
    history: Sequence[Observation],
    *,
    total_days: int = 30,
    interval: int = 7,
    years_of_history: int = 3,
    today: date | None = None,
) -> Forecast:
    """Predict NDVI every `interval` days up to `total_days` ahead.

    A date whose prediction is rejected is kept as an error entry and left
    out of the summary averages; the rest of the batch still runs.
    """

    validate_forecast_window(total_days, interval)
    reference = today or date.today()
    analysis = analyze_history(history)

    entries: list[ForecastEntry] = []
    for target in forecast_dates(reference, total_days, interval):
        try:
            result = predict_from_analysis(
                location,
                target,
                analysis,
                years_of_history,
                today=reference,
            )
        except PredictionError as exc:
            logger.warning(
                "ndvi.forecast.entry_failed target=%s error=%s", target, exc
            )
            entries.append(ForecastEntry(target_date=target, error=str(exc)))
            continue
        entries.append(ForecastEntry(target_date=target, result=result))

    return Forecast(
        location=location,
        days=total_days,
        interval=interval,
        start_date=reference,
        end_date=entries[-1].target_date if entries else None,
        summary=_summarize(entries),
        entries=tuple(entries),
    )
