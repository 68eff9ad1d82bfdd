from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Literal

ConfidenceLevel = Literal["very_low", "low", "medium", "high"]


@dataclass(frozen=True)
class Location:
    lat: float
    lon: float


@dataclass(frozen=True)
class Observation:
    """Single historical NDVI measurement for a location."""

    date: date
    value: float | None

    @property
    def month(self) -> int:
        return self.date.month

    @property
    def year(self) -> int:
        return self.date.year


@dataclass(frozen=True)
class MonthlyStats:
    average: float = 0.0
    std_dev: float = 0.0
    min: float = 0.0
    max: float = 0.0
    count: int = 0


SeasonalPattern = Mapping[int, MonthlyStats]


@dataclass(frozen=True)
class TrendModel:
    slope: float = 0.0
    intercept: float = 0.0
    r2: float = 0.0
    slope_per_year: float = 0.0


@dataclass(frozen=True)
class VariabilityStats:
    mean: float = 0.0
    std_dev: float = 0.0
    min: float = 0.0
    max: float = 0.0
    range: float = 0.0
    cv: float = 0.0
    count: int = 0


@dataclass(frozen=True)
class DataRange:
    start: date | None
    end: date | None
    points: int


@dataclass(frozen=True)
class HistoricalAnalysis:
    """Statistics derived from one historical series."""

    data_range: DataRange
    seasonal_pattern: SeasonalPattern
    trend: TrendModel
    variability: VariabilityStats


@dataclass(frozen=True)
class Prediction:
    value: float
    lower_bound: float
    upper_bound: float
    target_date: date
    days_ahead: int


@dataclass(frozen=True)
class ConfidenceFactors:
    seasonal_stability: float
    trend_reliability: float
    data_quality: float
    temporal_reliability: float
    variability_score: float


@dataclass(frozen=True)
class ConfidenceScore:
    percentage: int
    level: ConfidenceLevel
    factors: ConfidenceFactors


@dataclass(frozen=True)
class PredictionDetail:
    seasonal_baseline: float
    trend_adjustment: float
    historical_mean: float
    historical_min: float
    historical_max: float


@dataclass(frozen=True)
class PredictionResult:
    location: Location
    prediction: Prediction
    confidence: ConfidenceScore
    analysis: PredictionDetail
    years_analyzed: int
    data_points: int
    generated_at: datetime


@dataclass(frozen=True)
class ForecastEntry:
    """One forecast step; exactly one of `result` and `error` is set."""

    target_date: date
    result: PredictionResult | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.result is not None


@dataclass(frozen=True)
class ForecastSummary:
    average_value: float
    average_confidence: float
    total_predictions: int
    valid_predictions: int


@dataclass(frozen=True)
class Forecast:
    location: Location
    days: int
    interval: int
    start_date: date
    end_date: date | None
    summary: ForecastSummary
    entries: Sequence[ForecastEntry] = field(default_factory=tuple)
