from __future__ import annotations

# ruff: noqa: S101
import pytest

from prediction.confidence import (
    WEIGHT_DATA,
    WEIGHT_SEASONAL,
    WEIGHT_TEMPORAL,
    WEIGHT_TREND,
    WEIGHT_VARIABILITY,
    calculate_confidence,
    confidence_level,
    uncertainty_factor,
)
from prediction.types import MonthlyStats, TrendModel, VariabilityStats


def _pattern(month: int, stats: MonthlyStats) -> dict[int, MonthlyStats]:
    pattern = {m: MonthlyStats() for m in range(1, 13)}
    pattern[month] = stats
    return pattern


@pytest.mark.parametrize(
    ("percentage", "level"),
    [
        (100, "high"),
        (80, "high"),
        (79, "medium"),
        (60, "medium"),
        (59, "low"),
        (40, "low"),
        (39, "very_low"),
        (0, "very_low"),
    ],
)
def test_confidence_level_thresholds(percentage: int, level: str) -> None:
    assert confidence_level(percentage) == level


def test_weights_sum_to_one() -> None:
    total = (
        WEIGHT_SEASONAL
        + WEIGHT_TREND
        + WEIGHT_DATA
        + WEIGHT_TEMPORAL
        + WEIGHT_VARIABILITY
    )
    assert total == pytest.approx(1.0)


def test_uncertainty_factor_caps_at_horizon() -> None:
    assert uncertainty_factor(0) == 0
    assert uncertainty_factor(45) == pytest.approx(0.5)
    assert uncertainty_factor(200) == 1


def test_all_factors_perfect_scores_full_confidence() -> None:
    score = calculate_confidence(
        seasonal_pattern=_pattern(6, MonthlyStats(0.5, 0.0, 0.5, 0.5, 3)),
        trend=TrendModel(slope=0.001, intercept=0.4, r2=1.0),
        variability=VariabilityStats(mean=0.5, cv=0.0, count=36),
        target_month=6,
        days_ahead=0,
        total_observations=36,
        years_of_history=3,
    )

    assert score.percentage == 100
    assert score.level == "high"


def test_mixed_factors_are_weighted() -> None:
    score = calculate_confidence(
        seasonal_pattern=_pattern(4, MonthlyStats(0.4, 0.05, 0.3, 0.5, 3)),
        trend=TrendModel(r2=0.5),
        variability=VariabilityStats(mean=0.5, std_dev=0.1, cv=0.2),
        target_month=4,
        days_ahead=45,
        total_observations=18,
        years_of_history=3,
    )

    assert score.factors.seasonal_stability == pytest.approx(0.9)
    assert score.factors.trend_reliability == pytest.approx(0.5)
    assert score.factors.data_quality == pytest.approx(0.5)
    assert score.factors.temporal_reliability == pytest.approx(0.5)
    assert score.factors.variability_score == pytest.approx(0.8)
    assert score.percentage == 65
    assert score.level == "medium"


def test_missing_month_uses_neutral_stability() -> None:
    score = calculate_confidence(
        seasonal_pattern=_pattern(1, MonthlyStats()),
        trend=TrendModel(),
        variability=VariabilityStats(),
        target_month=1,
        days_ahead=90,
        total_observations=0,
        years_of_history=3,
    )

    assert score.factors.seasonal_stability == 0.5
    assert score.factors.temporal_reliability == 0
    assert score.percentage == 25
    assert score.level == "very_low"


def test_factors_are_clamped_to_unit_interval() -> None:
    score = calculate_confidence(
        seasonal_pattern=_pattern(2, MonthlyStats(0.1, 0.5, 0.0, 1.0, 4)),
        trend=TrendModel(r2=-0.2),
        variability=VariabilityStats(mean=0.2, std_dev=0.4, cv=2.0),
        target_month=2,
        days_ahead=30,
        total_observations=500,
        years_of_history=3,
    )

    assert score.factors.seasonal_stability == 0
    assert score.factors.trend_reliability == 0
    assert score.factors.data_quality == 1
    assert score.factors.variability_score == 0
    assert 0 <= score.percentage <= 100
    assert isinstance(score.percentage, int)


def test_zero_years_of_history_does_not_divide_by_zero() -> None:
    score = calculate_confidence(
        seasonal_pattern=_pattern(3, MonthlyStats()),
        trend=TrendModel(),
        variability=VariabilityStats(),
        target_month=3,
        days_ahead=10,
        total_observations=5,
        years_of_history=0,
    )

    assert score.factors.data_quality == 1
