"""Agronomic guidance derived from an NDVI prediction.

Thresholds follow common NDVI interpretation bands:

    < 0.1 bare soil, < 0.3 sparse, < 0.5 moderate, < 0.7 healthy,
    < 0.8 very healthy, otherwise exceptionally dense canopy.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .types import ConfidenceLevel, PredictionResult

BARE_SOIL = 0.1
SPARSE_VEGETATION = 0.3
MODERATE_VEGETATION = 0.5
HEALTHY_VEGETATION = 0.7
VERY_HEALTHY = 0.8

TREND_EPSILON = 0.01
LOW_CONFIDENCE_ALERT = 50


@dataclass(frozen=True)
class CropProfile:
    optimal_min: float
    optimal_max: float
    critical_stages: tuple[str, ...]
    notes: str


CROP_PROFILES: dict[str, CropProfile] = {
    "corn": CropProfile(
        0.6,
        0.85,
        ("V6 (6-leaf)", "VT (tasseling)", "R1 (silking)"),
        "Monitor nitrogen levels during vegetative growth",
    ),
    "wheat": CropProfile(
        0.5,
        0.75,
        ("Tillering", "Booting", "Heading"),
        "Peak NDVI occurs during heading stage",
    ),
    "soybean": CropProfile(
        0.6,
        0.8,
        ("V3-V5", "R1 (flowering)", "R5 (seed fill)"),
        "Maintain adequate moisture during pod fill",
    ),
    "rice": CropProfile(
        0.65,
        0.85,
        ("Tillering", "Panicle initiation", "Flowering"),
        "Keep fields flooded during critical growth stages",
    ),
}


def classify_ndvi(value: float) -> str:
    """Describe the land cover an NDVI value usually corresponds to."""

    if value < 0:
        return "Water, snow or clouds"
    if value < 0.2:
        return (
            "Very little or no vegetation. Bare soil, rocks, sand, "
            "urban areas."
        )
    if value < 0.6:
        return (
            "Moderate vegetation. Grasslands, shrubs, or plants at the "
            "beginning or end of their growing season."
        )
    return (
        "Very dense and healthy vegetation. Think of a forest in "
        "midsummer or a thriving crop."
    )


def vegetation_summary(ndvi: float) -> str:
    if ndvi < BARE_SOIL:
        return "Bare soil or no vegetation detected"
    if ndvi < SPARSE_VEGETATION:
        return "Sparse vegetation with low photosynthetic activity"
    if ndvi < MODERATE_VEGETATION:
        return "Moderate vegetation cover with developing canopy"
    if ndvi < HEALTHY_VEGETATION:
        return "Healthy vegetation with good canopy development"
    if ndvi < VERY_HEALTHY:
        return "Very healthy vegetation with dense canopy"
    return "Exceptionally dense and healthy vegetation"


def vegetation_status(ndvi: float) -> str:
    if ndvi < BARE_SOIL:
        return "bare"
    if ndvi < SPARSE_VEGETATION:
        return "sparse"
    if ndvi < MODERATE_VEGETATION:
        return "moderate"
    if ndvi < HEALTHY_VEGETATION:
        return "healthy"
    return "very_healthy"


def health_description(ndvi: float) -> str:
    if ndvi < BARE_SOIL:
        return "No vegetation"
    if ndvi < SPARSE_VEGETATION:
        return "Stressed or early growth"
    if ndvi < MODERATE_VEGETATION:
        return "Developing"
    if ndvi < HEALTHY_VEGETATION:
        return "Good"
    if ndvi < VERY_HEALTHY:
        return "Excellent"
    return "Optimal"


def trend_direction(trend_adjustment: float) -> str:
    if trend_adjustment > TREND_EPSILON:
        return "improving"
    if trend_adjustment < -TREND_EPSILON:
        return "declining"
    return "stable"


def _trend_analysis(trend_adjustment: float) -> dict[str, Any]:
    direction = trend_direction(trend_adjustment)
    descriptions = {
        "improving": "Vegetation health is improving over time",
        "declining": (
            "Vegetation health is declining - intervention may be needed"
        ),
        "stable": "Vegetation health is stable",
    }
    return {
        "direction": direction,
        "magnitude": abs(trend_adjustment),
        "description": descriptions[direction],
    }


def irrigation_advice(ndvi: float) -> dict[str, Any]:
    if ndvi < SPARSE_VEGETATION:
        return {
            "priority": "high",
            "action": "Increase irrigation immediately",
            "reason": (
                "Low NDVI indicates water stress or insufficient vegetation"
            ),
            "frequency": "Daily monitoring recommended",
        }
    if ndvi < MODERATE_VEGETATION:
        return {
            "priority": "medium",
            "action": "Maintain regular irrigation schedule",
            "reason": "Moderate vegetation requires consistent water supply",
            "frequency": "Every 2-3 days depending on weather",
        }
    if ndvi < HEALTHY_VEGETATION:
        return {
            "priority": "low",
            "action": "Continue current irrigation practices",
            "reason": "Healthy vegetation with adequate water",
            "frequency": "As needed based on soil moisture",
        }
    return {
        "priority": "low",
        "action": "Reduce irrigation if possible",
        "reason": "Very healthy vegetation may indicate excess water",
        "frequency": "Monitor for signs of overwatering",
    }


def fertilization_advice(
    ndvi: float, trend_adjustment: float
) -> dict[str, Any]:
    declining = trend_direction(trend_adjustment) == "declining"
    if ndvi < SPARSE_VEGETATION or declining:
        return {
            "priority": "high",
            "action": "Apply nitrogen-rich fertilizer",
            "reason": (
                "Low NDVI or declining trend indicates nutrient deficiency"
            ),
            "timing": "Within 1-2 weeks",
            "type": "Nitrogen (N) supplement recommended",
        }
    if ndvi < MODERATE_VEGETATION:
        return {
            "priority": "medium",
            "action": "Consider balanced NPK application",
            "reason": "Support vegetation development",
            "timing": "Within 3-4 weeks",
            "type": "Balanced NPK (Nitrogen-Phosphorus-Potassium)",
        }
    if ndvi < VERY_HEALTHY:
        return {
            "priority": "low",
            "action": "Maintain current fertilization schedule",
            "reason": "Vegetation shows good nutrient levels",
            "timing": "As per regular schedule",
            "type": "Maintenance application only",
        }
    return {
        "priority": "very_low",
        "action": "No additional fertilization needed",
        "reason": "Optimal vegetation health indicates adequate nutrients",
        "timing": "Monitor for changes",
        "type": "None required",
    }


def monitoring_advice(
    level: ConfidenceLevel, days_ahead: int
) -> dict[str, Any]:
    base: dict[str, Any] = {
        "methods": ["Satellite imagery", "Ground observations"],
        "parameters": ["NDVI", "Soil moisture", "Weather conditions"],
    }
    if level in ("very_low", "low"):
        return {
            **base,
            "frequency": "every 2-3 days",
            "priority": "high",
            "reason": "Low prediction confidence requires frequent monitoring",
            "alert": "Consider field inspection to verify conditions",
        }
    if level == "medium" or days_ahead > 60:
        return {
            **base,
            "frequency": "twice weekly",
            "priority": "medium",
            "reason": (
                "Medium confidence or long-term prediction needs regular "
                "checks"
            ),
        }
    return {
        **base,
        "frequency": "weekly",
        "priority": "normal",
        "reason": "High confidence prediction allows standard monitoring",
    }


def timing_advice(ndvi: float, target_date: str) -> dict[str, Any]:
    timing: dict[str, Any] = {
        "planting": None,
        "harvesting": None,
        "spraying": None,
    }
    if ndvi < SPARSE_VEGETATION:
        timing["planting"] = {
            "suitable": True,
            "timing": "Good conditions for planting",
            "notes": "Low vegetation cover provides opportunity for new crops",
        }
    if ndvi > HEALTHY_VEGETATION:
        timing["harvesting"] = {
            "suitable": True,
            "timing": f"Plan harvest around {target_date}",
            "notes": "Peak vegetation health indicates maturity approaching",
        }
    if ndvi > MODERATE_VEGETATION:
        timing["spraying"] = {
            "suitable": True,
            "timing": "Suitable for foliar applications",
            "notes": "Good canopy cover for effective treatment",
        }
    return timing


def action_items(
    ndvi: float, days_ahead: int, current_ndvi: float | None
) -> list[dict[str, Any]]:
    actions: list[dict[str, Any]] = []
    if current_ndvi is not None:
        change = ndvi - current_ndvi
        if change < -0.1:
            actions.append(
                {
                    "priority": "high",
                    "action": "Prepare for declining vegetation health",
                    "description": (
                        f"NDVI expected to drop by {abs(change):.2f} "
                        f"in {days_ahead} days"
                    ),
                    "category": "intervention",
                }
            )
        elif change > 0.1:
            actions.append(
                {
                    "priority": "low",
                    "action": "Maintain current practices",
                    "description": (
                        f"NDVI expected to improve by {change:.2f} "
                        f"in {days_ahead} days"
                    ),
                    "category": "maintenance",
                }
            )

    if ndvi < SPARSE_VEGETATION:
        actions.append(
            {
                "priority": "high",
                "action": "Investigate low vegetation index",
                "description": (
                    "Check for pest damage, disease, or nutrient deficiency"
                ),
                "category": "assessment",
            }
        )
    if ndvi > VERY_HEALTHY and days_ahead < 30:
        actions.append(
            {
                "priority": "medium",
                "action": "Plan harvesting operations",
                "description": (
                    "Peak vegetation health approaching - prepare harvest "
                    "logistics"
                ),
                "category": "planning",
            }
        )
    return actions


def alerts(
    result: PredictionResult, current_ndvi: float | None
) -> list[dict[str, Any]]:
    ndvi = result.prediction.value
    found: list[dict[str, Any]] = []
    if ndvi < SPARSE_VEGETATION:
        found.append(
            {
                "level": "warning",
                "message": "Low vegetation index predicted",
                "impact": "Potential crop stress or poor growth",
                "action": "Immediate field assessment recommended",
            }
        )
    if current_ndvi is not None and ndvi < current_ndvi - 0.15:
        found.append(
            {
                "level": "critical",
                "message": (
                    "Significant decline in vegetation health predicted"
                ),
                "impact": "Risk of crop failure or yield loss",
                "action": "Urgent intervention required",
            }
        )
    if result.confidence.percentage < LOW_CONFIDENCE_ALERT:
        found.append(
            {
                "level": "info",
                "message": "Low prediction confidence",
                "impact": "Prediction may be less reliable",
                "action": (
                    "Increase monitoring frequency and verify with ground "
                    "truth"
                ),
            }
        )
    if result.prediction.lower_bound < BARE_SOIL:
        found.append(
            {
                "level": "warning",
                "message": "Worst-case scenario shows very low vegetation",
                "impact": "Possible crop failure in unfavorable conditions",
                "action": "Prepare contingency plans",
            }
        )
    return found


def crop_advice(crop_type: str, ndvi: float) -> dict[str, Any]:
    profile = CROP_PROFILES.get(crop_type.lower(), CROP_PROFILES["corn"])
    if profile.optimal_min <= ndvi <= profile.optimal_max:
        status = "Within optimal range"
    elif ndvi < profile.optimal_min:
        status = "Below optimal - needs attention"
    else:
        status = "Above optimal - monitor for issues"
    return {
        "crop_type": crop_type,
        "optimal_range": {
            "min": profile.optimal_min,
            "max": profile.optimal_max,
        },
        "status": status,
        "critical_stages": list(profile.critical_stages),
        "notes": profile.notes,
    }


def build_recommendations(
    result: PredictionResult,
    *,
    crop_type: str = "general",
    current_ndvi: float | None = None,
) -> dict[str, Any]:
    ndvi = result.prediction.value
    days_ahead = result.prediction.days_ahead
    trend_adjustment = result.analysis.trend_adjustment

    recommendations: dict[str, Any] = {
        "summary": vegetation_summary(ndvi),
        "land_cover": classify_ndvi(ndvi),
        "vegetation": {
            "status": vegetation_status(ndvi),
            "health": health_description(ndvi),
            "trend": _trend_analysis(trend_adjustment),
        },
        "actions": action_items(ndvi, days_ahead, current_ndvi),
        "alerts": alerts(result, current_ndvi),
        "irrigation": irrigation_advice(ndvi),
        "fertilization": fertilization_advice(ndvi, trend_adjustment),
        "monitoring": monitoring_advice(result.confidence.level, days_ahead),
        "timing": timing_advice(
            ndvi, result.prediction.target_date.isoformat()
        ),
    }
    if crop_type != "general":
        recommendations["crop_specific"] = crop_advice(crop_type, ndvi)
    return recommendations
