from __future__ import annotations


class PredictionError(ValueError):
    """Base class for rejected prediction inputs."""


class PredictionRangeError(PredictionError):
    """Target date is not in the future or beyond the forecast horizon."""


class ForecastParameterError(PredictionError):
    """Forecast window or interval is out of range."""
