"""Reproducible demo NDVI history.

One observation per calendar month with a sinusoidal growing season peaking
mid-year, a latitude offset and bounded uniform noise. The generator is
seeded from the location and end date so repeated requests agree.
"""

from __future__ import annotations

import calendar
import math
import random
from datetime import date

from prediction.types import Location, Observation

from .base import SourceName

SEASONAL_AMPLITUDE = 0.2
SEASONAL_OFFSET = 0.5
LATITUDE_WEIGHT = 0.2
NOISE_SPAN = 0.1


def _shift_months(day: date, months: int) -> date:
    index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def synthetic_ndvi(month: int, lat: float, noise: float) -> float:
    seasonal = (
        math.sin((month - 1) / 12 * math.pi * 2 - math.pi / 2)
        * SEASONAL_AMPLITUDE
        + SEASONAL_OFFSET
    )
    latitude = math.cos(abs(lat) / 90 * math.pi / 2) * LATITUDE_WEIGHT
    return round(max(0.0, min(1.0, seasonal + latitude + noise)), 3)


class SyntheticHistorySource:
    name: SourceName = "synthetic"

    def get_history(
        self,
        location: Location,
        *,
        years: int,
        end: date,
    ) -> list[Observation]:
        rng = random.Random(
            f"{location.lat:.4f}:{location.lon:.4f}:{end.isoformat()}"
        )
        observations: list[Observation] = []
        for offset in range(years * 12 - 1, -1, -1):
            day = _shift_months(end, offset)
            noise = (rng.random() - 0.5) * NOISE_SPAN
            observations.append(
                Observation(
                    date=day,
                    value=synthetic_ndvi(day.month, location.lat, noise),
                )
            )
        return observations
