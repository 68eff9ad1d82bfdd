"""Interfaces for historical NDVI data sources."""

from __future__ import annotations

from datetime import date
from typing import Literal, Protocol

from prediction.types import Location, Observation

SourceName = Literal["synthetic", "static"]


class HistoricalSource(Protocol):
    """Supplies past NDVI observations for a location."""

    name: SourceName

    def get_history(
        self,
        location: Location,
        *,
        years: int,
        end: date,
    ) -> list[Observation]:
        """Return observations within `years` before `end`, oldest first."""
