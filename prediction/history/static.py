from __future__ import annotations

import json
from collections.abc import Iterable
from datetime import date
from pathlib import Path

from prediction.types import Location, Observation

from .base import SourceName


def load_observations(path: str | Path) -> list[Observation]:
    """Read `[{"date": "YYYY-MM-DD", "value": float | null}, ...]`."""

    with Path(path).open(encoding="utf-8") as handle:
        rows = json.load(handle)
    return [
        Observation(
            date=date.fromisoformat(row["date"]),
            value=None if row.get("value") is None else float(row["value"]),
        )
        for row in rows
    ]


class StaticHistorySource:
    """Serve a fixed series regardless of location."""

    name: SourceName = "static"

    def __init__(self, observations: Iterable[Observation] = ()) -> None:
        self._observations = sorted(observations, key=lambda obs: obs.date)

    @classmethod
    def from_file(cls, path: str | Path) -> StaticHistorySource:
        return cls(load_observations(path))

    def get_history(
        self,
        location: Location,
        *,
        years: int,
        end: date,
    ) -> list[Observation]:
        try:
            start = end.replace(year=end.year - years)
        except ValueError:
            # 29 February with a non-leap start year.
            start = end.replace(year=end.year - years, day=28)
        return [
            obs for obs in self._observations if start <= obs.date <= end
        ]
