from __future__ import annotations

from typing import cast

from django.conf import settings

from .base import HistoricalSource, SourceName
from .static import StaticHistorySource
from .synthetic import SyntheticHistorySource


def build_registry() -> dict[SourceName, HistoricalSource]:
    """Instantiate supported history sources.

    The static source serves the JSON series at `NDVI_STATIC_HISTORY_PATH`,
    or nothing when the setting is empty.
    """

    static_path = getattr(settings, "NDVI_STATIC_HISTORY_PATH", "")
    static = (
        StaticHistorySource.from_file(static_path)
        if static_path
        else StaticHistorySource()
    )
    sources: dict[SourceName, HistoricalSource] = {
        "synthetic": SyntheticHistorySource(),
        "static": static,
    }
    return sources


def default_source_name() -> SourceName:
    configured = getattr(settings, "NDVI_HISTORY_SOURCE", "synthetic")
    return cast(SourceName, configured.lower())


def validate_source(
    source: str | None, registry: dict[SourceName, HistoricalSource]
) -> SourceName:
    name = (source or default_source_name()).lower()
    if name not in registry:
        raise ValueError(f"Unsupported NDVI history source: {name}")
    return cast(SourceName, name)
