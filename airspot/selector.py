"""Primary/fallback source selection for point AQI queries."""
from __future__ import annotations

import enum
import logging
from typing import Dict, Iterable, List, Optional

from . import prediction, sources
from .breakpoints import POLLUTANTS
from .calculator import AQIResult, aggregate, reading_sub_index, tip_for
from .schemas import OpenMeteoHourly, Reading
from .upstream import UpstreamError

logger = logging.getLogger(__name__)

DEFAULT_RADIUS_M = 100_000
FORECAST_LOOKBACK_HOURS = 48


class SourceState(str, enum.Enum):
    UNSET = "unset"
    PRIMARY = "primary"
    FALLBACK = "fallback"
    NONE = "none"


SubIndices = Dict[str, Optional[int]]


def _has_any(sub_indices: SubIndices) -> bool:
    return any(v is not None for v in sub_indices.values())


def after_primary(sub_indices: SubIndices) -> SourceState:
    """PRIMARY when the measurement source produced a sub-index, else stay UNSET."""
    return SourceState.PRIMARY if _has_any(sub_indices) else SourceState.UNSET


def after_fallback(sub_indices: SubIndices) -> SourceState:
    return SourceState.FALLBACK if _has_any(sub_indices) else SourceState.NONE


def first_reading_per_pollutant(readings: Iterable[Reading]) -> Dict[str, Reading]:
    """Keep the first reading seen for each pollutant.

    Assumes the provider lists readings most recent first.
    """
    seen: Dict[str, Reading] = {}
    for reading in readings:
        if reading.pollutant in POLLUTANTS and reading.pollutant not in seen:
            seen[reading.pollutant] = reading
    return seen


def compute_sub_indices(readings: Iterable[Reading]) -> SubIndices:
    chosen = first_reading_per_pollutant(readings)
    sub_indices: SubIndices = {p: None for p in POLLUTANTS}
    for pollutant, reading in chosen.items():
        sub_indices[pollutant] = reading_sub_index(pollutant, reading.value, reading.unit)
    return sub_indices


def forecast_readings(hourly: OpenMeteoHourly, lookback: int = FORECAST_LOOKBACK_HOURS) -> List[Reading]:
    readings = []
    for pollutant in POLLUTANTS:
        value = hourly.latest(pollutant, lookback=lookback)
        if value is not None:
            readings.append(Reading(pollutant=pollutant, value=value, unit=hourly.units[pollutant]))
    return readings


def _empty() -> SubIndices:
    return {p: None for p in POLLUTANTS}


def select_aqi(lat: float, lng: float, radius: float = DEFAULT_RADIUS_M, use_model: bool = True) -> AQIResult:
    """Estimate the AQI at a point.

    The measurement source is tried first; the gridded forecast is consulted
    only when it produced no sub-index. Upstream failures never escape: the
    worst case is a result with source ``none``.
    """
    errors: Dict[str, str] = {}
    state = SourceState.UNSET
    sub_indices = _empty()

    try:
        sub_indices = compute_sub_indices(sources.fetch_openaq(lat, lng, radius))
    except UpstreamError as exc:
        errors["openaq"] = str(exc)
    state = after_primary(sub_indices)

    if state is SourceState.UNSET:
        try:
            hourly = sources.fetch_open_meteo(lat, lng)
            sub_indices = compute_sub_indices(forecast_readings(hourly))
        except UpstreamError as exc:
            logger.info("Forecast fallback failed at %s,%s: %s", lat, lng, exc)
            errors["openmeteo"] = str(exc)
            sub_indices = _empty()
        state = after_fallback(sub_indices)

    summary = aggregate(sub_indices)
    category = summary.category
    if use_model:
        model_category = prediction.predict_category(sub_indices, lat, lng)
        if model_category:
            category = model_category

    return AQIResult(
        sub_indices=sub_indices,
        overall=summary.overall,
        category=category,
        tip=tip_for(category),
        source=state.value,
        radius_used=radius if state is SourceState.PRIMARY else None,
        errors=errors,
    )


__all__ = [
    "DEFAULT_RADIUS_M",
    "FORECAST_LOOKBACK_HOURS",
    "SourceState",
    "after_primary",
    "after_fallback",
    "first_reading_per_pollutant",
    "compute_sub_indices",
    "forecast_readings",
    "select_aqi",
]
