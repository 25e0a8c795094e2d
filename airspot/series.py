"""Hourly AQI trend computed from the gridded forecast feed."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import pandas as pd

from . import sources
from .breakpoints import POLLUTANTS, TABLES
from .calculator import interpolate, round_half_up
from .schemas import OpenMeteoHourly, finite_number
from .units import normalize

logger = logging.getLogger(__name__)

DEFAULT_HOURS = 48
MIN_HOURS = 6
MAX_HOURS = 120
SERIES_SOURCE = "openmeteo"


def clamp_hours(raw: Any) -> int:
    """Requested window in hours, defaulting to 48 and clamped to 6..120."""
    value = finite_number(raw) if raw not in (None, "") else None
    if value is None:
        value = DEFAULT_HOURS
    return int(max(MIN_HOURS, min(MAX_HOURS, value)))


def _to_index(value: Any) -> Optional[int]:
    if value is None or pd.isna(value):
        return None
    return round_half_up(float(value))


def _sub_index_column(raw: pd.Series, pollutant: str, unit: str) -> pd.Series:
    table = TABLES[pollutant]
    return raw.map(lambda v: interpolate(normalize(pollutant, v, unit), table)).astype("float64")


def build_series(hourly: OpenMeteoHourly, hours: int = DEFAULT_HOURS) -> List[Dict[str, Any]]:
    """Per-hour sub-indices and overall index for the last ``hours`` samples.

    Only the prefix shared by the time array and all pollutant arrays is used,
    and entries keep the source's chronological order.
    """
    n = hourly.aligned_length()
    if n == 0 or hours <= 0:
        return []

    frame = pd.DataFrame({"t": hourly.time[:n]})
    for pollutant in POLLUTANTS:
        raw = pd.Series(hourly.values[pollutant][:n], dtype="float64")
        frame[pollutant] = _sub_index_column(raw, pollutant, hourly.units[pollutant])
    frame = frame.tail(hours).copy()
    frame["overall"] = frame[list(POLLUTANTS)].max(axis=1, skipna=True)

    series = []
    for row in frame.to_dict(orient="records"):
        entry: Dict[str, Any] = {"t": row["t"]}
        for column in (*POLLUTANTS, "overall"):
            entry[column] = _to_index(row[column])
        series.append(entry)
    return series


def fetch_series(lat: float, lng: float, hours: int = DEFAULT_HOURS) -> Dict[str, Any]:
    """Fetch the forecast feed with two past days and build the trend.

    Raises :class:`~airspot.upstream.UpstreamError` when the feed fails; the
    trend has no fallback source.
    """
    hourly = sources.fetch_open_meteo(lat, lng, past_days=2)
    series = build_series(hourly, hours)
    logger.info("Built %d hourly entries for %s,%s", len(series), lat, lng)
    return {"source": SERIES_SOURCE, "series": series}


__all__ = ["DEFAULT_HOURS", "MIN_HOURS", "MAX_HOURS", "clamp_hours", "build_series", "fetch_series"]
