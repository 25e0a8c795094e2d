"""Sub-index interpolation and overall AQI aggregation."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Sequence, Tuple

from .breakpoints import POLLUTANTS, TABLES, Breakpoint
from .units import normalize

UNKNOWN = "Unknown"

# upper bound (inclusive) of each category on the rounded overall index
AQI_CATEGORIES: Tuple[Tuple[str, int], ...] = (
    ("Good", 50),
    ("Moderate", 100),
    ("Unhealthy for Sensitive Groups", 150),
    ("Unhealthy", 200),
    ("Very Unhealthy", 300),
)
HAZARDOUS = "Hazardous"

CATEGORY_TIPS: Dict[str, str] = {
    "Good": "Air quality is satisfactory, enjoy outdoor activities.",
    "Moderate": "Unusually sensitive people limit prolonged outdoor exertion.",
    "Unhealthy for Sensitive Groups": "Sensitive groups reduce exertion; consider a mask.",
    "Unhealthy": "Everyone limit outdoor exertion; high-quality mask recommended.",
    "Very Unhealthy": "Avoid outdoor activity; use high-quality masks indoors/outdoors.",
    "Hazardous": "Stay indoors; use purifiers; follow local advisories.",
    UNKNOWN: "Live data unavailable nearby. Try a larger city.",
}
DEFAULT_TIP = "Check local guidance."


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up."""
    return int(math.floor(value + 0.5))


def interpolate(concentration: Optional[float], table: Sequence[Breakpoint]) -> Optional[float]:
    """Linearly interpolate ``concentration`` inside the first matching segment.

    Values outside every segment give ``None``; the table is never extrapolated.
    """
    if concentration is None:
        return None
    try:
        c = float(concentration)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(c):
        return None

    for bp in table:
        if bp.concentration_low <= c <= bp.concentration_high:
            span = bp.concentration_high - bp.concentration_low
            if span == 0:
                return float(bp.index_low)
            slope = (bp.index_high - bp.index_low) / span
            return bp.index_low + slope * (c - bp.concentration_low)
    return None


def sub_index(pollutant: str, concentration: Optional[float]) -> Optional[int]:
    """Rounded sub-index for a canonical-unit concentration."""
    value = interpolate(concentration, TABLES[pollutant])
    if value is None:
        return None
    return round_half_up(value)


def reading_sub_index(pollutant: str, value: float, unit: str) -> Optional[int]:
    return sub_index(pollutant, normalize(pollutant, value, unit))


def category_for(overall: Optional[float]) -> str:
    if overall is None:
        return UNKNOWN
    rounded = round_half_up(overall)
    for name, upper in AQI_CATEGORIES:
        if rounded <= upper:
            return name
    return HAZARDOUS


def tip_for(category: Optional[str]) -> str:
    return CATEGORY_TIPS.get(category or UNKNOWN, DEFAULT_TIP)


def overall_index(sub_indices: Mapping[str, Optional[float]]) -> Optional[int]:
    defined = [v for v in sub_indices.values() if v is not None]
    if not defined:
        return None
    return round_half_up(max(defined))


@dataclass(frozen=True)
class Aggregate:
    overall: Optional[int]
    category: str
    tip: str


def aggregate(sub_indices: Mapping[str, Optional[float]]) -> Aggregate:
    """Combine sub-indices into the overall index, its category and advice.

    The overall index is the maximum defined sub-index. When no sub-index is
    defined the overall stays ``None`` and the category is ``Unknown``.
    """
    overall = overall_index(sub_indices)
    category = category_for(overall)
    return Aggregate(overall=overall, category=category, tip=tip_for(category))


@dataclass
class AQIResult:
    """Outcome of one point query."""

    sub_indices: Dict[str, Optional[int]] = field(
        default_factory=lambda: {p: None for p in POLLUTANTS}
    )
    overall: Optional[int] = None
    category: str = UNKNOWN
    tip: str = CATEGORY_TIPS[UNKNOWN]
    source: str = "none"
    radius_used: Optional[float] = None
    errors: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, object]:
        return {
            "source": self.source,
            "radiusUsed": self.radius_used,
            "subIndices": {p: self.sub_indices.get(p) for p in POLLUTANTS},
            "overall": self.overall,
            "category": self.category,
            "tip": self.tip,
            "debug": {"openaqError": self.errors.get("openaq")},
        }


__all__ = [
    "UNKNOWN",
    "AQI_CATEGORIES",
    "CATEGORY_TIPS",
    "DEFAULT_TIP",
    "round_half_up",
    "interpolate",
    "sub_index",
    "reading_sub_index",
    "category_for",
    "tip_for",
    "overall_index",
    "aggregate",
    "Aggregate",
    "AQIResult",
]
