"""Conversion of raw pollutant readings into breakpoint table units."""
from __future__ import annotations

import math
from typing import Dict, Optional

from .breakpoints import CO, NO2, O3, PM25

# litres per mole of ideal gas at 25 °C and 1 atm
R_MOLAR_VOLUME = 24.45

MOLAR_MASS: Dict[str, float] = {
    O3: 48.00,
    NO2: 46.0055,
    CO: 28.01,
}

_MILLIGRAM_UNITS = {"mg/m³", "mg/m3"}


def _is_mass_unit(unit: str) -> bool:
    return "g/m" in unit


def normalize(pollutant: str, value: float, unit: str) -> Optional[float]:
    """Return ``value`` in the canonical unit of ``pollutant``.

    PM2.5 stays in µg/m³, O3 and NO2 become ppb, CO becomes ppm. ``None`` is
    returned for units that cannot be converted.
    """
    p = (pollutant or "").lower()
    u = (unit or "").strip().lower()

    if value is None or not math.isfinite(value):
        return None

    if p == PM25:
        if _is_mass_unit(u):
            return value
        return None

    if p in (O3, NO2):
        if u == "ppb":
            return value
        if _is_mass_unit(u):
            return value * R_MOLAR_VOLUME / MOLAR_MASS[p]
        return None

    if p == CO:
        if u == "ppm":
            return value
        if u in _MILLIGRAM_UNITS:
            return value * R_MOLAR_VOLUME / MOLAR_MASS[CO]
        if _is_mass_unit(u):
            return (value / 1000) * R_MOLAR_VOLUME / MOLAR_MASS[CO]
        return None

    return None


def to_mass_concentration(pollutant: str, concentration: float) -> float:
    """Inverse of :func:`normalize` for the mass units used by the forecast feed.

    PM2.5, O3 and NO2 map to µg/m³ and CO maps to mg/m³.
    """
    p = pollutant.lower()
    if p == PM25:
        return concentration
    if p in (O3, NO2, CO):
        return concentration * MOLAR_MASS[p] / R_MOLAR_VOLUME
    raise ValueError(f"unsupported pollutant: {pollutant}")


__all__ = ["R_MOLAR_VOLUME", "MOLAR_MASS", "normalize", "to_mass_concentration"]
