"""US EPA concentration breakpoints for the supported pollutants."""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Tuple

PM25 = "pm25"
O3 = "o3"
NO2 = "no2"
CO = "co"

POLLUTANTS: Tuple[str, ...] = (PM25, O3, NO2, CO)

# canonical unit per pollutant table
CANONICAL_UNITS: Mapping[str, str] = MappingProxyType(
    {PM25: "µg/m³", O3: "ppb", NO2: "ppb", CO: "ppm"}
)


@dataclass(frozen=True)
class Breakpoint:
    """One segment of a concentration to index mapping."""

    concentration_low: float
    concentration_high: float
    index_low: int
    index_high: int


def _table(*rows: Tuple[float, float, int, int]) -> Tuple[Breakpoint, ...]:
    return tuple(Breakpoint(*row) for row in rows)


PM25_TABLE = _table(
    (0.0, 12.0, 0, 50),
    (12.1, 35.4, 51, 100),
    (35.5, 55.4, 101, 150),
    (55.5, 150.4, 151, 200),
    (150.5, 250.4, 201, 300),
    (250.5, 500.4, 301, 500),
)

O3_8H_PPB_TABLE = _table(
    (0, 54, 0, 50),
    (55, 70, 51, 100),
    (71, 85, 101, 150),
    (86, 105, 151, 200),
    (106, 200, 201, 300),
    (201, 604, 301, 500),
)

NO2_1H_PPB_TABLE = _table(
    (0, 53, 0, 50),
    (54, 100, 51, 100),
    (101, 360, 101, 150),
    (361, 649, 151, 200),
    (650, 1249, 201, 300),
    (1250, 2049, 301, 500),
)

CO_8H_PPM_TABLE = _table(
    (0.0, 4.4, 0, 50),
    (4.5, 9.4, 51, 100),
    (9.5, 12.4, 101, 150),
    (12.5, 15.4, 151, 200),
    (15.5, 30.4, 201, 300),
    (30.5, 50.4, 301, 500),
)

TABLES: Mapping[str, Tuple[Breakpoint, ...]] = MappingProxyType(
    {
        PM25: PM25_TABLE,
        O3: O3_8H_PPB_TABLE,
        NO2: NO2_1H_PPB_TABLE,
        CO: CO_8H_PPM_TABLE,
    }
)


__all__ = [
    "Breakpoint",
    "PM25",
    "O3",
    "NO2",
    "CO",
    "POLLUTANTS",
    "CANONICAL_UNITS",
    "PM25_TABLE",
    "O3_8H_PPB_TABLE",
    "NO2_1H_PPB_TABLE",
    "CO_8H_PPM_TABLE",
    "TABLES",
]
