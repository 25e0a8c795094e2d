"""Typed shapes for upstream payloads and request-scoped values.

Upstream items are pydantic models. An item that fails validation is dropped
(``from_json`` returns ``None``), so a bad upstream payload reads as "no usable
data" instead of raising.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    FiniteFloat,
    TypeAdapter,
    ValidationError,
    field_validator,
    model_validator,
)

from .breakpoints import CO, NO2, O3, PM25, POLLUTANTS

_FINITE = TypeAdapter(FiniteFloat)


def finite_number(value: Any) -> Optional[float]:
    """``value`` as a finite float, or ``None``."""
    if isinstance(value, bool) or value is None:
        return None
    try:
        return _FINITE.validate_python(value)
    except ValidationError:
        return None


@dataclass(frozen=True)
class Reading:
    pollutant: str
    value: float
    unit: str


class OpenAQMeasurement(BaseModel):
    """One entry of the measurement provider's ``results`` array."""

    model_config = ConfigDict(frozen=True)

    parameter: str
    value: FiniteFloat
    unit: str = ""

    @field_validator("parameter", mode="before")
    @classmethod
    def _known_pollutant(cls, v: Any) -> str:
        parameter = str(v or "").lower()
        if parameter not in POLLUTANTS:
            raise ValueError(f"unsupported parameter {v!r}")
        return parameter

    @field_validator("value", mode="before")
    @classmethod
    def _not_bool(cls, v: Any) -> Any:
        if isinstance(v, bool):
            raise ValueError("boolean is not a measurement")
        return v

    @field_validator("unit", mode="before")
    @classmethod
    def _unit_text(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @classmethod
    def from_json(cls, item: Any) -> Optional["OpenAQMeasurement"]:
        try:
            return cls.model_validate(item)
        except ValidationError:
            return None

    def to_reading(self) -> Reading:
        return Reading(pollutant=self.parameter, value=self.value, unit=self.unit)


class OpenAQResponse(BaseModel):
    results: List[Any] = Field(default_factory=list)

    @field_validator("results", mode="before")
    @classmethod
    def _list_only(cls, v: Any) -> Any:
        return v if isinstance(v, list) else []


def parse_openaq_readings(payload: Any) -> List[Reading]:
    """Readings in the order the provider returned them."""
    try:
        response = OpenAQResponse.model_validate(payload)
    except ValidationError:
        return []
    readings = []
    for item in response.results:
        measurement = OpenAQMeasurement.from_json(item)
        if measurement is not None:
            readings.append(measurement.to_reading())
    return readings


# forecast feed variable -> (pollutant, unit)
OPEN_METEO_VARIABLES: Dict[str, tuple] = {
    "pm2_5": (PM25, "µg/m³"),
    "ozone": (O3, "µg/m³"),
    "nitrogen_dioxide": (NO2, "µg/m³"),
    "carbon_monoxide": (CO, "mg/m³"),
}


def _samples(v: Any) -> List[Optional[float]]:
    if not isinstance(v, list):
        return []
    return [finite_number(sample) for sample in v]


class OpenMeteoHourlyBlock(BaseModel):
    """The raw ``hourly`` object; unusable samples become ``None``."""

    time: List[str] = Field(default_factory=list)
    pm2_5: List[Optional[float]] = Field(default_factory=list)
    ozone: List[Optional[float]] = Field(default_factory=list)
    nitrogen_dioxide: List[Optional[float]] = Field(default_factory=list)
    carbon_monoxide: List[Optional[float]] = Field(default_factory=list)

    @field_validator("time", mode="before")
    @classmethod
    def _times(cls, v: Any) -> List[str]:
        return [str(t) for t in v] if isinstance(v, list) else []

    @field_validator("pm2_5", "ozone", "nitrogen_dioxide", "carbon_monoxide", mode="before")
    @classmethod
    def _finite_samples(cls, v: Any) -> List[Optional[float]]:
        return _samples(v)


class OpenMeteoHourly(BaseModel):
    """Hourly arrays of the gridded forecast feed, keyed by pollutant."""

    time: List[str] = Field(default_factory=list)
    values: Dict[str, List[Optional[float]]] = Field(
        default_factory=lambda: {p: [] for p in POLLUTANTS}
    )
    units: Dict[str, str] = Field(
        default_factory=lambda: {p: u for p, u in OPEN_METEO_VARIABLES.values()}
    )

    @classmethod
    def from_json(cls, payload: Any) -> "OpenMeteoHourly":
        hourly = payload.get("hourly") if isinstance(payload, dict) else None
        try:
            block = OpenMeteoHourlyBlock.model_validate(hourly)
        except ValidationError:
            return cls()
        values = {
            pollutant: getattr(block, variable)
            for variable, (pollutant, _unit) in OPEN_METEO_VARIABLES.items()
        }
        return cls(time=block.time, values=values)

    def latest(self, pollutant: str, lookback: int = 48) -> Optional[float]:
        """Most recent finite value within the last ``lookback`` samples."""
        series = self.values.get(pollutant) or []
        start = max(0, len(series) - lookback)
        for value in reversed(series[start:]):
            if value is not None:
                return value
        return None

    def aligned_length(self) -> int:
        return min([len(self.time)] + [len(self.values.get(p) or []) for p in POLLUTANTS])


class OverpassElement(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str = "node"
    id: Any = None
    lat: FiniteFloat
    lon: FiniteFloat
    tags: Dict[str, str]

    @model_validator(mode="before")
    @classmethod
    def _center_position(cls, data: Any) -> Any:
        # ways and relations carry their position in "center"
        if not isinstance(data, dict):
            return data
        center = data.get("center")
        if isinstance(center, dict):
            data = dict(data)
            if data.get("lat") is None:
                data["lat"] = center.get("lat")
            if data.get("lon") is None:
                data["lon"] = center.get("lon")
        return data

    @field_validator("tags")
    @classmethod
    def _named(cls, v: Dict[str, str]) -> Dict[str, str]:
        if not v.get("name"):
            raise ValueError("feature has no name")
        return v

    @classmethod
    def from_json(cls, element: Any) -> Optional["OverpassElement"]:
        try:
            return cls.model_validate(element)
        except ValidationError:
            return None


class GeoSearchPage(BaseModel):
    model_config = ConfigDict(frozen=True)

    pageid: Any = None
    title: str = Field(min_length=1)
    lat: FiniteFloat
    lon: FiniteFloat

    @classmethod
    def from_json(cls, item: Any) -> Optional["GeoSearchPage"]:
        try:
            return cls.model_validate(item)
        except ValidationError:
            return None


@dataclass(frozen=True)
class Bounds:
    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float


@dataclass
class Hotspot:
    id: str
    name: str
    lat: float
    lng: float
    kind: str
    score: int
    source: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = [
    "finite_number",
    "Reading",
    "OpenAQMeasurement",
    "OpenAQResponse",
    "parse_openaq_readings",
    "OPEN_METEO_VARIABLES",
    "OpenMeteoHourlyBlock",
    "OpenMeteoHourly",
    "OverpassElement",
    "GeoSearchPage",
    "Bounds",
    "Hotspot",
]
