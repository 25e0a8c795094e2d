"""Bridge to the external categorical prediction backend."""
from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

from . import config
from .schemas import finite_number
from .upstream import UpstreamError, get_json

logger = logging.getLogger(__name__)


def _num(value: Any, default: float = 0.0) -> float:
    number = finite_number(value)
    return default if number is None else number


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def clamp_inputs(body: Mapping[str, Any]) -> Dict[str, float]:
    """Model inputs: sub-indices in [0, 500] and coordinates on the globe.

    Missing or non-numeric fields become 0 before clamping.
    """
    inputs = {p: _clamp(_num(body.get(p)), 0, 500) for p in ("co", "o3", "no2", "pm25")}
    inputs["lat"] = _clamp(_num(body.get("lat")), -90, 90)
    inputs["lng"] = _clamp(_num(body.get("lng")), -180, 180)
    return inputs


def predict_category(
    sub_indices: Mapping[str, Optional[float]],
    lat: float,
    lng: float,
    base_url: Optional[str] = None,
) -> Optional[str]:
    """Category from the model, or ``None`` when unavailable."""
    base = base_url or config.backend_url()
    if not base:
        return None
    params = {p: sub_indices.get(p) or 0 for p in ("co", "o3", "no2", "pm25")}
    params.update({"lat": lat, "lng": lng})
    try:
        payload = get_json(f"{base}/predict", params=params, label="Prediction backend")
    except UpstreamError as exc:
        logger.warning("Model category unavailable: %s", exc)
        return None
    category = payload.get("category") if isinstance(payload, dict) else None
    return str(category) if category else None


def nearest_city(lat: float, lng: float, base_url: Optional[str] = None) -> Optional[Any]:
    """Nearest reference city as reported by the backend."""
    base = base_url or config.backend_url()
    if not base:
        return None
    try:
        return get_json(f"{base}/nearest-city", params={"lat": lat, "lng": lng}, label="Prediction backend")
    except UpstreamError as exc:
        logger.info("Nearest city lookup failed: %s", exc)
        return None


__all__ = ["clamp_inputs", "predict_category", "nearest_city"]
