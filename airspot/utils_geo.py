"""Geospatial helpers for point and bounding-box queries."""
from __future__ import annotations

import math
from typing import Any, Tuple

from .schemas import Bounds, finite_number

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points on a spherical earth."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(a))


def parse_coordinate(raw: Any, name: str) -> float:
    value = finite_number(raw) if raw not in (None, "") else None
    if value is None:
        raise ValueError(f"{name} must be a finite number")
    return value


def parse_point(raw_lat: Any, raw_lng: Any) -> Tuple[float, float]:
    try:
        return parse_coordinate(raw_lat, "lat"), parse_coordinate(raw_lng, "lng")
    except ValueError as exc:
        raise ValueError(f"lat/lng required: {exc}") from exc


def validate_bounds(min_lat: Any, max_lat: Any, min_lng: Any, max_lng: Any) -> Bounds:
    """Parse and check a bounding box.

    Longitudes are not ordered so that boxes crossing the antimeridian pass.
    """
    bounds = Bounds(
        min_lat=parse_coordinate(min_lat, "minLat"),
        max_lat=parse_coordinate(max_lat, "maxLat"),
        min_lng=parse_coordinate(min_lng, "minLng"),
        max_lng=parse_coordinate(max_lng, "maxLng"),
    )
    if bounds.min_lat > bounds.max_lat:
        raise ValueError("minLat must not exceed maxLat")
    if not all(-90 <= lat <= 90 for lat in (bounds.min_lat, bounds.max_lat)):
        raise ValueError("latitudes must lie within [-90, 90]")
    if not all(-180 <= lng <= 180 for lng in (bounds.min_lng, bounds.max_lng)):
        raise ValueError("longitudes must lie within [-180, 180]")
    return bounds


def wrap_longitude(lng: float) -> float:
    """Map a longitude into [-180, 180)."""
    return (lng + 180) % 360 - 180


def bbox_center(bounds: Bounds) -> Tuple[float, float]:
    """Centre of a box; a box with minLng > maxLng spans the antimeridian."""
    lat = (bounds.min_lat + bounds.max_lat) / 2
    max_lng = bounds.max_lng
    if bounds.min_lng > max_lng:
        max_lng += 360
        return lat, wrap_longitude((bounds.min_lng + max_lng) / 2)
    return lat, (bounds.min_lng + max_lng) / 2


__all__ = [
    "EARTH_RADIUS_KM",
    "haversine_km",
    "parse_coordinate",
    "parse_point",
    "validate_bounds",
    "wrap_longitude",
    "bbox_center",
]
