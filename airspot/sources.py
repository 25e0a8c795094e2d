"""Adapters for the third-party endpoints the service reads from."""
from __future__ import annotations

import logging
from typing import Any, Dict, List

from . import config
from .breakpoints import POLLUTANTS
from .schemas import (
    Bounds,
    GeoSearchPage,
    OpenMeteoHourly,
    OverpassElement,
    Reading,
    parse_openaq_readings,
)
from .upstream import get_json, post_form

logger = logging.getLogger(__name__)

OPEN_METEO_HOURLY = "pm2_5,carbon_monoxide,nitrogen_dioxide,ozone"
GEOSEARCH_RADIUS_M = 25000
GEOSEARCH_LIMIT = 50
COORD_DECIMALS = 4


def _coord(value: float) -> float:
    return round(float(value), COORD_DECIMALS)


def fetch_openaq(lat: float, lng: float, radius: float) -> List[Reading]:
    """Latest measurements near a point, most recent first."""
    params = {
        "coordinates": f"{_coord(lat)},{_coord(lng)}",
        "radius": int(radius),
        "limit": 400,
        "order_by": "datetime",
        "sort": "desc",
        "parameters": ",".join(POLLUTANTS),
    }
    headers = {}
    api_key = config.openaq_api_key()
    if api_key:
        headers["X-API-Key"] = api_key
    payload = get_json(
        config.OPENAQ_URL,
        params=params,
        headers=headers or None,
        ttl=config.OPENAQ_TTL,
        label="OpenAQ",
    )
    return parse_openaq_readings(payload)


def fetch_open_meteo(lat: float, lng: float, past_days: int = 0) -> OpenMeteoHourly:
    params: Dict[str, Any] = {
        "latitude": _coord(lat),
        "longitude": _coord(lng),
        "hourly": OPEN_METEO_HOURLY,
        "timezone": "UTC",
    }
    ttl = config.OPEN_METEO_TTL
    if past_days:
        params["past_days"] = past_days
        ttl = config.SERIES_TTL
    payload = get_json(config.OPEN_METEO_URL, params=params, ttl=ttl, label="OpenMeteo")
    return OpenMeteoHourly.from_json(payload)


def overpass_query(bounds: Bounds) -> str:
    """Named tourism, historic, natural and park features inside ``bounds``."""
    # Overpass bbox order: south, west, north, east
    box = f"({bounds.min_lat},{bounds.min_lng},{bounds.max_lat},{bounds.max_lng})"
    return "\n".join(
        [
            "[out:json][timeout:25];",
            "(",
            f'  node["tourism"~"attraction|viewpoint|museum|zoo|aquarium"]["name"]{box};',
            f'  way["tourism"~"attraction|viewpoint|museum"]["name"]{box};',
            f'  node["historic"]["name"]{box};',
            f'  node["natural"~"peak|beach|waterfall"]["name"]{box};',
            f'  node["leisure"="park"]["name"]{box};',
            ");",
            "out center 200;",
        ]
    )


def fetch_overpass(bounds: Bounds) -> List[OverpassElement]:
    payload = post_form(
        config.OVERPASS_URL,
        data={"data": overpass_query(bounds)},
        ttl=config.OVERPASS_TTL,
        label="Overpass",
    )
    elements = payload.get("elements") if isinstance(payload, dict) else None
    if not isinstance(elements, list):
        return []
    parsed = (OverpassElement.from_json(el) for el in elements)
    return [el for el in parsed if el is not None]


def fetch_geosearch(lat: float, lng: float) -> List[GeoSearchPage]:
    params = {
        "action": "query",
        "list": "geosearch",
        "gscoord": f"{_coord(lat)}|{_coord(lng)}",
        "gsradius": GEOSEARCH_RADIUS_M,
        "gslimit": GEOSEARCH_LIMIT,
        "format": "json",
    }
    payload = get_json(config.WIKIPEDIA_URL, params=params, ttl=config.WIKIPEDIA_TTL, label="Wikipedia")
    query = payload.get("query") if isinstance(payload, dict) else None
    pages = query.get("geosearch") if isinstance(query, dict) else None
    if not isinstance(pages, list):
        return []
    parsed = (GeoSearchPage.from_json(page) for page in pages)
    return [page for page in parsed if page is not None]


__all__ = [
    "fetch_openaq",
    "fetch_open_meteo",
    "overpass_query",
    "fetch_overpass",
    "fetch_geosearch",
]
