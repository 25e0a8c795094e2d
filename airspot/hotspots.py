"""Named points of interest inside a map viewport."""
from __future__ import annotations

import logging
import re
from typing import Iterable, List, Tuple

from . import sources
from .schemas import Bounds, GeoSearchPage, Hotspot, OverpassElement
from .upstream import UpstreamError
from .utils_geo import bbox_center, haversine_km

logger = logging.getLogger(__name__)

KIND_TAGS = ("tourism", "historic", "natural", "leisure")
HIGH_VALUE_KINDS = re.compile(r"attraction|viewpoint|museum")
DEDUPE_KM = 0.3
PRIMARY_LIMIT = 80
FALLBACK_LIMIT = 50
FALLBACK_SCORE = 3


def element_kind(tags) -> str:
    for tag in KIND_TAGS:
        if tags.get(tag):
            return str(tags[tag])
    return "poi"


def score(tags, kind: str) -> int:
    points = 0
    if tags.get("wikidata"):
        points += 5
    if tags.get("wikipedia"):
        points += 5
    if HIGH_VALUE_KINDS.search(kind):
        points += 2
    return points


def to_hotspot(element: OverpassElement) -> Hotspot:
    kind = element_kind(element.tags)
    return Hotspot(
        id=f"{element.type}/{element.id}",
        name=str(element.tags["name"]),
        lat=element.lat,
        lng=element.lon,
        kind=kind,
        score=score(element.tags, kind),
        source="overpass",
    )


def page_to_hotspot(page: GeoSearchPage) -> Hotspot:
    return Hotspot(
        id=f"wiki/{page.pageid}",
        name=page.title,
        lat=page.lat,
        lng=page.lon,
        kind="wiki",
        score=FALLBACK_SCORE,
        source="wikipedia",
    )


def dedupe_by_name_proximity(items: Iterable[Hotspot], max_km: float = DEDUPE_KM) -> List[Hotspot]:
    """Drop entries sharing a name with an earlier entry within ``max_km``."""
    kept: List[Hotspot] = []
    for item in items:
        key = item.name.strip().lower()
        clash = any(
            other.name.strip().lower() == key
            and haversine_km(other.lat, other.lng, item.lat, item.lng) <= max_km
            for other in kept
        )
        if not clash:
            kept.append(item)
    return kept


def primary_hotspots(bounds: Bounds) -> List[Hotspot]:
    items = [to_hotspot(el) for el in sources.fetch_overpass(bounds)]
    unique = dedupe_by_name_proximity(items)
    unique.sort(key=lambda h: h.score, reverse=True)
    return unique[:PRIMARY_LIMIT]


def fallback_hotspots(bounds: Bounds) -> List[Hotspot]:
    lat, lng = bbox_center(bounds)
    items = [page_to_hotspot(page) for page in sources.fetch_geosearch(lat, lng)]
    return dedupe_by_name_proximity(items)[:FALLBACK_LIMIT]


def resolve(bounds: Bounds) -> Tuple[List[Hotspot], str]:
    """Hotspots for ``bounds`` and the source that produced them.

    The encyclopedia geosearch is used only when the feature query fails or
    comes back empty. Never raises for upstream problems.
    """
    try:
        found = primary_hotspots(bounds)
    except UpstreamError as exc:
        logger.warning("Feature query failed, falling back: %s", exc)
        found = []
    if found:
        return found, "primary"

    try:
        found = fallback_hotspots(bounds)
    except UpstreamError as exc:
        logger.warning("Geosearch fallback failed: %s", exc)
        found = []
    if found:
        return found, "fallback"
    return [], "none"


__all__ = [
    "element_kind",
    "score",
    "to_hotspot",
    "page_to_hotspot",
    "dedupe_by_name_proximity",
    "primary_hotspots",
    "fallback_hotspots",
    "resolve",
]
