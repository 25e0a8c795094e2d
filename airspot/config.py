"""Environment driven settings for the airspot service."""
from __future__ import annotations

import os

from dotenv import load_dotenv

# Load environment variables from .env if available
load_dotenv()

OPENAQ_URL = os.environ.get("OPENAQ_URL", "https://api.openaq.org/v2/measurements")
OPEN_METEO_URL = os.environ.get(
    "OPEN_METEO_URL", "https://air-quality-api.open-meteo.com/v1/air-quality"
)
OVERPASS_URL = os.environ.get("OVERPASS_URL", "https://overpass-api.de/api/interpreter")
WIKIPEDIA_URL = os.environ.get("WIKIPEDIA_URL", "https://en.wikipedia.org/w/api.php")

UPSTREAM_TIMEOUT = float(os.environ.get("UPSTREAM_TIMEOUT", "10"))

# outbound revalidation windows, seconds
OPENAQ_TTL = 30
OPEN_METEO_TTL = 30
SERIES_TTL = 60
OVERPASS_TTL = 300
WIKIPEDIA_TTL = 300


def openaq_api_key() -> str | None:
    return os.environ.get("OPENAQ_API_KEY") or None


def backend_url() -> str | None:
    """Base URL of the prediction backend, without a trailing slash."""
    base = os.environ.get("PY_BACKEND_URL")
    if not base:
        return None
    return base.rstrip("/")


def secret_key() -> str:
    return os.environ.get("AIRSPOT_SECRET_KEY", "dev")


__all__ = [
    "OPENAQ_URL",
    "OPEN_METEO_URL",
    "OVERPASS_URL",
    "WIKIPEDIA_URL",
    "UPSTREAM_TIMEOUT",
    "OPENAQ_TTL",
    "OPEN_METEO_TTL",
    "SERIES_TTL",
    "OVERPASS_TTL",
    "WIKIPEDIA_TTL",
    "openaq_api_key",
    "backend_url",
    "secret_key",
]
