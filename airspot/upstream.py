"""Outbound HTTP boundary shared by the upstream adapters."""
from __future__ import annotations

import json
import logging
import time
from typing import Any, Dict, Mapping, Optional, Tuple

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from . import config

logger = logging.getLogger(__name__)


class UpstreamError(RuntimeError):
    """A third-party endpoint failed or returned something unusable."""


# simple in-memory cache
CACHE: Dict[Tuple, Tuple[float, Any]] = {}  # key -> (expires_ts, data)
CACHE_MAX_ENTRIES = 512
COORD_QUANTUM = 1e-4  # degrees, about 11 m


def _cache_get(key: Tuple) -> Any:
    item = CACHE.get(key)
    if not item:
        return None
    exp, data = item
    if exp < time.time():
        CACHE.pop(key, None)
        return None
    return data


def _sweep(now: float) -> None:
    for key in [k for k, (exp, _) in CACHE.items() if exp < now]:
        CACHE.pop(key, None)
    # still full: drop the entries closest to expiry
    overflow = len(CACHE) - CACHE_MAX_ENTRIES + 1
    if overflow > 0:
        for key in sorted(CACHE, key=lambda k: CACHE[k][0])[:overflow]:
            CACHE.pop(key, None)


def _cache_set(key: Tuple, data: Any, ttl: float) -> None:
    now = time.time()
    _sweep(now)
    CACHE[key] = (now + ttl, data)


def clear_cache() -> None:
    CACHE.clear()


def _quantize(val: Any, q: float = COORD_QUANTUM) -> Any:  # reduces cache key fragmentation
    if isinstance(val, float):
        return round(round(val / q) * q, 6)
    return val


def _cache_key(method: str, url: str, params: Optional[Mapping[str, Any]], data: Any) -> Tuple:
    params = {k: _quantize(v) for k, v in (params or {}).items()}
    payload = json.dumps({"params": params, "data": data}, sort_keys=True, default=str)
    return (method, url, payload)


# single attempt per upstream call
def _make_session() -> requests.Session:
    s = requests.Session()
    adapter = HTTPAdapter(max_retries=Retry(total=0, raise_on_status=False))
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    s.headers.update({"User-Agent": "airspot/0.1", "Accept": "application/json"})
    return s


SESSION = _make_session()


def request_json(
    method: str,
    url: str,
    params: Optional[Mapping[str, Any]] = None,
    data: Optional[Mapping[str, Any]] = None,
    headers: Optional[Mapping[str, str]] = None,
    ttl: float = 0,
    timeout: Optional[float] = None,
    label: str = "upstream",
) -> Any:
    """Perform one request and decode its JSON body.

    Responses are cached for ``ttl`` seconds when ``ttl`` is positive. Any
    transport failure, non-2xx status or undecodable body raises
    :class:`UpstreamError`.
    """
    key = _cache_key(method, url, params, data)
    if ttl > 0:
        cached = _cache_get(key)
        if cached is not None:
            return cached

    try:
        r = SESSION.request(
            method,
            url,
            params=params,
            data=data,
            headers=headers,
            timeout=timeout if timeout is not None else config.UPSTREAM_TIMEOUT,
        )
    except requests.RequestException as exc:
        logger.warning("%s %s failed: %s", method, url, exc)
        raise UpstreamError(f"{label} unreachable: {exc}") from exc

    if not 200 <= r.status_code < 300:
        logger.warning("%s %s returned HTTP %s; body=%s", method, url, r.status_code, r.text[:300])
        raise UpstreamError(f"{label} HTTP {r.status_code}")

    try:
        payload = r.json()
    except ValueError as exc:
        raise UpstreamError(f"{label} returned invalid JSON") from exc

    if ttl > 0:
        _cache_set(key, payload, ttl)
    return payload


def get_json(url: str, params: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> Any:
    return request_json("GET", url, params=params, **kwargs)


def post_form(url: str, data: Mapping[str, Any], **kwargs: Any) -> Any:
    return request_json("POST", url, data=data, **kwargs)


__all__ = ["UpstreamError", "SESSION", "request_json", "get_json", "post_form", "clear_cache"]
