"""Flask blueprint exposing point AQI and hourly trend endpoints."""
from __future__ import annotations

import logging

from flask import Blueprint, jsonify, request

from airspot import selector, series
from airspot.schemas import finite_number
from airspot.upstream import UpstreamError
from airspot.utils_geo import parse_point

logging.basicConfig(level=logging.INFO)
log = logging.getLogger(__name__)

bp = Blueprint("main", __name__)


def _radius(raw) -> float:
    value = finite_number(raw) if raw not in (None, "") else None
    if value is None or value <= 0:
        return selector.DEFAULT_RADIUS_M
    return value


@bp.route("/aq")
def air_quality():
    try:
        lat, lng = parse_point(request.args.get("lat"), request.args.get("lng"))
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400

    radius = _radius(request.args.get("radius"))
    try:
        result = selector.select_aqi(lat, lng, radius)
    except Exception as exc:  # pylint: disable=broad-except
        log.exception("AQ lookup failed: %s", exc)
        return jsonify({"error": "aq_failed", "details": str(exc)}), 500
    log.info("AQ %s,%s -> source=%s overall=%s", lat, lng, result.source, result.overall)

    resp = jsonify(result.to_dict())
    resp.headers["Cache-Control"] = "public, max-age=30"
    return resp


@bp.route("/aq/series")
def air_quality_series():
    try:
        lat, lng = parse_point(request.args.get("lat"), request.args.get("lng"))
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400

    hours = series.clamp_hours(request.args.get("hours"))
    try:
        payload = series.fetch_series(lat, lng, hours)
    except UpstreamError as exc:
        log.warning("Series fetch failed for %s,%s: %s", lat, lng, exc)
        return jsonify({"error": str(exc) or "series fetch failed"}), 500
    except Exception as exc:  # pylint: disable=broad-except
        log.exception("Series build failed: %s", exc)
        return jsonify({"error": "series_failed", "details": str(exc)}), 500

    resp = jsonify(payload)
    resp.headers["Cache-Control"] = "public, max-age=60"
    return resp


__all__ = ["bp"]
