"""Flask blueprint exposing points of interest for a map viewport."""
from __future__ import annotations

import logging

from flask import Blueprint, jsonify, request

from airspot.hotspots import resolve
from airspot.utils_geo import validate_bounds

logger = logging.getLogger(__name__)

hotspots_bp = Blueprint("hotspots", __name__)


@hotspots_bp.route("/hotspots")
def hotspots():
    args = request.args
    try:
        bounds = validate_bounds(
            args.get("minLat"), args.get("maxLat"), args.get("minLng"), args.get("maxLng")
        )
    except ValueError as exc:
        return jsonify({"error": f"bounds required: minLat,maxLat,minLng,maxLng ({exc})"}), 400

    try:
        found, source = resolve(bounds)
    except Exception as exc:  # pylint: disable=broad-except
        logger.exception("Hotspot lookup failed: %s", exc)
        return jsonify({"error": "hotspots_failed", "details": str(exc)}), 500
    logger.info("Resolved %d hotspots from %s", len(found), source)

    resp = jsonify({"hotspots": [h.to_dict() for h in found], "source": source})
    resp.headers["Cache-Control"] = "public, max-age=300"
    return resp


__all__ = ["hotspots_bp"]
