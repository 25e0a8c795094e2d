"""Flask blueprint exposing the manual category predictor."""
from __future__ import annotations

import logging

from flask import Blueprint, jsonify, request

from airspot import config
from airspot.calculator import UNKNOWN, tip_for
from airspot.prediction import clamp_inputs, nearest_city, predict_category

logger = logging.getLogger(__name__)

predict_bp = Blueprint("predict", __name__)


@predict_bp.route("/predict", methods=["POST"])
def predict():
    body = request.get_json(silent=True)
    if body is None:
        body = {}
    if not isinstance(body, dict):
        return jsonify({"error": "request body must be a JSON object"}), 400

    inputs = clamp_inputs(body)

    base = config.backend_url()
    if not base:
        return jsonify({"error": "PY_BACKEND_URL not set"}), 500

    # shares the Unknown advice used by /aq
    category = predict_category(inputs, inputs["lat"], inputs["lng"], base_url=base) or UNKNOWN
    city = nearest_city(inputs["lat"], inputs["lng"], base_url=base)

    resp = jsonify(
        {
            "inputs": inputs,
            "category": category,
            "tip": tip_for(category),
            "nearestCity": city,
        }
    )
    resp.headers["Cache-Control"] = "no-store"
    return resp


__all__ = ["predict_bp"]
