"""
Health controller - liveness endpoint for monitoring. No authentication.
"""

from flask import Blueprint, jsonify

from gym_backoffice.core.limiter_config import limiter

health_bp = Blueprint("health", __name__, url_prefix="/api/health")


@health_bp.route("", methods=["GET"])
@limiter.exempt
def health_check():
    return jsonify({"status": "ok", "message": "Gym back office API is running"}), 200
