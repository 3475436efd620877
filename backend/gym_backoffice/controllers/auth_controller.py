from flask import Blueprint, jsonify
from flask_login import login_required

from gym_backoffice.core.api_utils import json_body
from gym_backoffice.core.auth import get_current_admin
from gym_backoffice.core.exceptions import NotFoundError
from gym_backoffice.core.limiter_config import LOGIN_RATE_LIMIT, limiter
from gym_backoffice.core.validation import validate_payload
from gym_backoffice.db.session import SessionLocal
from gym_backoffice.repositories.admin_repo import AdminRepository
from gym_backoffice.schemas import serialize_admin
from gym_backoffice.services.auth_service import AuthService

auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


@auth_bp.route("/login", methods=["POST"])
@limiter.limit(LOGIN_RATE_LIMIT)
def login():
    """Exchange adminID + password for a bearer token."""
    data = validate_payload("login", json_body())
    db = SessionLocal()
    try:
        token, admin = AuthService(AdminRepository(db)).login(
            data["admin_id"], data["password"]
        )
        return jsonify({"token": token, "admin": serialize_admin(admin)}), 200
    finally:
        db.close()


@auth_bp.route("/me", methods=["GET"])
@login_required
def me():
    """Profile of the admin the bearer token belongs to."""
    admin = get_current_admin()
    if admin is None:
        raise NotFoundError("Admin")
    return jsonify(serialize_admin(admin)), 200
