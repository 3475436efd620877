"""
Bearer token authentication for the API.

Every protected route carries ``@login_required``. Flask-Login asks
``load_admin_from_request`` for the caller on each request; it decodes the
``Authorization: Bearer <jwt>`` header and loads the admin it names. There
is no server-side session: the token is the only identity a request has.

When no admin can be loaded, the unauthorized handler answers
401 ``Access token required`` if the header was missing, and
403 ``Invalid or expired token`` if a token was sent but rejected.
"""

import logging
from typing import Optional

from flask import Flask, g, jsonify
from flask_login import LoginManager, current_user

from gym_backoffice.core.security import get_admin_from_token
from gym_backoffice.db.session import SessionLocal
from gym_backoffice.domain.entities import Admin
from gym_backoffice.repositories.admin_repo import AdminRepository

logger = logging.getLogger(__name__)

login_manager = LoginManager()

AUTH_MISSING = "missing"
AUTH_INVALID = "invalid"


def _bearer_token(request) -> Optional[str]:
    auth_header = request.headers.get("Authorization", "")
    scheme, _, token = auth_header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


@login_manager.request_loader
def load_admin_from_request(request) -> Optional[Admin]:
    token = _bearer_token(request)
    if token is None:
        g.auth_failure = AUTH_MISSING
        return None

    identity = get_admin_from_token(token)
    if identity is None:
        g.auth_failure = AUTH_INVALID
        return None

    db = SessionLocal()
    try:
        admin = AdminRepository(db).get_by_id(identity["id"])
    finally:
        db.close()

    if admin is None:
        # Token signed for an admin that has since been removed
        g.auth_failure = AUTH_INVALID
        return None
    return admin


@login_manager.unauthorized_handler
def unauthorized():
    if g.get("auth_failure") == AUTH_INVALID:
        logger.info("Rejected invalid or expired token")
        return jsonify({"message": "Invalid or expired token"}), 403
    return jsonify({"message": "Access token required"}), 401


def init_auth(app: Flask) -> None:
    login_manager.init_app(app)


def get_current_admin() -> Optional[Admin]:
    """The admin authenticated for this request, or None."""
    if current_user and getattr(current_user, "is_authenticated", False):
        return current_user._get_current_object()
    return None
