"""
Application factory for the gym back office API.

``create_app`` wires logging, bearer token auth, rate limiting, the
database schema, every blueprint and the JSON error handlers.
"""

import logging
import os

from dotenv import load_dotenv
from flask import Flask
from werkzeug.exceptions import HTTPException

from gym_backoffice.core.api_utils import api_error
from gym_backoffice.core.config import (
    get_environment,
    get_log_json,
    get_log_level,
    get_log_to_file,
    get_rate_limit_enabled,
    get_sql_echo,
    is_production,
    is_testing,
    log_timezone_config,
)
from gym_backoffice.core.exceptions import GymBackofficeError
from gym_backoffice.core.validation import ValidationError


def load_environment() -> bool:
    """Load ``.env`` unless DATABASE_URL is already defined by the environment."""
    if os.getenv("DATABASE_URL"):
        return False
    load_dotenv()
    return True


load_environment()

WEAK_FLASK_SECRETS = ("dev-secret-change-me",)


def _secret_key() -> str:
    secret = os.getenv("FLASK_SECRET_KEY", "dev-secret-change-me")
    if is_production() and (secret in WEAK_FLASK_SECRETS or len(secret) < 32):
        raise ValueError(
            "Production deployment requires strong FLASK_SECRET_KEY (min 32 chars)."
        )
    return secret


def register_error_handlers(app: Flask) -> None:
    logger = logging.getLogger(__name__)

    @app.errorhandler(ValidationError)
    def handle_validation_error(e: ValidationError):
        return api_error(e.message, 400, e.errors)

    @app.errorhandler(GymBackofficeError)
    def handle_domain_error(e: GymBackofficeError):
        return api_error(e.message, e.status_code)

    @app.errorhandler(404)
    def handle_not_found(e):
        return api_error("Route not found", 404)

    @app.errorhandler(405)
    def handle_method_not_allowed(e):
        return api_error("Method not allowed", 405)

    @app.errorhandler(429)
    def handle_rate_limited(e):
        return api_error("Too many requests, please try again later", 429)

    @app.errorhandler(Exception)
    def handle_unexpected_error(e: Exception):
        if isinstance(e, HTTPException):
            return api_error(e.description or e.name, e.code or 500)
        logger.error(
            "Unhandled error",
            extra={"context": {"error": str(e), "type": type(e).__name__}},
            exc_info=True,
        )
        return api_error("Internal server error", 500)


def create_app() -> Flask:
    app = Flask(__name__)

    from gym_backoffice.core.logging_config import setup_logging

    setup_logging(
        app,
        log_level=get_log_level(),
        enable_sql_echo=get_sql_echo(),
        log_to_file=get_log_to_file(),
        use_json_format=get_log_json(),
    )
    logger = logging.getLogger(__name__)
    log_timezone_config()

    app.config["SECRET_KEY"] = _secret_key()
    app.config["TESTING"] = is_testing()
    app.json.sort_keys = False

    from gym_backoffice.core.auth import init_auth

    init_auth(app)

    from gym_backoffice.core.limiter_config import limiter

    limiter.init_app(app)
    if not get_rate_limit_enabled():
        limiter.enabled = False
        logger.info(
            "Rate limiting disabled", extra={"context": {"testing": is_testing()}}
        )

    from gym_backoffice.db.session import create_tables

    create_tables()

    from gym_backoffice.controllers import ALL_BLUEPRINTS

    for blueprint in ALL_BLUEPRINTS:
        app.register_blueprint(blueprint)

    register_error_handlers(app)

    logger.info(
        "Application created",
        extra={
            "context": {
                "environment": get_environment(),
                "blueprints": [bp.name for bp in ALL_BLUEPRINTS],
            }
        },
    )
    return app
