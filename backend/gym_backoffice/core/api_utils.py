"""
Common API utilities for consistent request parsing and error bodies.
"""

from typing import Any, Dict, List, Optional

from flask import jsonify, request

from gym_backoffice.core.exceptions import NotFoundError
from gym_backoffice.core.validation import parse_id


def api_error(
    message: str, status_code: int, errors: Optional[List[Dict[str, str]]] = None
) -> tuple:
    """
    Standard error body: ``{"message": ...}`` plus field ``errors`` if any.

    Returns:
        Tuple of (json_response, status_code)
    """
    body: Dict[str, Any] = {"message": message}
    if errors:
        body["errors"] = errors
    return jsonify(body), status_code


def json_body() -> Optional[Any]:
    """Parsed JSON body, or None when it is missing or malformed."""
    return request.get_json(silent=True)


def parse_path_id(raw_id: str, entity: str) -> int:
    """Turn a decimal id taken from the URL into an int.

    Anything that cannot name a row (non-numeric, zero, out of 64-bit
    range) is reported the same way as a row that does not exist.
    """
    parsed = parse_id(raw_id)
    if parsed is None:
        raise NotFoundError(entity)
    return parsed


def query_flag(name: str) -> bool:
    return request.args.get(name, "").strip().lower() in ("true", "1", "yes")
