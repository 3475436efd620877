"""
Blueprint builder for the plain CRUD resources.

Each resource gets the same five routes:

    GET    <prefix>            list, newest first
    POST   <prefix>            create (201)
    GET    <prefix>/<id>       detail
    PUT    <prefix>/<id>       partial update
    DELETE <prefix>/<id>       delete (refused with 409 while referenced)

Validation runs before a database session is opened. Service errors
propagate to the JSON error handlers registered in ``main.create_app``.
"""

from typing import Any, Callable

from flask import Blueprint, jsonify
from flask_login import login_required

from gym_backoffice.core.api_utils import json_body, parse_path_id
from gym_backoffice.core.validation import validate_payload
from gym_backoffice.db.session import SessionLocal
from gym_backoffice.services.crud_service import CrudService

ServiceFactory = Callable[[Any], CrudService]
Serializer = Callable[[Any], dict]


def build_crud_blueprint(
    name: str,
    url_prefix: str,
    entity_type: str,
    entity_label: str,
    make_service: ServiceFactory,
    serializer: Serializer,
) -> Blueprint:
    """
    Args:
        name: blueprint name
        url_prefix: e.g. ``/api/clients``
        entity_type: validator key in ``core.validation.get_validator``
        entity_label: entity name used in "not found" messages
        make_service: builds the service from an open SQLAlchemy session
        serializer: domain entity -> JSON dict
    """
    bp = Blueprint(name, __name__, url_prefix=url_prefix)

    @bp.route("", methods=["GET"])
    @login_required
    def list_items():
        db = SessionLocal()
        try:
            items = make_service(db).list_all()
            return jsonify([serializer(item) for item in items]), 200
        finally:
            db.close()

    @bp.route("", methods=["POST"])
    @login_required
    def create_item():
        data = validate_payload(entity_type, json_body())
        db = SessionLocal()
        try:
            created = make_service(db).create(data)
            return jsonify(serializer(created)), 201
        finally:
            db.close()

    @bp.route("/<item_id>", methods=["GET"])
    @login_required
    def get_item(item_id: str):
        entity_id = parse_path_id(item_id, entity_label)
        db = SessionLocal()
        try:
            return jsonify(serializer(make_service(db).get(entity_id))), 200
        finally:
            db.close()

    @bp.route("/<item_id>", methods=["PUT"])
    @login_required
    def update_item(item_id: str):
        entity_id = parse_path_id(item_id, entity_label)
        changes = validate_payload(entity_type, json_body(), partial=True)
        db = SessionLocal()
        try:
            updated = make_service(db).update(entity_id, changes)
            return jsonify(serializer(updated)), 200
        finally:
            db.close()

    @bp.route("/<item_id>", methods=["DELETE"])
    @login_required
    def delete_item(item_id: str):
        entity_id = parse_path_id(item_id, entity_label)
        db = SessionLocal()
        try:
            make_service(db).delete(entity_id)
            return jsonify({"message": f"{entity_label} deleted successfully"}), 200
        finally:
            db.close()

    return bp
