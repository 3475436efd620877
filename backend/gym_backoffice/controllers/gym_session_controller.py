"""
Gym entrance/exit endpoints.

POST /api/gym-sessions           request entry: {clientId, lockerNumber?}
PUT  /api/gym-sessions/<id>/exit request exit
GET  /api/gym-sessions           all visits; ?active=true for open ones only
GET  /api/gym-sessions/<id>      one visit
"""

from flask import Blueprint, jsonify
from flask_login import login_required

from gym_backoffice.core.api_utils import json_body, parse_path_id, query_flag
from gym_backoffice.core.validation import validate_payload
from gym_backoffice.db.session import SessionLocal
from gym_backoffice.repositories.client_repo import ClientRepository
from gym_backoffice.repositories.membership_repo import MembershipRepository
from gym_backoffice.repositories.visit_repo import VisitRepository
from gym_backoffice.schemas import serialize_visit
from gym_backoffice.services.admission_gate import AdmissionGate
from gym_backoffice.services.eligibility_service import MembershipEligibilityService
from gym_backoffice.services.presence_ledger import PresenceLedger

gym_session_bp = Blueprint("gym_sessions", __name__, url_prefix="/api/gym-sessions")

VISIT_LABEL = "Gym session"


def _ledger(db) -> PresenceLedger:
    return PresenceLedger(VisitRepository(db))


def _gate(db) -> AdmissionGate:
    eligibility = MembershipEligibilityService(
        ClientRepository(db), MembershipRepository(db)
    )
    return AdmissionGate(eligibility, _ledger(db))


@gym_session_bp.route("", methods=["GET"])
@login_required
def list_gym_sessions():
    db = SessionLocal()
    try:
        ledger = _ledger(db)
        if query_flag("active"):
            visits = ledger.list_open_visits()
        else:
            visits = ledger.list_all_visits()
        return jsonify([serialize_visit(v) for v in visits]), 200
    finally:
        db.close()


@gym_session_bp.route("/<visit_id>", methods=["GET"])
@login_required
def get_gym_session(visit_id: str):
    parsed_id = parse_path_id(visit_id, VISIT_LABEL)
    db = SessionLocal()
    try:
        return jsonify(serialize_visit(_ledger(db).get_visit(parsed_id))), 200
    finally:
        db.close()


@gym_session_bp.route("", methods=["POST"])
@login_required
def enter_gym():
    data = validate_payload("gym_entry", json_body())
    db = SessionLocal()
    try:
        visit = _gate(db).request_entry(
            data["client_id"], locker_number=data.get("locker_number")
        )
        return jsonify(serialize_visit(visit)), 201
    finally:
        db.close()


@gym_session_bp.route("/<visit_id>/exit", methods=["PUT"])
@login_required
def exit_gym(visit_id: str):
    parsed_id = parse_path_id(visit_id, VISIT_LABEL)
    db = SessionLocal()
    try:
        return jsonify(serialize_visit(_gate(db).request_exit(parsed_id))), 200
    finally:
        db.close()
