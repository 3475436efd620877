from flask import Blueprint, jsonify
from flask_login import login_required

from gym_backoffice.db.session import SessionLocal
from gym_backoffice.repositories.client_repo import ClientRepository
from gym_backoffice.repositories.instructor_repo import InstructorRepository
from gym_backoffice.repositories.membership_repo import MembershipRepository
from gym_backoffice.repositories.package_repo import PackageRepository
from gym_backoffice.repositories.payment_repo import PaymentRepository
from gym_backoffice.repositories.training_session_repo import TrainingSessionRepository
from gym_backoffice.repositories.visit_repo import VisitRepository
from gym_backoffice.schemas import serialize_recent_activity, serialize_stats
from gym_backoffice.services.dashboard_service import DashboardService

dashboard_bp = Blueprint("dashboard", __name__, url_prefix="/api/dashboard")


def _dashboard_service(db) -> DashboardService:
    return DashboardService(
        ClientRepository(db),
        PackageRepository(db),
        InstructorRepository(db),
        MembershipRepository(db),
        PaymentRepository(db),
        TrainingSessionRepository(db),
        VisitRepository(db),
    )


@dashboard_bp.route("/stats", methods=["GET"])
@login_required
def stats():
    db = SessionLocal()
    try:
        return jsonify(serialize_stats(_dashboard_service(db).get_stats())), 200
    finally:
        db.close()


@dashboard_bp.route("/recent-activity", methods=["GET"])
@login_required
def recent_activity():
    db = SessionLocal()
    try:
        activity = _dashboard_service(db).get_recent_activity()
        return jsonify(serialize_recent_activity(activity)), 200
    finally:
        db.close()
