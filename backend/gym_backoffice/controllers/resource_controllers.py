"""CRUD blueprints for clients, packages, instructors, memberships,
payments and training sessions."""

from gym_backoffice.repositories.client_repo import ClientRepository
from gym_backoffice.repositories.instructor_repo import InstructorRepository
from gym_backoffice.repositories.membership_repo import MembershipRepository
from gym_backoffice.repositories.package_repo import PackageRepository
from gym_backoffice.repositories.payment_repo import PaymentRepository
from gym_backoffice.repositories.training_session_repo import TrainingSessionRepository
from gym_backoffice.schemas import (
    serialize_client,
    serialize_instructor,
    serialize_membership,
    serialize_package,
    serialize_payment,
    serialize_session,
)
from gym_backoffice.services.catalog_services import (
    ClientService,
    InstructorService,
    PackageService,
    PaymentService,
)
from gym_backoffice.services.membership_service import (
    MembershipService,
    TrainingSessionService,
)

from .crud_routes import build_crud_blueprint


def _client_service(db):
    return ClientService(ClientRepository(db))


def _package_service(db):
    return PackageService(PackageRepository(db))


def _instructor_service(db):
    return InstructorService(InstructorRepository(db), PackageRepository(db))


def _membership_service(db):
    return MembershipService(
        MembershipRepository(db),
        ClientRepository(db),
        PackageRepository(db),
        InstructorRepository(db),
    )


def _payment_service(db):
    return PaymentService(PaymentRepository(db), ClientRepository(db))


def _session_service(db):
    return TrainingSessionService(
        TrainingSessionRepository(db), InstructorRepository(db), MembershipRepository(db)
    )


client_bp = build_crud_blueprint(
    "clients", "/api/clients", "client", "Client", _client_service, serialize_client
)
package_bp = build_crud_blueprint(
    "packages", "/api/packages", "package", "Package", _package_service, serialize_package
)
instructor_bp = build_crud_blueprint(
    "instructors",
    "/api/instructors",
    "instructor",
    "Instructor",
    _instructor_service,
    serialize_instructor,
)
membership_bp = build_crud_blueprint(
    "memberships",
    "/api/memberships",
    "membership",
    "Membership",
    _membership_service,
    serialize_membership,
)
payment_bp = build_crud_blueprint(
    "payments", "/api/payments", "payment", "Payment", _payment_service, serialize_payment
)
session_bp = build_crud_blueprint(
    "sessions", "/api/sessions", "session", "Session", _session_service, serialize_session
)

RESOURCE_BLUEPRINTS = (
    client_bp,
    package_bp,
    instructor_bp,
    membership_bp,
    payment_bp,
    session_bp,
)
