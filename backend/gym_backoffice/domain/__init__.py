"""
Domain package - Pure business logic layer.

This package contains:
- entities.py: Domain entities (dataclasses) with business rules
- interfaces.py: Repository contracts consumed by the services
"""

from .entities import (
    Admin,
    Attendance,
    Client,
    Instructor,
    Membership,
    Package,
    Payment,
    PresenceState,
    TrainingSession,
    Visit,
)
from .interfaces import (
    IAdminRepository,
    IClientRepository,
    IInstructorRepository,
    IMembershipReader,
    IMembershipRepository,
    IPackageRepository,
    IPaymentRepository,
    ITrainingSessionRepository,
    IVisitReader,
    IVisitRepository,
    IVisitWriter,
)

__all__ = [
    # Domain entities
    "Admin",
    "Attendance",
    "Client",
    "Instructor",
    "Membership",
    "Package",
    "Payment",
    "PresenceState",
    "TrainingSession",
    "Visit",
    # Repository interfaces
    "IAdminRepository",
    "IClientRepository",
    "IInstructorRepository",
    "IMembershipRepository",
    "IPackageRepository",
    "IPaymentRepository",
    "ITrainingSessionRepository",
    "IVisitRepository",
    # Segregated interfaces
    "IMembershipReader",
    "IVisitReader",
    "IVisitWriter",
]
