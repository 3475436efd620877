"""
Abstract interfaces for repositories following Interface Segregation Principle.

Services depend on these contracts, never on SQLAlchemy, so unit tests can
hand them mocks built from ``tests.factories.repository_factories``.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, Generic, List, Optional, TypeVar

from .entities import (
    Admin,
    Client,
    Instructor,
    Membership,
    Package,
    Payment,
    TrainingSession,
    Visit,
)

EntityT = TypeVar("EntityT")


class ICrudRepository(ABC, Generic[EntityT]):
    """Create/read/update/delete contract shared by the plain CRUD tables."""

    @abstractmethod
    def get_by_id(self, entity_id: int) -> Optional[EntityT]:
        """Get one row with the relations shown on its detail view."""
        pass

    @abstractmethod
    def list_all(self) -> List[EntityT]:
        """List rows newest first, with the relations shown in list views."""
        pass

    @abstractmethod
    def exists(self, entity_id: int) -> bool:
        pass

    @abstractmethod
    def count(self) -> int:
        pass

    @abstractmethod
    def create(self, entity: EntityT) -> EntityT:
        pass

    @abstractmethod
    def update(self, entity: EntityT) -> EntityT:
        pass

    @abstractmethod
    def delete(self, entity_id: int) -> bool:
        """Delete a row. Returns False if it did not exist."""
        pass

    def count_related(self, entity_id: int) -> Dict[str, int]:
        """Rows in other tables that still reference this one, by relation name."""
        return {}


class IAdminRepository(ABC):
    """Interface for admin accounts."""

    @abstractmethod
    def get_by_id(self, admin_pk: int) -> Optional[Admin]:
        pass

    @abstractmethod
    def get_by_admin_id(self, admin_login: str) -> Optional[Admin]:
        pass

    @abstractmethod
    def get_password_hash(self, admin_login: str) -> Optional[str]:
        pass

    @abstractmethod
    def create(self, admin: Admin, password_hash: str) -> Admin:
        pass


class IClientRepository(ICrudRepository[Client]):
    @abstractmethod
    def list_recent(self, limit: int) -> List[Client]:
        pass


class IPackageRepository(ICrudRepository[Package]):
    pass


class IInstructorRepository(ICrudRepository[Instructor]):
    pass


class IMembershipReader(ABC):
    """Read side of memberships used by the eligibility check and dashboard."""

    @abstractmethod
    def has_active_for_client(self, client_id: int, now: datetime) -> bool:
        """True iff some membership of the client is paid and ends at or after now."""
        pass

    @abstractmethod
    def count_active(self, now: datetime) -> int:
        pass

    @abstractmethod
    def list_recent(self, limit: int) -> List[Membership]:
        pass


class IMembershipRepository(ICrudRepository[Membership], IMembershipReader):
    pass


class IPaymentRepository(ICrudRepository[Payment]):
    @abstractmethod
    def list_recent(self, limit: int) -> List[Payment]:
        pass


class ITrainingSessionRepository(ICrudRepository[TrainingSession]):
    @abstractmethod
    def count_upcoming_unattended(self, now: datetime) -> int:
        pass


class IVisitReader(ABC):
    """Interface for visit (gym session) read operations."""

    @abstractmethod
    def get_by_id(self, visit_id: int) -> Optional[Visit]:
        pass

    @abstractmethod
    def find_open_by_client(self, client_id: int) -> Optional[Visit]:
        """The client's visit with no exit time, if any."""
        pass

    @abstractmethod
    def list_open(self, limit: Optional[int] = None) -> List[Visit]:
        """Open visits, newest entrance first."""
        pass

    @abstractmethod
    def list_all(self) -> List[Visit]:
        """All visits, newest entrance first."""
        pass

    @abstractmethod
    def count_open(self) -> int:
        pass

    @abstractmethod
    def count_entered_since(self, since: datetime) -> int:
        pass


class IVisitWriter(ABC):
    """Interface for visit (gym session) write operations."""

    @abstractmethod
    def create_open(
        self, client_id: int, entrance_time: datetime, locker_number: Optional[int]
    ) -> Visit:
        """Insert an open visit.

        Raises:
            AlreadyPresentError: the storage-level open visit constraint
                rejected the insert.
        """
        pass

    @abstractmethod
    def set_exit_time(self, visit_id: int, exit_time: datetime) -> Optional[Visit]:
        """Stamp the exit time. Returns None if the visit does not exist."""
        pass


class IVisitRepository(IVisitReader, IVisitWriter):
    """Complete visit repository interface combining read/write operations."""

    pass
