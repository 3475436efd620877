"""
Repository test factories following Interface Segregation Principle.

Each factory hands out ``Mock(spec=...)`` objects for one repository
interface, so a unit test only depends on the contract the service under
test actually uses.
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import Mock

from gym_backoffice.domain.entities import Client, Membership, Visit
from gym_backoffice.domain.interfaces import (
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
)

NOW = datetime(2026, 3, 14, 9, 30, tzinfo=timezone.utc)


class ClientRepositoryFactory:
    @staticmethod
    def create_mock_full(existing_ids=()) -> Mock:
        """Client repository mock; ``exists`` is True only for ``existing_ids``."""
        mock_repo = Mock(spec=IClientRepository)
        known = set(existing_ids)
        mock_repo.exists.side_effect = lambda client_id: client_id in known
        mock_repo.get_by_id.return_value = None
        mock_repo.list_all.return_value = []
        mock_repo.list_recent.return_value = []
        mock_repo.count.return_value = 0
        mock_repo.count_related.return_value = {}
        mock_repo.delete.return_value = False
        return mock_repo


class MembershipRepositoryFactory:
    @staticmethod
    def create_mock_reader(active_for=()) -> Mock:
        """Reader mock whose clients in ``active_for`` hold an active membership."""
        mock_reader = Mock(spec=IMembershipReader)
        active = set(active_for)
        mock_reader.has_active_for_client.side_effect = (
            lambda client_id, now: client_id in active
        )
        mock_reader.count_active.return_value = 0
        mock_reader.list_recent.return_value = []
        return mock_reader

    @staticmethod
    def create_mock_full() -> Mock:
        mock_repo = Mock(spec=IMembershipRepository)
        mock_repo.get_by_id.return_value = None
        mock_repo.exists.return_value = False
        mock_repo.list_recent.return_value = []
        mock_repo.count_active.return_value = 0
        mock_repo.count_related.return_value = {}
        return mock_repo


class VisitRepositoryFactory:
    @staticmethod
    def create_mock_reader() -> Mock:
        mock_reader = Mock(spec=IVisitReader)
        mock_reader.get_by_id.return_value = None
        mock_reader.find_open_by_client.return_value = None
        mock_reader.list_open.return_value = []
        mock_reader.list_all.return_value = []
        mock_reader.count_open.return_value = 0
        mock_reader.count_entered_since.return_value = 0
        return mock_reader

    @staticmethod
    def create_mock_full() -> Mock:
        mock_repo = Mock(spec=IVisitRepository)
        mock_repo.get_by_id.return_value = None
        mock_repo.find_open_by_client.return_value = None
        mock_repo.list_open.return_value = []
        mock_repo.list_all.return_value = []
        mock_repo.create_open.side_effect = lambda client_id, entrance_time, locker_number: Visit(
            id=101,
            client_id=client_id,
            entrance_time=entrance_time,
            exit_time=None,
            locker_number=locker_number,
        )
        mock_repo.set_exit_time.return_value = None
        return mock_repo


class CatalogRepositoryFactory:
    """Mocks for the plain CRUD repositories."""

    @staticmethod
    def create_mock(interface, existing_ids=()) -> Mock:
        mock_repo = Mock(spec=interface)
        known = set(existing_ids)
        mock_repo.exists.side_effect = lambda entity_id: entity_id in known
        mock_repo.get_by_id.return_value = None
        mock_repo.list_all.return_value = []
        mock_repo.count.return_value = 0
        mock_repo.count_related.return_value = {}
        mock_repo.create.side_effect = lambda entity: entity
        mock_repo.update.side_effect = lambda entity: entity
        mock_repo.delete.return_value = True
        return mock_repo

    @staticmethod
    def package_repo(existing_ids=()) -> Mock:
        return CatalogRepositoryFactory.create_mock(IPackageRepository, existing_ids)

    @staticmethod
    def instructor_repo(existing_ids=()) -> Mock:
        return CatalogRepositoryFactory.create_mock(IInstructorRepository, existing_ids)

    @staticmethod
    def payment_repo(existing_ids=()) -> Mock:
        return CatalogRepositoryFactory.create_mock(IPaymentRepository, existing_ids)

    @staticmethod
    def session_repo(existing_ids=()) -> Mock:
        mock_repo = CatalogRepositoryFactory.create_mock(
            ITrainingSessionRepository, existing_ids
        )
        mock_repo.count_upcoming_unattended.return_value = 0
        return mock_repo


class AdminRepositoryFactory:
    @staticmethod
    def create_mock_full() -> Mock:
        mock_repo = Mock(spec=IAdminRepository)
        mock_repo.get_by_id.return_value = None
        mock_repo.get_by_admin_id.return_value = None
        mock_repo.get_password_hash.return_value = None
        return mock_repo


def make_client(client_id: int = 1, **overrides) -> Client:
    values = dict(
        id=client_id,
        fname="Ayse",
        lname="Yilmaz",
        phone_number="5550001122",
        social_number="12345678901",
        is_male=False,
    )
    values.update(overrides)
    return Client(**values)


def make_membership(membership_id: int = 1, **overrides) -> Membership:
    values = dict(
        id=membership_id,
        client_id=1,
        package_id=1,
        instructor_id=1,
        status="active",
        start_date=NOW - timedelta(days=10),
        end_date=NOW + timedelta(days=20),
        payment_date=NOW - timedelta(days=10),
        is_paid=True,
    )
    values.update(overrides)
    return Membership(**values)


def make_visit(visit_id: int = 1, **overrides) -> Visit:
    values = dict(
        id=visit_id,
        client_id=1,
        entrance_time=NOW - timedelta(hours=1),
        exit_time=None,
    )
    values.update(overrides)
    return Visit(**values)
