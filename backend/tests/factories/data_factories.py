"""
Database seeding helpers for integration tests.

Rows are written through the real repositories so they go through the
same mapping code as the API.
"""

from datetime import date, datetime, timedelta, timezone

from gym_backoffice.domain.entities import Client, Instructor, Membership, Package
from gym_backoffice.repositories.client_repo import ClientRepository
from gym_backoffice.repositories.instructor_repo import InstructorRepository
from gym_backoffice.repositories.membership_repo import MembershipRepository
from gym_backoffice.repositories.package_repo import PackageRepository


def seed_client(db, **overrides) -> Client:
    values = dict(
        fname="Ayse",
        lname="Yilmaz",
        dob=date(1994, 6, 1),
        is_male=False,
        phone_number="5550001122",
        social_number="12345678901",
    )
    values.update(overrides)
    return ClientRepository(db).create(Client(**values))


def seed_package(db, **overrides) -> Package:
    values = dict(package_name="Monthly", duration="1 month", price=500, days=30)
    values.update(overrides)
    return PackageRepository(db).create(Package(**values))


def seed_instructor(db, package_id: int, **overrides) -> Instructor:
    values = dict(
        package_id=package_id,
        fname="Mert",
        dob=date(1988, 2, 10),
        is_male=True,
        salary=20000.0,
        title="Personal trainer",
        phone_number="5559998877",
    )
    values.update(overrides)
    return InstructorRepository(db).create(Instructor(**values))


def seed_membership(
    db,
    client_id: int,
    is_paid: bool = True,
    end_date: datetime = None,
    package_id: int = None,
    instructor_id: int = None,
) -> Membership:
    """Membership for ``client_id``; defaults to paid and ending tomorrow."""
    now = datetime.now(timezone.utc)
    if package_id is None:
        package_id = seed_package(db).id
    if instructor_id is None:
        instructor_id = seed_instructor(db, package_id).id
    membership = Membership(
        client_id=client_id,
        package_id=package_id,
        instructor_id=instructor_id,
        status="active" if is_paid else "pending",
        start_date=now - timedelta(days=29),
        end_date=end_date or now + timedelta(days=1),
        payment_date=now - timedelta(days=29),
        is_paid=is_paid,
    )
    return MembershipRepository(db).create(membership)
