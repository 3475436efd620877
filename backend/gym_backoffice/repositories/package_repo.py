from typing import Dict

from sqlalchemy.orm import selectinload

from gym_backoffice.db.base import Instructor as DbInstructor
from gym_backoffice.db.base import Membership as DbMembership
from gym_backoffice.db.base import Package as DbPackage
from gym_backoffice.domain.entities import Package as DomainPackage
from gym_backoffice.domain.interfaces import IPackageRepository

from . import mappers
from .base_repository import SqlAlchemyCrudRepository


class PackageRepository(SqlAlchemyCrudRepository, IPackageRepository):
    """Repository for membership packages."""

    model = DbPackage
    columns = mappers.PACKAGE_COLUMNS

    def _list_options(self) -> list:
        return [selectinload(DbPackage.instructors), selectinload(DbPackage.memberships)]

    def _detail_options(self) -> list:
        return self._list_options()

    def _to_domain(self, db_package: DbPackage, detail: bool = False) -> DomainPackage:
        package = mappers.package_from_row(db_package)
        package.instructor_count = len(db_package.instructors)
        package.membership_count = len(db_package.memberships)
        if detail:
            package.instructors = [
                mappers.instructor_from_row(i) for i in db_package.instructors
            ]
            package.memberships = [
                mappers.membership_from_row(m) for m in db_package.memberships
            ]
        return package

    def count_related(self, entity_id: int) -> Dict[str, int]:
        return self._nonzero(
            {
                "instructors": self._count_where(DbInstructor, package_id=entity_id),
                "memberships": self._count_where(DbMembership, package_id=entity_id),
            }
        )
