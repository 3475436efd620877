from typing import Dict

from sqlalchemy.orm import joinedload, selectinload

from gym_backoffice.db.base import Instructor as DbInstructor
from gym_backoffice.db.base import Membership as DbMembership
from gym_backoffice.db.base import TrainingSession as DbTrainingSession
from gym_backoffice.domain.entities import Instructor as DomainInstructor
from gym_backoffice.domain.interfaces import IInstructorRepository

from . import mappers
from .base_repository import SqlAlchemyCrudRepository


class InstructorRepository(SqlAlchemyCrudRepository, IInstructorRepository):
    """Repository for instructors; every view embeds the package."""

    model = DbInstructor
    columns = mappers.INSTRUCTOR_COLUMNS

    def _list_options(self) -> list:
        return [
            joinedload(DbInstructor.package),
            selectinload(DbInstructor.memberships),
            selectinload(DbInstructor.sessions),
        ]

    def _detail_options(self) -> list:
        return self._list_options()

    def _to_domain(
        self, db_instructor: DbInstructor, detail: bool = False
    ) -> DomainInstructor:
        instructor = mappers.instructor_from_row(db_instructor)
        instructor.package = mappers.package_from_row(db_instructor.package)
        instructor.membership_count = len(db_instructor.memberships)
        instructor.session_count = len(db_instructor.sessions)
        if detail:
            instructor.memberships = [
                mappers.membership_from_row(m) for m in db_instructor.memberships
            ]
            instructor.sessions = [
                mappers.session_from_row(s) for s in db_instructor.sessions
            ]
        return instructor

    def count_related(self, entity_id: int) -> Dict[str, int]:
        return self._nonzero(
            {
                "memberships": self._count_where(DbMembership, instructor_id=entity_id),
                "sessions": self._count_where(DbTrainingSession, instructor_id=entity_id),
            }
        )
