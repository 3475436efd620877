from datetime import datetime

from sqlalchemy import func
from sqlalchemy.orm import joinedload, selectinload

from gym_backoffice.db.base import Attendance as DbAttendance
from gym_backoffice.db.base import Membership as DbMembership
from gym_backoffice.db.base import TrainingSession as DbTrainingSession
from gym_backoffice.domain.entities import TrainingSession as DomainTrainingSession
from gym_backoffice.domain.interfaces import ITrainingSessionRepository

from . import mappers
from .base_repository import SqlAlchemyCrudRepository


class TrainingSessionRepository(SqlAlchemyCrudRepository, ITrainingSessionRepository):
    """Instructor sessions booked against memberships, with attendance."""

    model = DbTrainingSession
    columns = mappers.SESSION_COLUMNS

    def _ordered(self, query):
        return query.order_by(
            DbTrainingSession.destination_date.desc(), DbTrainingSession.id.desc()
        )

    def _list_options(self) -> list:
        return [
            joinedload(DbTrainingSession.instructor),
            joinedload(DbTrainingSession.membership).joinedload(DbMembership.client),
            selectinload(DbTrainingSession.attendance).joinedload(DbAttendance.client),
        ]

    def _detail_options(self) -> list:
        return self._list_options()

    def _to_domain(
        self, db_session: DbTrainingSession, detail: bool = False
    ) -> DomainTrainingSession:
        session = mappers.session_from_row(db_session)
        session.instructor = mappers.instructor_from_row(db_session.instructor)
        membership = mappers.membership_from_row(db_session.membership)
        membership.client = mappers.client_from_row(db_session.membership.client)
        session.membership = membership
        session.attendance = [
            mappers.attendance_from_row(a) for a in db_session.attendance
        ]
        return session

    def count_upcoming_unattended(self, now: datetime) -> int:
        return (
            self.db.query(func.count(DbTrainingSession.id))
            .filter(
                DbTrainingSession.destination_date >= now,
                DbTrainingSession.is_attended.is_(False),
            )
            .scalar()
            or 0
        )
