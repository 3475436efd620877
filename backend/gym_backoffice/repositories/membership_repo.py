"""Membership repository.

Besides CRUD it answers the admission question "does this client hold a
paid, unexpired membership right now?" with a single indexed query.
"""

from datetime import datetime
from typing import Dict

from sqlalchemy import func
from sqlalchemy.orm import joinedload, selectinload

from gym_backoffice.db.base import Membership as DbMembership
from gym_backoffice.db.base import TrainingSession as DbTrainingSession
from gym_backoffice.domain.entities import Membership as DomainMembership
from gym_backoffice.domain.interfaces import IMembershipRepository

from . import mappers
from .base_repository import SqlAlchemyCrudRepository


class MembershipRepository(SqlAlchemyCrudRepository, IMembershipRepository):
    model = DbMembership
    columns = mappers.MEMBERSHIP_COLUMNS

    def _list_options(self) -> list:
        return [
            joinedload(DbMembership.client),
            joinedload(DbMembership.package),
            joinedload(DbMembership.instructor),
        ]

    def _detail_options(self) -> list:
        return self._list_options() + [selectinload(DbMembership.sessions)]

    def _to_domain(
        self, db_membership: DbMembership, detail: bool = False
    ) -> DomainMembership:
        membership = mappers.membership_from_row(db_membership)
        membership.client = mappers.client_from_row(db_membership.client)
        membership.package = mappers.package_from_row(db_membership.package)
        membership.instructor = mappers.instructor_from_row(db_membership.instructor)
        if detail:
            membership.sessions = [
                mappers.session_from_row(s)
                for s in sorted(
                    db_membership.sessions,
                    key=lambda s: (s.destination_date, s.id),
                    reverse=True,
                )
            ]
        return membership

    def _active_filter(self, now: datetime):
        return (DbMembership.is_paid.is_(True), DbMembership.end_date >= now)

    def has_active_for_client(self, client_id: int, now: datetime) -> bool:
        found = (
            self.db.query(DbMembership.id)
            .filter(DbMembership.client_id == client_id, *self._active_filter(now))
            .first()
        )
        return found is not None

    def count_active(self, now: datetime) -> int:
        return (
            self.db.query(func.count(DbMembership.id))
            .filter(*self._active_filter(now))
            .scalar()
            or 0
        )

    def count_related(self, entity_id: int) -> Dict[str, int]:
        return self._nonzero(
            {"sessions": self._count_where(DbTrainingSession, membership_id=entity_id)}
        )
