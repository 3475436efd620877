"""Client repository implementation.

List views carry each client's memberships (with package and instructor);
the detail view adds payments and the ten most recent visits.
"""

from typing import Dict

from sqlalchemy.orm import selectinload

from gym_backoffice.db.base import Attendance as DbAttendance
from gym_backoffice.db.base import Client as DbClient
from gym_backoffice.db.base import GymSession as DbGymSession
from gym_backoffice.db.base import Membership as DbMembership
from gym_backoffice.db.base import Payment as DbPayment
from gym_backoffice.domain.entities import Client as DomainClient
from gym_backoffice.domain.interfaces import IClientRepository

from . import mappers
from .base_repository import SqlAlchemyCrudRepository

RECENT_VISITS_ON_DETAIL = 10


def _membership_with_refs(db_membership: DbMembership):
    membership = mappers.membership_from_row(db_membership)
    membership.package = mappers.package_from_row(db_membership.package)
    membership.instructor = mappers.instructor_from_row(db_membership.instructor)
    return membership


class ClientRepository(SqlAlchemyCrudRepository, IClientRepository):
    """Repository for Client persistence operations."""

    model = DbClient
    columns = mappers.CLIENT_COLUMNS

    def _list_options(self) -> list:
        return [
            selectinload(DbClient.memberships).selectinload(DbMembership.package),
            selectinload(DbClient.memberships).selectinload(DbMembership.instructor),
        ]

    def _detail_options(self) -> list:
        return self._list_options() + [selectinload(DbClient.payments)]

    def _to_domain(self, db_client: DbClient, detail: bool = False) -> DomainClient:
        client = mappers.client_from_row(db_client)
        client.memberships = [
            _membership_with_refs(m)
            for m in sorted(
                db_client.memberships, key=lambda m: (m.created_at, m.id), reverse=True
            )
        ]
        if detail:
            client.payments = [
                mappers.payment_from_row(p)
                for p in sorted(
                    db_client.payments, key=lambda p: (p.created_at, p.id), reverse=True
                )
            ]
            recent_visits = (
                self.db.query(DbGymSession)
                .filter_by(client_id=db_client.id)
                .order_by(DbGymSession.entrance_time.desc(), DbGymSession.id.desc())
                .limit(RECENT_VISITS_ON_DETAIL)
                .all()
            )
            client.visits = [mappers.visit_from_row(v) for v in recent_visits]
        return client

    def count_related(self, entity_id: int) -> Dict[str, int]:
        return self._nonzero(
            {
                "memberships": self._count_where(DbMembership, client_id=entity_id),
                "payments": self._count_where(DbPayment, client_id=entity_id),
                "gym sessions": self._count_where(DbGymSession, client_id=entity_id),
                "attendance records": self._count_where(
                    DbAttendance, client_id=entity_id
                ),
            }
        )
