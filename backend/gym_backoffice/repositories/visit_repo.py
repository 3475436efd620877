"""Visit (gym session) repository.

Visits are append-only: rows are inserted open and later stamped with an
exit time, never deleted. The database holds the at-most-one-open-visit
rule through the ``uq_gym_sessions_open_visit`` partial unique index; a
violating insert surfaces here as ``AlreadyPresentError``.
"""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import joinedload

from gym_backoffice.core.exceptions import AlreadyPresentError
from gym_backoffice.db.base import GymSession as DbGymSession
from gym_backoffice.db.session import SessionLocal
from gym_backoffice.domain.entities import Visit
from gym_backoffice.domain.interfaces import IVisitRepository

from . import mappers

logger = logging.getLogger(__name__)


class VisitRepository(IVisitRepository):
    def __init__(self, db_session=None):
        self.db = db_session or SessionLocal()

    def _query(self):
        return self.db.query(DbGymSession).options(joinedload(DbGymSession.client))

    def _newest_first(self, query):
        return query.order_by(DbGymSession.entrance_time.desc(), DbGymSession.id.desc())

    def _to_domain(self, db_visit: DbGymSession) -> Visit:
        visit = mappers.visit_from_row(db_visit)
        visit.client = mappers.client_from_row(db_visit.client)
        return visit

    def get_by_id(self, visit_id: int) -> Optional[Visit]:
        db_visit = self._query().filter(DbGymSession.id == visit_id).first()
        return self._to_domain(db_visit) if db_visit else None

    def find_open_by_client(self, client_id: int) -> Optional[Visit]:
        db_visit = (
            self._query()
            .filter(
                DbGymSession.client_id == client_id,
                DbGymSession.exit_time.is_(None),
            )
            .first()
        )
        return self._to_domain(db_visit) if db_visit else None

    def list_open(self, limit: Optional[int] = None) -> List[Visit]:
        query = self._newest_first(
            self._query().filter(DbGymSession.exit_time.is_(None))
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_domain(v) for v in query.all()]

    def list_all(self) -> List[Visit]:
        return [self._to_domain(v) for v in self._newest_first(self._query()).all()]

    def count_open(self) -> int:
        return (
            self.db.query(func.count(DbGymSession.id))
            .filter(DbGymSession.exit_time.is_(None))
            .scalar()
            or 0
        )

    def count_entered_since(self, since: datetime) -> int:
        return (
            self.db.query(func.count(DbGymSession.id))
            .filter(DbGymSession.entrance_time >= since)
            .scalar()
            or 0
        )

    def create_open(
        self, client_id: int, entrance_time: datetime, locker_number: Optional[int]
    ) -> Visit:
        db_visit = DbGymSession(
            client_id=client_id,
            entrance_time=entrance_time,
            exit_time=None,
            locker_number=locker_number,
        )
        self.db.add(db_visit)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            if self.find_open_by_client(client_id) is None:
                # Not the open visit index (e.g. client row deleted meanwhile)
                raise
            logger.warning(
                "Open visit insert rejected by database",
                extra={"context": {"client_id": client_id, "error": str(exc.orig)}},
            )
            raise AlreadyPresentError(client_id) from exc
        self.db.refresh(db_visit)
        return self._to_domain(db_visit)

    def set_exit_time(self, visit_id: int, exit_time: datetime) -> Optional[Visit]:
        db_visit = self.db.query(DbGymSession).filter_by(id=visit_id).first()
        if not db_visit:
            return None
        db_visit.exit_time = exit_time
        self.db.commit()
        self.db.refresh(db_visit)
        return self._to_domain(db_visit)
