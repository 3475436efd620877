"""
Presence ledger: the record of who is inside the gym.

A client is INSIDE while they have a visit with no exit time and OUTSIDE
otherwise. The ledger only opens, closes and lists visits; whether a client
may enter at all is the admission gate's call.
"""

import logging
from datetime import datetime
from typing import List, Optional

from gym_backoffice.core.config import utcnow
from gym_backoffice.core.exceptions import AlreadyPresentError, NotFoundError
from gym_backoffice.domain.entities import PresenceState, Visit
from gym_backoffice.domain.interfaces import IVisitRepository

logger = logging.getLogger(__name__)


class PresenceLedger:
    def __init__(self, visit_repo: IVisitRepository) -> None:
        self.visit_repo = visit_repo

    def open_visit(
        self,
        client_id: int,
        now: Optional[datetime] = None,
        locker_number: Optional[int] = None,
    ) -> Visit:
        """Start a visit with ``entrance_time = now`` and no exit time.

        Raises:
            AlreadyPresentError: the client already has an open visit. The
                repository raises it too when a concurrent insert loses the
                race on the open visit index.
        """
        if self.visit_repo.find_open_by_client(client_id) is not None:
            raise AlreadyPresentError(client_id)
        return self.visit_repo.create_open(client_id, now or utcnow(), locker_number)

    def close_visit(self, visit_id: int, now: Optional[datetime] = None) -> Visit:
        """Stamp ``exit_time = now`` on a visit.

        Closing an already closed visit overwrites its exit time.

        Raises:
            NotFoundError: no visit with that id
        """
        existing = self.visit_repo.get_by_id(visit_id)
        if existing is None:
            raise NotFoundError("Gym session", visit_id)
        if not existing.is_open:
            logger.warning(
                "Closing a visit that is already closed; exit time overwritten",
                extra={
                    "context": {
                        "visit_id": visit_id,
                        "previous_exit_time": existing.exit_time,
                    }
                },
            )

        closed = self.visit_repo.set_exit_time(visit_id, now or utcnow())
        if closed is None:
            raise NotFoundError("Gym session", visit_id)
        return closed

    def list_open_visits(self) -> List[Visit]:
        return self.visit_repo.list_open()

    def list_all_visits(self) -> List[Visit]:
        return self.visit_repo.list_all()

    def get_visit(self, visit_id: int) -> Visit:
        visit = self.visit_repo.get_by_id(visit_id)
        if visit is None:
            raise NotFoundError("Gym session", visit_id)
        return visit

    def find_open_visit(self, client_id: int) -> Optional[Visit]:
        return self.visit_repo.find_open_by_client(client_id)

    def state_of(self, client_id: int) -> PresenceState:
        if self.find_open_visit(client_id) is None:
            return PresenceState.OUTSIDE
        return PresenceState.INSIDE
