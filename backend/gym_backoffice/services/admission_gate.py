"""
Admission gate: the OUTSIDE <-> INSIDE state machine for one client.

    OUTSIDE --request_entry--> INSIDE   (eligible at ``now``)
    INSIDE  --request_exit-->  OUTSIDE

There is no other transition; an open visit stays open until someone
requests the exit.
"""

import logging
from datetime import datetime
from typing import Optional

from gym_backoffice.core.config import utcnow
from gym_backoffice.core.exceptions import AlreadyPresentError, NoActiveMembershipError
from gym_backoffice.domain.entities import Visit

from .eligibility_service import MembershipEligibilityService
from .presence_ledger import PresenceLedger

logger = logging.getLogger(__name__)


class AdmissionGate:
    def __init__(
        self, eligibility: MembershipEligibilityService, ledger: PresenceLedger
    ) -> None:
        self.eligibility = eligibility
        self.ledger = ledger

    def request_entry(
        self,
        client_id: int,
        locker_number: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> Visit:
        """Let a client in and open their visit.

        Raises:
            NotFoundError: unknown client
            NoActiveMembershipError: no paid, unexpired membership at ``now``
            AlreadyPresentError: the client already has an open visit
        """
        now = now or utcnow()

        if not self.eligibility.is_eligible(client_id, now):
            logger.info(
                "Entry denied: no active membership",
                extra={"context": {"client_id": client_id}},
            )
            raise NoActiveMembershipError(client_id)

        try:
            visit = self.ledger.open_visit(client_id, now, locker_number)
        except AlreadyPresentError:
            logger.info(
                "Entry denied: client already inside",
                extra={"context": {"client_id": client_id}},
            )
            raise

        logger.info(
            "Entry granted",
            extra={
                "context": {
                    "client_id": client_id,
                    "visit_id": visit.id,
                    "locker_number": locker_number,
                }
            },
        )
        return visit

    def request_exit(self, visit_id: int, now: Optional[datetime] = None) -> Visit:
        """Close the visit. Raises NotFoundError for an unknown visit id."""
        visit = self.ledger.close_visit(visit_id, now or utcnow())
        logger.info(
            "Exit recorded",
            extra={"context": {"client_id": visit.client_id, "visit_id": visit.id}},
        )
        return visit
