from datetime import datetime
from typing import Optional

from gym_backoffice.core.config import utcnow
from gym_backoffice.core.exceptions import NotFoundError
from gym_backoffice.domain.interfaces import IClientRepository, IMembershipReader


class MembershipEligibilityService:
    """Decides whether a client may enter the gym right now.

    A client is eligible iff at least one of their memberships is paid and
    ends at or after ``now``. Computed per request, never cached.
    """

    def __init__(
        self, client_repo: IClientRepository, membership_reader: IMembershipReader
    ) -> None:
        self.client_repo = client_repo
        self.membership_reader = membership_reader

    def is_eligible(self, client_id: int, now: Optional[datetime] = None) -> bool:
        """
        Raises:
            NotFoundError: the client does not exist
        """
        if not self.client_repo.exists(client_id):
            raise NotFoundError("Client", client_id)
        return self.membership_reader.has_active_for_client(client_id, now or utcnow())
