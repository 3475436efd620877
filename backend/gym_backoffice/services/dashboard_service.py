from datetime import datetime
from typing import Optional

from gym_backoffice.core.config import start_of_today, utcnow
from gym_backoffice.domain.entities import DashboardStats, RecentActivity
from gym_backoffice.domain.interfaces import (
    IClientRepository,
    IInstructorRepository,
    IMembershipRepository,
    IPackageRepository,
    IPaymentRepository,
    ITrainingSessionRepository,
    IVisitReader,
)

RECENT_LIMIT = 5
ACTIVE_VISITS_LIMIT = 10


class DashboardService:
    """Read-only counters and recent rows for the back office home page."""

    def __init__(
        self,
        client_repo: IClientRepository,
        package_repo: IPackageRepository,
        instructor_repo: IInstructorRepository,
        membership_repo: IMembershipRepository,
        payment_repo: IPaymentRepository,
        session_repo: ITrainingSessionRepository,
        visit_reader: IVisitReader,
    ) -> None:
        self.client_repo = client_repo
        self.package_repo = package_repo
        self.instructor_repo = instructor_repo
        self.membership_repo = membership_repo
        self.payment_repo = payment_repo
        self.session_repo = session_repo
        self.visit_reader = visit_reader

    def get_stats(self, now: Optional[datetime] = None) -> DashboardStats:
        """Counts as of ``now``; "today" starts at local midnight in APP_TZ."""
        now = now or utcnow()
        return DashboardStats(
            total_clients=self.client_repo.count(),
            total_packages=self.package_repo.count(),
            total_instructors=self.instructor_repo.count(),
            active_memberships=self.membership_repo.count_active(now),
            active_gym_sessions=self.visit_reader.count_open(),
            today_gym_sessions=self.visit_reader.count_entered_since(start_of_today(now)),
            total_payments=self.payment_repo.count(),
            active_sessions=self.session_repo.count_upcoming_unattended(now),
        )

    def get_recent_activity(self) -> RecentActivity:
        return RecentActivity(
            recent_clients=self.client_repo.list_recent(RECENT_LIMIT),
            recent_memberships=self.membership_repo.list_recent(RECENT_LIMIT),
            recent_payments=self.payment_repo.list_recent(RECENT_LIMIT),
            active_visits=self.visit_reader.list_open(limit=ACTIVE_VISITS_LIMIT),
        )
