from gym_backoffice.core.validation import ValidationError
from gym_backoffice.domain.entities import Membership, TrainingSession
from gym_backoffice.domain.interfaces import (
    IClientRepository,
    IInstructorRepository,
    IMembershipRepository,
    IPackageRepository,
    ITrainingSessionRepository,
)

from .crud_service import CrudService


class MembershipService(CrudService[Membership]):
    """Memberships tie a client to a package and an instructor."""

    entity_name = "Membership"
    entity_cls = Membership

    def __init__(
        self,
        membership_repo: IMembershipRepository,
        client_repo: IClientRepository,
        package_repo: IPackageRepository,
        instructor_repo: IInstructorRepository,
    ) -> None:
        super().__init__(membership_repo)
        self.client_repo = client_repo
        self.package_repo = package_repo
        self.instructor_repo = instructor_repo

    def _references(self):
        return {
            "client_id": ("Client", self.client_repo),
            "package_id": ("Package", self.package_repo),
            "instructor_id": ("Instructor", self.instructor_repo),
        }

    def _check_consistency(self, membership: Membership) -> None:
        # Partial updates may move only one end of the range
        if (
            membership.start_date
            and membership.end_date
            and membership.end_date < membership.start_date
        ):
            raise ValidationError(
                [{"field": "endDate", "message": "endDate must not be before startDate"}]
            )


class TrainingSessionService(CrudService[TrainingSession]):
    entity_name = "Session"
    entity_cls = TrainingSession

    def __init__(
        self,
        session_repo: ITrainingSessionRepository,
        instructor_repo: IInstructorRepository,
        membership_repo: IMembershipRepository,
    ) -> None:
        super().__init__(session_repo)
        self.instructor_repo = instructor_repo
        self.membership_repo = membership_repo

    def _references(self):
        return {
            "instructor_id": ("Instructor", self.instructor_repo),
            "membership_id": ("Membership", self.membership_repo),
        }
