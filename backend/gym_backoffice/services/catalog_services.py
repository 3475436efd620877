"""Services for clients, packages, instructors and payments."""

from gym_backoffice.domain.entities import Client, Instructor, Package, Payment
from gym_backoffice.domain.interfaces import (
    IClientRepository,
    IInstructorRepository,
    IPackageRepository,
    IPaymentRepository,
)

from .crud_service import CrudService


class ClientService(CrudService[Client]):
    entity_name = "Client"
    entity_cls = Client


class PackageService(CrudService[Package]):
    entity_name = "Package"
    entity_cls = Package


class InstructorService(CrudService[Instructor]):
    entity_name = "Instructor"
    entity_cls = Instructor

    def __init__(
        self, instructor_repo: IInstructorRepository, package_repo: IPackageRepository
    ) -> None:
        super().__init__(instructor_repo)
        self.package_repo = package_repo

    def _references(self):
        return {"package_id": ("Package", self.package_repo)}


class PaymentService(CrudService[Payment]):
    entity_name = "Payment"
    entity_cls = Payment

    def __init__(
        self, payment_repo: IPaymentRepository, client_repo: IClientRepository
    ) -> None:
        super().__init__(payment_repo)
        self.client_repo = client_repo

    def _references(self):
        return {"client_id": ("Client", self.client_repo)}
