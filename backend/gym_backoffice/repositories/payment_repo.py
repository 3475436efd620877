from sqlalchemy.orm import joinedload

from gym_backoffice.db.base import Payment as DbPayment
from gym_backoffice.domain.entities import Payment as DomainPayment
from gym_backoffice.domain.interfaces import IPaymentRepository

from . import mappers
from .base_repository import SqlAlchemyCrudRepository


class PaymentRepository(SqlAlchemyCrudRepository, IPaymentRepository):
    model = DbPayment
    columns = mappers.PAYMENT_COLUMNS

    def _list_options(self) -> list:
        return [joinedload(DbPayment.client)]

    def _detail_options(self) -> list:
        return self._list_options()

    def _to_domain(self, db_payment: DbPayment, detail: bool = False) -> DomainPayment:
        payment = mappers.payment_from_row(db_payment)
        payment.client = mappers.client_from_row(db_payment.client)
        return payment
