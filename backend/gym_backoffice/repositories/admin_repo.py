from typing import Optional

from gym_backoffice.db.base import Admin as DbAdmin
from gym_backoffice.domain.entities import Admin as DomainAdmin
from gym_backoffice.domain.interfaces import IAdminRepository

from . import mappers


class AdminRepository(IAdminRepository):
    """Repository for admin accounts. Password hashes never leave this layer
    except through ``get_password_hash``."""

    def __init__(self, db_session) -> None:
        self.db = db_session

    def get_by_id(self, admin_pk: int) -> Optional[DomainAdmin]:
        db_admin = self.db.query(DbAdmin).filter_by(id=admin_pk).first()
        return mappers.admin_from_row(db_admin) if db_admin else None

    def get_by_admin_id(self, admin_login: str) -> Optional[DomainAdmin]:
        db_admin = self.db.query(DbAdmin).filter_by(admin_id=admin_login).first()
        return mappers.admin_from_row(db_admin) if db_admin else None

    def get_password_hash(self, admin_login: str) -> Optional[str]:
        db_admin = self.db.query(DbAdmin).filter_by(admin_id=admin_login).first()
        return db_admin.password_hash if db_admin else None

    def create(self, admin: DomainAdmin, password_hash: str) -> DomainAdmin:
        db_admin = DbAdmin(
            password_hash=password_hash,
            **mappers.write_columns(admin, mappers.ADMIN_COLUMNS),
        )
        self.db.add(db_admin)
        self.db.commit()
        self.db.refresh(db_admin)
        return mappers.admin_from_row(db_admin)
