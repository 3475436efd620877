import logging
from typing import Optional, Tuple

from gym_backoffice.core.exceptions import InvalidCredentialsError
from gym_backoffice.core.security import create_admin_token, hash_password, verify_password
from gym_backoffice.domain.entities import Admin
from gym_backoffice.domain.interfaces import IAdminRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Admin authentication and account bootstrap."""

    def __init__(self, repo: IAdminRepository) -> None:
        self.repo = repo

    def authenticate(self, admin_login: str, password: str) -> Optional[Admin]:
        """Return the admin if the password matches, else None."""
        password_hash = self.repo.get_password_hash(admin_login)
        if not password_hash or not verify_password(password, password_hash):
            return None
        return self.repo.get_by_admin_id(admin_login)

    def login(self, admin_login: str, password: str) -> Tuple[str, Admin]:
        """Authenticate and issue a bearer token.

        Raises:
            InvalidCredentialsError: unknown adminID or wrong password
        """
        admin = self.authenticate(admin_login, password)
        if admin is None:
            logger.warning(
                "Failed admin login", extra={"context": {"admin_id": admin_login}}
            )
            raise InvalidCredentialsError()

        logger.info("Admin logged in", extra={"context": {"admin_id": admin.admin_id}})
        return create_admin_token(admin.id, admin.admin_id), admin

    def get_admin(self, admin_pk: int) -> Optional[Admin]:
        return self.repo.get_by_id(admin_pk)

    def create_admin(self, admin: Admin, password: str) -> Admin:
        if not admin.admin_id or not password:
            raise ValueError("adminID and password are required")
        if self.repo.get_by_admin_id(admin.admin_id) is not None:
            raise ValueError(f"Admin '{admin.admin_id}' already exists")
        return self.repo.create(admin, hash_password(password))
