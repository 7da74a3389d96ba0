"""
Account provisioning.

Accounts are created by operators (seed command, scripts), never through
the request path.
"""

from typing import Optional

from sqlalchemy.orm import Session

from leave_portal.config.settings import settings
from leave_portal.core.exceptions import RepositoryError
from leave_portal.core.security import PasswordHasher
from leave_portal.repositories.user.user_repository import UserRepository
from leave_portal.schemas.user.user import UserResponse
from leave_portal.services.base import BaseService, ServiceResult


class UserService(BaseService[UserRepository]):

    def __init__(self, db: Session, password_hasher: Optional[PasswordHasher] = None):
        super().__init__(UserRepository(db), db)
        self.hasher = password_hasher or PasswordHasher(settings.PASSWORD_BCRYPT_ROUNDS)

    def create_user(
        self,
        full_name: str,
        email: str,
        password: str,
        is_admin: bool = False,
    ) -> ServiceResult[UserResponse]:
        """Create an account, storing only the bcrypt hash of `password`."""
        if not full_name or not email or not password:
            return ServiceResult.validation_failure("Name, email and password are required")

        try:
            if self.repository.find_by_email(email) is not None:
                return ServiceResult.validation_failure(f"Email already registered: {email}", field="email")
            user = self.repository.create_user(
                full_name=full_name,
                email=email,
                password_hash=self.hasher.hash(password),
                is_admin=is_admin,
            )
        except RepositoryError as e:
            return self._handle_exception(e, "create user", email)

        self._logger.info(f"Provisioned {'admin' if is_admin else 'employee'} account {user.id}")
        return ServiceResult.success(UserResponse.model_validate(user))
