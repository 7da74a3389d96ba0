"""
Authentication service.

Sign-in issues a signed access token naming both the user and a freshly
inserted session row. A request is authenticated by the session its own
token references; sign-out deletes that row, which invalidates the token
even before it expires.
"""

from datetime import timedelta
from typing import Optional

from sqlalchemy.orm import Session

from leave_portal.config.settings import settings
from leave_portal.core.constants import MSG_INVALID_PASSWORD, MSG_SESSION_FAILED, MSG_USER_NOT_FOUND
from leave_portal.core.exceptions import RepositoryError, TokenError
from leave_portal.core.security import JWTManager, PasswordHasher
from leave_portal.models.auth.user_session import UserSession
from leave_portal.models.user.user import User
from leave_portal.repositories.auth.session_repository import SessionRepository
from leave_portal.repositories.user.user_repository import UserRepository
from leave_portal.schemas.auth.auth import CurrentView, TokenResponse
from leave_portal.schemas.user.user import UserResponse
from leave_portal.services.base import (
    BaseService,
    ErrorCode,
    ErrorSeverity,
    ServiceError,
    ServiceResult,
)


def default_jwt_manager() -> JWTManager:
    return JWTManager(
        secret_key=settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
        access_token_expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
    )


class AuthenticationService(BaseService[SessionRepository]):
    """
    Sign-in, sign-out and the per-request identity gate.
    """

    def __init__(
        self,
        db: Session,
        jwt_manager: Optional[JWTManager] = None,
        password_hasher: Optional[PasswordHasher] = None,
    ):
        super().__init__(SessionRepository(db), db)
        self.user_repository = UserRepository(db)
        self.jwt = jwt_manager or default_jwt_manager()
        self.hasher = password_hasher or PasswordHasher(settings.PASSWORD_BCRYPT_ROUNDS)

    @staticmethod
    def _rejected(message: str) -> ServiceResult:
        return ServiceResult.failure(
            ServiceError(
                code=ErrorCode.AUTHENTICATION_FAILED,
                message=message,
                severity=ErrorSeverity.WARNING,
            )
        )

    # -------------------------------------------------------------------------
    # Sign-in / sign-out
    # -------------------------------------------------------------------------

    def sign_in(self, email: str, password: str) -> ServiceResult[TokenResponse]:
        """
        Verify credentials and open a session.

        Failure messages are shown to the user as-is: "User not found",
        "Invalid password" or "Error creating session".
        """
        try:
            user = self.user_repository.find_by_email(email)
        except RepositoryError as e:
            return self._handle_exception(e, "sign in", email)

        if user is None:
            self._logger.info(f"Sign-in rejected for unknown email {email}")
            return self._rejected(MSG_USER_NOT_FOUND)

        if not self.hasher.verify(password, user.password_hash):
            self._logger.info(f"Sign-in rejected for user {user.id}: bad password")
            return self._rejected(MSG_INVALID_PASSWORD)

        try:
            session = self.repository.create_session(user.id)
        except RepositoryError as e:
            self._logger.error(f"Session creation failed for user {user.id}: {e}", exc_info=True)
            return ServiceResult.failure(
                ServiceError(code=ErrorCode.INTERNAL_ERROR, message=MSG_SESSION_FAILED)
            )

        expires = timedelta(minutes=self.jwt.access_token_expire_minutes)
        token = self.jwt.create_access_token(user.id, session.id, expires_delta=expires)

        self._logger.info(f"User {user.id} signed in", extra={"user_id": user.id})
        return ServiceResult.success(
            TokenResponse(
                access_token=token,
                expires_in=int(expires.total_seconds()),
                session_id=session.id,
                user=UserResponse.model_validate(user),
            )
        )

    def sign_out(self, token: str) -> ServiceResult[bool]:
        """
        Delete every session of the user `token` belongs to.

        Unknown, expired or already-deleted sessions are a no-op that
        reports False.
        """
        session = self.get_current_session(token)
        if session is None:
            return ServiceResult.success(False, message="No active session")

        try:
            removed = self.repository.delete_for_user(session.user_id)
        except RepositoryError as e:
            return self._handle_exception(e, "sign out", session.user_id)

        self._logger.info(f"Closed {removed} session(s)", extra={"user_id": session.user_id})
        return ServiceResult.success(removed > 0)

    # -------------------------------------------------------------------------
    # Gate
    # -------------------------------------------------------------------------

    def get_current_session(self, token: Optional[str]) -> Optional[UserSession]:
        """Session row the token references, or None if there is none."""
        if not token:
            return None

        try:
            claims = self.jwt.decode_token(token)
        except TokenError as e:
            self._logger.debug(f"Rejected token: {e.message}")
            return None

        try:
            session = self.repository.find_by_id(claims["sid"])
        except RepositoryError as e:
            self._logger.error(f"Session lookup failed: {e}", exc_info=True)
            return None

        if session is None or session.user_id != claims["sub"]:
            return None
        return session

    def get_user(self, user_id: Optional[str]) -> Optional[User]:
        if not user_id:
            return None
        try:
            return self.user_repository.find_by_id(user_id)
        except RepositoryError as e:
            self._logger.error(f"User lookup failed: {e}", exc_info=True)
            return None

    def resolve_view(self, token: Optional[str]) -> CurrentView:
        """Which screen to show: sign-in, admin dashboard or employee calendar."""
        session = self.get_current_session(token)
        if session is None:
            return CurrentView(view="signin")

        user = self.get_user(session.user_id)
        if user is None:
            return CurrentView(view="signin")

        return CurrentView(
            view="admin" if user.is_admin else "employee",
            user=UserResponse.model_validate(user),
        )
