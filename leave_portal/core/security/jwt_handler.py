"""
JWT token management utilities.

Handles creation and validation of the access tokens that carry a
client's sign-in session.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

from leave_portal.core.exceptions import InvalidTokenError, TokenExpiredError

logger = logging.getLogger(__name__)


class JWTManager:
    """
    JWT token manager for authentication.

    Each token names the user (`sub`) and the session row (`sid`) it was
    issued for, so a request is tied to its own session rather than to
    whichever session happens to be newest.
    """

    DEFAULT_ALGORITHM = "HS256"
    DEFAULT_ACCESS_TOKEN_EXPIRE_MINUTES = 60

    def __init__(
        self,
        secret_key: str,
        algorithm: str = DEFAULT_ALGORITHM,
        access_token_expire_minutes: int = DEFAULT_ACCESS_TOKEN_EXPIRE_MINUTES,
    ):
        if not secret_key:
            raise ValueError("JWT secret key is required")
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.access_token_expire_minutes = access_token_expire_minutes

    def create_access_token(
        self,
        user_id: str,
        session_id: str,
        additional_claims: Optional[Dict[str, Any]] = None,
        expires_delta: Optional[timedelta] = None,
    ) -> str:
        """
        Create JWT access token.

        Args:
            user_id: User identifier
            session_id: Session row identifier
            additional_claims: Additional claims to include
            expires_delta: Custom expiration time

        Returns:
            Encoded JWT token
        """
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta or timedelta(minutes=self.access_token_expire_minutes))

        payload = {
            "sub": str(user_id),
            "sid": str(session_id),
            "token_type": "access",
            "iat": now,
            "exp": expire,
        }

        if additional_claims:
            payload.update(additional_claims)

        token = jwt.encode(payload, self.secret_key, algorithm=self.algorithm)
        logger.debug(f"Access token created for user {user_id}")
        return token

    def decode_token(self, token: str) -> Dict[str, Any]:
        """
        Decode and validate a token.

        Raises:
            TokenExpiredError: If the token is past its expiry
            InvalidTokenError: If the token is malformed, badly signed or
                lacks the session claims
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"require": ["exp", "sub", "sid"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError() from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}") from e

        if payload.get("token_type") != "access":
            raise InvalidTokenError("Unexpected token type")

        return payload
