"""
Security helpers: password hashing and signed access tokens.
"""

from leave_portal.core.security.password_hasher import PasswordHasher
from leave_portal.core.security.jwt_handler import JWTManager

__all__ = ["PasswordHasher", "JWTManager"]
