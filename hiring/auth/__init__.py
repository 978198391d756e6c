"""
Authentication module for the hiring backend.

Provides bearer JWT verification and role-based authorization.
"""

from hiring.auth.config import (
    JWT_SECRET,
    JWT_AUDIENCE,
)
from hiring.auth.exceptions import (
    AuthenticationError,
    InvalidTokenError,
    TokenExpiredError,
    InsufficientRoleError,
)
from hiring.auth.dependencies import (
    Identity,
    get_current_identity,
    require_role,
)
from hiring.auth.jwt import create_access_token

__all__ = [
    # Config
    "JWT_SECRET",
    "JWT_AUDIENCE",
    # Exceptions
    "AuthenticationError",
    "InvalidTokenError",
    "TokenExpiredError",
    "InsufficientRoleError",
    # Dependencies
    "Identity",
    "get_current_identity",
    "require_role",
    "create_access_token",
]
