"""
FastAPI authentication dependencies.

Provides dependency injection for authenticated endpoints.
"""
import logging
from typing import Optional
from uuid import UUID

from fastapi import Depends, Header

from hiring.auth.jwt import verify_token, extract_user_id, extract_role, extract_email
from hiring.auth.exceptions import (
    AuthenticationError,
    InvalidTokenError,
    InsufficientRoleError,
)
from hiring.models.enums import UserRole

logger = logging.getLogger(__name__)


# =============================================================================
# Auth Context
# =============================================================================

class Identity:
    """The authenticated caller: user id and platform role."""

    def __init__(
        self,
        user_id: UUID,
        role: UserRole,
        email: Optional[str] = None,
        name: Optional[str] = None,
    ):
        self.user_id = user_id
        self.role = role
        self.email = email
        self.name = name

    @property
    def is_candidate(self) -> bool:
        return self.role == UserRole.CANDIDATE


# =============================================================================
# Token Extraction
# =============================================================================

def extract_token(authorization: Optional[str]) -> str:
    """
    Extract the JWT token from Authorization header.

    Raises:
        AuthenticationError: If header is missing or malformed
    """
    if not authorization:
        raise AuthenticationError("Authorization header required")

    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise AuthenticationError("Invalid authorization header format. Use: Bearer <token>")

    return parts[1]


# =============================================================================
# Dependency Functions
# =============================================================================

async def get_current_identity(
    authorization: Optional[str] = Header(None),
) -> Identity:
    """
    Get the authenticated caller from the bearer token.

    Usage:
        @router.get("/protected")
        async def protected_endpoint(identity: Identity = Depends(get_current_identity)):
            return {"user_id": str(identity.user_id)}
    """
    token = extract_token(authorization)
    payload = verify_token(token)

    raw_user_id = extract_user_id(payload)
    try:
        user_id = UUID(raw_user_id)
    except (ValueError, TypeError):
        raise InvalidTokenError(f"Invalid user ID in token: {raw_user_id}")

    raw_role = extract_role(payload)
    try:
        role = UserRole(raw_role)
    except ValueError:
        raise InvalidTokenError(f"Unknown role in token: {raw_role}")

    return Identity(
        user_id=user_id,
        role=role,
        email=extract_email(payload),
        name=payload.get("name"),
    )


def require_role(*allowed_roles: UserRole):
    """
    Dependency factory that requires specific roles.

    Usage:
        @router.post("/job-offers/{id}/apply")
        async def apply(identity: Identity = Depends(require_role(UserRole.CANDIDATE))):
            ...
    """
    async def dependency(
        identity: Identity = Depends(get_current_identity),
    ) -> Identity:
        if identity.role not in allowed_roles:
            raise InsufficientRoleError(allowed_roles, identity.role)

        return identity

    return dependency
