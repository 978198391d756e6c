"""
Errors raised while identifying callers and checking their platform role.

They render through the HiringException handler: 401 when the caller cannot
be identified, 403 when the caller's role does not allow the action.
"""
from typing import Any, Dict, Iterable, Optional
from fastapi import status

from hiring.exceptions import HiringException
from hiring.models.enums import UserRole

ROLE_LABELS = {
    UserRole.COMPANY_OWNER: "company owners",
    UserRole.RECRUITER: "recruiters",
    UserRole.CANDIDATE: "candidates",
}


class AuthenticationError(HiringException):
    """The caller could not be identified from the Authorization header."""

    def __init__(self, message: str = "Sign in to use the hiring platform", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_401_UNAUTHORIZED, details)


class InvalidTokenError(AuthenticationError):
    """The access token is malformed, badly signed or missing a claim."""

    def __init__(self, message: str = "Access token is invalid", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class TokenExpiredError(AuthenticationError):
    def __init__(self, details: Optional[Dict[str, Any]] = None):
        super().__init__("Access token has expired, sign in again", details)


class InsufficientRoleError(HiringException):
    """The caller is signed in, but their role may not perform the action."""

    def __init__(self, allowed_roles: Iterable[UserRole], current_role: UserRole):
        self.allowed_roles = list(allowed_roles)
        self.current_role = current_role
        audience = " and ".join(ROLE_LABELS[r] for r in self.allowed_roles)
        super().__init__(
            f"This action is reserved for {audience}",
            status.HTTP_403_FORBIDDEN,
            {"allowed_roles": [r.value for r in self.allowed_roles], "role": current_role.value},
        )
