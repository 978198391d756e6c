"""
JWT verification utilities.

Tokens are HS256-signed with JWT_SECRET and carry the user id in "sub" and
the platform role in "role".
"""
import logging
from typing import Any, Dict, Optional
from datetime import datetime, timezone

import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError as JWTInvalidTokenError

from hiring.auth import config as auth_config
from hiring.auth.exceptions import InvalidTokenError, TokenExpiredError

logger = logging.getLogger(__name__)


def verify_token(token: str) -> Dict[str, Any]:
    """Verify an HS256 token and return its claims."""
    if not auth_config.JWT_SECRET:
        raise InvalidTokenError("JWT_SECRET not configured")

    options = {"require": ["sub", "exp"]}
    kwargs: Dict[str, Any] = {}
    if auth_config.JWT_AUDIENCE:
        kwargs["audience"] = auth_config.JWT_AUDIENCE
    else:
        options["verify_aud"] = False

    try:
        return jwt.decode(
            token,
            auth_config.JWT_SECRET,
            algorithms=["HS256"],
            options=options,
            **kwargs,
        )
    except ExpiredSignatureError:
        raise TokenExpiredError()
    except JWTInvalidTokenError as e:
        logger.warning(f"Invalid HS256 token: {e}")
        raise InvalidTokenError()


def extract_user_id(payload: Dict[str, Any]) -> str:
    """Extract the user ID (sub claim) from a decoded JWT payload."""
    user_id = payload.get("sub")
    if not user_id:
        raise InvalidTokenError("Token missing user ID (sub claim)")
    return user_id


def extract_role(payload: Dict[str, Any]) -> str:
    role = payload.get("role")
    if not role:
        raise InvalidTokenError("Token missing role claim")
    return role


def extract_email(payload: Dict[str, Any]) -> Optional[str]:
    return payload.get("email")


def create_access_token(
    user_id: str,
    role: str,
    email: Optional[str] = None,
    name: Optional[str] = None,
    expires_in: Optional[int] = None,
) -> str:
    """Mint an HS256 token (development and tests)."""
    if not auth_config.JWT_SECRET:
        raise InvalidTokenError("JWT_SECRET not configured")

    now = datetime.now(timezone.utc)
    lifetime = expires_in if expires_in is not None else auth_config.ACCESS_TOKEN_EXPIRY
    claims: Dict[str, Any] = {
        "sub": user_id,
        "role": role,
        "iat": int(now.timestamp()),
        "exp": int(now.timestamp() + lifetime),
    }
    if email:
        claims["email"] = email
    if name:
        claims["name"] = name
    if auth_config.JWT_AUDIENCE:
        claims["aud"] = auth_config.JWT_AUDIENCE

    return jwt.encode(claims, auth_config.JWT_SECRET, algorithm="HS256")
