"""
Authentication configuration.

Centralizes JWT settings for bearer tokens issued by the identity provider.
"""
import os
from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# Token Configuration
# =============================================================================

# Shared secret used to verify HS256 tokens
JWT_SECRET = os.environ.get("JWT_SECRET", "")

# Expected "aud" claim; empty disables the audience check
JWT_AUDIENCE = os.environ.get("JWT_AUDIENCE", "")

# Lifetime of tokens minted by create_access_token (seconds)
ACCESS_TOKEN_EXPIRY = int(os.environ.get("ACCESS_TOKEN_EXPIRY", "3600"))
