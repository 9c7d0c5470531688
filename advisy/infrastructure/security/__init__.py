"""Security: JWT verification for API callers."""

from advisy.infrastructure.security.jwt import (
    TokenClaims,
    create_access_token,
    verify_token,
)

__all__ = ["TokenClaims", "create_access_token", "verify_token"]
