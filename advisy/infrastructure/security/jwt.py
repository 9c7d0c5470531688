"""JWT access tokens carrying the user id (sub) and tenant_id claims.

Uses advisy.core.config for secret and algorithm. Tokens are issued by the
identity platform; create_access_token exists for seeding scripts and tests.
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import Any, cast

from jose import JWTError, jwt

from advisy.core.config import get_settings
from advisy.core.constants import CACHE_KEY_SEP
from advisy.shared.utils import utc_now


@dataclass(frozen=True)
class TokenClaims:
    """Verified identity extracted from an access token."""

    user_id: str
    tenant_id: str
    payload: dict[str, Any]


def create_access_token(
    user_id: str,
    tenant_id: str,
    extra_claims: dict[str, Any] | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed access token for user_id in tenant_id.

    Args:
        user_id: Value of the sub claim.
        tenant_id: Value of the tenant_id claim.
        extra_claims: Optional additional claims.
        expires_delta: Optional TTL; else settings.access_token_expire_minutes.

    Returns:
        Encoded JWT string.
    """
    settings = get_settings()
    ttl = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    to_encode: dict[str, Any] = dict(extra_claims or {})
    to_encode.update(sub=user_id, tenant_id=tenant_id, exp=utc_now() + ttl)
    encoded = jwt.encode(
        to_encode,
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    return cast(str, encoded)


def verify_token(token: str) -> TokenClaims:
    """Verify and decode a JWT.

    Raises:
        ValueError: If token is invalid or expired, or sub / tenant_id is
            missing or contains the cache key separator.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    user_id = payload.get("sub")
    tenant_id = payload.get("tenant_id")
    if not user_id:
        raise ValueError("Token missing required claim: sub")
    if not tenant_id:
        raise ValueError("Token missing required claim: tenant_id")
    user_id, tenant_id = str(user_id), str(tenant_id)
    for claim, value in (("sub", user_id), ("tenant_id", tenant_id)):
        if CACHE_KEY_SEP in value:
            raise ValueError(f"Token claim {claim} contains {CACHE_KEY_SEP!r}")
    return TokenClaims(user_id=user_id, tenant_id=tenant_id, payload=payload)
