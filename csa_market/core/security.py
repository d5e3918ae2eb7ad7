"""Identity-provider token handling.

Sign-in happens at the external identity provider; this service only verifies
the bearer tokens it issues and reads the user id from the ``sub`` claim.
"""

from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from csa_market.core.settings import get_settings


def create_access_token(user_id: str, expires_delta: timedelta | None = None) -> str:
    """
    Mint an access token the way the identity provider does.

    Used by local tooling and tests; production tokens come from the provider.

    Args:
        user_id: Subject of the token
        expires_delta: Lifetime, defaults to the configured expiry

    Returns:
        Encoded JWT
    """
    settings = get_settings()
    now = datetime.now(UTC)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)

    payload: dict[str, Any] = {"sub": user_id, "iat": now, "exp": now + expires_delta}
    if settings.jwt_audience:
        payload["aud"] = settings.jwt_audience
    if settings.jwt_issuer:
        payload["iss"] = settings.jwt_issuer

    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def verify_token(token: str) -> dict[str, Any]:
    """
    Verify and decode a bearer token.

    Raises:
        jwt.ExpiredSignatureError: If token is expired
        jwt.InvalidTokenError: If token is invalid
    """
    settings = get_settings()
    return jwt.decode(
        token,
        settings.jwt_secret_key,
        algorithms=[settings.jwt_algorithm],
        audience=settings.jwt_audience,
        issuer=settings.jwt_issuer,
        options={"require": ["sub", "exp"]},
    )
