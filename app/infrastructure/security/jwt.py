"""Staff API tokens (HS256, shared SECRET_KEY).

The internal application issues these; the portal only verifies them and
reads the organization and role claims. create_access_token exists for the
development seed script and tests.
"""

from datetime import timedelta
from typing import Any, cast

from jose import JWTError, jwt

from app.core.config import get_settings
from app.shared.utils.datetime import utc_now

# Claims a staff token must carry besides exp.
REQUIRED_STAFF_CLAIMS = ("sub", "organization_id")


def create_access_token(
    claims: dict[str, Any],
    expires_delta: timedelta | None = None,
) -> str:
    """Sign a staff token carrying claims (sub, email, organization_id, role).

    Expiry defaults to settings.access_token_expire_minutes.
    """
    settings = get_settings()
    issued_at = utc_now()
    ttl = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    payload = {**claims, "iat": issued_at, "exp": issued_at + ttl}
    return cast(
        str,
        jwt.encode(
            payload, settings.secret_key.get_secret_value(), algorithm=settings.algorithm
        ),
    )


def verify_token(token: str) -> dict[str, Any]:
    """Decode a staff token and check the organization scope is present.

    Raises:
        ValueError: bad signature, expired, or a required claim is missing.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid staff token: {e!s}") from e
    missing = [claim for claim in REQUIRED_STAFF_CLAIMS if not payload.get(claim)]
    if missing:
        raise ValueError(f"Staff token missing claims: {', '.join(missing)}")
    return payload
