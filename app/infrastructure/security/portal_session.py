"""Portal sessions for external visitors (HS256 JWT, one cookie per space).

The token binds an identity (email, pseudonymous visitor id, or
'anonymous') to a single space. verify() returns None for anything it
cannot trust: bad signature, expiry, or another space's token.
"""

from datetime import timedelta
from typing import cast

from fastapi import Response
from jose import JWTError, jwt

from app.application.dtos.access import PortalSession
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import from_timestamp_utc, utc_now

logger = get_logger(__name__)

SESSION_ALGORITHM = "HS256"
SESSION_COOKIE_PREFIX = "portal_session_"


def session_cookie_name(space_id: str) -> str:
    return f"{SESSION_COOKIE_PREFIX}{space_id}"


class PortalSessionManager:
    """ISessionManager implementation. Built once in create_app and kept on app.state."""

    def __init__(
        self,
        secret: str,
        *,
        expire_days: int = 30,
        cookie_secure: bool = True,
    ) -> None:
        if not secret:
            raise ValueError("Portal session secret is required")
        self._secret = secret
        self._ttl = timedelta(days=expire_days)
        self._cookie_secure = cookie_secure

    def create(self, space_id: str, identity: str) -> PortalSession:
        issued_at = utc_now()
        expires_at = issued_at + self._ttl
        token = jwt.encode(
            {
                "sub": identity,
                "space_id": space_id,
                "iat": int(issued_at.timestamp()),
                "exp": int(expires_at.timestamp()),
            },
            self._secret,
            algorithm=SESSION_ALGORITHM,
        )
        return PortalSession(
            space_id=space_id,
            identity=identity,
            token=cast(str, token),
            expires_at=from_timestamp_utc(int(expires_at.timestamp())),
        )

    def verify(self, space_id: str, token: str) -> PortalSession | None:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[SESSION_ALGORITHM],
                options={"require_exp": True, "require_sub": True},
            )
        except JWTError as e:
            logger.debug("Rejected portal session token: %s", e)
            return None
        if payload.get("space_id") != space_id:
            logger.debug("Portal session token is bound to another space")
            return None
        return PortalSession(
            space_id=space_id,
            identity=payload["sub"],
            token=token,
            expires_at=from_timestamp_utc(payload["exp"]),
        )

    def set_cookie(self, response: Response, session: PortalSession) -> None:
        response.set_cookie(
            key=session_cookie_name(session.space_id),
            value=session.token,
            max_age=int(self._ttl.total_seconds()),
            httponly=True,
            secure=self._cookie_secure,
            samesite="lax",
            path="/",
        )

    def delete_cookie(self, response: Response, space_id: str) -> None:
        response.delete_cookie(
            key=session_cookie_name(space_id),
            httponly=True,
            secure=self._cookie_secure,
            samesite="lax",
            path="/",
        )
