"""Staff authentication (Bearer JWT issued by the internal application)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.domain.exceptions import AuthenticationException, AuthorizationException
from app.infrastructure.security.jwt import verify_token
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

_http_bearer = HTTPBearer(auto_error=False)

# Organization roles allowed to manage integrations.
INTEGRATION_ADMIN_ROLES = frozenset({"owner", "admin"})


@dataclass(frozen=True)
class StaffPrincipal:
    """Authenticated staff caller, scoped to one organization."""

    email: str
    organization_id: str
    role: str | None = None


async def get_current_staff(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
) -> StaffPrincipal:
    """Return the caller from the Bearer token; 401 when missing or invalid."""
    if credentials is None:
        raise AuthenticationException("Not authenticated")
    try:
        payload = verify_token(credentials.credentials)
    except ValueError as e:
        logger.debug("Rejected staff token: %s", e)
        raise AuthenticationException("Invalid or expired token") from e
    return StaffPrincipal(
        email=str(payload.get("email") or payload["sub"]).lower(),
        organization_id=str(payload["organization_id"]),
        role=payload.get("role"),
    )


async def require_integration_admin(
    staff: Annotated[StaffPrincipal, Depends(get_current_staff)],
) -> StaffPrincipal:
    """Only organization owners and admins may manage integrations."""
    if staff.role not in INTEGRATION_ADMIN_ROLES:
        raise AuthorizationException("integration", "manage")
    return staff


CurrentStaff = Annotated[StaffPrincipal, Depends(get_current_staff)]
IntegrationAdmin = Annotated[StaffPrincipal, Depends(require_integration_admin)]
