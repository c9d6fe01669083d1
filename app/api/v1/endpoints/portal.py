"""Portal API for external visitors: access page settings, entry, magic links, session.

Access refusals are typed results, not exceptions: lifecycle denials map to
403 and authentication denials to 401, each with the generic message the
evaluator chose. Admission sets the per-space HttpOnly session cookie.
"""

from collections.abc import Awaitable, Callable
from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from app.api.v1.dependencies import (
    get_magic_link_sender,
    get_magic_link_service,
    get_magic_link_service_for_read,
    get_portal_access_service,
    get_portal_access_service_for_read,
    get_session_manager,
)
from app.application.dtos.access import AccessCredentials, AccessDecision, AccessDenied
from app.application.services import MagicLinkService, PortalAccessService
from app.core.limiter import limit_magic_link, limit_magic_link_redeem, limit_portal_access
from app.infrastructure.security.portal_session import (
    PortalSessionManager,
    session_cookie_name,
)
from app.schemas.portal import (
    AccessDeniedResponse,
    AccessGrantedResponse,
    AccessRequest,
    AccessSettingsResponse,
    MagicLinkRedeemRequest,
    MagicLinkRequest,
    MagicLinkResponse,
    SessionResponse,
)
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()

_DENIAL_RESPONSES: dict[int | str, dict] = {
    401: {"model": AccessDeniedResponse, "description": "Credentials refused"},
    403: {"model": AccessDeniedResponse, "description": "Space not open to visitors"},
    404: {"description": "Space not found"},
}


def _denied_response(denied: AccessDenied) -> JSONResponse:
    code = status.HTTP_403_FORBIDDEN if denied.is_lifecycle else status.HTTP_401_UNAUTHORIZED
    return JSONResponse(
        status_code=code,
        content=AccessDeniedResponse(error=denied.reason, message=denied.message).model_dump(
            mode="json"
        ),
    )


async def _send_magic_link_job(
    send_magic_link: Callable[[str, str], Awaitable[None]],
    space_id: str,
    email: str,
) -> None:
    """Background task: issue and email a magic link. Failures are logged only."""
    try:
        await send_magic_link(space_id, email)
    except Exception:
        logger.exception("Magic link issue failed for space %s", space_id)


def _admit(
    decision: AccessDecision,
    response: Response,
    session_manager: PortalSessionManager,
) -> AccessGrantedResponse | JSONResponse:
    if isinstance(decision, AccessDenied):
        return _denied_response(decision)
    session = decision.session
    if session is None:
        raise RuntimeError("Granted access decision has no session")
    session_manager.set_cookie(response, session)
    return AccessGrantedResponse(identity=session.identity, expires_at=session.expires_at)


@router.get("/{space_id}/access-settings", response_model=AccessSettingsResponse)
async def get_access_settings(
    space_id: str,
    service: Annotated[PortalAccessService, Depends(get_portal_access_service_for_read)],
):
    """Mode flags, status and branding for the access page. No secrets."""
    settings = await service.get_access_settings(space_id)
    return AccessSettingsResponse.model_validate(settings, from_attributes=True)


@router.post(
    "/{space_id}/access",
    response_model=AccessGrantedResponse,
    responses=_DENIAL_RESPONSES,
)
@limit_portal_access
async def enter_space(
    request: Request,
    response: Response,
    space_id: str,
    body: AccessRequest,
    service: Annotated[PortalAccessService, Depends(get_portal_access_service)],
    session_manager: Annotated[PortalSessionManager, Depends(get_session_manager)],
):
    """Evaluate a password and/or email against the space's access mode."""
    decision = await service.evaluate_access(
        space_id, AccessCredentials(password=body.password, email=body.email)
    )
    return _admit(decision, response, session_manager)


@router.post("/{space_id}/magic-link", response_model=MagicLinkResponse)
@limit_magic_link
async def request_magic_link(
    request: Request,
    space_id: str,
    body: MagicLinkRequest,
    background_tasks: BackgroundTasks,
    service: Annotated[MagicLinkService, Depends(get_magic_link_service_for_read)],
    send_magic_link: Annotated[
        Callable[[str, str], Awaitable[None]], Depends(get_magic_link_sender)
    ],
):
    """Email a one-time link to an approved stakeholder. The reply never reveals membership.

    The token is issued and emailed after the response is sent.
    """
    result = await service.request_magic_link(space_id, body.email)
    if result.recipient is not None:
        background_tasks.add_task(
            _send_magic_link_job, send_magic_link, space_id, result.recipient
        )
    return MagicLinkResponse(message=result.message)


@router.post(
    "/{space_id}/magic-link/redeem",
    response_model=AccessGrantedResponse,
    responses=_DENIAL_RESPONSES,
)
@limit_magic_link_redeem
async def redeem_magic_link(
    request: Request,
    response: Response,
    space_id: str,
    body: MagicLinkRedeemRequest,
    service: Annotated[MagicLinkService, Depends(get_magic_link_service)],
    session_manager: Annotated[PortalSessionManager, Depends(get_session_manager)],
):
    """Exchange a magic-link token for a session. Each token works once."""
    decision = await service.redeem_magic_link(space_id, body.token)
    return _admit(decision, response, session_manager)


@router.get(
    "/{space_id}/session",
    response_model=SessionResponse,
    responses={401: {"description": "No valid session for this space"}},
)
async def get_session(
    request: Request,
    space_id: str,
    service: Annotated[PortalAccessService, Depends(get_portal_access_service_for_read)],
):
    """Current visitor identity for this space, from the session cookie."""
    session = service.read_session(space_id, request.cookies.get(session_cookie_name(space_id)))
    if session is None:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"error": "AUTHENTICATION_ERROR", "message": "No active session"},
        )
    return SessionResponse(
        space_id=session.space_id,
        identity=session.identity,
        expires_at=session.expires_at,
    )


@router.delete("/{space_id}/session", status_code=status.HTTP_204_NO_CONTENT)
async def end_session(
    space_id: str,
    session_manager: Annotated[PortalSessionManager, Depends(get_session_manager)],
) -> Response:
    """Sign out of this space (clears the cookie)."""
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    session_manager.delete_cookie(response, space_id)
    return response
