"""Staff space API: share settings, stakeholders, status, chat notifications.

All routes require a staff Bearer token; a space outside the caller's
organization is reported as not found.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status

from app.api.v1.dependencies import (
    CurrentStaff,
    get_chat_notification_service,
    get_share_settings_service,
    get_space_status_service,
)
from app.application.dtos.notification import ChatMessageNotice
from app.application.dtos.space import ShareSettingsUpdate
from app.application.services import (
    ChatNotificationService,
    ShareSettingsService,
    SpaceStatusService,
)
from app.core.limiter import limit_writes
from app.schemas.space import (
    ChatNotificationRequest,
    ChatNotificationResponse,
    ShareSettingsResponse,
    ShareSettingsUpdateRequest,
    SpaceStatusResponse,
    SpaceStatusUpdateRequest,
    StakeholderCreateRequest,
    StakeholderResponse,
)

router = APIRouter()


@router.get("/{space_id}/share-settings", response_model=ShareSettingsResponse)
async def get_share_settings(
    space_id: str,
    staff: CurrentStaff,
    service: Annotated[ShareSettingsService, Depends(get_share_settings_service)],
):
    settings = await service.get_share_settings(space_id, staff.organization_id)
    return ShareSettingsResponse.model_validate(settings, from_attributes=True)


@router.put("/{space_id}/share-settings", response_model=ShareSettingsResponse)
@limit_writes
async def update_share_settings(
    request: Request,
    space_id: str,
    body: ShareSettingsUpdateRequest,
    staff: CurrentStaff,
    service: Annotated[ShareSettingsService, Depends(get_share_settings_service)],
):
    """Change access mode, password gate, or the analytics email flag."""
    settings = await service.update_share_settings(
        space_id,
        staff.organization_id,
        ShareSettingsUpdate(
            access_mode=body.access_mode,
            password=body.password,
            clear_password=body.clear_password,
            require_email_for_analytics=body.require_email_for_analytics,
        ),
    )
    return ShareSettingsResponse.model_validate(settings, from_attributes=True)


@router.post(
    "/{space_id}/stakeholders",
    response_model=StakeholderResponse,
    status_code=status.HTTP_201_CREATED,
)
@limit_writes
async def add_stakeholder(
    request: Request,
    space_id: str,
    body: StakeholderCreateRequest,
    staff: CurrentStaff,
    service: Annotated[ShareSettingsService, Depends(get_share_settings_service)],
):
    member = await service.add_stakeholder(space_id, staff.organization_id, body.email)
    return StakeholderResponse.model_validate(member, from_attributes=True)


@router.delete(
    "/{space_id}/stakeholders/{member_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
@limit_writes
async def remove_stakeholder(
    request: Request,
    space_id: str,
    member_id: str,
    staff: CurrentStaff,
    service: Annotated[ShareSettingsService, Depends(get_share_settings_service)],
) -> Response:
    await service.remove_stakeholder(space_id, staff.organization_id, member_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{space_id}/status", response_model=SpaceStatusResponse)
async def get_status(
    space_id: str,
    staff: CurrentStaff,
    service: Annotated[SpaceStatusService, Depends(get_space_status_service)],
):
    result = await service.get_status(space_id, staff.organization_id)
    return SpaceStatusResponse.model_validate(result, from_attributes=True)


@router.put(
    "/{space_id}/status",
    response_model=SpaceStatusResponse,
    responses={409: {"description": "Transition not allowed from the current status"}},
)
@limit_writes
async def change_status(
    request: Request,
    space_id: str,
    body: SpaceStatusUpdateRequest,
    staff: CurrentStaff,
    service: Annotated[SpaceStatusService, Depends(get_space_status_service)],
):
    result = await service.change_status(
        space_id, staff.organization_id, body.status, staff.email
    )
    return SpaceStatusResponse.model_validate(result, from_attributes=True)


@router.post("/{space_id}/chat-notifications", response_model=ChatNotificationResponse)
@limit_writes
async def notify_chat_message(
    request: Request,
    space_id: str,
    body: ChatNotificationRequest,
    staff: CurrentStaff,
    service: Annotated[ChatNotificationService, Depends(get_chat_notification_service)],
):
    """Notify the owner and mentioned people about a message the chat feature stored."""
    summary = await service.notify_new_message(
        staff.organization_id,
        ChatMessageNotice(
            space_id=space_id,
            message_id=body.message_id,
            sender_email=str(body.sender_email),
            sender_name=body.sender_name,
            content=body.content,
            mentions=body.mentions,
            from_stakeholder=body.from_stakeholder,
        ),
    )
    return ChatNotificationResponse.model_validate(summary, from_attributes=True)
