"""Slack integration management. Owner or admin role required."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status

from app.api.v1.dependencies import IntegrationAdmin, get_slack_integration_service
from app.application.services import SlackIntegrationService
from app.core.limiter import limit_writes
from app.schemas.integration import (
    SlackChannelResponse,
    SlackConnectRequest,
    SlackIntegrationResponse,
    SlackIntegrationUpdateRequest,
)

router = APIRouter()


@router.post(
    "/slack",
    response_model=SlackIntegrationResponse,
    status_code=status.HTTP_201_CREATED,
)
@limit_writes
async def connect_slack(
    request: Request,
    body: SlackConnectRequest,
    staff: IntegrationAdmin,
    service: Annotated[SlackIntegrationService, Depends(get_slack_integration_service)],
):
    """Store the bot token (encrypted) for the caller's organization."""
    integration = await service.connect(
        staff.organization_id, body.access_token, body.team_id, body.team_name
    )
    return SlackIntegrationResponse.model_validate(integration, from_attributes=True)


@router.put("/slack/{integration_id}", response_model=SlackIntegrationResponse)
@limit_writes
async def update_slack(
    request: Request,
    integration_id: str,
    body: SlackIntegrationUpdateRequest,
    staff: IntegrationAdmin,
    service: Annotated[SlackIntegrationService, Depends(get_slack_integration_service)],
):
    """Change subscribed events, target channel, or the enabled flag."""
    integration = await service.update_settings(
        integration_id,
        staff.organization_id,
        enabled_events=body.enabled_events,
        channel_id=body.notification_channel_id,
        channel_name=body.notification_channel_name,
        enabled=body.enabled,
    )
    return SlackIntegrationResponse.model_validate(integration, from_attributes=True)


@router.get("/slack/{integration_id}/channels", response_model=list[SlackChannelResponse])
async def list_slack_channels(
    integration_id: str,
    staff: IntegrationAdmin,
    service: Annotated[SlackIntegrationService, Depends(get_slack_integration_service)],
):
    channels = await service.list_channels(integration_id, staff.organization_id)
    return [SlackChannelResponse.model_validate(c) for c in channels]


@router.delete("/slack/{integration_id}", status_code=status.HTTP_204_NO_CONTENT)
@limit_writes
async def disconnect_slack(
    request: Request,
    integration_id: str,
    staff: IntegrationAdmin,
    service: Annotated[SlackIntegrationService, Depends(get_slack_integration_service)],
) -> Response:
    await service.disconnect(integration_id, staff.organization_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
