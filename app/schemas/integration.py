"""Slack integration API schemas. The access token is write-only."""

from pydantic import BaseModel, ConfigDict, Field


class SlackConnectRequest(BaseModel):
    access_token: str = Field(..., min_length=1, max_length=512)
    team_id: str | None = Field(None, max_length=64)
    team_name: str | None = Field(None, max_length=255)


class SlackIntegrationUpdateRequest(BaseModel):
    """Partial update; omitted fields are unchanged."""

    enabled: bool | None = None
    enabled_events: list[str] | None = None
    notification_channel_id: str | None = Field(None, max_length=64)
    notification_channel_name: str | None = Field(None, max_length=255)


class SlackIntegrationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    organization_id: str
    team_id: str | None = None
    team_name: str | None = None
    enabled: bool
    enabled_events: list[str]
    notification_channel_id: str | None = None
    notification_channel_name: str | None = None
    error_count: int = 0


class SlackChannelResponse(BaseModel):
    id: str
    name: str
    is_private: bool = False
