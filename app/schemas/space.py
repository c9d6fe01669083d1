"""Staff space API schemas: share settings, stakeholders, status, chat notifications."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator

from app.domain.enums import AccessMode, SpaceStatus


class StakeholderResponse(BaseModel):
    """An approved email on a restricted space."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    invited_email: str
    invited_at: datetime | None = None
    joined_at: datetime | None = None


class StakeholderCreateRequest(BaseModel):
    email: EmailStr


class ShareSettingsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    access_mode: AccessMode
    has_password: bool
    require_email_for_analytics: bool
    status: SpaceStatus
    stakeholders: list[StakeholderResponse] = Field(default_factory=list)


class ShareSettingsUpdateRequest(BaseModel):
    """Partial update; omitted fields are unchanged."""

    access_mode: AccessMode | None = None
    password: str | None = Field(None, min_length=1, max_length=1024)
    clear_password: bool = False
    require_email_for_analytics: bool | None = None

    @model_validator(mode="after")
    def password_xor_clear(self) -> "ShareSettingsUpdateRequest":
        if self.password is not None and self.clear_password:
            raise ValueError("Provide either password or clear_password, not both")
        return self


class SpaceStatusResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    space_id: str
    status: SpaceStatus
    available_statuses: list[SpaceStatus]


class SpaceStatusUpdateRequest(BaseModel):
    status: SpaceStatus


class ChatNotificationRequest(BaseModel):
    """A chat message the chat feature has already stored."""

    message_id: str = Field(..., min_length=1)
    sender_email: EmailStr
    sender_name: str | None = Field(None, max_length=255)
    content: str = Field(..., max_length=20000)
    mentions: list[str] = Field(default_factory=list, max_length=100)
    from_stakeholder: bool = False


class ChatNotificationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    emailed: list[str]
    suppressed: list[str]
    failed: list[str]
