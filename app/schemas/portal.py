"""Portal (external visitor) API schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from app.domain.enums import AccessMode, DenialReason, SpaceStatus


class AccessRequest(BaseModel):
    """Body for POST /portal/{space_id}/access. Which fields matter depends on the space."""

    password: str | None = Field(None, max_length=1024)
    email: str | None = Field(None, max_length=320)


class MagicLinkRequest(BaseModel):
    """Body for POST /portal/{space_id}/magic-link."""

    email: str = Field(..., max_length=320)


class MagicLinkRedeemRequest(BaseModel):
    """Body for POST /portal/{space_id}/magic-link/redeem."""

    token: str = Field(..., max_length=512)


class MagicLinkResponse(BaseModel):
    """Same message whether or not the email is a stakeholder."""

    message: str


class AccessGrantedResponse(BaseModel):
    """Admit response; the session itself travels in the HttpOnly cookie."""

    identity: str
    expires_at: datetime


class AccessDeniedResponse(BaseModel):
    """401/403 body for a refused access attempt."""

    error: DenialReason
    message: str


class SessionResponse(BaseModel):
    """Current portal session for a space."""

    space_id: str
    identity: str
    expires_at: datetime


class AccessSettingsResponse(BaseModel):
    """What the access page needs before prompting."""

    access_mode: AccessMode
    has_password: bool
    require_email_for_analytics: bool
    status: SpaceStatus
    client_name: str | None = None
    logo_url: str | None = None
    brand_color: str | None = None
    org_logo_url: str | None = None
    org_brand_color: str | None = None
