"""API dependencies: DB sessions, staff auth, app.state infrastructure, services."""

from app.api.v1.dependencies.auth import (
    CurrentStaff,
    IntegrationAdmin,
    StaffPrincipal,
    get_current_staff,
    require_integration_admin,
)
from app.api.v1.dependencies.db import ReadSession, SessionScope, get_session_scope
from app.api.v1.dependencies.infra import (
    get_cipher,
    get_http_client,
    get_mailer,
    get_session_manager,
    get_signer,
    get_slack_client,
)
from app.api.v1.dependencies.services import (
    get_chat_notification_service,
    get_magic_link_sender,
    get_magic_link_service,
    get_magic_link_service_for_read,
    get_portal_access_service,
    get_portal_access_service_for_read,
    get_share_settings_service,
    get_slack_integration_service,
    get_space_status_service,
)

__all__ = [
    "CurrentStaff",
    "IntegrationAdmin",
    "ReadSession",
    "SessionScope",
    "StaffPrincipal",
    "get_chat_notification_service",
    "get_cipher",
    "get_current_staff",
    "get_http_client",
    "get_magic_link_sender",
    "get_magic_link_service",
    "get_magic_link_service_for_read",
    "get_mailer",
    "get_portal_access_service",
    "get_portal_access_service_for_read",
    "get_session_manager",
    "get_session_scope",
    "get_share_settings_service",
    "get_signer",
    "get_slack_client",
    "get_slack_integration_service",
    "get_space_status_service",
    "require_integration_admin",
]
