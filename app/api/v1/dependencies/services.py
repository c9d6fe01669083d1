"""Application service dependencies (composition root).

Routes depend only on these builders; repositories share the request's
session so each request is one transaction. Background work
(get_magic_link_sender) opens its own sessions through get_session_scope.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.dependencies.db import SessionScope, get_session_scope
from app.api.v1.dependencies.infra import (
    get_cipher,
    get_mailer,
    get_session_manager,
    get_signer,
    get_slack_client,
)
from app.application.interfaces.services import (
    IMailer,
    ISecretCipher,
    ISessionManager,
    ISignedUrlProvider,
    ISlackClient,
)
from app.application.services import (
    AccessPolicyEvaluator,
    ActivityHook,
    ChatNotificationService,
    EmailDelivery,
    MagicLinkService,
    NotificationRateLimiter,
    PortalAccessService,
    ShareSettingsService,
    SlackIntegrationService,
    SlackNotificationService,
    SpaceStatusService,
)
from app.core.config import get_settings
from app.infrastructure.persistence.database import get_db, get_db_transactional
from app.infrastructure.persistence.repositories import (
    AccessTokenRepository,
    ActivityLogRepository,
    EmailLogRepository,
    NotificationRepository,
    SlackIntegrationRepository,
    SpaceMemberRepository,
    SpaceRepository,
)
from app.infrastructure.security import BcryptPasswordHasher


def _activity_hook(
    db: AsyncSession, cipher: ISecretCipher, slack_client: ISlackClient | None
) -> ActivityHook:
    space_repo = SpaceRepository(db)
    notifier = None
    if slack_client is not None:
        notifier = SlackNotificationService(
            SlackIntegrationRepository(db),
            cipher,
            slack_client,
            app_url=get_settings().app_url,
        )
    return ActivityHook(ActivityLogRepository(db), space_repo, notifier)


def _portal_access_service(
    db: AsyncSession,
    session_manager: ISessionManager,
    signer: ISignedUrlProvider | None,
    activity_hook: ActivityHook | None,
) -> PortalAccessService:
    settings = get_settings()
    member_repo = SpaceMemberRepository(db)
    evaluator = AccessPolicyEvaluator(
        member_repo,
        BcryptPasswordHasher(),
        mask_membership=settings.mask_restricted_membership,
    )
    return PortalAccessService(
        SpaceRepository(db),
        member_repo,
        evaluator,
        session_manager,
        signer=signer,
        branding_url_ttl_seconds=settings.branding_url_ttl_seconds,
        activity_hook=activity_hook,
    )


async def get_portal_access_service_for_read(
    db: Annotated[AsyncSession, Depends(get_db)],
    session_manager: Annotated[ISessionManager, Depends(get_session_manager)],
    signer: Annotated[ISignedUrlProvider | None, Depends(get_signer)],
) -> PortalAccessService:
    """Access settings and session reads (no writes)."""
    return _portal_access_service(db, session_manager, signer, None)


async def get_portal_access_service(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    session_manager: Annotated[ISessionManager, Depends(get_session_manager)],
    signer: Annotated[ISignedUrlProvider | None, Depends(get_signer)],
    cipher: Annotated[ISecretCipher, Depends(get_cipher)],
    slack_client: Annotated[ISlackClient | None, Depends(get_slack_client)],
) -> PortalAccessService:
    """Access evaluation: joined_at, session and first-visit activity in one transaction."""
    hook = _activity_hook(db, cipher, slack_client)
    return _portal_access_service(db, session_manager, signer, hook)


def _magic_link_service(
    db: AsyncSession,
    session_manager: ISessionManager,
    mailer: IMailer,
    activity_hook: ActivityHook | None = None,
) -> MagicLinkService:
    settings = get_settings()
    return MagicLinkService(
        SpaceRepository(db),
        SpaceMemberRepository(db),
        AccessTokenRepository(db),
        session_manager,
        EmailDelivery(mailer, EmailLogRepository(db)),
        app_url=settings.app_url,
        ttl_days=settings.magic_link_ttl_days,
        activity_hook=activity_hook,
    )


async def get_magic_link_service(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    session_manager: Annotated[ISessionManager, Depends(get_session_manager)],
    mailer: Annotated[IMailer, Depends(get_mailer)],
    cipher: Annotated[ISecretCipher, Depends(get_cipher)],
    slack_client: Annotated[ISlackClient | None, Depends(get_slack_client)],
) -> MagicLinkService:
    """Redemption: token use, joined_at, session and first-visit activity in one transaction."""
    return _magic_link_service(
        db, session_manager, mailer, _activity_hook(db, cipher, slack_client)
    )


async def get_magic_link_service_for_read(
    db: Annotated[AsyncSession, Depends(get_db)],
    session_manager: Annotated[ISessionManager, Depends(get_session_manager)],
    mailer: Annotated[IMailer, Depends(get_mailer)],
) -> MagicLinkService:
    """Link requests: membership lookup only; issuing runs in get_magic_link_sender."""
    return _magic_link_service(db, session_manager, mailer)


def get_magic_link_sender(
    session_manager: Annotated[ISessionManager, Depends(get_session_manager)],
    mailer: Annotated[IMailer, Depends(get_mailer)],
    session_scope: Annotated[SessionScope, Depends(get_session_scope)],
) -> Callable[[str, str], Awaitable[None]]:
    """Return a callable that issues then emails a magic link in fresh sessions.

    The token row is committed before the mailer is called; the email_log
    row is written in a second transaction.
    """

    async def send_magic_link(space_id: str, email: str) -> None:
        async with session_scope() as session:
            service = _magic_link_service(session, session_manager, mailer)
            issued = await service.issue_magic_link(space_id, email)
        if issued is None:
            return
        async with session_scope() as session:
            service = _magic_link_service(session, session_manager, mailer)
            await service.deliver_magic_link(issued)

    return send_magic_link


async def get_share_settings_service(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> ShareSettingsService:
    return ShareSettingsService(
        SpaceRepository(db), SpaceMemberRepository(db), BcryptPasswordHasher()
    )


async def get_space_status_service(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    cipher: Annotated[ISecretCipher, Depends(get_cipher)],
    slack_client: Annotated[ISlackClient | None, Depends(get_slack_client)],
) -> SpaceStatusService:
    return SpaceStatusService(
        SpaceRepository(db), activity_hook=_activity_hook(db, cipher, slack_client)
    )


async def get_chat_notification_service(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    mailer: Annotated[IMailer, Depends(get_mailer)],
) -> ChatNotificationService:
    settings = get_settings()
    email_log_repo = EmailLogRepository(db)
    return ChatNotificationService(
        SpaceRepository(db),
        SpaceMemberRepository(db),
        NotificationRepository(db),
        EmailDelivery(mailer, email_log_repo),
        NotificationRateLimiter(
            email_log_repo, window_minutes=settings.notification_window_minutes
        ),
        app_url=settings.app_url,
    )


async def get_slack_integration_service(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    cipher: Annotated[ISecretCipher, Depends(get_cipher)],
    slack_client: Annotated[ISlackClient | None, Depends(get_slack_client)],
) -> SlackIntegrationService:
    return SlackIntegrationService(SlackIntegrationRepository(db), cipher, slack_client)
