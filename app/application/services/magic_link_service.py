"""Magic links: issue and redeem single-use, time-limited portal access tokens.

The raw token only leaves this module in the emailed link; the store keeps
its SHA-256 digest. Requesting a link only checks membership: issuing the
token and emailing it happen after the response, so reply time does not
depend on whether the email is a stakeholder. Redemption is a single
conditional update in the store, so a token admits at most once even under
concurrent requests.
"""

from __future__ import annotations

import hashlib
import secrets
from datetime import timedelta

from app.application.dtos.access import (
    AccessDecision,
    AccessDenied,
    AccessGranted,
    MagicLinkEmail,
    MagicLinkRequestResult,
)
from app.application.interfaces.repositories import (
    IAccessTokenRepository,
    ISpaceMemberRepository,
    ISpaceRepository,
)
from app.application.interfaces.services import IActivityHook, ISessionManager
from app.application.services.access_policy_evaluator import lifecycle_denial
from app.application.services.email_delivery import EmailDelivery
from app.domain.enums import DenialReason, EmailType, IntegrationEvent
from app.domain.exceptions import SpaceNotFoundException
from app.domain.value_objects import normalize_email
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import utc_now

logger = get_logger(__name__)

MAGIC_LINK_SENT_MESSAGE = "If your email is in our system, we've sent you a link!"
LINK_INVALID_MESSAGE = "Link is invalid or has expired."
MAGIC_LINK_SUBJECT = "Your access link"

# 32 random bytes (256 bits) before URL-safe encoding.
TOKEN_BYTES = 32


def generate_token() -> str:
    """Return a new URL-safe random token."""
    return secrets.token_urlsafe(TOKEN_BYTES)


def hash_token(token: str) -> str:
    """Return the SHA-256 hex digest stored in place of the raw token."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class MagicLinkService:
    """Request and redeem magic links for restricted-mode stakeholders."""

    def __init__(
        self,
        space_repo: ISpaceRepository,
        member_repo: ISpaceMemberRepository,
        token_repo: IAccessTokenRepository,
        session_manager: ISessionManager,
        email_delivery: EmailDelivery,
        *,
        app_url: str,
        ttl_days: int = 7,
        activity_hook: IActivityHook | None = None,
    ) -> None:
        self._space_repo = space_repo
        self._member_repo = member_repo
        self._token_repo = token_repo
        self._session_manager = session_manager
        self._email_delivery = email_delivery
        self._app_url = app_url.rstrip("/")
        self._ttl = timedelta(days=ttl_days)
        self._activity_hook = activity_hook

    def build_link(self, space_id: str, token: str) -> str:
        return f"{self._app_url}/space/{space_id}/access?token={token}"

    async def request_magic_link(
        self, space_id: str, email: str | None
    ) -> MagicLinkRequestResult:
        """Check whether email may receive a link. Writes nothing and sends nothing.

        The result compares equal whether or not the email is known and
        costs the same lookup either way. The caller passes result.recipient
        to issue_magic_link and deliver_magic_link outside the request.
        """
        normalized = normalize_email(email)
        if normalized is None:
            return MagicLinkRequestResult(message=MAGIC_LINK_SENT_MESSAGE)
        member = await self._member_repo.find_stakeholder(space_id, normalized)
        if member is None:
            logger.debug("Magic link requested for non-stakeholder on space %s", space_id)
            return MagicLinkRequestResult(message=MAGIC_LINK_SENT_MESSAGE)
        return MagicLinkRequestResult(message=MAGIC_LINK_SENT_MESSAGE, recipient=normalized)

    async def issue_magic_link(self, space_id: str, email: str) -> MagicLinkEmail | None:
        """Store a new token digest for a stakeholder and return the email to send.

        Returns None when email is no longer a stakeholder. The caller commits
        before delivering so a link is never sent for a token that was not stored.
        """
        normalized = normalize_email(email)
        if normalized is None:
            return None
        if await self._member_repo.find_stakeholder(space_id, normalized) is None:
            logger.info("Stakeholder removed before magic link issue on space %s", space_id)
            return None

        token = generate_token()
        expires_at = utc_now() + self._ttl
        await self._token_repo.create(space_id, normalized, hash_token(token), expires_at)

        summary = await self._space_repo.get_summary(space_id)
        return MagicLinkEmail(
            space_id=space_id,
            to_email=normalized,
            link=self.build_link(space_id, token),
            expires_at=expires_at,
            space_name=summary.name if summary else None,
            organization_id=summary.organization_id if summary else None,
        )

    async def deliver_magic_link(self, email: MagicLinkEmail) -> bool:
        """Send an issued link and log the attempt. Best-effort: never raises."""
        return await self._email_delivery.send(
            email.to_email,
            EmailType.MAGIC_LINK,
            MAGIC_LINK_SUBJECT,
            {
                "link": email.link,
                "space_name": email.space_name,
                "expires_at": email.expires_at.isoformat(),
            },
            space_id=email.space_id,
            organization_id=email.organization_id,
        )

    async def redeem_magic_link(self, space_id: str, token: str | None) -> AccessDecision:
        """Redeem a token and mint a session.

        Raises:
            SpaceNotFoundException: space_id does not exist.

        Returns:
            AccessGranted with session, a lifecycle AccessDenied for draft or
            archived spaces, or LINK_INVALID for any unusable token.
        """
        config = await self._space_repo.get_access_config(space_id)
        if config is None:
            raise SpaceNotFoundException(space_id)
        denied = lifecycle_denial(config)
        if denied is not None:
            return denied

        invalid = AccessDenied(DenialReason.LINK_INVALID, LINK_INVALID_MESSAGE)
        if not token:
            return invalid

        now = utc_now()
        redeemed = await self._token_repo.redeem(space_id, hash_token(token), now)
        if redeemed is None:
            logger.info("Magic link rejected for space %s", space_id)
            return invalid

        # Stakeholders removed after the link was issued lose access.
        member = await self._member_repo.find_stakeholder(space_id, redeemed.email)
        if member is None:
            logger.info("Magic link redeemed by removed stakeholder on space %s", space_id)
            return invalid

        first_visit = await self._member_repo.mark_joined(member.id, now)
        session = self._session_manager.create(space_id, redeemed.email)
        if first_visit and self._activity_hook is not None:
            await self._activity_hook.record(
                space_id,
                redeemed.email,
                IntegrationEvent.PORTAL_FIRST_VISIT.value,
                {"via": "magic_link"},
            )
        return AccessGranted(identity=redeemed.email, member_id=member.id, session=session)
