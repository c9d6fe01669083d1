"""Portal access: the direct (password/email) entry path and the access page settings."""

from __future__ import annotations

from app.application.dtos.access import (
    AccessCredentials,
    AccessDecision,
    AccessGranted,
    PortalAccessSettings,
    PortalSession,
)
from app.application.interfaces.repositories import ISpaceMemberRepository, ISpaceRepository
from app.application.interfaces.services import (
    IActivityHook,
    ISessionManager,
    ISignedUrlProvider,
)
from app.application.services.access_policy_evaluator import AccessPolicyEvaluator
from app.domain.entities.space import SpaceAccessConfig
from app.domain.enums import IntegrationEvent
from app.domain.exceptions import SpaceNotFoundException
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import utc_now

logger = get_logger(__name__)

# Signed branding URLs stay valid for a day.
DEFAULT_BRANDING_URL_TTL_SECONDS = 60 * 60 * 24


class PortalAccessService:
    """Entry point for visitors arriving at a space without a magic link."""

    def __init__(
        self,
        space_repo: ISpaceRepository,
        member_repo: ISpaceMemberRepository,
        evaluator: AccessPolicyEvaluator,
        session_manager: ISessionManager,
        *,
        signer: ISignedUrlProvider | None = None,
        branding_url_ttl_seconds: int = DEFAULT_BRANDING_URL_TTL_SECONDS,
        activity_hook: IActivityHook | None = None,
    ) -> None:
        self._space_repo = space_repo
        self._member_repo = member_repo
        self._evaluator = evaluator
        self._session_manager = session_manager
        self._signer = signer
        self._branding_url_ttl = branding_url_ttl_seconds
        self._activity_hook = activity_hook

    async def _load_config(self, space_id: str) -> SpaceAccessConfig:
        config = await self._space_repo.get_access_config(space_id)
        if config is None:
            raise SpaceNotFoundException(space_id)
        return config

    async def evaluate_access(
        self, space_id: str, credentials: AccessCredentials
    ) -> AccessDecision:
        """Evaluate credentials and, on admit, stamp joined_at and mint a session.

        Raises:
            SpaceNotFoundException: space_id does not exist.
        """
        config = await self._load_config(space_id)
        decision = await self._evaluator.evaluate(config, credentials)
        if not isinstance(decision, AccessGranted):
            return decision

        first_visit = False
        if decision.member_id is not None:
            first_visit = await self._member_repo.mark_joined(decision.member_id, utc_now())
        session = self._session_manager.create(space_id, decision.identity)
        if first_visit and self._activity_hook is not None:
            await self._activity_hook.record(
                space_id,
                decision.identity,
                IntegrationEvent.PORTAL_FIRST_VISIT.value,
                {"via": "access_form"},
            )
        return AccessGranted(
            identity=decision.identity,
            member_id=decision.member_id,
            session=session,
        )

    def read_session(self, space_id: str, token: str | None) -> PortalSession | None:
        """Return the visitor's session for this space, or None."""
        if not token:
            return None
        return self._session_manager.verify(space_id, token)

    async def get_access_settings(self, space_id: str) -> PortalAccessSettings:
        """Return what the access page needs before prompting. No secrets leave here.

        Raises:
            SpaceNotFoundException: space_id does not exist.
        """
        config = await self._load_config(space_id)
        branding = config.branding
        return PortalAccessSettings(
            access_mode=config.access_mode,
            has_password=config.has_password,
            require_email_for_analytics=config.require_email_for_analytics,
            status=config.status,
            client_name=branding.client_name,
            logo_url=await self._signed_url(branding.logo_path),
            brand_color=branding.brand_color,
            org_logo_url=await self._signed_url(branding.org_logo_path),
            org_brand_color=branding.org_brand_color,
        )

    async def _signed_url(self, object_path: str | None) -> str | None:
        if not object_path or self._signer is None:
            return None
        try:
            return await self._signer.sign(object_path, self._branding_url_ttl)
        except Exception as e:
            logger.warning("Could not sign branding asset URL: %s", e)
            return None
