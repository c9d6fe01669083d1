"""Access policy evaluator: admit/deny over a space's access configuration.

One evaluator covers every access mode. Checks run in a fixed order:
lifecycle, restricted membership, password, public email requirement.
Every input maps to AccessGranted or AccessDenied; nothing here raises for
bad credentials or malformed stored hashes.
"""

from __future__ import annotations

import asyncio

from app.application.dtos.access import (
    AccessCredentials,
    AccessDecision,
    AccessDenied,
    AccessGranted,
)
from app.application.interfaces.repositories import ISpaceMemberRepository
from app.application.interfaces.services import IPasswordHasher
from app.domain.entities.space import SpaceAccessConfig
from app.domain.enums import AccessMode, DenialReason
from app.domain.lifecycle import DENIAL_MESSAGES, entry_denial
from app.domain.value_objects import VisitorIdentity, normalize_email
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

ACCESS_DENIED_MESSAGE = "Access denied. Your email is not authorized for this portal."
EMAIL_REQUIRED_MESSAGE = "Email is required"
PASSWORD_REQUIRED_MESSAGE = "Password is required"
INCORRECT_PASSWORD_MESSAGE = "Incorrect password"
MASKED_CREDENTIALS_MESSAGE = "Invalid credentials"


def lifecycle_denial(config: SpaceAccessConfig) -> AccessDenied | None:
    """Return the status-specific denial for a draft or archived space, else None."""
    reason = entry_denial(config.status)
    if reason is None:
        return None
    return AccessDenied(reason=reason, message=DENIAL_MESSAGES[reason])


class AccessPolicyEvaluator:
    """Decide whether a visitor may enter a space.

    mask_membership: when True, restricted-mode unknown emails and wrong
    passwords return the same INVALID_CREDENTIALS denial, and a dummy bcrypt
    comparison runs for unknown emails so response time does not reveal
    membership.
    """

    def __init__(
        self,
        member_repo: ISpaceMemberRepository,
        password_hasher: IPasswordHasher,
        *,
        mask_membership: bool = False,
    ) -> None:
        self._member_repo = member_repo
        self._hasher = password_hasher
        self._mask_membership = mask_membership

    async def evaluate(
        self, config: SpaceAccessConfig, credentials: AccessCredentials
    ) -> AccessDecision:
        """Return AccessGranted (with identity) or AccessDenied (with reason)."""
        denied = lifecycle_denial(config)
        if denied is not None:
            return denied

        email = normalize_email(credentials.email)
        member_id: str | None = None

        if config.access_mode == AccessMode.RESTRICTED:
            if email is None:
                return AccessDenied(DenialReason.EMAIL_REQUIRED, EMAIL_REQUIRED_MESSAGE)
            member = await self._member_repo.find_stakeholder(config.space_id, email)
            if member is None:
                logger.info(
                    "Restricted access denied for unknown email on space %s",
                    config.space_id,
                )
                if self._mask_membership:
                    if config.password_hash is not None and not credentials.password:
                        return AccessDenied(
                            DenialReason.PASSWORD_REQUIRED, PASSWORD_REQUIRED_MESSAGE
                        )
                    if credentials.password:
                        await asyncio.to_thread(
                            self._hasher.dummy_verify, credentials.password
                        )
                    return self._invalid_credentials()
                return AccessDenied(DenialReason.ACCESS_DENIED, ACCESS_DENIED_MESSAGE)
            member_id = member.id

        if config.password_hash is not None:
            if not credentials.password:
                return AccessDenied(
                    DenialReason.PASSWORD_REQUIRED, PASSWORD_REQUIRED_MESSAGE
                )
            matches = await asyncio.to_thread(
                self._hasher.verify, credentials.password, config.password_hash
            )
            if not matches:
                logger.info("Incorrect portal password for space %s", config.space_id)
                return self._invalid_credentials()

        if (
            config.access_mode == AccessMode.PUBLIC
            and config.require_email_for_analytics
            and email is None
        ):
            return AccessDenied(DenialReason.EMAIL_REQUIRED, EMAIL_REQUIRED_MESSAGE)

        identity = VisitorIdentity.from_email(email)
        return AccessGranted(identity=str(identity), member_id=member_id)

    def _invalid_credentials(self) -> AccessDenied:
        message = (
            MASKED_CREDENTIALS_MESSAGE
            if self._mask_membership
            else INCORRECT_PASSWORD_MESSAGE
        )
        return AccessDenied(DenialReason.INVALID_CREDENTIALS, message)
