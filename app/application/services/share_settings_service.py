"""Share settings for staff: access mode, portal password, approved stakeholders."""

from __future__ import annotations

import asyncio

from app.application.dtos.space import ShareSettings, ShareSettingsUpdate, SpaceMemberResult
from app.application.interfaces.repositories import ISpaceMemberRepository, ISpaceRepository
from app.application.interfaces.services import IPasswordHasher
from app.application.services.space_status_service import load_space_for_organization
from app.domain.exceptions import (
    ResourceNotFoundException,
    SpaceNotFoundException,
    ValidationException,
)
from app.domain.value_objects import normalize_email
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

# bcrypt only reads the first 72 bytes of its input.
MAX_PASSWORD_BYTES = 72


class ShareSettingsService:
    """Read and update how a space is shared with external visitors."""

    def __init__(
        self,
        space_repo: ISpaceRepository,
        member_repo: ISpaceMemberRepository,
        password_hasher: IPasswordHasher,
    ) -> None:
        self._space_repo = space_repo
        self._member_repo = member_repo
        self._hasher = password_hasher

    async def get_share_settings(self, space_id: str, organization_id: str) -> ShareSettings:
        await load_space_for_organization(self._space_repo, space_id, organization_id)
        config = await self._space_repo.get_access_config(space_id)
        if config is None:
            raise SpaceNotFoundException(space_id)
        stakeholders = await self._member_repo.list_stakeholders(space_id)
        return ShareSettings(
            access_mode=config.access_mode,
            has_password=config.has_password,
            require_email_for_analytics=config.require_email_for_analytics,
            status=config.status,
            stakeholders=stakeholders,
        )

    async def update_share_settings(
        self, space_id: str, organization_id: str, update: ShareSettingsUpdate
    ) -> ShareSettings:
        """Apply a partial update. A new password is hashed; an empty update is a no-op."""
        await load_space_for_organization(self._space_repo, space_id, organization_id)
        if update.password and update.clear_password:
            raise ValidationException(
                "Set a new password or clear it, not both", field="password"
            )
        if not update.is_empty():
            password_hash: str | None = None
            if update.password:
                if len(update.password.encode("utf-8")) > MAX_PASSWORD_BYTES:
                    raise ValidationException(
                        f"Password must be at most {MAX_PASSWORD_BYTES} bytes",
                        field="password",
                    )
                password_hash = await asyncio.to_thread(self._hasher.hash, update.password)
            await self._space_repo.update_access_settings(
                space_id,
                access_mode=update.access_mode,
                password_hash=password_hash,
                clear_password=update.clear_password,
                require_email_for_analytics=update.require_email_for_analytics,
            )
            logger.info("Share settings updated for space %s", space_id)
        return await self.get_share_settings(space_id, organization_id)

    async def add_stakeholder(
        self, space_id: str, organization_id: str, email: str
    ) -> SpaceMemberResult:
        """Approve an email for restricted access.

        Raises:
            ValidationException: blank email or already approved.
        """
        await load_space_for_organization(self._space_repo, space_id, organization_id)
        normalized = normalize_email(email)
        if normalized is None:
            raise ValidationException("Email is required", field="email")
        existing = await self._member_repo.find_stakeholder(space_id, normalized)
        if existing is not None:
            raise ValidationException("Email already added", field="email")
        return await self._member_repo.add_stakeholder(space_id, normalized)

    async def remove_stakeholder(
        self, space_id: str, organization_id: str, member_id: str
    ) -> None:
        """Revoke an approved email.

        Raises:
            ResourceNotFoundException: no stakeholder row with member_id in this space.
        """
        await load_space_for_organization(self._space_repo, space_id, organization_id)
        removed = await self._member_repo.remove(space_id, member_id)
        if not removed:
            raise ResourceNotFoundException("space_member", member_id)
