"""Tests for SpaceStatusService, ShareSettingsService and PortalAccessService (in-memory repos)."""

from dataclasses import replace
from datetime import datetime

import pytest

from app.application.dtos.access import AccessCredentials, AccessDenied, AccessGranted
from app.application.dtos.space import ShareSettingsUpdate, SpaceMemberResult, SpaceSummary
from app.application.services.access_policy_evaluator import AccessPolicyEvaluator
from app.application.services.portal_access_service import PortalAccessService
from app.application.services.share_settings_service import ShareSettingsService
from app.application.services.space_status_service import SpaceStatusService
from app.domain.entities.space import Branding, SpaceAccessConfig
from app.domain.enums import AccessMode, DenialReason, MemberRole, SpaceStatus
from app.domain.exceptions import (
    InvalidTransitionException,
    ResourceNotFoundException,
    SpaceNotFoundException,
    ValidationException,
)
from app.infrastructure.security.portal_session import PortalSessionManager


class InMemorySpaceRepo:
    def __init__(self, config: SpaceAccessConfig) -> None:
        self.config = config
        self.status_writes: list[SpaceStatus] = []

    async def get_access_config(self, space_id):
        return self.config if space_id == self.config.space_id else None

    async def get_summary(self, space_id):
        if space_id != self.config.space_id:
            return None
        return SpaceSummary(
            id=space_id,
            organization_id=self.config.organization_id,
            name="Globex rollout",
            status=self.config.status,
            owner_email="owner@acme.com",
        )

    async def update_status(self, space_id, status) -> None:
        self.status_writes.append(status)
        self.config = replace(self.config, status=status)

    async def update_access_settings(
        self,
        space_id,
        *,
        access_mode=None,
        password_hash=None,
        clear_password=False,
        require_email_for_analytics=None,
    ) -> None:
        changes: dict = {}
        if access_mode is not None:
            changes["access_mode"] = access_mode
        if clear_password:
            changes["password_hash"] = None
        elif password_hash is not None:
            changes["password_hash"] = password_hash
        if require_email_for_analytics is not None:
            changes["require_email_for_analytics"] = require_email_for_analytics
        self.config = replace(self.config, **changes)


class InMemoryMemberRepo:
    def __init__(self) -> None:
        self.members: dict[str, SpaceMemberResult] = {}
        self.joined: set[str] = set()

    async def find_stakeholder(self, space_id, email):
        for m in self.members.values():
            if m.space_id == space_id and m.invited_email == email:
                return m
        return None

    async def list_stakeholders(self, space_id):
        return [m for m in self.members.values() if m.space_id == space_id]

    async def add_stakeholder(self, space_id, email):
        member = SpaceMemberResult(
            id=f"m{len(self.members) + 1}",
            space_id=space_id,
            invited_email=email,
            role=MemberRole.STAKEHOLDER,
        )
        self.members[member.id] = member
        return member

    async def remove(self, space_id, member_id) -> bool:
        member = self.members.get(member_id)
        if member is None or member.space_id != space_id:
            return False
        del self.members[member_id]
        return True

    async def mark_joined(self, member_id: str, joined_at: datetime) -> bool:
        if member_id in self.joined:
            return False
        self.joined.add(member_id)
        return True


class FakeHasher:
    def hash(self, password: str) -> str:
        return f"hash:{password}"

    def verify(self, password: str, password_hash: str) -> bool:
        return password_hash == f"hash:{password}"

    def dummy_verify(self, password: str) -> None:
        return None


class RecordingHook:
    def __init__(self) -> None:
        self.calls: list[tuple] = []

    async def record(self, space_id, actor_email, action, metadata=None) -> None:
        self.calls.append((space_id, actor_email, action, metadata))


class FakeSigner:
    async def sign(self, object_path: str, ttl_seconds: int) -> str:
        if object_path == "broken.png":
            raise RuntimeError("signing backend down")
        return f"https://files.example.com/{object_path}?ttl={ttl_seconds}"


def _config(**overrides) -> SpaceAccessConfig:
    values = {
        "space_id": "space-1",
        "organization_id": "org-1",
        "access_mode": AccessMode.RESTRICTED,
        "status": SpaceStatus.ACTIVE,
    }
    values.update(overrides)
    return SpaceAccessConfig(**values)


@pytest.fixture
def spaces() -> InMemorySpaceRepo:
    return InMemorySpaceRepo(_config())


@pytest.fixture
def members() -> InMemoryMemberRepo:
    return InMemoryMemberRepo()


@pytest.fixture
def hook() -> RecordingHook:
    return RecordingHook()


async def test_status_get_lists_available(spaces) -> None:
    result = await SpaceStatusService(spaces).get_status("space-1", "org-1")
    assert result.status == SpaceStatus.ACTIVE
    assert result.available_statuses == [
        SpaceStatus.ACTIVE,
        SpaceStatus.COMPLETED,
        SpaceStatus.ARCHIVED,
    ]


async def test_status_change_persists_and_records_activity(spaces, hook) -> None:
    service = SpaceStatusService(spaces, activity_hook=hook)
    result = await service.change_status(
        "space-1", "org-1", SpaceStatus.COMPLETED, "owner@acme.com"
    )
    assert result.status == SpaceStatus.COMPLETED
    assert spaces.status_writes == [SpaceStatus.COMPLETED]
    assert hook.calls == [
        (
            "space-1",
            "owner@acme.com",
            "space.status_changed",
            {"from": "active", "to": "completed"},
        )
    ]


async def test_invalid_transition_writes_nothing(hook) -> None:
    spaces = InMemorySpaceRepo(_config(status=SpaceStatus.DRAFT))
    service = SpaceStatusService(spaces, activity_hook=hook)
    with pytest.raises(InvalidTransitionException):
        await service.change_status("space-1", "org-1", SpaceStatus.COMPLETED, "owner@acme.com")
    assert spaces.status_writes == []
    assert hook.calls == []


async def test_status_of_other_organization_space_is_not_found(spaces) -> None:
    with pytest.raises(SpaceNotFoundException):
        await SpaceStatusService(spaces).get_status("space-1", "org-2")


async def test_share_settings_password_is_hashed_and_never_returned(spaces, members) -> None:
    service = ShareSettingsService(spaces, members, FakeHasher())
    settings = await service.update_share_settings(
        "space-1",
        "org-1",
        ShareSettingsUpdate(access_mode=AccessMode.PUBLIC, password="hunter2"),
    )
    assert settings.access_mode == AccessMode.PUBLIC
    assert settings.has_password is True
    assert spaces.config.password_hash == "hash:hunter2"

    cleared = await service.update_share_settings(
        "space-1", "org-1", ShareSettingsUpdate(clear_password=True)
    )
    assert cleared.has_password is False
    assert cleared.access_mode == AccessMode.PUBLIC


async def test_share_settings_rejects_conflicting_password_update(spaces, members) -> None:
    service = ShareSettingsService(spaces, members, FakeHasher())
    with pytest.raises(ValidationException):
        await service.update_share_settings(
            "space-1", "org-1", ShareSettingsUpdate(password="x", clear_password=True)
        )


async def test_share_settings_rejects_password_over_72_bytes(spaces, members) -> None:
    service = ShareSettingsService(spaces, members, FakeHasher())
    with pytest.raises(ValidationException):
        await service.update_share_settings(
            "space-1", "org-1", ShareSettingsUpdate(password="é" * 37)
        )


async def test_stakeholders_add_list_remove(spaces, members) -> None:
    service = ShareSettingsService(spaces, members, FakeHasher())
    added = await service.add_stakeholder("space-1", "org-1", " Client@Globex.com ")
    assert added.invited_email == "client@globex.com"

    with pytest.raises(ValidationException):
        await service.add_stakeholder("space-1", "org-1", "client@globex.com")

    settings = await service.get_share_settings("space-1", "org-1")
    assert [s.invited_email for s in settings.stakeholders] == ["client@globex.com"]

    await service.remove_stakeholder("space-1", "org-1", added.id)
    with pytest.raises(ResourceNotFoundException):
        await service.remove_stakeholder("space-1", "org-1", added.id)


def _portal(spaces, members, hook=None, signer=None) -> PortalAccessService:
    return PortalAccessService(
        spaces,
        members,
        AccessPolicyEvaluator(members, FakeHasher()),
        PortalSessionManager("test-portal-secret"),
        signer=signer,
        activity_hook=hook,
    )


async def test_admission_stamps_first_visit_once(spaces, members, hook) -> None:
    await members.add_stakeholder("space-1", "a@x.com")
    service = _portal(spaces, members, hook)

    first = await service.evaluate_access("space-1", AccessCredentials(email="a@x.com"))
    second = await service.evaluate_access("space-1", AccessCredentials(email="A@x.com"))

    assert isinstance(first, AccessGranted)
    assert isinstance(second, AccessGranted)
    assert first.session is not None
    assert first.session.identity == "a@x.com"
    assert hook.calls == [
        ("space-1", "a@x.com", "portal.first_visit", {"via": "access_form"})
    ]


async def test_denial_mints_no_session(spaces, members) -> None:
    decision = await _portal(spaces, members).evaluate_access(
        "space-1", AccessCredentials(email="b@x.com")
    )
    assert isinstance(decision, AccessDenied)
    assert decision.reason == DenialReason.ACCESS_DENIED


async def test_unknown_space_raises(spaces, members) -> None:
    with pytest.raises(SpaceNotFoundException):
        await _portal(spaces, members).evaluate_access("missing", AccessCredentials())


async def test_read_session_round_trip(spaces, members) -> None:
    spaces.config = _config(access_mode=AccessMode.PUBLIC)
    service = _portal(spaces, members)
    decision = await service.evaluate_access("space-1", AccessCredentials())
    assert isinstance(decision, AccessGranted)
    assert decision.session is not None

    session = service.read_session("space-1", decision.session.token)
    assert session is not None
    assert session.identity == "anonymous"
    assert service.read_session("space-2", decision.session.token) is None
    assert service.read_session("space-1", None) is None


async def test_access_settings_sign_branding_and_hide_hash(spaces, members) -> None:
    spaces.config = _config(
        password_hash="hash:hunter2",
        branding=Branding(
            client_name="Globex",
            logo_path="spaces/globex.png",
            brand_color="#ff0000",
            org_logo_path="broken.png",
            org_brand_color="#1f6feb",
        ),
    )
    settings = await _portal(spaces, members, signer=FakeSigner()).get_access_settings("space-1")
    assert settings.has_password is True
    assert settings.client_name == "Globex"
    assert settings.logo_url == "https://files.example.com/spaces/globex.png?ttl=86400"
    assert settings.org_logo_url is None
    assert settings.org_brand_color == "#1f6feb"
    assert not hasattr(settings, "password_hash")


async def test_access_settings_without_signer_omit_logos(spaces, members) -> None:
    spaces.config = _config(branding=Branding(logo_path="spaces/globex.png"))
    settings = await _portal(spaces, members).get_access_settings("space-1")
    assert settings.logo_url is None
