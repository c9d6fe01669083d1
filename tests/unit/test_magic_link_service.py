"""Tests for MagicLinkService (in-memory repos and mailer)."""

import asyncio
from datetime import datetime

import pytest

from app.application.dtos.access import AccessDenied, AccessGranted
from app.application.dtos.space import RedeemedToken, SpaceMemberResult, SpaceSummary
from app.application.services.email_delivery import EmailDelivery
from app.application.services.magic_link_service import (
    LINK_INVALID_MESSAGE,
    MAGIC_LINK_SENT_MESSAGE,
    MagicLinkService,
    hash_token,
)
from app.domain.entities.space import SpaceAccessConfig
from app.domain.enums import (
    AccessMode,
    DenialReason,
    EmailStatus,
    EmailType,
    MemberRole,
    SpaceStatus,
)
from app.domain.exceptions import SpaceNotFoundException
from app.infrastructure.security.portal_session import PortalSessionManager


class FakeSpaceRepo:
    def __init__(self, status: SpaceStatus = SpaceStatus.ACTIVE) -> None:
        self.status = status

    async def get_access_config(self, space_id: str):
        if space_id != "space-1":
            return None
        return SpaceAccessConfig(
            space_id=space_id,
            organization_id="org-1",
            access_mode=AccessMode.RESTRICTED,
            status=self.status,
        )

    async def get_summary(self, space_id: str):
        return SpaceSummary(
            id=space_id, organization_id="org-1", name="Globex rollout", status=self.status
        )


class FakeMemberRepo:
    def __init__(self, emails: list[str]) -> None:
        self.emails = list(emails)
        self.joined: set[str] = set()

    async def find_stakeholder(self, space_id: str, email: str):
        if email not in self.emails:
            return None
        return SpaceMemberResult(
            id=f"m-{email}", space_id=space_id, invited_email=email, role=MemberRole.STAKEHOLDER
        )

    async def mark_joined(self, member_id: str, joined_at: datetime) -> bool:
        if member_id in self.joined:
            return False
        self.joined.add(member_id)
        return True


class FakeTokenRepo:
    """Mirrors the conditional update: unused, unexpired, same space."""

    def __init__(self) -> None:
        self.rows: dict[str, dict] = {}

    async def create(self, space_id, email, token_hash, expires_at) -> str:
        self.rows[token_hash] = {
            "id": f"t{len(self.rows) + 1}",
            "space_id": space_id,
            "email": email,
            "expires_at": expires_at,
            "used_at": None,
        }
        return self.rows[token_hash]["id"]

    async def redeem(self, space_id, token_hash, now):
        row = self.rows.get(token_hash)
        if (
            row is None
            or row["space_id"] != space_id
            or row["used_at"] is not None
            or row["expires_at"] <= now
        ):
            return None
        row["used_at"] = now
        return RedeemedToken(token_id=row["id"], space_id=space_id, email=row["email"], used_at=now)


class FakeMailer:
    def __init__(self, ok: bool = True) -> None:
        self.ok = ok
        self.sent: list[tuple[str, EmailType, str, dict]] = []

    async def send(self, to, kind, subject, payload) -> bool:
        self.sent.append((to, kind, subject, payload))
        return self.ok


class BlockingMailer:
    """Never finishes sending; stands in for a slow provider round trip."""

    def __init__(self) -> None:
        self.called = asyncio.Event()
        self._release = asyncio.Event()

    async def send(self, to, kind, subject, payload) -> bool:
        self.called.set()
        await self._release.wait()
        return True


class FakeEmailLog:
    def __init__(self) -> None:
        self.entries = []

    async def record(self, entry) -> None:
        self.entries.append(entry)


class FakeActivityHook:
    def __init__(self) -> None:
        self.calls: list[tuple] = []

    async def record(self, space_id, actor_email, action, metadata=None) -> None:
        self.calls.append((space_id, actor_email, action, metadata))


@pytest.fixture
def parts():
    return {
        "spaces": FakeSpaceRepo(),
        "members": FakeMemberRepo(["a@x.com"]),
        "tokens": FakeTokenRepo(),
        "mailer": FakeMailer(),
        "email_log": FakeEmailLog(),
        "hook": FakeActivityHook(),
    }


@pytest.fixture
def service(parts) -> MagicLinkService:
    return MagicLinkService(
        parts["spaces"],
        parts["members"],
        parts["tokens"],
        PortalSessionManager("test-portal-secret"),
        EmailDelivery(parts["mailer"], parts["email_log"]),
        app_url="https://portal.example.com/",
        ttl_days=7,
        activity_hook=parts["hook"],
    )


async def _issue_and_deliver(service: MagicLinkService, email: str = "a@x.com") -> str:
    """Run the post-response half of a request and return the raw token."""
    issued = await service.issue_magic_link("space-1", email)
    assert issued is not None
    await service.deliver_magic_link(issued)
    return issued.link.split("token=", 1)[1]


async def test_request_for_stakeholder_does_not_issue_or_send(service, parts) -> None:
    """The request only resolves the recipient; issuing and email come later."""
    result = await service.request_magic_link("space-1", " A@X.com ")
    assert result.message == MAGIC_LINK_SENT_MESSAGE
    assert result.recipient == "a@x.com"
    assert parts["tokens"].rows == {}
    assert parts["mailer"].sent == []
    assert parts["email_log"].entries == []


async def test_request_does_not_wait_on_the_mailer(parts) -> None:
    mailer = BlockingMailer()
    service = MagicLinkService(
        parts["spaces"],
        parts["members"],
        parts["tokens"],
        PortalSessionManager("test-portal-secret"),
        EmailDelivery(mailer, parts["email_log"]),
        app_url="https://portal.example.com",
    )
    result = await asyncio.wait_for(service.request_magic_link("space-1", "a@x.com"), 1)
    assert result.recipient == "a@x.com"
    assert not mailer.called.is_set()


async def test_request_for_unknown_email_is_indistinguishable(service, parts) -> None:
    """Same message, no recipient, no token, no email."""
    known = await service.request_magic_link("space-1", "a@x.com")
    unknown = await service.request_magic_link("space-1", "b@x.com")
    blank = await service.request_magic_link("space-1", "  ")
    assert known == unknown == blank
    assert unknown.recipient is None
    assert blank.recipient is None
    assert parts["tokens"].rows == {}
    assert parts["mailer"].sent == []


async def test_issue_and_deliver_emails_link_and_stores_hash(service, parts) -> None:
    issued = await service.issue_magic_link("space-1", "a@x.com")
    assert issued is not None
    assert issued.to_email == "a@x.com"
    assert issued.space_name == "Globex rollout"
    assert issued.organization_id == "org-1"
    assert issued.link.startswith("https://portal.example.com/space/space-1/access?token=")

    raw_token = issued.link.split("token=", 1)[1]
    assert list(parts["tokens"].rows) == [hash_token(raw_token)]
    assert raw_token not in parts["tokens"].rows
    assert parts["mailer"].sent == []

    assert await service.deliver_magic_link(issued) is True
    [(to, kind, _subject, payload)] = parts["mailer"].sent
    assert to == "a@x.com"
    assert kind == EmailType.MAGIC_LINK
    assert payload["link"] == issued.link
    assert payload["expires_at"] == issued.expires_at.isoformat()

    [entry] = parts["email_log"].entries
    assert entry.status == EmailStatus.SENT
    assert entry.type == EmailType.MAGIC_LINK
    assert entry.space_id == "space-1"
    assert entry.organization_id == "org-1"


async def test_issue_skips_stakeholder_removed_after_request(service, parts) -> None:
    result = await service.request_magic_link("space-1", "a@x.com")
    parts["members"].emails.remove("a@x.com")

    assert await service.issue_magic_link("space-1", result.recipient) is None
    assert parts["tokens"].rows == {}


async def test_mailer_failure_is_logged_not_raised(parts) -> None:
    parts["mailer"].ok = False
    service = MagicLinkService(
        parts["spaces"],
        parts["members"],
        parts["tokens"],
        PortalSessionManager("test-portal-secret"),
        EmailDelivery(parts["mailer"], parts["email_log"]),
        app_url="https://portal.example.com",
    )
    issued = await service.issue_magic_link("space-1", "a@x.com")
    assert await service.deliver_magic_link(issued) is False
    assert parts["email_log"].entries[0].status == EmailStatus.FAILED


async def test_redeem_admits_once(service, parts) -> None:
    token = await _issue_and_deliver(service)

    first = await service.redeem_magic_link("space-1", token)
    assert isinstance(first, AccessGranted)
    assert first.identity == "a@x.com"
    assert first.session is not None
    assert first.session.space_id == "space-1"

    second = await service.redeem_magic_link("space-1", token)
    assert isinstance(second, AccessDenied)
    assert second.reason == DenialReason.LINK_INVALID
    assert second.message == LINK_INVALID_MESSAGE


async def test_first_redeem_records_first_visit(service, parts) -> None:
    tokens = [await _issue_and_deliver(service), await _issue_and_deliver(service)]

    await service.redeem_magic_link("space-1", tokens[0])
    await service.redeem_magic_link("space-1", tokens[1])
    assert parts["hook"].calls == [
        ("space-1", "a@x.com", "portal.first_visit", {"via": "magic_link"})
    ]


@pytest.mark.parametrize("token", [None, "", "never-issued"])
async def test_unusable_tokens_are_link_invalid(service, token) -> None:
    decision = await service.redeem_magic_link("space-1", token)
    assert isinstance(decision, AccessDenied)
    assert decision.reason == DenialReason.LINK_INVALID


async def test_removed_stakeholder_cannot_redeem(service, parts) -> None:
    token = await _issue_and_deliver(service)
    parts["members"].emails.remove("a@x.com")

    decision = await service.redeem_magic_link("space-1", token)
    assert isinstance(decision, AccessDenied)
    assert decision.reason == DenialReason.LINK_INVALID


@pytest.mark.parametrize(
    ("status", "reason"),
    [
        (SpaceStatus.DRAFT, DenialReason.SPACE_NOT_READY),
        (SpaceStatus.ARCHIVED, DenialReason.SPACE_UNAVAILABLE),
    ],
)
async def test_closed_space_denies_before_consuming_token(
    service, parts, status, reason
) -> None:
    """Lifecycle denial carries the status-specific reason and leaves the token unused."""
    token = await _issue_and_deliver(service)
    parts["spaces"].status = status

    decision = await service.redeem_magic_link("space-1", token)
    assert isinstance(decision, AccessDenied)
    assert decision.reason == reason
    assert decision.is_lifecycle
    assert parts["tokens"].rows[hash_token(token)]["used_at"] is None


async def test_redeem_unknown_space_raises(service) -> None:
    with pytest.raises(SpaceNotFoundException):
        await service.redeem_magic_link("missing", "token")


def test_hash_token_is_sha256_hex() -> None:
    digest = hash_token("abc")
    assert len(digest) == 64
    assert digest == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
