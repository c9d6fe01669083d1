"""Service interfaces (ports) for the application layer.

Protocols define contracts for infrastructure services (DIP).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from app.domain.enums import EmailType

if TYPE_CHECKING:
    from app.application.dtos.access import PortalSession


# Password hashing interface
class IPasswordHasher(Protocol):
    """Protocol for password hashing (bcrypt in production)."""

    def hash(self, password: str) -> str:
        """Return a bcrypt hash for password."""

    def verify(self, password: str, password_hash: str) -> bool:
        """Return True on match. Malformed hashes verify as False."""

    def dummy_verify(self, password: str) -> None:
        """Run a comparison against a fixed hash to equalize timing."""


# Portal session interface
class ISessionManager(Protocol):
    """Protocol for issuing and reading portal sessions."""

    def create(self, space_id: str, identity: str) -> PortalSession:
        """Mint an opaque session credential bound to space and identity."""

    def verify(self, space_id: str, token: str) -> PortalSession | None:
        """Return the session, or None when invalid, expired, or for another space."""


# Outbound email interface
class IMailer(Protocol):
    """Protocol for sending email. Failures are logged and reported as False."""

    async def send(
        self, to: str, kind: EmailType, subject: str, payload: dict[str, Any]
    ) -> bool:
        """Render and send one email. Return True when the provider accepted it."""


# Signed URL interface
class ISignedUrlProvider(Protocol):
    """Protocol for time-limited read URLs to stored objects."""

    async def sign(self, object_path: str, ttl_seconds: int) -> str:
        """Return a signed URL. Raises StorageException on failure."""


# Secret cipher interface
class ISecretCipher(Protocol):
    """Protocol for at-rest encryption of integration secrets."""

    def encrypt(self, plaintext: str) -> str:
        """Return an encrypted blob for plaintext."""

    def decrypt(self, blob: str) -> str:
        """Return plaintext. Raises EncryptionIntegrityException on any failure."""


# Slack Web API interface
class ISlackClient(Protocol):
    """Protocol for posting messages to Slack."""

    async def post_message(
        self, access_token: str, channel_id: str, text: str, blocks: list[dict[str, Any]]
    ) -> dict[str, Any]:
        """Post a message and return the API response. Raises SlackApiException on error."""

    async def list_channels(self, access_token: str) -> list[dict[str, Any]]:
        """Return channels as {id, name, is_private}. Raises SlackApiException on error."""


# Activity hook interface
class IActivityHook(Protocol):
    """Protocol for recording activity and forwarding it to integrations."""

    async def record(
        self,
        space_id: str,
        actor_email: str,
        action: str,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        """Write the activity log and notify integrations. Never raises."""
