"""Signed URL provider protocol. Implementations: LocalSignedUrlProvider, S3SignedUrlProvider."""

from typing import Protocol


class SignedUrlProtocol(Protocol):
    """Protocol for time-limited read URLs to stored objects (branding assets)."""

    async def sign(self, object_path: str, ttl_seconds: int) -> str:
        """Return a signed URL valid for ttl_seconds. Raises StorageException on failure."""
        ...
