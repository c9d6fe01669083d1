"""Branding asset storage: signed URL providers."""

from app.infrastructure.external.storage.factory import StorageFactory
from app.infrastructure.external.storage.local_signer import LocalSignedUrlProvider
from app.infrastructure.external.storage.protocol import SignedUrlProtocol

__all__ = ["LocalSignedUrlProvider", "SignedUrlProtocol", "StorageFactory"]
