"""Signed URL provider factory: creates local or S3 signer from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.infrastructure.exceptions import StorageNotSupportedError
from app.infrastructure.external.storage.protocol import SignedUrlProtocol

if TYPE_CHECKING:
    from app.core.config import Settings


class StorageFactory:
    """Factory for signed URL providers based on configuration."""

    @staticmethod
    def create_signer(settings: "Settings | None" = None) -> SignedUrlProtocol:
        """Create a signer from settings.

        Args:
            settings: Application settings; if None, uses get_settings().

        Returns:
            LocalSignedUrlProvider or S3SignedUrlProvider.

        Raises:
            StorageNotSupportedError: Unknown backend, missing config, or boto3 not installed.
        """
        from app.core.config import get_settings

        s = settings or get_settings()
        backend = s.storage_backend.lower()

        if backend == "local":
            from app.infrastructure.external.storage.local_signer import (
                LocalSignedUrlProvider,
            )

            secret = s.storage_signing_secret
            if secret is None or not secret.get_secret_value():
                raise StorageNotSupportedError(backend, "STORAGE_SIGNING_SECRET is not set")
            return LocalSignedUrlProvider(
                base_url=s.storage_base_url,
                signing_secret=secret.get_secret_value(),
            )
        if backend == "s3":
            if not s.s3_bucket:
                raise StorageNotSupportedError(backend, "S3_BUCKET is not set")
            try:
                from app.infrastructure.external.storage.s3_signer import (
                    S3SignedUrlProvider,
                )
            except ImportError as e:
                raise StorageNotSupportedError(
                    backend, "S3 backend requires boto3. Install with: pip install '.[storage]'"
                ) from e
            return S3SignedUrlProvider(
                bucket=s.s3_bucket,
                region=s.s3_region,
                endpoint_url=s.s3_endpoint_url,
                access_key=s.s3_access_key,
                secret_key=s.s3_secret_key.get_secret_value() if s.s3_secret_key else None,
            )
        raise StorageNotSupportedError(backend, "Supported: 'local', 's3'")
