"""S3-compatible presigned GET URLs (AWS S3, MinIO, etc.)."""

from __future__ import annotations

import asyncio

import boto3

from app.infrastructure.exceptions import StorageSigningError


class S3SignedUrlProvider:
    """Presigned URLs via boto3 (sync) run in a thread for the async API."""

    def __init__(
        self,
        bucket: str,
        region: str = "us-east-1",
        endpoint_url: str | None = None,
        access_key: str | None = None,
        secret_key: str | None = None,
    ) -> None:
        """Initialize S3 client.

        Args:
            bucket: Bucket name.
            region: AWS region.
            endpoint_url: Custom endpoint (MinIO/Spaces).
            access_key: Optional; uses env/IAM if not set.
            secret_key: Optional.
        """
        self.bucket = bucket
        extra = {} if endpoint_url is None else {"endpoint_url": endpoint_url}
        self._client = boto3.client(
            "s3",
            region_name=region,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            **extra,
        )

    async def sign(self, object_path: str, ttl_seconds: int) -> str:
        def _presign() -> str:
            return self._client.generate_presigned_url(
                "get_object",
                Params={"Bucket": self.bucket, "Key": object_path},
                ExpiresIn=ttl_seconds,
            )

        try:
            return await asyncio.to_thread(_presign)
        except Exception as e:
            raise StorageSigningError(object_path, str(e)) from e
