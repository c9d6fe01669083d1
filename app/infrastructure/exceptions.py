"""Infrastructure exceptions for storage and external API operations.

They extend PortalException so presentation can map them to HTTP responses
consistently when one escapes a best-effort path.
"""

from app.domain.exceptions import PortalException


class StorageException(PortalException):
    """Base exception for storage operations."""


class StorageSigningError(StorageException):
    """A signed URL could not be produced for an object."""

    def __init__(self, object_path: str, reason: str) -> None:
        super().__init__(
            f"Failed to sign URL for: {object_path}",
            "STORAGE_SIGNING_ERROR",
            {"object_path": object_path, "reason": reason},
        )


class StorageNotSupportedError(StorageException):
    """Requested storage backend is not configured or not installed."""

    def __init__(self, backend: str, reason: str) -> None:
        super().__init__(
            f"Storage backend unavailable: {backend}",
            "STORAGE_NOT_SUPPORTED",
            {"backend": backend, "reason": reason},
        )


class SlackApiException(PortalException):
    """Slack Web API returned ok=false or the request failed."""

    def __init__(self, method: str, error: str) -> None:
        super().__init__(
            f"Slack API {method} failed: {error}",
            "SLACK_API_ERROR",
            {"method": method, "error": error},
        )
        self.slack_error = error
