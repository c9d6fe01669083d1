"""Local signed URLs: HMAC-SHA256 over path and expiry, served by a static file host."""

from __future__ import annotations

import hashlib
import hmac
from urllib.parse import quote, urlencode

from app.infrastructure.exceptions import StorageSigningError
from app.shared.utils.datetime import utc_now


class LocalSignedUrlProvider:
    """Produce ``{base_url}/{path}?expires=...&signature=...`` URLs.

    verify() lets the file host check a URL with the same secret.
    """

    def __init__(self, base_url: str, signing_secret: str) -> None:
        if not signing_secret:
            raise ValueError("STORAGE_SIGNING_SECRET required for local signed URLs")
        self._base_url = base_url.rstrip("/")
        self._secret = signing_secret.encode("utf-8")

    def _signature(self, object_path: str, expires: int) -> str:
        message = f"{object_path}:{expires}".encode()
        return hmac.new(self._secret, message, hashlib.sha256).hexdigest()

    async def sign(self, object_path: str, ttl_seconds: int) -> str:
        path = object_path.lstrip("/")
        if not path or ".." in path.split("/"):
            raise StorageSigningError(object_path, "invalid object path")
        expires = int(utc_now().timestamp()) + ttl_seconds
        query = urlencode({"expires": expires, "signature": self._signature(path, expires)})
        return f"{self._base_url}/{quote(path)}?{query}"

    def verify(self, object_path: str, expires: int, signature: str) -> bool:
        """Return True when the signature matches and has not expired."""
        if expires < int(utc_now().timestamp()):
            return False
        expected = self._signature(object_path.lstrip("/"), expires)
        return hmac.compare_digest(expected, signature)
