"""At-rest encryption for integration secrets (AES-256-GCM).

Blob format: ``nonce_hex:tag_hex:ciphertext_hex``. New blobs use a 12-byte
nonce; 16-byte nonces written by earlier deployments are still accepted on
decrypt. Any malformed blob or failed tag check raises
EncryptionIntegrityException; partial plaintext is never returned.
"""

import binascii
import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from app.core.config import CREDENTIAL_KEY_LENGTH, Settings
from app.domain.exceptions import EncryptionIntegrityException
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

NONCE_LENGTH = 12
LEGACY_NONCE_LENGTH = 16
TAG_LENGTH = 16
_ACCEPTED_NONCE_LENGTHS = (NONCE_LENGTH, LEGACY_NONCE_LENGTH)


def derive_key(raw_key: str, *, allow_padding: bool = False) -> bytes:
    """Turn the configured key string into 32 key bytes.

    Longer keys are truncated. Shorter keys are rejected unless
    allow_padding is set, in which case they are zero-padded.

    Raises:
        ValueError: key is empty, or short and padding is not allowed.
    """
    key = raw_key.encode("utf-8")
    if not key:
        raise ValueError("Credential encryption key is empty")
    if len(key) >= CREDENTIAL_KEY_LENGTH:
        return key[:CREDENTIAL_KEY_LENGTH]
    if not allow_padding:
        raise ValueError(
            f"Credential encryption key must be at least {CREDENTIAL_KEY_LENGTH} bytes"
        )
    logger.warning(
        "Credential encryption key is shorter than %d bytes; zero-padding (development only)",
        CREDENTIAL_KEY_LENGTH,
    )
    return key + b"\x00" * (CREDENTIAL_KEY_LENGTH - len(key))


def _unhex(part: str) -> bytes:
    try:
        return binascii.unhexlify(part)
    except (binascii.Error, ValueError) as e:
        raise EncryptionIntegrityException("Encrypted secret is not valid hex") from e


class CredentialCipher:
    """AES-256-GCM cipher bound to one key for the life of the process."""

    def __init__(self, key: bytes) -> None:
        if len(key) != CREDENTIAL_KEY_LENGTH:
            raise ValueError(f"Key must be exactly {CREDENTIAL_KEY_LENGTH} bytes")
        self._aesgcm = AESGCM(key)

    def encrypt_bytes(self, plaintext: bytes) -> str:
        nonce = os.urandom(NONCE_LENGTH)
        sealed = self._aesgcm.encrypt(nonce, plaintext, None)
        ciphertext, tag = sealed[:-TAG_LENGTH], sealed[-TAG_LENGTH:]
        return f"{nonce.hex()}:{tag.hex()}:{ciphertext.hex()}"

    def decrypt_bytes(self, blob: str) -> bytes:
        """Decrypt a blob.

        Raises:
            EncryptionIntegrityException: wrong shape, bad hex, bad lengths, or tag mismatch.
        """
        parts = blob.split(":") if isinstance(blob, str) else []
        if len(parts) != 3:
            raise EncryptionIntegrityException("Encrypted secret has an invalid format")
        nonce, tag, ciphertext = (_unhex(p) for p in parts)
        if len(nonce) not in _ACCEPTED_NONCE_LENGTHS:
            raise EncryptionIntegrityException("Encrypted secret has an invalid nonce length")
        if len(tag) != TAG_LENGTH:
            raise EncryptionIntegrityException("Encrypted secret has an invalid tag length")
        try:
            return self._aesgcm.decrypt(nonce, ciphertext + tag, None)
        except InvalidTag as e:
            raise EncryptionIntegrityException() from e

    def encrypt(self, plaintext: str) -> str:
        return self.encrypt_bytes(plaintext.encode("utf-8"))

    def decrypt(self, blob: str) -> str:
        plaintext = self.decrypt_bytes(blob)
        try:
            return plaintext.decode("utf-8")
        except UnicodeDecodeError as e:
            raise EncryptionIntegrityException("Decrypted secret is not valid UTF-8") from e


class PlaintextCredentialCipher:
    """Development-only pass-through storage.

    Values without the blob separator are returned as stored. Real blobs are
    decrypted with the inner cipher when a key is configured; without one
    they raise rather than being returned as if they were plaintext.
    """

    def __init__(self, inner: CredentialCipher | None = None) -> None:
        self._inner = inner

    def encrypt(self, plaintext: str) -> str:
        return plaintext

    def decrypt(self, blob: str) -> str:
        if ":" not in blob:
            return blob
        if self._inner is None:
            raise EncryptionIntegrityException(
                "Encrypted secret found but no credential encryption key is configured"
            )
        return self._inner.decrypt(blob)


def build_credential_cipher(settings: Settings) -> CredentialCipher | PlaintextCredentialCipher:
    """Build the process-wide cipher from settings (called once in create_app).

    Plaintext storage is only reachable in the development profile with
    ALLOW_PLAINTEXT_CREDENTIALS set; Settings validation enforces that.
    """
    raw_key = settings.credential_encryption_key.get_secret_value()
    inner: CredentialCipher | None = None
    if raw_key:
        inner = CredentialCipher(derive_key(raw_key, allow_padding=settings.is_development))
    if settings.allow_plaintext_credentials:
        if not settings.is_development:
            raise ValueError("Plaintext credentials are only allowed in development")
        logger.warning("Integration credentials are stored in plaintext (development profile)")
        return PlaintextCredentialCipher(inner)
    if inner is None:
        raise ValueError("CREDENTIAL_ENCRYPTION_KEY is required")
    return inner
