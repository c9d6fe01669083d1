"""Security: staff JWT, portal sessions, password hashing, and credential encryption."""

from app.infrastructure.security.credential_cipher import (
    CredentialCipher,
    PlaintextCredentialCipher,
    build_credential_cipher,
)
from app.infrastructure.security.jwt import create_access_token, verify_token
from app.infrastructure.security.password import (
    BcryptPasswordHasher,
    get_password_hash,
    verify_password,
)
from app.infrastructure.security.portal_session import PortalSessionManager

__all__ = [
    "BcryptPasswordHasher",
    "CredentialCipher",
    "PlaintextCredentialCipher",
    "PortalSessionManager",
    "build_credential_cipher",
    "create_access_token",
    "get_password_hash",
    "verify_password",
    "verify_token",
]
