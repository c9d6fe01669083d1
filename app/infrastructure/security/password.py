"""Portal password hashing (bcrypt).

Space passwords are plain bcrypt with cost 10, the format existing space
rows already hold, so stored hashes keep verifying. bcrypt reads at most
72 bytes; longer passwords are rejected when they are set.
"""

import bcrypt

BCRYPT_ROUNDS = 10

# Fixed hash for dummy comparisons when no real hash applies (timing-attack mitigation).
# Computed lazily on first use.
_dummy_hash_cache: bytes | None = None


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Return True if plain_password matches hashed_password. Malformed hashes return False."""
    try:
        result = bcrypt.checkpw(
            plain_password.encode("utf-8"),
            hashed_password.encode("utf-8"),
        )
        return bool(result)
    except (ValueError, TypeError):
        return False


def get_password_hash(password: str) -> str:
    """Return bcrypt hash of password."""
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
    return hashed.decode("utf-8")


def _dummy_hash() -> bytes:
    global _dummy_hash_cache
    if _dummy_hash_cache is None:
        _dummy_hash_cache = bcrypt.hashpw(
            b"not-a-real-password", bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
        )
    return _dummy_hash_cache


class BcryptPasswordHasher:
    """IPasswordHasher backed by bcrypt. Calls are blocking; callers use asyncio.to_thread."""

    def hash(self, password: str) -> str:
        return get_password_hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        return verify_password(password, password_hash)

    def dummy_verify(self, password: str) -> None:
        try:
            bcrypt.checkpw(password.encode("utf-8")[:72], _dummy_hash())
        except (ValueError, TypeError):
            pass
