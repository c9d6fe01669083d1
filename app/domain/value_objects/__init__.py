"""Domain value objects (immutable, self-validating)."""

from app.domain.value_objects.core import (
    ANONYMOUS_IDENTITY,
    VisitorIdentity,
    normalize_email,
)

__all__ = [
    "ANONYMOUS_IDENTITY",
    "VisitorIdentity",
    "normalize_email",
]
