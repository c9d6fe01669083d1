"""Domain value objects for the space portal.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

from dataclasses import dataclass

ANONYMOUS_IDENTITY = "anonymous"


def normalize_email(raw: str | None) -> str | None:
    """Trim and lower-case an email or visitor id; blank input becomes None."""
    if raw is None:
        return None
    value = raw.strip().lower()
    return value or None


@dataclass(frozen=True)
class VisitorIdentity:
    """Identity bound to a portal session (SRP: identity normalization).

    Either a lower-cased email, a client-generated pseudonymous visitor id
    (e.g. 'anonymous-4f2c'), or the literal 'anonymous'.
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value or self.value != self.value.strip().lower():
            raise ValueError("Visitor identity must be trimmed and lower-case")

    @classmethod
    def from_email(cls, raw: str | None) -> "VisitorIdentity":
        """Build from optional email input; missing input yields the anonymous identity."""
        return cls(normalize_email(raw) or ANONYMOUS_IDENTITY)

    @property
    def is_anonymous(self) -> bool:
        return self.value == ANONYMOUS_IDENTITY

    def __str__(self) -> str:
        return self.value
