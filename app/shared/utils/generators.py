"""Primary key generation (CUID2, matching ids issued by the main application)."""

from cuid2 import cuid_wrapper

_cuid = cuid_wrapper()


def generate_cuid() -> str:
    """Return a new CUID2 string for use as a row id."""
    return str(_cuid())
