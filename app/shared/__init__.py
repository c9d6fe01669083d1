"""Shared utilities: request context, telemetry, and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from app.shared.context import get_request_id, reset_request_id, set_request_id
from app.shared.utils import ensure_utc, from_timestamp_utc, generate_cuid, utc_now

__all__ = [
    "get_request_id",
    "set_request_id",
    "reset_request_id",
    "generate_cuid",
    "utc_now",
    "ensure_utc",
    "from_timestamp_utc",
]
