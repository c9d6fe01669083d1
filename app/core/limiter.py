"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and route modules can use the same
instance without circular imports. Central limit strings and decorators
keep rate limits DRY.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

# Single source of truth for rate limit strings and decorators.
PORTAL_ACCESS_LIMIT = "10/minute"
MAGIC_LINK_LIMIT = "5/minute"
MAGIC_LINK_REDEEM_LIMIT = "20/minute"
WRITE_ENDPOINT_LIMIT = "120/minute"

limit_portal_access = limiter.limit(PORTAL_ACCESS_LIMIT)
limit_magic_link = limiter.limit(MAGIC_LINK_LIMIT)
limit_magic_link_redeem = limiter.limit(MAGIC_LINK_REDEEM_LIMIT)
limit_writes = limiter.limit(WRITE_ENDPOINT_LIMIT)
