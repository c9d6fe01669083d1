"""Domain entities and aggregates.

Pure domain models; no ORM or persistence concerns.
"""

from app.domain.entities.space import AccessTokenEntity, Branding, SpaceAccessConfig

__all__ = [
    "AccessTokenEntity",
    "Branding",
    "SpaceAccessConfig",
]
