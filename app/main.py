"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, middleware, routers, and the
process-wide singletons (credential cipher, portal session manager,
branding URL signer) stored on app.state.

Settings are loaded inside create_app() so that tests can set env (and optionally
clear get_settings cache) before importing or calling create_app().
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from app.api.v1 import api_router
from app.core.config import Settings, get_settings
from app.core.exception_handlers import register_exception_handlers
from app.core.lifespan import create_lifespan
from app.core.limiter import limiter
from app.infrastructure.exceptions import StorageNotSupportedError
from app.infrastructure.external.storage import StorageFactory
from app.infrastructure.security import PortalSessionManager, build_credential_cipher
from app.middleware import (
    RequestIDMiddleware,
    SecurityHeadersMiddleware,
    TimeoutMiddleware,
)
from app.shared.telemetry.logging import get_logger, setup_logging

logger = get_logger(__name__)


def _build_signer(settings: Settings):
    """Branding URL signer, or None when storage is not configured (logos are then omitted)."""
    try:
        return StorageFactory.create_signer(settings)
    except StorageNotSupportedError as e:
        logger.warning("Branding assets disabled: %s", e.message)
        return None


def create_app() -> FastAPI:
    """Build and return the FastAPI application. Settings are resolved here, not at import."""
    settings = get_settings()
    setup_logging()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    register_exception_handlers(app)

    # Fail at startup, not on the first Slack call, when the key is unusable.
    app.state.credential_cipher = build_credential_cipher(settings)
    app.state.session_manager = PortalSessionManager(
        settings.portal_session_secret.get_secret_value(),
        expire_days=settings.portal_session_expire_days,
        cookie_secure=settings.portal_session_cookie_secure,
    )
    app.state.signer = _build_signer(settings)

    # First added = innermost. Order: timeout → request ID → security → CORS.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)
    app.add_middleware(TimeoutMiddleware, timeout_seconds=settings.request_timeout_seconds)

    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()
