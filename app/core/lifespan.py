"""Application lifespan: startup and shutdown.

Single place for startup/shutdown wiring of infrastructure: the shared
outbound HTTP client (mailer, Slack) and the SQL engine dispose.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI

from app.infrastructure.persistence.database import dispose_engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit close the HTTP client and dispose the engine."""
    # ---- Startup ----
    # Shared HTTP client for Resend and Slack calls (connection reuse).
    app.state.http_client = httpx.AsyncClient(timeout=30.0)

    yield

    # ---- Shutdown ----
    if getattr(app.state, "http_client", None) is not None:
        await app.state.http_client.aclose()
        app.state.http_client = None
        logger.info("Outbound HTTP client closed")

    await dispose_engine()
