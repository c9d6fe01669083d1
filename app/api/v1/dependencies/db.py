"""Database session dependencies."""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.database import get_db, transactional_session

ReadSession = Annotated[AsyncSession, Depends(get_db)]

SessionScope = Callable[[], AbstractAsyncContextManager[AsyncSession]]


def get_session_scope() -> SessionScope:
    """Factory of committed sessions for background tasks (not tied to the request)."""
    return transactional_session
