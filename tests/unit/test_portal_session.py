"""Tests for portal session tokens and cookies."""

from datetime import timedelta

import pytest
from fastapi import Response
from jose import jwt

from app.infrastructure.security.portal_session import (
    PortalSessionManager,
    session_cookie_name,
)
from app.shared.utils.datetime import utc_now

SECRET = "test-portal-secret"


@pytest.fixture
def manager() -> PortalSessionManager:
    return PortalSessionManager(SECRET, expire_days=30, cookie_secure=True)


def test_create_then_verify(manager: PortalSessionManager) -> None:
    session = manager.create("space-1", "a@x.com")
    assert session.identity == "a@x.com"
    assert timedelta(days=29) < session.expires_at - utc_now() <= timedelta(days=30)

    verified = manager.verify("space-1", session.token)
    assert verified is not None
    assert verified.identity == "a@x.com"
    assert verified.expires_at == session.expires_at


def test_token_is_bound_to_its_space(manager: PortalSessionManager) -> None:
    session = manager.create("space-1", "a@x.com")
    assert manager.verify("space-2", session.token) is None


def test_other_secret_is_rejected(manager: PortalSessionManager) -> None:
    session = PortalSessionManager("another-secret").create("space-1", "a@x.com")
    assert manager.verify("space-1", session.token) is None


def test_expired_token_is_rejected(manager: PortalSessionManager) -> None:
    past = int((utc_now() - timedelta(minutes=1)).timestamp())
    token = jwt.encode(
        {"sub": "a@x.com", "space_id": "space-1", "iat": past - 60, "exp": past},
        SECRET,
        algorithm="HS256",
    )
    assert manager.verify("space-1", token) is None


def test_garbage_token_is_rejected(manager: PortalSessionManager) -> None:
    assert manager.verify("space-1", "not-a-jwt") is None


def test_empty_secret_refused() -> None:
    with pytest.raises(ValueError):
        PortalSessionManager("")


def test_cookie_is_http_only_and_per_space(manager: PortalSessionManager) -> None:
    session = manager.create("space-1", "a@x.com")
    response = Response()
    manager.set_cookie(response, session)
    header = response.headers["set-cookie"]
    assert header.startswith(f"{session_cookie_name('space-1')}={session.token}")
    lowered = header.lower()
    assert "httponly" in lowered
    assert "secure" in lowered
    assert "samesite=lax" in lowered
    assert f"max-age={30 * 24 * 3600}" in lowered


def test_delete_cookie_expires_it(manager: PortalSessionManager) -> None:
    response = Response()
    manager.delete_cookie(response, "space-1")
    header = response.headers["set-cookie"]
    assert header.startswith("portal_session_space-1=")
    assert "max-age=0" in header.lower()
