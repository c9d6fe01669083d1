"""Portal API: access page settings, entry, magic links and the session cookie."""

from datetime import timedelta

from httpx import AsyncClient, Response
from sqlalchemy import select

from app.api.v1.dependencies import get_mailer
from app.application.services.magic_link_service import MAGIC_LINK_SENT_MESSAGE, hash_token
from app.infrastructure.persistence.models import AccessToken, EmailLog, SpaceMember
from app.infrastructure.persistence.repositories import AccessTokenRepository
from app.infrastructure.security.portal_session import session_cookie_name
from app.main import app
from app.shared.utils.datetime import utc_now


def _session_token(response: Response) -> str:
    return response.headers["set-cookie"].split(";")[0].split("=", 1)[1]


async def test_access_settings_expose_flags_not_secrets(client: AsyncClient, make_space) -> None:
    space = await make_space(access_mode="public", password="hunter2")
    response = await client.get(f"/api/v1/portal/{space.id}/access-settings")

    assert response.status_code == 200
    data = response.json()
    assert data["access_mode"] == "public"
    assert data["has_password"] is True
    assert data["status"] == "active"
    assert data["client_name"] == "Globex"
    assert data["org_brand_color"] == "#1f6feb"
    assert data["org_logo_url"].startswith("http://localhost:8000/files/orgs/acme.png?expires=")
    assert data["logo_url"] is None
    assert "password_hash" not in data
    assert "hunter2" not in response.text


async def test_restricted_stakeholder_is_admitted_with_cookie(
    client: AsyncClient, make_space, db_session
) -> None:
    space = await make_space(stakeholders=("client@globex.com",))
    response = await client.post(
        f"/api/v1/portal/{space.id}/access", json={"email": "Client@Globex.com"}
    )

    assert response.status_code == 200
    assert response.json()["identity"] == "client@globex.com"
    cookie = response.headers["set-cookie"]
    assert cookie.startswith(f"{session_cookie_name(space.id)}=")
    assert "httponly" in cookie.lower()

    member = (
        await db_session.execute(select(SpaceMember).where(SpaceMember.space_id == space.id))
    ).scalar_one()
    assert member.joined_at is not None


async def test_restricted_unknown_email_is_refused(client: AsyncClient, make_space) -> None:
    space = await make_space(stakeholders=("client@globex.com",))
    response = await client.post(
        f"/api/v1/portal/{space.id}/access", json={"email": "intruder@evil.com"}
    )

    assert response.status_code == 401
    assert response.json()["error"] == "access_denied"
    assert "set-cookie" not in response.headers


async def test_public_password_space(client: AsyncClient, make_space) -> None:
    space = await make_space(access_mode="public", password="hunter2")
    url = f"/api/v1/portal/{space.id}/access"

    missing = await client.post(url, json={})
    wrong = await client.post(url, json={"password": "nope"})
    right = await client.post(url, json={"password": "hunter2"})

    assert missing.status_code == 401
    assert missing.json()["error"] == "password_required"
    assert wrong.status_code == 401
    assert wrong.json()["error"] == "invalid_credentials"
    assert right.status_code == 200
    assert right.json()["identity"] == "anonymous"


async def test_lifecycle_denial_is_forbidden(client: AsyncClient, make_space) -> None:
    draft = await make_space(access_mode="public", status="draft")
    archived = await make_space(access_mode="public", status="archived")

    not_ready = await client.post(f"/api/v1/portal/{draft.id}/access", json={})
    unavailable = await client.post(f"/api/v1/portal/{archived.id}/access", json={})

    assert not_ready.status_code == 403
    assert not_ready.json()["error"] == "space_not_ready"
    assert unavailable.status_code == 403
    assert unavailable.json()["error"] == "space_unavailable"


async def test_unknown_space_is_not_found(client: AsyncClient) -> None:
    response = await client.post("/api/v1/portal/missing/access", json={})
    assert response.status_code == 404
    assert response.json()["error"] == "SPACE_NOT_FOUND"


async def test_session_read_and_sign_out(client: AsyncClient, make_space) -> None:
    space = await make_space(access_mode="public")
    entered = await client.post(f"/api/v1/portal/{space.id}/access", json={})
    token = _session_token(entered)
    cookie = {"Cookie": f"{session_cookie_name(space.id)}={token}"}
    client.cookies.clear()

    current = await client.get(f"/api/v1/portal/{space.id}/session", headers=cookie)
    assert current.status_code == 200
    assert current.json()["space_id"] == space.id
    assert current.json()["identity"] == "anonymous"

    other = await make_space(access_mode="public")
    foreign = await client.get(
        f"/api/v1/portal/{other.id}/session",
        headers={"Cookie": f"{session_cookie_name(other.id)}={token}"},
    )
    assert foreign.status_code == 401

    signed_out = await client.delete(f"/api/v1/portal/{space.id}/session")
    assert signed_out.status_code == 204
    assert "max-age=0" in signed_out.headers["set-cookie"].lower()


async def test_session_without_cookie(client: AsyncClient, make_space) -> None:
    space = await make_space(access_mode="public")
    client.cookies.clear()
    response = await client.get(f"/api/v1/portal/{space.id}/session")
    assert response.status_code == 401
    assert response.json() == {"error": "AUTHENTICATION_ERROR", "message": "No active session"}


async def test_magic_link_reply_does_not_reveal_membership(
    client: AsyncClient, make_space, db_session
) -> None:
    space = await make_space(stakeholders=("client@globex.com",))
    url = f"/api/v1/portal/{space.id}/magic-link"

    known = await client.post(url, json={"email": "client@globex.com"})
    unknown = await client.post(url, json={"email": "nobody@globex.com"})

    assert known.status_code == unknown.status_code == 200
    assert known.json() == unknown.json()

    tokens = (await db_session.execute(select(AccessToken))).scalars().all()
    assert [t.email for t in tokens] == ["client@globex.com"]
    logs = (await db_session.execute(select(EmailLog))).scalars().all()
    assert [(log.to_email, log.type, log.status) for log in logs] == [
        ("client@globex.com", "portal_magic_link", "sent")
    ]


class _RejectingMailer:
    async def send(self, to, kind, subject, payload) -> bool:
        return False


async def test_magic_link_delivery_failure_does_not_change_reply(
    client: AsyncClient, make_space, db_session
) -> None:
    """The token is stored before delivery; a rejected send is logged, not surfaced."""
    space = await make_space(stakeholders=("client@globex.com",))
    app.dependency_overrides[get_mailer] = _RejectingMailer

    response = await client.post(
        f"/api/v1/portal/{space.id}/magic-link", json={"email": "client@globex.com"}
    )

    assert response.status_code == 200
    assert response.json() == {"message": MAGIC_LINK_SENT_MESSAGE}
    token = (await db_session.execute(select(AccessToken))).scalar_one()
    assert token.used_at is None
    log = (await db_session.execute(select(EmailLog))).scalar_one()
    assert (log.to_email, log.status) == ("client@globex.com", "failed")


async def test_magic_link_redeems_once(client: AsyncClient, make_space, db_session) -> None:
    space = await make_space(stakeholders=("client@globex.com",))
    raw = "raw-magic-link-token"
    await AccessTokenRepository(db_session).create(
        space.id, "client@globex.com", hash_token(raw), utc_now() + timedelta(days=7)
    )
    url = f"/api/v1/portal/{space.id}/magic-link/redeem"

    first = await client.post(url, json={"token": raw})
    second = await client.post(url, json={"token": raw})

    assert first.status_code == 200
    assert first.json()["identity"] == "client@globex.com"
    assert first.headers["set-cookie"].startswith(f"{session_cookie_name(space.id)}=")
    assert second.status_code == 401
    assert second.json()["error"] == "link_invalid"


async def test_magic_link_on_archived_space_is_forbidden(
    client: AsyncClient, make_space, db_session
) -> None:
    space = await make_space(status="archived", stakeholders=("client@globex.com",))
    raw = "archived-space-token"
    await AccessTokenRepository(db_session).create(
        space.id, "client@globex.com", hash_token(raw), utc_now() + timedelta(days=7)
    )

    response = await client.post(
        f"/api/v1/portal/{space.id}/magic-link/redeem", json={"token": raw}
    )
    assert response.status_code == 403
    assert response.json()["error"] == "space_unavailable"

    token = (await db_session.execute(select(AccessToken))).scalar_one()
    assert token.used_at is None
