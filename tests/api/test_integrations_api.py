"""Slack integration API: role gate, connect, settings, channels, disconnect."""

from httpx import AsyncClient
from sqlalchemy import select

from app.infrastructure.persistence.models import SlackIntegration


async def test_members_cannot_manage_integrations(client: AsyncClient, staff_headers) -> None:
    response = await client.post(
        "/api/v1/integrations/slack",
        json={"access_token": "xoxb-secret"},
        headers=staff_headers(role="member"),
    )
    assert response.status_code == 403
    assert response.json()["error"] == "PERMISSION_DENIED"


async def test_connect_stores_encrypted_token(
    client: AsyncClient, staff_headers, organization, db_session
) -> None:
    response = await client.post(
        "/api/v1/integrations/slack",
        json={"access_token": "xoxb-secret", "team_id": "T1", "team_name": "Acme"},
        headers=staff_headers(role="admin"),
    )

    assert response.status_code == 201
    body = response.json()
    assert body["organization_id"] == organization.id
    assert body["enabled"] is True
    assert body["enabled_events"] == ["task.completed", "form.submitted", "file.uploaded"]
    assert "access_token" not in body
    assert "xoxb-secret" not in response.text

    row = (await db_session.execute(select(SlackIntegration))).scalar_one()
    assert row.access_token != "xoxb-secret"
    assert "xoxb-secret" not in row.access_token


async def test_update_channels_and_disconnect(client: AsyncClient, staff_headers) -> None:
    headers = staff_headers()
    created = await client.post(
        "/api/v1/integrations/slack", json={"access_token": "xoxb-secret"}, headers=headers
    )
    integration_id = created.json()["id"]
    url = f"/api/v1/integrations/slack/{integration_id}"

    updated = await client.put(
        url,
        json={
            "enabled_events": ["form.answered", "space.status_changed", "form.submitted"],
            "notification_channel_id": "C123",
            "notification_channel_name": "onboarding",
        },
        headers=headers,
    )
    assert updated.status_code == 200
    assert updated.json()["enabled_events"] == ["form.submitted", "space.status_changed"]
    assert updated.json()["notification_channel_id"] == "C123"

    unknown = await client.put(url, json={"enabled_events": ["bogus.event"]}, headers=headers)
    assert unknown.status_code == 400

    channels = await client.get(f"{url}/channels", headers=headers)
    assert channels.status_code == 200
    assert channels.json() == []

    assert (await client.delete(url, headers=headers)).status_code == 204
    assert (await client.delete(url, headers=headers)).status_code == 404


async def test_unknown_integration_is_not_found(client: AsyncClient, staff_headers) -> None:
    response = await client.put(
        "/api/v1/integrations/slack/missing", json={"enabled": False}, headers=staff_headers()
    )
    assert response.status_code == 404
    assert response.json()["error"] == "RESOURCE_NOT_FOUND"
