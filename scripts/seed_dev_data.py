"""Seed dev data from scripts/seed-data.json into the portal database.

Loads organizations (by name; created if missing), spaces (by name within the
organization) with their access settings, team members and approved
stakeholders. Prints a staff token per organization so the staff endpoints
can be exercised with curl.

Usage:
    uv run python -m scripts.seed_dev_data [path/to/seed-data.json]

Default path: scripts/seed-data.json (relative to project root).
Requires: DATABASE_URL and an up-to-date schema (alembic upgrade head).
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path

from dotenv import load_dotenv
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.enums import AccessMode, MemberRole, SpaceStatus
from app.domain.value_objects import normalize_email
from app.infrastructure.persistence import database
from app.infrastructure.persistence.models import Organization, Space, SpaceMember
from app.infrastructure.persistence.repositories import SpaceMemberRepository
from app.infrastructure.security.jwt import create_access_token
from app.infrastructure.security.password import get_password_hash


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


def _load_env() -> None:
    """Load .env from project root so get_settings() sees DATABASE_URL when run as script."""
    load_dotenv(_project_root() / ".env", override=True)


async def _get_or_create_organization(session: AsyncSession, data: dict) -> Organization:
    existing = await session.scalar(
        select(Organization).where(Organization.name == data["name"])
    )
    if existing is not None:
        return existing
    org = Organization(
        name=data["name"],
        logo_path=data.get("logo_path"),
        brand_color=data.get("brand_color"),
    )
    session.add(org)
    await session.flush()
    print(f"  Organization {org.name} -> {org.id}")
    return org


async def _get_or_create_space(
    session: AsyncSession, organization_id: str, data: dict
) -> Space:
    existing = await session.scalar(
        select(Space).where(
            Space.organization_id == organization_id, Space.name == data["name"]
        )
    )
    if existing is not None:
        return existing
    password = data.get("password")
    space = Space(
        organization_id=organization_id,
        name=data["name"],
        client_name=data.get("client_name"),
        owner_email=normalize_email(data.get("owner_email")),
        status=SpaceStatus(data.get("status", SpaceStatus.ACTIVE.value)).value,
        access_mode=AccessMode(data.get("access_mode", AccessMode.RESTRICTED.value)).value,
        access_password_hash=get_password_hash(password) if password else None,
        require_email_for_analytics=bool(data.get("require_email_for_analytics", False)),
        brand_color=data.get("brand_color"),
    )
    session.add(space)
    await session.flush()
    print(f"  Space {space.name} ({space.access_mode}, {space.status}) -> {space.id}")
    return space


async def _seed_members(session: AsyncSession, space: Space, data: dict) -> None:
    member_repo = SpaceMemberRepository(session)
    for email in data.get("team", []):
        normalized = normalize_email(email)
        if normalized is None or await member_repo.is_staff_member(space.id, normalized):
            continue
        session.add(
            SpaceMember(space_id=space.id, invited_email=normalized, role=MemberRole.MEMBER.value)
        )
    for email in data.get("stakeholders", []):
        normalized = normalize_email(email)
        if normalized is None:
            continue
        if await member_repo.find_stakeholder(space.id, normalized) is None:
            await member_repo.add_stakeholder(space.id, normalized)
            print(f"    Stakeholder {normalized}")
    await session.flush()


async def run(path: Path) -> None:
    _load_env()
    if not path.is_file():
        print(f"Seed file not found: {path}", file=sys.stderr)
        sys.exit(1)
    data = json.loads(path.read_text(encoding="utf-8"))

    session_factory = database._require_session_factory()
    tokens: dict[str, str] = {}
    async with session_factory() as session:
        async with session.begin():
            for org_data in data.get("organizations", []):
                org = await _get_or_create_organization(session, org_data)
                for space_data in org_data.get("spaces", []):
                    space = await _get_or_create_space(session, org.id, space_data)
                    await _seed_members(session, space, space_data)
                staff_email = org_data.get("staff_email")
                if staff_email:
                    tokens[org.name] = create_access_token(
                        {
                            "sub": staff_email,
                            "email": staff_email,
                            "organization_id": org.id,
                            "role": org_data.get("staff_role", "owner"),
                        }
                    )
    await database.dispose_engine()

    for org_name, token in tokens.items():
        print(f"Staff token for {org_name}:\n  {token}")
    print("Seed completed.")


def main() -> None:
    root = _project_root()
    path_arg = sys.argv[1] if len(sys.argv) > 1 else None
    path = Path(path_arg) if path_arg else root / "scripts" / "seed-data.json"
    if not path.is_absolute():
        path = (root / path).resolve()
    asyncio.run(run(path))


if __name__ == "__main__":
    main()
