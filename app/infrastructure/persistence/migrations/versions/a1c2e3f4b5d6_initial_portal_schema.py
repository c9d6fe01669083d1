"""Initial schema: organizations, spaces, members, access tokens, email log,
notifications, Slack integrations, activity log.

Revision ID: a1c2e3f4b5d6
Revises:
Create Date: 2026-10-19

access_token stores only SHA-256 token hashes; rows are never deleted.
email_log has a composite index for the chat notification recency lookup.
"""

from collections.abc import Sequence
from typing import Union

import sqlalchemy as sa
from alembic import op

revision: str = "a1c2e3f4b5d6"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "organization",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("logo_path", sa.String(1024), nullable=True),
        sa.Column("brand_color", sa.String(32), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "space",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("organization_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("client_name", sa.String(255), nullable=True),
        sa.Column("owner_email", sa.String(320), nullable=True),
        sa.Column("status", sa.String(16), server_default="draft", nullable=False),
        sa.Column("access_mode", sa.String(16), server_default="restricted", nullable=False),
        sa.Column("access_password_hash", sa.String(255), nullable=True),
        sa.Column(
            "require_email_for_analytics",
            sa.Boolean(),
            server_default=sa.false(),
            nullable=False,
        ),
        sa.Column("logo_path", sa.String(1024), nullable=True),
        sa.Column("brand_color", sa.String(32), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "status IN ('draft', 'active', 'completed', 'archived')",
            name="space_status_check",
        ),
        sa.CheckConstraint(
            "access_mode IN ('public', 'restricted')",
            name="space_access_mode_check",
        ),
        sa.ForeignKeyConstraint(["organization_id"], ["organization.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_space_organization_id"), "space", ["organization_id"])
    op.create_index(op.f("ix_space_status"), "space", ["status"])

    op.create_table(
        "space_member",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("space_id", sa.String(), nullable=False),
        sa.Column("invited_email", sa.String(320), nullable=False),
        sa.Column("role", sa.String(16), nullable=False),
        sa.Column(
            "invited_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column("joined_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["space_id"], ["space.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_space_member_space_id"), "space_member", ["space_id"])
    op.create_index(
        "uq_space_member_space_email_role",
        "space_member",
        ["space_id", "invited_email", "role"],
        unique=True,
    )

    op.create_table(
        "access_token",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("space_id", sa.String(), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("token_hash", sa.String(64), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("used_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["space_id"], ["space.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_access_token_space_id"), "access_token", ["space_id"])
    op.create_index(
        op.f("ix_access_token_token_hash"), "access_token", ["token_hash"], unique=True
    )

    op.create_table(
        "email_log",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("to_email", sa.String(320), nullable=False),
        sa.Column("subject", sa.String(500), nullable=False),
        sa.Column("type", sa.String(64), nullable=False),
        sa.Column("status", sa.String(16), nullable=False),
        sa.Column("organization_id", sa.String(), nullable=True),
        sa.Column("space_id", sa.String(), nullable=True),
        sa.Column("error_message", sa.Text(), nullable=True),
        sa.Column("metadata", sa.JSON(), nullable=True),
        sa.Column(
            "sent_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["organization_id"], ["organization.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["space_id"], ["space.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_email_log_recent", "email_log", ["type", "to_email", "space_id", "sent_at"]
    )

    op.create_table(
        "notification",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("recipient_email", sa.String(320), nullable=False),
        sa.Column("type", sa.String(64), nullable=False),
        sa.Column("space_id", sa.String(), nullable=False),
        sa.Column("message_id", sa.String(), nullable=True),
        sa.Column("title", sa.String(500), nullable=False),
        sa.Column("body", sa.Text(), nullable=True),
        sa.Column("link", sa.String(2048), nullable=True),
        sa.Column("email_sent_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("read_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["space_id"], ["space.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_notification_recipient_email"), "notification", ["recipient_email"]
    )
    op.create_index(op.f("ix_notification_space_id"), "notification", ["space_id"])

    op.create_table(
        "slack_integration",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("organization_id", sa.String(), nullable=False),
        sa.Column("team_id", sa.String(64), nullable=True),
        sa.Column("team_name", sa.String(255), nullable=True),
        sa.Column("access_token", sa.Text(), nullable=False),
        sa.Column("enabled", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("enabled_events", sa.JSON(), nullable=False),
        sa.Column("notification_channel_id", sa.String(64), nullable=True),
        sa.Column("notification_channel_name", sa.String(255), nullable=True),
        sa.Column("error_count", sa.Integer(), server_default="0", nullable=False),
        sa.Column("last_error_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("last_error_message", sa.Text(), nullable=True),
        sa.Column("last_notification_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["organization_id"], ["organization.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_slack_integration_organization_id"), "slack_integration", ["organization_id"]
    )
    op.create_index(
        op.f("ix_slack_integration_deleted_at"), "slack_integration", ["deleted_at"]
    )

    op.create_table(
        "activity_log",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("space_id", sa.String(), nullable=False),
        sa.Column("actor_email", sa.String(320), nullable=False),
        sa.Column("action", sa.String(64), nullable=False),
        sa.Column("metadata", sa.JSON(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["space_id"], ["space.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_activity_log_space_created", "activity_log", ["space_id", "created_at"]
    )


def downgrade() -> None:
    op.drop_index("ix_activity_log_space_created", table_name="activity_log")
    op.drop_table("activity_log")
    op.drop_index(op.f("ix_slack_integration_deleted_at"), table_name="slack_integration")
    op.drop_index(op.f("ix_slack_integration_organization_id"), table_name="slack_integration")
    op.drop_table("slack_integration")
    op.drop_index(op.f("ix_notification_space_id"), table_name="notification")
    op.drop_index(op.f("ix_notification_recipient_email"), table_name="notification")
    op.drop_table("notification")
    op.drop_index("ix_email_log_recent", table_name="email_log")
    op.drop_table("email_log")
    op.drop_index(op.f("ix_access_token_token_hash"), table_name="access_token")
    op.drop_index(op.f("ix_access_token_space_id"), table_name="access_token")
    op.drop_table("access_token")
    op.drop_index("uq_space_member_space_email_role", table_name="space_member")
    op.drop_index(op.f("ix_space_member_space_id"), table_name="space_member")
    op.drop_table("space_member")
    op.drop_index(op.f("ix_space_status"), table_name="space")
    op.drop_index(op.f("ix_space_organization_id"), table_name="space")
    op.drop_table("space")
    op.drop_table("organization")
