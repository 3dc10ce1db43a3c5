"""create consent, email registry and campaign list tables

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

revision: str = "a1b2c3d4e5f6"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "people",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("first_name", sa.String(100), nullable=False, server_default=""),
        sa.Column("last_name", sa.String(100), nullable=False, server_default=""),
        sa.Column("keycloak_id", sa.String(64), nullable=True),
        sa.Column("newsletter", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("mail_hash", sa.String(128), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_people_email", "people", ["email"], unique=True)
    op.create_index("ix_people_keycloak_id", "people", ["keycloak_id"], unique=True)

    op.create_table(
        "unregistered_notification_consents",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("consent", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("mail_hash", sa.String(128), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index(
        "ix_unregistered_notification_consents_email",
        "unregistered_notification_consents",
        ["email"],
        unique=True,
    )

    op.create_table(
        "email_sent_registry",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("type", sa.Enum("confirmConsent", name="emailtype"), nullable=False),
        sa.Column("date_sent", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index(
        "ix_email_sent_registry_email_type",
        "email_sent_registry",
        ["email", "type"],
        unique=True,
    )

    op.create_table(
        "campaigns",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_campaigns_slug", "campaigns", ["slug"], unique=True)

    op.create_table(
        "notification_lists",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column(
            "campaign_id",
            sa.String(36),
            sa.ForeignKey("campaigns.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_notification_lists_campaign_id", "notification_lists", ["campaign_id"])


def downgrade() -> None:
    op.drop_index("ix_notification_lists_campaign_id", table_name="notification_lists")
    op.drop_table("notification_lists")
    op.drop_index("ix_campaigns_slug", table_name="campaigns")
    op.drop_table("campaigns")
    op.drop_index("ix_email_sent_registry_email_type", table_name="email_sent_registry")
    op.drop_table("email_sent_registry")
    sa.Enum(name="emailtype").drop(op.get_bind(), checkfirst=True)
    op.drop_index("ix_unregistered_notification_consents_email", table_name="unregistered_notification_consents")
    op.drop_table("unregistered_notification_consents")
    op.drop_index("ix_people_keycloak_id", table_name="people")
    op.drop_index("ix_people_email", table_name="people")
    op.drop_table("people")
