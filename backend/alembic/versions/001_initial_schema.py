"""Initial schema

Creates tables for:
- users: Accounts
- projects: Per-user containers of flows and tokens
- tokens: PII field definitions
- flows: Authentication flows with an optimistic-concurrency version
- nodes: Flow steps keyed by (flow_id, id)

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-17
"""

from collections.abc import Sequence

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op
from ivrflow.models.base import GUID

# revision identifiers, used by Alembic.
revision: str = "001_initial"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

JSONType = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")

NODE_TYPES = ("start", "prompt", "collect", "validate", "branch", "end")
TOKEN_TYPES = (
    "SSN",
    "PIN",
    "ACCOUNT_NUMBER",
    "DEBIT_CARD",
    "DOB",
    "PASSWORD",
    "CUSTOM",
    "OTHER",
)


def timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Create the initial tables."""
    op.create_table(
        "users",
        sa.Column("id", GUID(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        *timestamps(),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "projects",
        sa.Column("id", GUID(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "user_id",
            GUID(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        *timestamps(),
    )
    op.create_index("ix_projects_user_id", "projects", ["user_id"])

    op.create_table(
        "tokens",
        sa.Column("id", GUID(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column(
            "type",
            sa.Enum(*TOKEN_TYPES, name="token_type", native_enum=False, length=32),
            nullable=False,
        ),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("format", sa.String(255), nullable=True),
        sa.Column(
            "project_id",
            GUID(),
            sa.ForeignKey("projects.id", ondelete="CASCADE"),
            nullable=False,
        ),
        *timestamps(),
    )
    op.create_index("ix_tokens_project_id", "tokens", ["project_id"])

    op.create_table(
        "flows",
        sa.Column("id", GUID(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "project_id",
            GUID(),
            sa.ForeignKey("projects.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        *timestamps(),
    )
    op.create_index("ix_flows_project_id", "flows", ["project_id"])

    op.create_table(
        "nodes",
        sa.Column(
            "flow_id",
            GUID(),
            sa.ForeignKey("flows.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column(
            "type",
            sa.Enum(*NODE_TYPES, name="node_type", native_enum=False, length=16),
            nullable=False,
        ),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("prompt", sa.Text(), nullable=True),
        sa.Column("position_x", sa.Float(), nullable=False),
        sa.Column("position_y", sa.Float(), nullable=False),
        sa.Column("token_id", sa.String(64), nullable=True),
        sa.Column("validation_rules", JSONType, nullable=True),
        sa.Column("next_node_ids", JSONType, nullable=False),
        sa.Column("sort_order", sa.Integer(), nullable=False),
        *timestamps(),
    )


def downgrade() -> None:
    """Drop the initial tables."""
    op.drop_table("nodes")
    op.drop_index("ix_flows_project_id", table_name="flows")
    op.drop_table("flows")
    op.drop_index("ix_tokens_project_id", table_name="tokens")
    op.drop_table("tokens")
    op.drop_index("ix_projects_user_id", table_name="projects")
    op.drop_table("projects")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
