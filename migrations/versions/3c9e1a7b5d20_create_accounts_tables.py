"""create accounts tables

Revision ID: 3c9e1a7b5d20
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

import gamehub.adapters.orm

# revision identifiers, used by Alembic.
revision: str = "3c9e1a7b5d20"  # pragma: allowlist secret
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "accounts",
        sa.Column("id", gamehub.adapters.orm.CrossDatabaseUUID(), nullable=False),
        sa.Column("username", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("confirmed", sa.Boolean(), nullable=False),
        sa.Column("created_at", gamehub.adapters.orm.TZAwareDatetime(timezone=True), nullable=False),
        sa.Column("confirmed_at", gamehub.adapters.orm.TZAwareDatetime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username", name="uq_accounts_username"),
        sa.UniqueConstraint("email", name="uq_accounts_email"),
    )

    op.create_table(
        "confirmation_tokens",
        sa.Column("id", gamehub.adapters.orm.CrossDatabaseUUID(), nullable=False),
        sa.Column("account_id", gamehub.adapters.orm.CrossDatabaseUUID(), nullable=False),
        sa.Column("token", sa.String(length=100), nullable=False),
        sa.Column("created_at", gamehub.adapters.orm.TZAwareDatetime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["account_id"], ["accounts.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("token", name="uq_confirmation_tokens_token"),
    )
    op.create_index("ix_confirmation_tokens_account_id", "confirmation_tokens", ["account_id"], unique=False)

    op.create_table(
        "characters",
        sa.Column("account_id", gamehub.adapters.orm.CrossDatabaseUUID(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("character_class", sa.String(length=50), nullable=False),
        sa.Column("level", sa.Integer(), nullable=False),
        sa.Column("health", sa.Integer(), nullable=False),
        sa.Column("position_x", sa.Float(), nullable=False),
        sa.Column("position_y", sa.Float(), nullable=False),
        sa.Column("updated_at", gamehub.adapters.orm.TZAwareDatetime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["account_id"], ["accounts.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("account_id"),
    )

    op.create_table(
        "chat_messages",
        sa.Column("id", gamehub.adapters.orm.CrossDatabaseUUID(), nullable=False),
        sa.Column("account_id", gamehub.adapters.orm.CrossDatabaseUUID(), nullable=False),
        sa.Column("display_name", sa.String(length=100), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("created_at", gamehub.adapters.orm.TZAwareDatetime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["account_id"], ["accounts.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_chat_messages_created_at", "chat_messages", ["created_at"], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_chat_messages_created_at", table_name="chat_messages")
    op.drop_table("chat_messages")
    op.drop_table("characters")
    op.drop_index("ix_confirmation_tokens_account_id", table_name="confirmation_tokens")
    op.drop_table("confirmation_tokens")
    op.drop_table("accounts")
