"""ABOUTME: SQLAlchemy table definitions and imperative mapping for GameHub
ABOUTME: Defines database schema with named unique constraints, foreign keys and indexes"""

import uuid
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import (
    TIMESTAMP,
    Boolean,
    Column,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
    TypeDecorator,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import UUID as PostgresUUID
from sqlalchemy.engine.interfaces import Dialect
from sqlalchemy.orm import registry
from sqlalchemy.sql.sqltypes import String as SQLString

from gamehub.domain.value_objects import (
    CHARACTER_CLASS_MAX_LENGTH,
    CHARACTER_NAME_MAX_LENGTH,
    EMAIL_MAX_LENGTH,
    USERNAME_MAX_LENGTH,
)

USERNAME_CONSTRAINT = "uq_accounts_username"
EMAIL_CONSTRAINT = "uq_accounts_email"


def aware_utcnow() -> datetime:  # pragma: no cover
    return datetime.now(UTC)


class TZAwareDatetime(TypeDecorator):
    """Custom type for timezone-aware datetime objects."""

    impl = TIMESTAMP
    cache_ok = True

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        # Ensure timezone=True for PostgreSQL
        kwargs.setdefault("timezone", True)
        super().__init__(*args, **kwargs)

    def process_result_value(self, value: Any, dialect: Dialect) -> datetime | None:
        if value is None:
            return value

        # SQLite hands back naive datetimes, they were stored as UTC
        if isinstance(value, datetime) and value.tzinfo is None:
            return value.replace(tzinfo=UTC)

        return value


class CrossDatabaseUUID(TypeDecorator):
    """Cross-database UUID type that works with both PostgreSQL and SQLite."""

    impl = SQLString
    cache_ok = True

    def load_dialect_impl(self, dialect: Dialect) -> Any:
        if dialect.name == "postgresql":
            return dialect.type_descriptor(PostgresUUID(as_uuid=True))
        # For SQLite and other databases, use CHAR(36) to store UUID as string
        return dialect.type_descriptor(SQLString(36))

    def process_bind_param(self, value: Any, dialect: Dialect) -> Any:
        if value is None:
            return value

        if isinstance(value, uuid.UUID):
            return value if dialect.name == "postgresql" else str(value)
        if isinstance(value, str):
            try:
                parsed = uuid.UUID(value)
            except ValueError as e:
                raise ValueError(f"Invalid UUID string: {value}") from e
            return parsed if dialect.name == "postgresql" else str(parsed)
        raise TypeError(f"Expected UUID or string, got {type(value)}")

    def process_result_value(self, value: Any, dialect: Dialect) -> uuid.UUID | None:
        if value is None:
            return value
        if isinstance(value, uuid.UUID):
            return value
        return uuid.UUID(str(value))


# Create a registry for imperative mapping
mapper_registry = registry()
metadata = mapper_registry.metadata

accounts = Table(
    "accounts",
    metadata,
    Column("id", CrossDatabaseUUID(), primary_key=True, default=uuid.uuid4),
    Column("username", String(USERNAME_MAX_LENGTH), nullable=False),
    Column("email", String(EMAIL_MAX_LENGTH), nullable=False),
    Column("password_hash", String(255), nullable=False),
    Column("confirmed", Boolean, nullable=False, default=False),
    Column("created_at", TZAwareDatetime(), nullable=False, default=aware_utcnow),
    Column("confirmed_at", TZAwareDatetime(), nullable=True),
    UniqueConstraint("username", name=USERNAME_CONSTRAINT),
    UniqueConstraint("email", name=EMAIL_CONSTRAINT),
)

confirmation_tokens = Table(
    "confirmation_tokens",
    metadata,
    Column("id", CrossDatabaseUUID(), primary_key=True, default=uuid.uuid4),
    Column("account_id", CrossDatabaseUUID(), ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False),
    Column("token", String(100), nullable=False),
    Column("created_at", TZAwareDatetime(), nullable=False, default=aware_utcnow),
    UniqueConstraint("token", name="uq_confirmation_tokens_token"),
)

# One row per account - saving a character replaces it
characters = Table(
    "characters",
    metadata,
    Column(
        "account_id",
        CrossDatabaseUUID(),
        ForeignKey("accounts.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("name", String(CHARACTER_NAME_MAX_LENGTH), nullable=False),
    Column("character_class", String(CHARACTER_CLASS_MAX_LENGTH), nullable=False),
    Column("level", Integer, nullable=False, default=1),
    Column("health", Integer, nullable=False),
    Column("position_x", Float, nullable=False, default=0.0),
    Column("position_y", Float, nullable=False, default=0.0),
    Column("updated_at", TZAwareDatetime(), nullable=False, default=aware_utcnow),
)

chat_messages = Table(
    "chat_messages",
    metadata,
    Column("id", CrossDatabaseUUID(), primary_key=True, default=uuid.uuid4),
    Column("account_id", CrossDatabaseUUID(), ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False),
    Column("display_name", String(CHARACTER_NAME_MAX_LENGTH), nullable=False),
    Column("message", Text, nullable=False),
    Column("created_at", TZAwareDatetime(), nullable=False, default=aware_utcnow),
)

Index("ix_confirmation_tokens_account_id", confirmation_tokens.c.account_id)
Index("ix_chat_messages_created_at", chat_messages.c.created_at)
