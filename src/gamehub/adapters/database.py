"""ABOUTME: Database connection setup and imperative mapping for GameHub
ABOUTME: Configures SQLAlchemy sessions and maps domain objects to tables"""

import logging

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import clear_mappers as sqla_clear_mappers
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from gamehub.adapters import orm
from gamehub.config import bool_environ_get
from gamehub.domain import accounts, characters, chat, confirmation

logger = logging.getLogger(__name__)


class DatabaseError(Exception):
    """Base exception for database-related errors."""


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """Create the one engine (and connection pool) the process shares."""
    if not database_url:
        raise DatabaseError("No database URL configured")
    echo = bool_environ_get("DB_ECHO") or echo
    extra_args: dict = {}
    if database_url.startswith("postgresql"):
        extra_args = {
            "pool_pre_ping": True,  # Verify connections before use
            "pool_recycle": 3600,  # Recycle connections after 1 hour
            "pool_size": 10,  # Connection pool size
            "max_overflow": 20,  # Additional connections beyond pool_size
        }
    elif database_url == "sqlite:///:memory:":
        # every connection to an in-memory database is a new database, so share one
        extra_args = {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}
    # bound parameters carry password hashes and confirmation tokens, keep them out of error text
    return create_engine(database_url, echo=echo, hide_parameters=True, **extra_args)


def describe_db_error(error: BaseException) -> str:
    """Name a database error for the logs without its SQL, parameters or driver detail.

    Driver messages can quote the offending row (a duplicate token, say), so only
    the exception types are kept.
    """
    orig = getattr(error, "orig", None)
    if orig is None:
        return type(error).__name__
    return f"{type(error).__name__} ({type(orig).__name__})"


def create_session_factory(database_url: str = "", echo: bool = False, engine: Engine | None = None) -> sessionmaker:
    """Create a SQLAlchemy session factory with proper configuration."""
    engine = engine or create_db_engine(database_url, echo=echo)
    return sessionmaker(bind=engine, expire_on_commit=False)


def check_connection(engine: Engine) -> None:
    """Open one connection to prove the database is reachable.

    Raises:
        DatabaseError: if no connection could be made
    """
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Could not connect to database: {e}")
        raise DatabaseError(f"Could not connect to database: {e}") from e


# Track if mappers have been started
_mappers_started = False


def start_mappers() -> None:
    """Start imperative mapping between domain objects and database tables.

    This function must be called before using any domain objects with SQLAlchemy.
    The mapping is done imperatively to keep domain objects independent of SQLAlchemy.
    """
    global _mappers_started

    if _mappers_started:
        return

    try:
        orm.mapper_registry.map_imperatively(accounts.Account, orm.accounts)
        orm.mapper_registry.map_imperatively(confirmation.ConfirmationToken, orm.confirmation_tokens)
        orm.mapper_registry.map_imperatively(characters.Character, orm.characters)
        orm.mapper_registry.map_imperatively(chat.ChatMessage, orm.chat_messages)

        _mappers_started = True

    except Exception as e:  # pragma: no cover
        raise DatabaseError(f"Failed to start mappers: {e}") from e


def clear_mappers() -> None:
    sqla_clear_mappers()

    global _mappers_started
    _mappers_started = False


def create_tables(engine: Engine) -> None:
    try:
        orm.metadata.create_all(engine)
    except SQLAlchemyError as e:  # pragma: no cover
        raise DatabaseError(f"Failed to create tables: {e}") from e


def drop_tables(engine: Engine) -> None:
    """Drop all tables. This permanently deletes all data."""
    try:
        orm.metadata.drop_all(engine)
    except SQLAlchemyError as e:  # pragma: no cover
        raise DatabaseError(f"Failed to drop tables: {e}") from e
