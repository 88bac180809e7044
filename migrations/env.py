"""ABOUTME: Alembic migration environment for GameHub
ABOUTME: Points alembic at the application's table metadata and DATABASE_URL"""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from gamehub.adapters.orm import metadata
from gamehub.config import InvalidConfig, get_db_uri

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

database_url = get_db_uri()
if not database_url:
    raise InvalidConfig("DATABASE_URL must be set to run migrations")
config.set_main_option("sqlalchemy.url", database_url)

target_metadata = metadata


def run_migrations_offline() -> None:
    """Emit the migration SQL without connecting to the database."""
    context.configure(
        url=database_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations against a live database connection."""
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
