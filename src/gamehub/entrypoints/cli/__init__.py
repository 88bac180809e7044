"""ABOUTME: Main CLI entry point using Click for GameHub administration
ABOUTME: Provides subcommands for database setup and account inspection"""

import click
from sqlalchemy.orm import sessionmaker

from gamehub import __version__, bootstrap
from gamehub.config import get_config


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """GameHub administration CLI."""
    # Ensure context object exists
    ctx.ensure_object(dict)
    ctx.obj["config"] = get_config()


def get_session_factory(ctx: click.Context) -> sessionmaker:
    """Connect on first use, so commands that need no database never open one."""
    if ctx.obj.get("session_factory") is None:
        ctx.obj["session_factory"] = bootstrap.bootstrap(database_url=ctx.obj["config"].DATABASE_URL)
    else:
        bootstrap.bootstrap(session_factory=ctx.obj["session_factory"])
    session_factory = ctx.obj["session_factory"]
    assert isinstance(session_factory, sessionmaker)
    return session_factory


@cli.command()
def version() -> None:
    """Show GameHub version."""
    click.echo(f"GameHub {__version__}")


# Import subcommands to register them
from .accounts import accounts  # noqa: E402
from .database import database  # noqa: E402

cli.add_command(accounts)
cli.add_command(database)


if __name__ == "__main__":
    cli()
