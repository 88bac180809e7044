"""ABOUTME: CLI commands for database management operations
ABOUTME: Provides commands to create the tables and to reset the database"""

import os

import click

from gamehub.adapters import database as db

from . import get_session_factory


@click.group()
def database() -> None:
    """Database management commands."""
    pass


@database.command("init")
@click.pass_context
def init_db(ctx: click.Context) -> None:
    """Create any missing tables. Existing tables and data are left alone."""
    try:
        session_factory = get_session_factory(ctx)
        db.create_tables(session_factory.kw["bind"])
        click.echo(click.style("✓ Database tables created.", "green"))
    except Exception as e:
        click.echo(click.style(f"✗ Error creating tables: {e}", "red"))
        raise click.Abort() from e


@database.command("reset")
@click.pass_context
def reset_db(ctx: click.Context) -> None:
    """Reset the database (drop all tables and recreate)."""
    if os.environ.get("ALLOW_RESET_DB", "") != "DANGEROUS":
        click.echo("Resetting the database is a dangerous operation. In order to enable it set the")
        click.echo("environment variable ALLOW_RESET_DB to DANGEROUS.")
        return

    click.echo(click.style("⚠️  WARNING: This will destroy ALL data in the database!", "red"))
    delete_confirm = click.prompt("Type 'delete everything' if you want to continue.")
    if delete_confirm != "delete everything":
        click.echo("Operation cancelled.")
        return

    try:
        engine = get_session_factory(ctx).kw["bind"]
        db.drop_tables(engine)
        db.create_tables(engine)
        click.echo(click.style("✓ Database reset successfully.", "green"))
    except Exception as e:
        click.echo(click.style(f"✗ Error resetting database: {e}", "red"))
        raise click.Abort() from e
