"""ABOUTME: CLI commands for inspecting player accounts
ABOUTME: Lists accounts with their confirmation status"""

import click

from gamehub.service_layer.unit_of_work import SqlAlchemyUnitOfWork

from . import get_session_factory


@click.group()
def accounts() -> None:
    """Account management commands."""
    pass


@accounts.command("list")
@click.option("--unconfirmed", is_flag=True, help="Only show accounts that have not confirmed their email")
@click.pass_context
def list_accounts(ctx: click.Context, unconfirmed: bool) -> None:
    """List registered accounts."""
    try:
        with SqlAlchemyUnitOfWork(get_session_factory(ctx)) as uow:
            all_accounts = sorted(uow.accounts.all(), key=lambda a: a.created_at)
            if unconfirmed:
                all_accounts = [a for a in all_accounts if not a.confirmed]

            if not all_accounts:
                click.echo("No accounts found.")
                return

            click.echo(f"Found {len(all_accounts)} account(s):")
            click.echo()
            for account in all_accounts:
                status = "confirmed" if account.confirmed else "unconfirmed"
                click.echo(f"  {account.username} <{account.email}> [{status}]")
                click.echo(f"    ID: {account.id}")
                click.echo(f"    Created: {account.created_at:%Y-%m-%d %H:%M}")
                click.echo()

    except Exception as e:
        click.echo(click.style(f"✗ Error listing accounts: {e}", "red"))
        raise click.Abort() from e
