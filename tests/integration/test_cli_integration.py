"""ABOUTME: Integration tests for CLI commands using real database
ABOUTME: Tests account listing and database management against SQLite"""

from gamehub import __version__
from gamehub.entrypoints.cli import cli
from gamehub.service_layer.unit_of_work import SqlAlchemyUnitOfWork


def add_account(session_factory, username, confirmed=False):
    with SqlAlchemyUnitOfWork(session_factory) as uow:
        account_id = uow.accounts.create_unconfirmed(username, f"{username}@example.com", "hash")
        if confirmed:
            uow.accounts.mark_confirmed(account_id)
        uow.commit()


class TestCliAccountsIntegration:
    def test_list_accounts(self, sqlite_session_factory, cli_with_session_factory):
        add_account(sqlite_session_factory, "alice", confirmed=True)
        add_account(sqlite_session_factory, "bob")

        result = cli_with_session_factory(cli, ["accounts", "list"])

        assert result.exit_code == 0, f"exit code non-zero: {result.exit_code}. Output: {result.output}"
        assert "Found 2 account(s)" in result.output
        assert "alice <alice@example.com> [confirmed]" in result.output
        assert "bob <bob@example.com> [unconfirmed]" in result.output

    def test_list_unconfirmed_only(self, sqlite_session_factory, cli_with_session_factory):
        add_account(sqlite_session_factory, "alice", confirmed=True)
        add_account(sqlite_session_factory, "bob")

        result = cli_with_session_factory(cli, ["accounts", "list", "--unconfirmed"])

        assert result.exit_code == 0, result.output
        assert "bob@example.com" in result.output
        assert "alice@example.com" not in result.output

    def test_list_when_empty(self, cli_with_session_factory):
        result = cli_with_session_factory(cli, ["accounts", "list"])

        assert result.exit_code == 0, result.output
        assert "No accounts found." in result.output


class TestCliDatabaseIntegration:
    def test_init_is_safe_to_repeat(self, sqlite_session_factory, cli_with_session_factory):
        add_account(sqlite_session_factory, "alice")

        result = cli_with_session_factory(cli, ["database", "init"])

        assert result.exit_code == 0, result.output
        assert "Database tables created." in result.output
        with SqlAlchemyUnitOfWork(sqlite_session_factory) as uow:
            assert len(list(uow.accounts.all())) == 1

    def test_reset_needs_environment_guard(self, sqlite_session_factory, cli_with_session_factory, clear_env_vars):
        clear_env_vars("ALLOW_RESET_DB")
        add_account(sqlite_session_factory, "alice")

        result = cli_with_session_factory(cli, ["database", "reset"])

        assert result.exit_code == 0, result.output
        assert "ALLOW_RESET_DB" in result.output
        with SqlAlchemyUnitOfWork(sqlite_session_factory) as uow:
            assert len(list(uow.accounts.all())) == 1

    def test_reset_drops_data(self, sqlite_session_factory, cli_with_session_factory, temp_env_vars):
        temp_env_vars(ALLOW_RESET_DB="DANGEROUS")
        add_account(sqlite_session_factory, "alice")

        result = cli_with_session_factory(cli, ["database", "reset"], input="delete everything\n")

        assert result.exit_code == 0, result.output
        assert "Database reset successfully." in result.output
        with SqlAlchemyUnitOfWork(sqlite_session_factory) as uow:
            assert list(uow.accounts.all()) == []

    def test_reset_cancelled(self, sqlite_session_factory, cli_with_session_factory, temp_env_vars):
        temp_env_vars(ALLOW_RESET_DB="DANGEROUS")
        add_account(sqlite_session_factory, "alice")

        result = cli_with_session_factory(cli, ["database", "reset"], input="no thanks\n")

        assert result.exit_code == 0, result.output
        assert "Operation cancelled." in result.output


def test_version(cli_with_session_factory):
    result = cli_with_session_factory(cli, ["version"])

    assert result.exit_code == 0
    assert f"GameHub {__version__}" in result.output
