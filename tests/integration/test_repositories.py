"""ABOUTME: Integration tests for repository implementations
ABOUTME: Tests repository methods and constraint handling against a real SQLite database"""

import uuid
from datetime import UTC, datetime, timedelta

import pytest

from gamehub.adapters.sql_repository import (
    SqlAlchemyAccountRepository,
    SqlAlchemyCharacterRepository,
    SqlAlchemyChatMessageRepository,
    SqlAlchemyConfirmationTokenRepository,
)
from gamehub.domain.characters import Character
from gamehub.domain.chat import ChatMessage
from gamehub.domain.value_objects import ConflictReason
from gamehub.service_layer.exceptions import ConflictError


@pytest.fixture
def session(sqlite_session_factory):
    session = sqlite_session_factory()
    yield session
    session.rollback()
    session.close()


@pytest.fixture
def accounts(session):
    return SqlAlchemyAccountRepository(session)


@pytest.fixture
def tokens(session):
    return SqlAlchemyConfirmationTokenRepository(session)


class TestAccountRepository:
    def test_create_unconfirmed_and_read_back(self, accounts, session):
        account_id = accounts.create_unconfirmed("alice", "alice@example.com", "hash")
        session.commit()
        session.expunge_all()

        account = accounts.get(account_id)
        assert account is not None
        assert account.username == "alice"
        assert account.email == "alice@example.com"
        assert account.confirmed is False
        assert account.created_at.tzinfo is not None

    def test_duplicate_username_is_tagged(self, accounts, session):
        accounts.create_unconfirmed("alice", "alice@example.com", "hash")
        session.commit()

        with pytest.raises(ConflictError) as exc_info:
            accounts.create_unconfirmed("alice", "other@example.com", "hash")

        assert exc_info.value.reason == ConflictReason.USERNAME_TAKEN

    def test_duplicate_email_is_tagged(self, accounts, session):
        accounts.create_unconfirmed("alice", "alice@example.com", "hash")
        session.commit()

        with pytest.raises(ConflictError) as exc_info:
            accounts.create_unconfirmed("bob", "alice@example.com", "hash")

        assert exc_info.value.reason == ConflictReason.EMAIL_TAKEN

    def test_username_lookup_is_case_sensitive(self, accounts, session):
        accounts.create_unconfirmed("alice", "alice@example.com", "hash")
        session.commit()

        assert accounts.get_by_username("alice") is not None
        assert accounts.get_by_username("Alice") is None

    def test_get_by_email(self, accounts, session):
        account_id = accounts.create_unconfirmed("alice", "alice@example.com", "hash")
        session.commit()

        assert accounts.get_by_email("alice@example.com").id == account_id
        assert accounts.get_by_email("nobody@example.com") is None

    def test_mark_confirmed_is_idempotent(self, accounts, session):
        account_id = accounts.create_unconfirmed("alice", "alice@example.com", "hash")
        session.commit()

        assert accounts.mark_confirmed(account_id) is True
        session.commit()
        confirmed_at = accounts.get(account_id).confirmed_at
        assert accounts.mark_confirmed(account_id) is True
        session.commit()

        account = accounts.get(account_id)
        assert account.confirmed is True
        assert account.confirmed_at == confirmed_at

    def test_mark_confirmed_unknown_account(self, accounts):
        assert accounts.mark_confirmed(uuid.uuid4()) is False

    def test_all_is_ordered_by_creation(self, accounts, session):
        accounts.create_unconfirmed("alice", "alice@example.com", "hash")
        accounts.create_unconfirmed("bob", "bob@example.com", "hash")
        session.commit()

        assert [a.username for a in accounts.all()] == ["alice", "bob"]


class TestConfirmationTokenRepository:
    def test_redeem_returns_account_once(self, accounts, tokens, session):
        account_id = accounts.create_unconfirmed("alice", "alice@example.com", "hash")
        token = tokens.issue(account_id)
        session.commit()

        assert tokens.redeem(token) == account_id
        session.commit()
        assert tokens.redeem(token) is None

    def test_redeem_unknown_token(self, tokens):
        assert tokens.redeem("no-such-token") is None

    def test_redeem_deletes_the_row(self, accounts, tokens, session):
        account_id = accounts.create_unconfirmed("alice", "alice@example.com", "hash")
        token = tokens.issue(account_id)
        session.commit()

        tokens.redeem(token)
        session.commit()

        assert tokens.get_by_token(token) is None

    def test_rolled_back_redemption_leaves_token(self, accounts, tokens, session):
        account_id = accounts.create_unconfirmed("alice", "alice@example.com", "hash")
        token = tokens.issue(account_id)
        session.commit()

        tokens.redeem(token)
        session.rollback()

        assert tokens.redeem(token) == account_id

    def test_delete_for_account(self, accounts, tokens, session):
        alice = accounts.create_unconfirmed("alice", "alice@example.com", "hash")
        bob = accounts.create_unconfirmed("bob", "bob@example.com", "hash")
        tokens.issue(alice)
        tokens.issue(alice)
        bob_token = tokens.issue(bob)
        session.commit()

        assert tokens.delete_for_account(alice) == 2
        session.commit()

        assert tokens.redeem(bob_token) == bob


class TestCharacterRepository:
    def test_add_and_get_by_account(self, accounts, session):
        account_id = accounts.create_unconfirmed("alice", "alice@example.com", "hash")
        characters = SqlAlchemyCharacterRepository(session)
        characters.add(
            Character(
                account_id=account_id,
                name="Aragorn",
                character_class="ranger",
                level=3,
                health=80,
                position_x=1.5,
                position_y=-2.0,
            )
        )
        session.commit()
        session.expunge_all()

        character = characters.get(account_id)
        assert character.name == "Aragorn"
        assert character.position_y == -2.0
        assert characters.get(uuid.uuid4()) is None


class TestChatMessageRepository:
    def test_latest_is_newest_first(self, accounts, session):
        account_id = accounts.create_unconfirmed("alice", "alice@example.com", "hash")
        messages = SqlAlchemyChatMessageRepository(session)
        start = datetime.now(UTC)
        for i in range(5):
            messages.add(
                ChatMessage(
                    account_id=account_id,
                    display_name="Aragorn",
                    message=f"message {i}",
                    created_at=start + timedelta(seconds=i),
                )
            )
        session.commit()

        latest = messages.latest(3)

        assert [m.message for m in latest] == ["message 4", "message 3", "message 2"]
