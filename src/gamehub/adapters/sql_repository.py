"""ABOUTME: SQLAlchemy implementations of repository interfaces
ABOUTME: Provides concrete database operations using SQLAlchemy sessions"""

from __future__ import annotations

import uuid
from collections.abc import Iterable

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from gamehub.adapters import orm
from gamehub.domain.accounts import Account
from gamehub.domain.characters import Character
from gamehub.domain.chat import ChatMessage
from gamehub.domain.confirmation import ConfirmationToken
from gamehub.domain.value_objects import ConflictReason
from gamehub.service_layer.exceptions import ConflictError
from gamehub.service_layer.repositories import (
    AccountRepository,
    CharacterRepository,
    ChatMessageRepository,
    ConfirmationTokenRepository,
)


def conflict_reason_from_error(error: IntegrityError) -> ConflictReason:
    """Work out which unique constraint an insert violated.

    PostgreSQL names the constraint, SQLite names the column. Anything else is UNKNOWN.
    """
    diag = getattr(error.orig, "diag", None)
    constraint_name = getattr(diag, "constraint_name", None) or ""
    message = f"{constraint_name} {error.orig}"
    if orm.USERNAME_CONSTRAINT in message or "accounts.username" in message:
        return ConflictReason.USERNAME_TAKEN
    if orm.EMAIL_CONSTRAINT in message or "accounts.email" in message:
        return ConflictReason.EMAIL_TAKEN
    return ConflictReason.UNKNOWN


class SqlAlchemyRepository:
    """Base SQLAlchemy repository with common functionality."""

    def __init__(self, session: Session) -> None:
        self.session = session


class SqlAlchemyAccountRepository(SqlAlchemyRepository, AccountRepository):
    """SQLAlchemy implementation of AccountRepository."""

    def add(self, item: Account) -> None:
        self.session.add(item)

    def get(self, item_id: uuid.UUID) -> Account | None:
        return self.session.query(Account).filter_by(id=item_id).first()

    def all(self) -> Iterable[Account]:
        return self.session.query(Account).order_by(orm.accounts.c.created_at).all()

    def create_unconfirmed(self, username: str, email: str, password_hash: str) -> uuid.UUID:
        account = Account(username=username, email=email, password_hash=password_hash)
        self.session.add(account)
        try:
            # flush now so the unique constraints are checked before anything else happens
            self.session.flush()
        except IntegrityError as e:
            raise ConflictError(conflict_reason_from_error(e)) from e
        return account.id

    def get_by_username(self, username: str) -> Account | None:
        return self.session.query(Account).filter_by(username=username).first()

    def get_by_email(self, email: str) -> Account | None:
        return self.session.query(Account).filter_by(email=email).first()

    def mark_confirmed(self, account_id: uuid.UUID) -> bool:
        account = self.get(account_id)
        if account is None:
            return False
        account.confirm()
        return True


class SqlAlchemyConfirmationTokenRepository(SqlAlchemyRepository, ConfirmationTokenRepository):
    """SQLAlchemy implementation of ConfirmationTokenRepository."""

    def issue(self, account_id: uuid.UUID) -> str:
        token = ConfirmationToken(account_id=account_id)
        self.session.add(token)
        return token.token

    def get_by_token(self, token: str) -> ConfirmationToken | None:
        return self.session.query(ConfirmationToken).filter_by(token=token).first()

    def redeem(self, token: str) -> uuid.UUID | None:
        self.session.flush()
        table = orm.confirmation_tokens
        account_id = self.session.execute(select(table.c.account_id).where(table.c.token == token)).scalar()
        if account_id is None:
            return None
        # A concurrent redemption of the same token will block here and then delete nothing
        result = self.session.execute(delete(table).where(table.c.token == token))
        if result.rowcount != 1:  # type: ignore[attr-defined]
            return None
        return account_id

    def delete_for_account(self, account_id: uuid.UUID) -> int:
        self.session.flush()
        table = orm.confirmation_tokens
        result = self.session.execute(delete(table).where(table.c.account_id == account_id))
        return int(result.rowcount)  # type: ignore[attr-defined]


class SqlAlchemyCharacterRepository(SqlAlchemyRepository, CharacterRepository):
    """SQLAlchemy implementation of CharacterRepository."""

    def add(self, item: Character) -> None:
        self.session.add(item)

    def get(self, item_id: uuid.UUID) -> Character | None:
        """Get the character belonging to an account."""
        return self.session.query(Character).filter_by(account_id=item_id).first()

    def all(self) -> Iterable[Character]:
        return self.session.query(Character).all()


class SqlAlchemyChatMessageRepository(SqlAlchemyRepository, ChatMessageRepository):
    """SQLAlchemy implementation of ChatMessageRepository."""

    def add(self, item: ChatMessage) -> None:
        self.session.add(item)

    def latest(self, limit: int) -> list[ChatMessage]:
        return list(
            self.session.query(ChatMessage).order_by(orm.chat_messages.c.created_at.desc()).limit(limit).all()
        )
