"""ABOUTME: Unit of Work pattern implementation for transaction management
ABOUTME: Coordinates repository operations within database transactions"""

from __future__ import annotations

import abc
from types import TracebackType

from sqlalchemy.orm import Session, sessionmaker

from gamehub.adapters.sql_repository import (
    SqlAlchemyAccountRepository,
    SqlAlchemyCharacterRepository,
    SqlAlchemyChatMessageRepository,
    SqlAlchemyConfirmationTokenRepository,
)
from gamehub.service_layer.repositories import (
    AccountRepository,
    CharacterRepository,
    ChatMessageRepository,
    ConfirmationTokenRepository,
)


class AbstractUnitOfWork(abc.ABC):
    """Abstract Unit of Work interface."""

    accounts: AccountRepository
    confirmation_tokens: ConfirmationTokenRepository
    characters: CharacterRepository
    chat_messages: ChatMessageRepository

    def __enter__(self) -> AbstractUnitOfWork:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if exc_type is not None:
            self.rollback()
        else:
            self.commit()

    @abc.abstractmethod
    def commit(self) -> None:
        """Commit the current transaction."""
        raise NotImplementedError

    @abc.abstractmethod
    def rollback(self) -> None:
        """Rollback the current transaction."""
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """SQLAlchemy implementation of Unit of Work pattern.

    The session factory is built once at startup and handed in - each unit of
    work only opens a session from the shared pool.
    """

    def __init__(self, session_factory: sessionmaker) -> None:
        self.session_factory = session_factory
        self._session: Session | None = None

    @property
    def session(self) -> Session:
        if self._session is None:
            self._session = self.session_factory()
        assert isinstance(self._session, Session)
        return self._session

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        # Initialize repositories with the session
        self.accounts = SqlAlchemyAccountRepository(self.session)
        self.confirmation_tokens = SqlAlchemyConfirmationTokenRepository(self.session)
        self.characters = SqlAlchemyCharacterRepository(self.session)
        self.chat_messages = SqlAlchemyChatMessageRepository(self.session)

        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        try:
            if exc_type is not None:
                self.rollback()
            else:
                self.commit()
        finally:
            self.session.close()
            self._session = None

    def commit(self) -> None:
        """Commit the current transaction."""
        self.session.commit()

    def rollback(self) -> None:
        """Rollback the current transaction."""
        self.session.rollback()
