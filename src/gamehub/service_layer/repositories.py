"""ABOUTME: Abstract repository interfaces for domain objects
ABOUTME: Defines repository contracts to abstract database operations from business logic"""

from __future__ import annotations

import abc
import uuid
from collections.abc import Iterable
from typing import Any

from gamehub.domain.accounts import Account
from gamehub.domain.chat import ChatMessage


class AbstractRepository(abc.ABC):
    """Base repository interface providing common operations."""

    @abc.abstractmethod
    def add(self, item: Any) -> None:
        """Add an item to the repository."""
        raise NotImplementedError

    @abc.abstractmethod
    def get(self, item_id: uuid.UUID) -> Any | None:
        """Get an item by its ID."""
        raise NotImplementedError

    @abc.abstractmethod
    def all(self) -> Iterable[Any]:
        """List all items in the repository."""
        raise NotImplementedError


class AccountRepository(AbstractRepository):
    """Repository interface for Account domain objects - the credential store."""

    @abc.abstractmethod
    def create_unconfirmed(self, username: str, email: str, password_hash: str) -> uuid.UUID:
        """Insert a new unconfirmed account and return its id.

        Raises:
            ConflictError: if the username or email is already registered
        """
        raise NotImplementedError

    @abc.abstractmethod
    def get_by_username(self, username: str) -> Account | None:
        """Get an account by its username (case-sensitive)."""
        raise NotImplementedError

    @abc.abstractmethod
    def get_by_email(self, email: str) -> Account | None:
        """Get an account by its email address."""
        raise NotImplementedError

    @abc.abstractmethod
    def mark_confirmed(self, account_id: uuid.UUID) -> bool:
        """Flip the account to confirmed. Idempotent.

        Returns True if the account exists (whether or not it was already confirmed).
        """
        raise NotImplementedError


class ConfirmationTokenRepository(abc.ABC):
    """Repository interface for one-time confirmation tokens."""

    @abc.abstractmethod
    def issue(self, account_id: uuid.UUID) -> str:
        """Create and store a fresh token for the account, returning the token string."""
        raise NotImplementedError

    @abc.abstractmethod
    def redeem(self, token: str) -> uuid.UUID | None:
        """Delete the token and return its account id.

        Returns None when the token is unknown or was already redeemed - the two
        cases are deliberately indistinguishable.
        """
        raise NotImplementedError

    @abc.abstractmethod
    def delete_for_account(self, account_id: uuid.UUID) -> int:
        """Delete all outstanding tokens for an account. Returns the number deleted."""
        raise NotImplementedError


class CharacterRepository(AbstractRepository):
    """Repository interface for Character domain objects, keyed by account id."""


class ChatMessageRepository(abc.ABC):
    """Repository interface for the chat log."""

    @abc.abstractmethod
    def add(self, item: ChatMessage) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def latest(self, limit: int) -> list[ChatMessage]:
        """Get the most recent messages, newest first."""
        raise NotImplementedError

