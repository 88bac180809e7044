"""ABOUTME: Account domain model for GameHub authentication
ABOUTME: Contains the Account class as a plain Python object mapped imperatively to the accounts table"""

import uuid
from datetime import UTC, datetime

from .value_objects import EMAIL_MAX_LENGTH, USERNAME_MAX_LENGTH, validate_email


class Account:
    """A registered player account.

    Starts unconfirmed and becomes confirmed exactly once, when the emailed
    confirmation token is redeemed. There is no transition back.
    """

    def __init__(
        self,
        username: str,
        email: str,
        password_hash: str,
        account_id: uuid.UUID | None = None,
        confirmed: bool = False,
        created_at: datetime | None = None,
        confirmed_at: datetime | None = None,
    ):
        if not username:
            raise ValueError("Account must have a username")
        if len(username) > USERNAME_MAX_LENGTH:
            raise ValueError(f"Username cannot be longer than {USERNAME_MAX_LENGTH} characters")
        if len(email) > EMAIL_MAX_LENGTH:
            raise ValueError(f"Email cannot be longer than {EMAIL_MAX_LENGTH} characters")
        if not password_hash:
            raise ValueError("Account must have a password hash")
        validate_email(email)

        self.id = account_id or uuid.uuid4()
        self.username = username
        self.email = email
        self.password_hash = password_hash
        self.confirmed = confirmed
        self.created_at = created_at or datetime.now(UTC)
        self.confirmed_at = confirmed_at

    def confirm(self) -> bool:
        """Mark the account as confirmed.

        Returns False, and changes nothing, if it was already confirmed.
        """
        if self.confirmed:
            return False
        self.confirmed = True
        self.confirmed_at = datetime.now(UTC)
        return True

    def __repr__(self) -> str:
        return f"Account(id={self.id!r}, username={self.username!r}, confirmed={self.confirmed!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Account):  # pragma: no cover
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def create_detached_copy(self) -> "Account":
        """Create a detached copy of this account for use outside SQLAlchemy sessions"""
        return Account(
            username=self.username,
            email=self.email,
            password_hash=self.password_hash,
            account_id=self.id,
            confirmed=self.confirmed,
            created_at=self.created_at,
            confirmed_at=self.confirmed_at,
        )
