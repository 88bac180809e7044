"""ABOUTME: Email confirmation domain model for verifying account ownership
ABOUTME: Contains ConfirmationToken class and the one-time token generator"""

import secrets
import uuid
from datetime import UTC, datetime


def generate_confirmation_token(length: int = 32) -> str:
    """Generate a cryptographically secure URL-safe confirmation token."""
    return secrets.token_urlsafe(length)


class ConfirmationToken:
    """One-time token linking an emailed confirmation link to an unconfirmed account.

    Tokens do not expire; they are deleted when redeemed.
    """

    def __init__(
        self,
        account_id: uuid.UUID,
        token_id: uuid.UUID | None = None,
        token: str | None = None,
        created_at: datetime | None = None,
    ):
        self.id = token_id or uuid.uuid4()
        self.account_id = account_id
        self.token = token or generate_confirmation_token()
        self.created_at = created_at or datetime.now(UTC)

    def __repr__(self) -> str:
        # the token string is a credential, keep it out of logs
        return f"ConfirmationToken(id={self.id!r}, account_id={self.account_id!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConfirmationToken):  # pragma: no cover
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
