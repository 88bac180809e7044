"""ABOUTME: Custom exceptions for service layer operations
ABOUTME: Defines business logic exceptions with caller-safe error messages"""

from gamehub.domain.value_objects import ConflictReason
from gamehub.translations import gettext as _


class GameHubError(Exception):
    """Base exception for all our custom errors."""


class ServiceLayerError(GameHubError):
    """Base exception for all service layer errors."""


class ValidationError(ServiceLayerError):
    """Raised when a request is malformed or missing required fields."""


class ConflictError(ServiceLayerError):
    """Raised when a username or email is already registered."""

    def __init__(self, reason: ConflictReason = ConflictReason.UNKNOWN) -> None:
        if reason == ConflictReason.USERNAME_TAKEN:
            message = _("Username already exists")
        elif reason == ConflictReason.EMAIL_TAKEN:
            message = _("Email is already registered")
        else:
            message = _("Username or email already exists")
        super().__init__(message)
        self.reason = reason


class NotFoundError(ServiceLayerError):
    """General error to indicate something cannot be found in a repository"""


class UserNotFoundError(NotFoundError):
    """No account has the given username"""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or _("User not found"))


class CharacterNotFoundError(NotFoundError):
    """The player has no saved character"""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or _("Character not found"))


class PlayerNotFoundError(NotFoundError):
    """No account exists for the given player id"""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or _("Player not found"))


class NotConfirmedError(ServiceLayerError):
    """Raised when logging in to an account whose email is not yet confirmed."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or _("Please confirm your email address before logging in"))


class InvalidCredentialsError(ServiceLayerError):
    """Raised when authentication fails due to a wrong password."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or _("Invalid password"))


class InvalidTokenError(ServiceLayerError):
    """Raised for any confirmation token that cannot be redeemed.

    The message is the same whether the token never existed or was already
    used, so callers cannot probe for tokens.
    """

    def __init__(self) -> None:
        super().__init__(_("Invalid confirmation token"))


class InternalError(ServiceLayerError):
    """A store, hasher or notifier fault. The message is safe to show callers."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or _("An internal error occurred"))


class HashingError(GameHubError):
    """The password hasher failed for a reason unrelated to its input."""


class NotificationError(GameHubError):
    """The confirmation email could not be delivered."""
