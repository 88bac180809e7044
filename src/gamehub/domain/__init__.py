"""Domain models for GameHub."""

from .confirmation import ConfirmationToken, generate_confirmation_token

__all__ = ["ConfirmationToken", "generate_confirmation_token"]
