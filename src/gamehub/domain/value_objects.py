"""ABOUTME: Value objects and enums for GameHub domain models
ABOUTME: Defines shared enums and validation functions used across domain objects"""

import re
from enum import Enum

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

# Column widths in the accounts and characters tables
USERNAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 255
CHARACTER_NAME_MAX_LENGTH = 100
CHARACTER_CLASS_MAX_LENGTH = 50


class ConflictReason(Enum):
    """Which uniqueness rule a registration collided with."""

    USERNAME_TAKEN = "username-taken"
    EMAIL_TAKEN = "email-taken"
    UNKNOWN = "unknown"


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email))


def validate_email(email: str) -> None:
    """Basic local@domain.tld shape check."""
    if not is_valid_email(email):
        raise ValueError("Invalid email address")
