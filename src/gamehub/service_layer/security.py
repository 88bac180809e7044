"""ABOUTME: Security utilities for password hashing and verification
ABOUTME: Wraps werkzeug's self-describing salted hashes with a configurable cost factor"""

import logging

from werkzeug.security import check_password_hash, generate_password_hash

from gamehub.config import DEFAULT_PASSWORD_HASH_METHOD

from .exceptions import HashingError

logger = logging.getLogger(__name__)

SALT_LENGTH = 16


def hash_password(password: str, method: str = DEFAULT_PASSWORD_HASH_METHOD) -> str:
    """Hash a password using werkzeug's secure method.

    The digest looks like ``scrypt:32768:8:1$<salt>$<hash>`` - the method and its
    cost parameters travel with it, so digests made under an older setting
    still verify after the cost is raised.

    Raises:
        HashingError: if the hasher itself fails (e.g. an unsupported method)
    """
    try:
        return generate_password_hash(password, method=method, salt_length=SALT_LENGTH)
    except (ValueError, TypeError, MemoryError) as e:
        raise HashingError(f"Password hashing failed using method '{method}': {e}") from e


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its hash.

    Comparison is constant-time. A digest werkzeug cannot parse never matches.
    """
    try:
        return check_password_hash(password_hash, password)
    except (ValueError, TypeError) as e:
        logger.warning(f"Stored password hash could not be checked: {e}")
        return False
