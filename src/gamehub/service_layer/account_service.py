"""ABOUTME: Account lifecycle service - registration, email confirmation and login
ABOUTME: Owns the confirmation-before-login and one-time-token rules across the credential and token stores"""

import logging
import uuid

from sqlalchemy.exc import SQLAlchemyError

from gamehub.adapters.database import describe_db_error
from gamehub.adapters.email import EmailAdapter
from gamehub.adapters.template_renderer import TemplateRenderer
from gamehub.adapters.url_generator import URLGenerator
from gamehub.config import DEFAULT_PASSWORD_HASH_METHOD
from gamehub.domain.accounts import Account
from gamehub.domain.value_objects import EMAIL_MAX_LENGTH, USERNAME_MAX_LENGTH, is_valid_email
from gamehub.translations import gettext as _

from .exceptions import (
    HashingError,
    InternalError,
    InvalidCredentialsError,
    InvalidTokenError,
    NotConfirmedError,
    NotificationError,
    UserNotFoundError,
    ValidationError,
)
from .security import hash_password, verify_password
from .unit_of_work import AbstractUnitOfWork

logger = logging.getLogger(__name__)

CONFIRM_ENDPOINT = "accounts.confirm"


def register(
    uow: AbstractUnitOfWork,
    email_adapter: EmailAdapter,
    template_renderer: TemplateRenderer,
    url_generator: URLGenerator,
    username: str,
    password: str,
    email: str,
    hash_method: str = DEFAULT_PASSWORD_HASH_METHOD,
) -> uuid.UUID:
    """
    Register a new, unconfirmed account and email it a confirmation link.

    The account insert, the token insert and the email all happen inside one
    unit of work. If the email cannot be sent nothing is committed, so no
    account is ever left without a way to be confirmed.

    Args:
        uow: Unit of Work for database operations
        email_adapter: Email adapter for sending the confirmation link
        template_renderer: Renders the confirmation email bodies
        url_generator: Builds the absolute confirmation URL
        username: Requested username (unique, case-sensitive)
        password: Plain text password (will be hashed)
        email: Email address (unique)
        hash_method: werkzeug hash method string carrying the cost factor

    Returns:
        The new account's id

    Raises:
        ValidationError: If a field is missing or the email is malformed
        ConflictError: If the username or email is already registered
        InternalError: If hashing, storage or email delivery fails
    """
    username = (username or "").strip()
    email = (email or "").strip()
    if not username or not password or not email:
        raise ValidationError(_("Username, password, and email are required"))
    if len(username) > USERNAME_MAX_LENGTH:
        raise ValidationError(_("Username cannot be longer than %(max)s characters", max=USERNAME_MAX_LENGTH))
    if len(email) > EMAIL_MAX_LENGTH:
        raise ValidationError(_("Email cannot be longer than %(max)s characters", max=EMAIL_MAX_LENGTH))
    if not is_valid_email(email):
        raise ValidationError(_("Invalid email format"))

    try:
        password_hash = hash_password(password, method=hash_method)
    except HashingError as e:
        logger.error(f"Registration failed for {username}: {e}")
        raise InternalError(_("Registration failed")) from e

    try:
        with uow:
            account_id = uow.accounts.create_unconfirmed(username, email, password_hash)
            token = uow.confirmation_tokens.issue(account_id)

            account = uow.accounts.get(account_id)
            assert isinstance(account, Account)
            if not send_confirmation_email(email_adapter, template_renderer, url_generator, account, token):
                raise NotificationError(f"Confirmation email to {email} was not delivered")

            uow.commit()
    except NotificationError as e:
        logger.error(f"Registration of {username} rolled back: {e}")
        raise InternalError(_("Could not send the confirmation email, please try again later")) from e
    except SQLAlchemyError as e:
        logger.error(f"Database error registering {username}: {describe_db_error(e)}")
        raise InternalError(_("Registration failed")) from e

    logger.info(f"Registered account {account_id} for {username}, awaiting confirmation")
    return account_id


def send_confirmation_email(
    email_adapter: EmailAdapter,
    template_renderer: TemplateRenderer,
    url_generator: URLGenerator,
    account: Account,
    confirmation_token: str,
) -> bool:
    """
    Send the email confirmation link to an account's address.

    Returns:
        True if email sent successfully, False otherwise
    """
    try:
        confirmation_url = url_generator.generate_url(CONFIRM_ENDPOINT, token=confirmation_token, _external=True)

        context = {
            "username": account.username,
            "email_address": account.email,
            "confirmation_url": confirmation_url,
        }
        text_body = template_renderer.render_template("emails/account_confirmation.txt", **context)
        html_body = template_renderer.render_template("emails/account_confirmation.html", **context)

        success = email_adapter.send_email(
            to=[(account.username, account.email)],
            subject=_("Confirm your GameHub account"),
            text_body=text_body,
            html_body=html_body,
        )
    except Exception as e:
        logger.error(f"Error sending confirmation email to {account.email}: {e}")
        return False

    if success:
        logger.info(f"Confirmation email sent to {account.email}")
    else:
        logger.error(f"Failed to send confirmation email to {account.email}")
    return success


def confirm(uow: AbstractUnitOfWork, token: str) -> uuid.UUID:
    """
    Redeem a confirmation token and mark its account confirmed.

    Deleting the token and confirming the account commit together. Unknown and
    already-used tokens raise the same error.

    Returns:
        The id of the confirmed account

    Raises:
        InvalidTokenError: If the token is empty, unknown or already used
        InternalError: If the store fails
    """
    token = (token or "").strip()
    if not token:
        raise InvalidTokenError()

    try:
        with uow:
            account_id = uow.confirmation_tokens.redeem(token)
            if account_id is None:
                raise InvalidTokenError()

            if not uow.accounts.mark_confirmed(account_id):
                # the account behind the token is gone, roll the redemption back
                logger.warning(f"Confirmation token references missing account {account_id}")
                raise InvalidTokenError()

            # a confirmed account has no use for any other outstanding token
            uow.confirmation_tokens.delete_for_account(account_id)
            uow.commit()
    except SQLAlchemyError as e:
        logger.error(f"Database error confirming account: {describe_db_error(e)}")
        raise InternalError(_("Confirmation failed")) from e

    logger.info(f"Account {account_id} confirmed")
    return account_id


def login(uow: AbstractUnitOfWork, username: str, password: str) -> uuid.UUID:
    """
    Check a username and password against a confirmed account.

    Confirmation is checked before the password, so an unconfirmed account
    reports NotConfirmedError whatever password is given.

    Returns:
        The account id - no session or token is issued

    Raises:
        ValidationError: If either field is missing
        UserNotFoundError: If no account has this username
        NotConfirmedError: If the account has not been confirmed
        InvalidCredentialsError: If the password does not match
        InternalError: If the store fails
    """
    username = (username or "").strip()
    if not username or not password:
        raise ValidationError(_("Username and password are required"))

    try:
        with uow:
            account = uow.accounts.get_by_username(username)
            if account is None:
                raise UserNotFoundError()
            account = account.create_detached_copy()
    except SQLAlchemyError as e:
        logger.error(f"Database error during login for {username}: {describe_db_error(e)}")
        raise InternalError(_("Login failed")) from e

    if not account.confirmed:
        raise NotConfirmedError()

    if not verify_password(password, account.password_hash):
        logger.info(f"Failed login for {username}")
        raise InvalidCredentialsError()

    return account.id


def resend_confirmation(
    uow: AbstractUnitOfWork,
    email_adapter: EmailAdapter,
    template_renderer: TemplateRenderer,
    url_generator: URLGenerator,
    email: str,
) -> None:
    """
    Issue a fresh confirmation link for an unconfirmed account.

    Unknown and already-confirmed addresses are silently ignored so the
    response cannot be used to discover which emails are registered.

    Raises:
        ValidationError: If the email is missing
        InternalError: If storage or email delivery fails
    """
    email = (email or "").strip()
    if not email:
        raise ValidationError(_("Email is required"))

    try:
        with uow:
            account = uow.accounts.get_by_email(email)
            if account is None or account.confirmed:
                return

            # older links stop working once a new one is sent
            uow.confirmation_tokens.delete_for_account(account.id)
            token = uow.confirmation_tokens.issue(account.id)

            if not send_confirmation_email(email_adapter, template_renderer, url_generator, account, token):
                raise NotificationError(f"Confirmation email to {email} was not delivered")

            uow.commit()
    except NotificationError as e:
        logger.error(f"Resending confirmation rolled back: {e}")
        raise InternalError(_("Could not send the confirmation email, please try again later")) from e
    except SQLAlchemyError as e:
        logger.error(f"Database error resending confirmation: {describe_db_error(e)}")
        raise InternalError() from e
