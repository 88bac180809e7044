"""ABOUTME: JSON endpoints for the account lifecycle
ABOUTME: Register, confirm by emailed link, log in, and resend the confirmation link"""

from typing import Any

from flask import Blueprint, current_app, jsonify, request
from flask.typing import ResponseReturnValue

from gamehub.entrypoints.extensions import get_resources, get_unit_of_work
from gamehub.service_layer import account_service
from gamehub.service_layer.exceptions import (
    ConflictError,
    InternalError,
    InvalidCredentialsError,
    InvalidTokenError,
    NotConfirmedError,
    UserNotFoundError,
    ValidationError,
)
from gamehub.translations import _

accounts_bp = Blueprint("accounts", __name__)


def _json_body() -> dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _text_field(data: dict[str, Any], key: str) -> str:
    value = data.get(key, "")
    return value if isinstance(value, str) else ""


@accounts_bp.route("/register", methods=["POST"])
def register() -> ResponseReturnValue:
    """Create an unconfirmed account and email its confirmation link."""
    data = _json_body()
    resources = get_resources()
    try:
        account_id = account_service.register(
            uow=get_unit_of_work(),
            email_adapter=resources.email_adapter,
            template_renderer=resources.template_renderer,
            url_generator=resources.url_generator,
            username=_text_field(data, "username"),
            password=_text_field(data, "password"),
            email=_text_field(data, "email"),
            hash_method=current_app.config["PASSWORD_HASH_METHOD"],
        )
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except ConflictError as e:
        return jsonify({"error": str(e)}), 409
    except InternalError as e:
        return jsonify({"error": str(e)}), 500
    except Exception as e:
        current_app.logger.error(f"Registration error: {e}")
        return jsonify({"error": _("An error occurred during registration")}), 500

    return jsonify({
        "message": _("Registration successful. Please check your email to confirm your account."),
        "userId": str(account_id),
    }), 201


@accounts_bp.route("/confirm", methods=["GET"])
def confirm() -> ResponseReturnValue:
    """Redeem the token from an emailed confirmation link. Answers in plain text for browsers."""
    headers = {"Content-Type": "text/plain; charset=utf-8"}
    try:
        account_service.confirm(get_unit_of_work(), request.args.get("token", ""))
    except InvalidTokenError as e:
        return str(e), 400, headers
    except InternalError as e:
        return str(e), 500, headers
    except Exception as e:
        current_app.logger.error(f"Confirmation error: {e}")
        return _("An error occurred during confirmation"), 500, headers

    return _("Email confirmed. You can now log in."), 200, headers


@accounts_bp.route("/login", methods=["POST"])
def login() -> ResponseReturnValue:
    """Check credentials. Nothing is issued, the caller just gets the player id back."""
    data = _json_body()
    try:
        account_id = account_service.login(
            get_unit_of_work(),
            username=_text_field(data, "username"),
            password=_text_field(data, "password"),
        )
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except (UserNotFoundError, InvalidCredentialsError):
        # one message for both, so usernames cannot be probed
        return jsonify({"error": _("Invalid username or password")}), 401
    except NotConfirmedError as e:
        return jsonify({"error": str(e)}), 403
    except InternalError as e:
        return jsonify({"error": str(e)}), 500
    except Exception as e:
        current_app.logger.error(f"Login error: {e}")
        return jsonify({"error": _("An error occurred during login")}), 500

    return jsonify({
        "message": _("Login successful"),
        "player_id": str(account_id),
        "userId": str(account_id),
    }), 200


@accounts_bp.route("/resend-confirmation", methods=["POST"])
def resend_confirmation() -> ResponseReturnValue:
    """Send a fresh confirmation link. The reply never says whether the email is registered."""
    data = _json_body()
    resources = get_resources()
    try:
        account_service.resend_confirmation(
            uow=get_unit_of_work(),
            email_adapter=resources.email_adapter,
            template_renderer=resources.template_renderer,
            url_generator=resources.url_generator,
            email=_text_field(data, "email"),
        )
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except InternalError as e:
        return jsonify({"error": str(e)}), 500
    except Exception as e:
        current_app.logger.error(f"Resend confirmation error: {e}")
        return jsonify({"error": _("An error occurred while sending the confirmation email")}), 500

    return jsonify({
        "message": _("If that address belongs to an unconfirmed account, a new confirmation link has been sent.")
    }), 200
