"""ABOUTME: JSON endpoints for game state - saved characters and the shared chat log
ABOUTME: Players are identified by the player id returned from login"""

import uuid
from typing import Any

from flask import Blueprint, current_app, jsonify, request
from flask.typing import ResponseReturnValue

from gamehub.entrypoints.extensions import get_unit_of_work
from gamehub.service_layer import character_service, chat_service
from gamehub.service_layer.exceptions import NotFoundError, ValidationError
from gamehub.translations import _

game_bp = Blueprint("game", __name__)

# field name -> accepted JSON types
CHARACTER_PAYLOAD: dict[str, tuple[type, ...]] = {
    "name": (str,),
    "character_class": (str,),
    "level": (int,),
    "health": (int,),
    "position_x": (int, float),
    "position_y": (int, float),
}


def _parse_player_id(value: Any) -> uuid.UUID:
    if not value or not isinstance(value, str):
        raise ValidationError(_("player_id is required"))
    try:
        return uuid.UUID(value)
    except ValueError as e:
        raise ValidationError(_("Invalid player_id")) from e


def _character_fields(data: dict[str, Any]) -> dict[str, Any]:
    fields = {}
    for field, types in CHARACTER_PAYLOAD.items():
        if field not in data or data[field] is None:
            raise ValidationError(_("Missing required field: %(field)s", field=field))
        value = data[field]
        # JSON true/false would otherwise pass as an int
        if isinstance(value, bool) or not isinstance(value, types):
            raise ValidationError(_("Invalid value for field: %(field)s", field=field))
        fields[field] = value
    return fields


@game_bp.route("/character", methods=["POST"])
def save_character() -> ResponseReturnValue:
    """Create or replace the caller's character."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": _("No JSON data provided")}), 400
    try:
        player_id = _parse_player_id(data.get("player_id"))
        character_service.save_character(get_unit_of_work(), player_id, **_character_fields(data))
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except Exception as e:
        current_app.logger.error(f"Error saving character: {e}")
        return jsonify({"error": _("An error occurred while saving the character")}), 500

    return jsonify({"message": _("Character saved")}), 200


@game_bp.route("/character", methods=["GET"])
def get_character() -> ResponseReturnValue:
    try:
        player_id = _parse_player_id(request.args.get("player_id", ""))
        character = character_service.get_character(get_unit_of_work(), player_id)
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except Exception as e:
        current_app.logger.error(f"Error loading character: {e}")
        return jsonify({"error": _("An error occurred while loading the character")}), 500

    return jsonify(character.to_dict()), 200


@game_bp.route("/chat", methods=["POST"])
def post_chat_message() -> ResponseReturnValue:
    """Post a message under the caller's character name."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": _("No JSON data provided")}), 400
    try:
        player_id = _parse_player_id(data.get("player_id"))
        message = data.get("message")
        if not isinstance(message, str) or not message.strip():
            raise ValidationError(_("Missing required field: %(field)s", field="message"))
        chat_service.post_message(get_unit_of_work(), player_id, message)
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except Exception as e:
        current_app.logger.error(f"Error posting chat message: {e}")
        return jsonify({"error": _("An error occurred while posting the message")}), 500

    return jsonify({"message": _("Message sent")}), 201


@game_bp.route("/chat", methods=["GET"])
def list_chat_messages() -> ResponseReturnValue:
    """The latest chat messages, newest first."""
    try:
        messages = chat_service.latest_messages(get_unit_of_work())
    except Exception as e:
        current_app.logger.error(f"Error loading chat messages: {e}")
        return jsonify({"error": _("An error occurred while loading messages")}), 500

    return jsonify([m.to_dict() for m in messages]), 200
