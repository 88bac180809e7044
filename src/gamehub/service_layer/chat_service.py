"""ABOUTME: Chat service for the poll-based shared chat log
ABOUTME: Appends messages under the author's character name and lists the latest ones"""

import uuid

from gamehub.domain.chat import ChatMessage

from .exceptions import CharacterNotFoundError, ValidationError
from .unit_of_work import AbstractUnitOfWork

LATEST_MESSAGES_LIMIT = 50


def post_message(uow: AbstractUnitOfWork, player_id: uuid.UUID, message: str) -> ChatMessage:
    """
    Append a message to the chat log.

    The author is shown by their character's name, so a player must have
    saved a character before they can chat.

    Raises:
        CharacterNotFoundError: If the player has no character
        ValidationError: If the message is empty or too long
    """
    message = (message or "").strip()
    with uow:
        character = uow.characters.get(player_id)
        if character is None:
            raise CharacterNotFoundError()

        try:
            chat_message = ChatMessage(account_id=player_id, display_name=character.name, message=message)
        except ValueError as e:
            raise ValidationError(str(e)) from e

        uow.chat_messages.add(chat_message)
        detached = chat_message.create_detached_copy()
        uow.commit()
        return detached


def latest_messages(uow: AbstractUnitOfWork, limit: int = LATEST_MESSAGES_LIMIT) -> list[ChatMessage]:
    """Get the most recent chat messages, newest first."""
    with uow:
        return [m.create_detached_copy() for m in uow.chat_messages.latest(limit)]
