"""Unit tests for the ChatMessage domain model."""

import uuid

import pytest

from gamehub.domain.chat import MAX_MESSAGE_LENGTH, ChatMessage


class TestChatMessage:
    def test_rejects_empty_message(self):
        with pytest.raises(ValueError, match="empty"):
            ChatMessage(account_id=uuid.uuid4(), display_name="Aragorn", message="")

    def test_rejects_overlong_message(self):
        with pytest.raises(ValueError, match="longer"):
            ChatMessage(account_id=uuid.uuid4(), display_name="Aragorn", message="x" * (MAX_MESSAGE_LENGTH + 1))

    def test_accepts_message_at_limit(self):
        message = ChatMessage(account_id=uuid.uuid4(), display_name="Aragorn", message="x" * MAX_MESSAGE_LENGTH)
        assert len(message.message) == MAX_MESSAGE_LENGTH

    def test_to_dict_shows_display_name_as_username(self):
        account_id = uuid.uuid4()
        message = ChatMessage(account_id=account_id, display_name="Aragorn", message="hello")

        data = message.to_dict()

        assert data["id"] == str(message.id)
        assert data["player_id"] == str(account_id)
        assert data["username"] == "Aragorn"
        assert data["message"] == "hello"
        assert data["created_at"] == message.created_at.isoformat()
