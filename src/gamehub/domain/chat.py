"""ABOUTME: Chat message domain model for the shared game chat log
ABOUTME: Messages are append-only and carry the author's character name at posting time"""

import uuid
from datetime import UTC, datetime
from typing import Any

MAX_MESSAGE_LENGTH = 500


class ChatMessage:
    def __init__(
        self,
        account_id: uuid.UUID,
        display_name: str,
        message: str,
        message_id: uuid.UUID | None = None,
        created_at: datetime | None = None,
    ):
        if not message:
            raise ValueError("Chat message cannot be empty")
        if len(message) > MAX_MESSAGE_LENGTH:
            raise ValueError(f"Chat message cannot be longer than {MAX_MESSAGE_LENGTH} characters")

        self.id = message_id or uuid.uuid4()
        self.account_id = account_id
        self.display_name = display_name
        self.message = message
        self.created_at = created_at or datetime.now(UTC)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "player_id": str(self.account_id),
            "username": self.display_name,
            "message": self.message,
            "created_at": self.created_at.isoformat(),
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChatMessage):  # pragma: no cover
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def create_detached_copy(self) -> "ChatMessage":
        return ChatMessage(
            account_id=self.account_id,
            display_name=self.display_name,
            message=self.message,
            message_id=self.id,
            created_at=self.created_at,
        )
