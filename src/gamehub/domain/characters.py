"""ABOUTME: Character domain model for a player's saved game character
ABOUTME: One character per account, replaced wholesale on every save"""

import uuid
from datetime import UTC, datetime
from typing import Any

from .value_objects import CHARACTER_CLASS_MAX_LENGTH, CHARACTER_NAME_MAX_LENGTH

CHARACTER_FIELDS = ("name", "character_class", "level", "health", "position_x", "position_y")


class Character:
    """The single game character belonging to an account."""

    def __init__(
        self,
        account_id: uuid.UUID,
        name: str,
        character_class: str,
        level: int,
        health: int,
        position_x: float,
        position_y: float,
        updated_at: datetime | None = None,
    ):
        if not name:
            raise ValueError("Character must have a name")
        if len(name) > CHARACTER_NAME_MAX_LENGTH:
            raise ValueError(f"Character name cannot be longer than {CHARACTER_NAME_MAX_LENGTH} characters")
        if len(character_class) > CHARACTER_CLASS_MAX_LENGTH:
            raise ValueError(f"Character class cannot be longer than {CHARACTER_CLASS_MAX_LENGTH} characters")
        if level < 1:
            raise ValueError("Level must be at least 1")

        self.account_id = account_id
        self.name = name
        self.character_class = character_class
        self.level = level
        self.health = health
        self.position_x = position_x
        self.position_y = position_y
        self.updated_at = updated_at or datetime.now(UTC)

    def update_from(self, other: "Character") -> None:
        """Overwrite this character's state with another's."""
        for field in CHARACTER_FIELDS:
            setattr(self, field, getattr(other, field))
        self.updated_at = datetime.now(UTC)

    def to_dict(self) -> dict[str, Any]:
        return {
            "player_id": str(self.account_id),
            "name": self.name,
            "character_class": self.character_class,
            "level": self.level,
            "health": self.health,
            "position_x": self.position_x,
            "position_y": self.position_y,
            "updated_at": self.updated_at.isoformat(),
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Character):  # pragma: no cover
            return False
        return self.account_id == other.account_id

    def __hash__(self) -> int:
        return hash(self.account_id)

    def create_detached_copy(self) -> "Character":
        return Character(
            account_id=self.account_id,
            name=self.name,
            character_class=self.character_class,
            level=self.level,
            health=self.health,
            position_x=self.position_x,
            position_y=self.position_y,
            updated_at=self.updated_at,
        )
