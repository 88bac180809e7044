"""ABOUTME: Character persistence service - one saved character per player
ABOUTME: Upserts and loads characters keyed by the owning account id"""

import uuid

from gamehub.domain.characters import Character

from .exceptions import CharacterNotFoundError, PlayerNotFoundError, ValidationError
from .unit_of_work import AbstractUnitOfWork


def save_character(
    uow: AbstractUnitOfWork,
    player_id: uuid.UUID,
    name: str,
    character_class: str,
    level: int,
    health: int,
    position_x: float,
    position_y: float,
) -> Character:
    """
    Create or replace the character belonging to a player.

    Raises:
        PlayerNotFoundError: If no account has this id
        ValidationError: If the character data is invalid
    """
    try:
        incoming = Character(
            account_id=player_id,
            name=name,
            character_class=character_class,
            level=level,
            health=health,
            position_x=position_x,
            position_y=position_y,
        )
    except ValueError as e:
        raise ValidationError(str(e)) from e

    with uow:
        if uow.accounts.get(player_id) is None:
            raise PlayerNotFoundError()

        character = uow.characters.get(player_id)
        if character is None:
            uow.characters.add(incoming)
            character = incoming
        else:
            character.update_from(incoming)

        detached = character.create_detached_copy()
        uow.commit()
        return detached


def get_character(uow: AbstractUnitOfWork, player_id: uuid.UUID) -> Character:
    """Load a player's character.

    Raises:
        CharacterNotFoundError: If the player has not saved one
    """
    with uow:
        character = uow.characters.get(player_id)
        if character is None:
            raise CharacterNotFoundError()
        return character.create_detached_copy()
