from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from crawler.domain.balance_tables import (
    BASE_PLAYER_DEFENSE,
    BASE_PLAYER_HEALTH,
    BASE_PLAYER_STRENGTH,
)
from crawler.domain.models.inventory import Inventory
from crawler.domain.models.location import Location
from crawler.domain.models.move import Move
from crawler.domain.models.room import Room


class PlayerState(str, Enum):
    EXPLORING = "exploring"
    FIGHTING = "fighting"


@dataclass(eq=False)
class Player:
    location: Location
    current_room: Room
    inventory: Inventory = field(default_factory=Inventory)
    moves: List[Move] = field(default_factory=list)
    health: float = BASE_PLAYER_HEALTH
    base_defense: float = BASE_PLAYER_DEFENSE
    strength: float = BASE_PLAYER_STRENGTH
    state: PlayerState = PlayerState.EXPLORING
    moved_last: bool = False
    max_health: float = BASE_PLAYER_HEALTH

    @property
    def defense(self) -> float:
        return self.base_defense + self.inventory.armor_bonus()

    @property
    def is_defeated(self) -> bool:
        return self.health <= 0

    def reset_cooldowns(self) -> None:
        for move in self.moves:
            move.reset_cooldown()


def derive_state(player: Player) -> PlayerState:
    """Fighting whenever the current room holds a living enemy, otherwise the previous state."""
    if player.current_room.get_num_enemies_alive() > 0:
        return PlayerState.FIGHTING
    return player.state
