from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from crawler.domain.balance_tables import ENEMY_PROFILES


class EnemyType(str, Enum):
    RAT = "rat"
    GOBLIN = "goblin"
    SKELETON = "skeleton"
    ORC = "orc"
    TROLL = "troll"

    @property
    def display_name(self) -> str:
        return self.value.title()

    @property
    def base_health(self) -> float:
        return ENEMY_PROFILES[self.value][0]

    @property
    def damage_range(self) -> tuple[float, float]:
        _, low, high = ENEMY_PROFILES[self.value]
        return low, high


@dataclass
class Enemy:
    enemy_type: EnemyType
    health: Optional[float] = None
    turn_counter: int = 0

    def __post_init__(self) -> None:
        self.enemy_type = EnemyType(self.enemy_type)
        if self.health is None:
            self.health = self.enemy_type.base_health
        self.health = float(self.health)

    @property
    def name(self) -> str:
        return self.enemy_type.display_name

    @property
    def is_defeated(self) -> bool:
        return self.health <= 0

    @property
    def is_alive(self) -> bool:
        return not self.is_defeated

    def get_damage_from_attack(self, rng: random.Random | None = None) -> float:
        rng = rng or random
        low, high = self.enemy_type.damage_range
        return low + rng.random() * (high - low)

    def take_damage(self, amount: float) -> bool:
        """Apply damage and report whether this hit took the enemy from alive to defeated."""
        was_alive = self.is_alive
        self.health -= float(amount)
        return was_alive and self.is_defeated

    def next_turn(self) -> int:
        self.turn_counter += 1
        return self.turn_counter
