from __future__ import annotations

from dataclasses import dataclass
from typing import List

from crawler.domain.balance_tables import STARTING_MOVESET


@dataclass
class Move:
    id: int
    min_damage: float
    max_damage: float
    name: str
    max_cooldown: int = 0
    cooldown: int = 0

    @property
    def is_ready(self) -> bool:
        return self.cooldown <= 0

    def roll_damage(self, sample: float) -> float:
        return self.min_damage + sample * (self.max_damage - self.min_damage)

    def start_cooldown(self) -> None:
        if self.max_cooldown > 0:
            self.cooldown = self.max_cooldown

    def tick_cooldown(self) -> None:
        if self.cooldown > 0:
            self.cooldown -= 1

    def reset_cooldown(self) -> None:
        self.cooldown = 0


class MoveRegistry:
    """Hands out sequential move ids, starting at 0 for every registry."""

    def __init__(self) -> None:
        self._next_id = 0

    def create_move(self, min_damage: float, max_damage: float, name: str, max_cooldown: int = 0) -> Move:
        min_damage = float(min_damage)
        max_damage = float(max_damage)
        if min_damage > max_damage:
            raise ValueError(f"move '{name}' has min damage {min_damage} above max damage {max_damage}")
        if int(max_cooldown) < 0:
            raise ValueError(f"move '{name}' has a negative cooldown")

        move = Move(
            id=self._next_id,
            min_damage=min_damage,
            max_damage=max_damage,
            name=str(name),
            max_cooldown=int(max_cooldown),
        )
        self._next_id += 1
        return move


def default_moveset(registry: MoveRegistry) -> List[Move]:
    return [
        registry.create_move(min_damage, max_damage, name, max_cooldown)
        for name, min_damage, max_damage, max_cooldown in STARTING_MOVESET
    ]
