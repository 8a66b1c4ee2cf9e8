from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def menu_number(self) -> int:
        return _MENU_NUMBERS[self]

    @property
    def offset(self) -> tuple[int, int]:
        return _UNIT_VECTORS[self]

    @classmethod
    def from_menu_number(cls, number: int | None) -> "Direction | None":
        for direction, menu_number in _MENU_NUMBERS.items():
            if menu_number == number:
                return direction
        return None


_MENU_NUMBERS = {
    Direction.UP: 1,
    Direction.DOWN: 2,
    Direction.LEFT: 3,
    Direction.RIGHT: 4,
}

_UNIT_VECTORS = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}


@dataclass
class Location:
    x: int
    y: int

    def add(self, other: "Location") -> None:
        self.x += other.x
        self.y += other.y

    def step(self, direction: Direction) -> "Location":
        dx, dy = direction.offset
        return Location(self.x + dx, self.y + dy)

    def as_tuple(self) -> tuple[int, int]:
        return self.x, self.y

    @staticmethod
    def unit(direction: Direction) -> "Location":
        dx, dy = direction.offset
        return Location(dx, dy)
