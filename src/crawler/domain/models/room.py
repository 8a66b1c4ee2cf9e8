from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

from crawler.domain.balance_tables import ROOM_DISPLAY_NAMES, ROOM_ESCAPE_THRESHOLDS
from crawler.domain.models.enemy import Enemy
from crawler.domain.models.inventory import Inventory
from crawler.domain.models.item import Item
from crawler.domain.models.location import Direction, Location

if TYPE_CHECKING:
    from crawler.domain.models.grid import RoomGrid


class RoomType(str, Enum):
    HALLWAY = "hallway"
    CHAMBER = "chamber"
    ARMORY = "armory"
    TREASURY = "treasury"
    CRYPT = "crypt"
    LAIR = "lair"

    @property
    def display_name(self) -> str:
        return ROOM_DISPLAY_NAMES[self.value]

    @property
    def run_from_threshold(self) -> float:
        return ROOM_ESCAPE_THRESHOLDS[self.value][0]

    @property
    def run_to_threshold(self) -> float:
        return ROOM_ESCAPE_THRESHOLDS[self.value][1]


@dataclass(eq=False)
class Chest:
    item: Optional[Item] = None
    locked: bool = False

    @property
    def is_looted(self) -> bool:
        return self.item is None

    @property
    def counts(self) -> bool:
        return self.item is not None or self.locked

    @property
    def is_lootable(self) -> bool:
        return self.item is not None and not self.locked


@dataclass(eq=False)
class Room:
    room_type: RoomType
    location: Location
    chests: List[Optional[Chest]] = field(default_factory=list)
    enemies: List[Enemy] = field(default_factory=list)
    id: int = 0
    grid: Optional["RoomGrid"] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self.room_type = RoomType(self.room_type)

    @property
    def name(self) -> str:
        return self.room_type.display_name

    def can_leave_from(self, direction: Direction) -> bool:
        if self.grid is None:
            return False
        return self.grid.neighbor(self.location, direction) is not None

    def exits(self) -> List[Direction]:
        return [direction for direction in Direction if self.can_leave_from(direction)]

    def _present_chests(self) -> List[Chest]:
        return [chest for chest in self.chests if chest is not None]

    def get_num_chests(self) -> int:
        return sum(1 for chest in self._present_chests() if chest.counts)

    def get_num_lootable_chests(self) -> int:
        return sum(1 for chest in self._present_chests() if chest.is_lootable)

    def get_num_locked_chests(self) -> int:
        return sum(1 for chest in self._present_chests() if chest.locked)

    def unlock_chests(self, count: int) -> int:
        unlocked = 0
        for chest in self._present_chests():
            if unlocked >= count:
                break
            if chest.locked:
                chest.locked = False
                unlocked += 1
        return unlocked

    def loot_into(self, inventory: Inventory) -> int:
        looted = 0
        for chest in self._present_chests():
            if inventory.is_full():
                break
            if not chest.is_lootable:
                continue
            if inventory.add_item(chest.item):
                chest.item = None
                looted += 1
        return looted

    def can_run_from(self, sample: float) -> bool:
        return sample < self.room_type.run_from_threshold

    def can_run_to(self, sample: float) -> bool:
        return sample < self.room_type.run_to_threshold

    def get_num_enemies_alive(self) -> int:
        return sum(1 for enemy in self.enemies if enemy.is_alive)

    def get_current_enemy(self) -> Optional[Enemy]:
        for enemy in self.enemies:
            if enemy.is_alive:
                return enemy
        return None
