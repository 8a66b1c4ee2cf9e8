from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ItemType(str, Enum):
    KEY = "key"
    ARMOR = "armor"
    HEALTH = "health"
    INSTANT_DAMAGE = "instant_damage"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def useable(self) -> bool:
        return _CAPABILITIES[self][0]

    @property
    def equipable(self) -> bool:
        return _CAPABILITIES[self][1]

    @classmethod
    def from_number(cls, number: int | None) -> "ItemType | None":
        members = list(cls)
        if number is None or number < 0 or number >= len(members):
            return None
        return members[number]


# (useable, equipable); every category must appear here.
_CAPABILITIES = {
    ItemType.KEY: (True, False),
    ItemType.ARMOR: (False, True),
    ItemType.HEALTH: (True, False),
    ItemType.INSTANT_DAMAGE: (True, False),
}

_DISPLAY_NAMES = {
    ItemType.KEY: "Key",
    ItemType.ARMOR: "Armor",
    ItemType.HEALTH: "Health Potion",
    ItemType.INSTANT_DAMAGE: "Bomb",
}

USEABLE_ITEM_TYPES = frozenset(item_type for item_type, (useable, _) in _CAPABILITIES.items() if useable)
EQUIPABLE_ITEM_TYPES = frozenset(item_type for item_type, (_, equipable) in _CAPABILITIES.items() if equipable)


@dataclass(eq=False)
class Item:
    item_type: ItemType
    effect: float

    def __post_init__(self) -> None:
        self.item_type = ItemType(self.item_type)
        self.effect = float(self.effect)

    @property
    def name(self) -> str:
        return self.item_type.display_name

    def describe(self) -> str:
        if self.item_type == ItemType.KEY:
            return f"{self.name} (unlocks {self.effect:g} chest{'s' if self.effect != 1 else ''})"
        if self.item_type == ItemType.ARMOR:
            return f"{self.name} (+{self.effect:g} defense)"
        if self.item_type == ItemType.HEALTH:
            return f"{self.name} (restores {self.effect:g} health)"
        return f"{self.name} (deals {self.effect:g} damage)"
