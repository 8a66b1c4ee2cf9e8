from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from crawler.domain.balance_tables import INVENTORY_SIZE
from crawler.domain.models.item import Item


@dataclass
class Inventory:
    """Fixed-capacity item slots plus a single armor slot outside the array.

    Every mutating operation either completes fully or leaves the inventory
    untouched and returns ``False``.
    """

    capacity: int = INVENTORY_SIZE
    item_slots: List[Optional[Item]] = field(default_factory=list)
    armor_slot: Optional[Item] = None

    def __post_init__(self) -> None:
        if self.capacity <= 0:
            raise ValueError("inventory capacity must be positive")
        slots = list(self.item_slots)[: self.capacity]
        slots.extend([None] * (self.capacity - len(slots)))
        self.item_slots = slots

    def is_valid_index(self, index: int | None) -> bool:
        return isinstance(index, int) and 0 <= index < self.capacity

    def item_at(self, index: int) -> Optional[Item]:
        return self.item_slots[index]

    def slots_used(self) -> int:
        return sum(1 for item in self.item_slots if item is not None)

    def slots_not_used(self) -> int:
        return self.capacity - self.slots_used()

    def is_full(self) -> bool:
        return self.slots_used() == self.capacity

    def add_item(self, item: Item) -> bool:
        if item is None:
            return False
        for index, slot in enumerate(self.item_slots):
            if slot is None:
                self.item_slots[index] = item
                return True
        return False

    def remove_at(self, index: int) -> Optional[Item]:
        item = self.item_slots[index]
        self.item_slots[index] = None
        return item

    def remove_item(self, item: Item) -> bool:
        for index, slot in enumerate(self.item_slots):
            if slot is item:
                self.item_slots[index] = None
                return True
        return False

    def is_useable(self, index: int) -> Tuple[Optional[Item], bool]:
        item = self.item_slots[index]
        if item is None or not item.item_type.useable:
            return None, False
        return item, True

    def is_equipable(self, index: int) -> Tuple[Optional[Item], bool]:
        item = self.item_slots[index]
        if item is None or not item.item_type.equipable:
            return None, False
        return item, True

    def num_useables(self) -> int:
        return sum(1 for item in self.item_slots if item is not None and item.item_type.useable)

    def num_equipables(self) -> int:
        return sum(1 for item in self.item_slots if item is not None and item.item_type.equipable)

    def equip_armor(self, index: int) -> bool:
        """Move the armor at ``index`` into the armor slot.

        A previously equipped piece takes over the vacated slot, so the swap
        never needs free capacity and never drops an item.
        """
        item, ok = self.is_equipable(index)
        if not ok:
            return False
        self.item_slots[index] = self.armor_slot
        self.armor_slot = item
        return True

    def unequip_armor(self) -> bool:
        if self.armor_slot is None:
            return False
        if not self.add_item(self.armor_slot):
            return False
        self.armor_slot = None
        return True

    def armor_bonus(self) -> float:
        if self.armor_slot is None:
            return 0.0
        return float(self.armor_slot.effect)
