import logging
from typing import List, Optional

from crawler.application.dtos import ActionResult, InventorySlotView
from crawler.application.services.combat_service import CombatService
from crawler.application.services.event_bus import EventBus
from crawler.domain.events import ChestsUnlocked, ItemUsed
from crawler.domain.models.inventory import Inventory
from crawler.domain.models.item import Item, ItemType
from crawler.domain.models.player import Player


logger = logging.getLogger(__name__)


def inventory_slot_views(inventory: Inventory) -> List[InventorySlotView]:
    rows: List[InventorySlotView] = []
    for index, item in enumerate(inventory.item_slots):
        if item is None:
            rows.append(InventorySlotView(index=index))
            continue
        rows.append(
            InventorySlotView(
                index=index,
                item_name=item.name,
                item_type=item.item_type.value,
                effect=item.effect,
                description=item.describe(),
                useable=item.item_type.useable,
                equipable=item.item_type.equipable,
            )
        )
    return rows


class InventoryService:
    """Applies inventory actions and reports whether each one used up the turn."""

    def __init__(self, combat_service: Optional[CombatService] = None, event_bus: Optional[EventBus] = None) -> None:
        self.combat_service = combat_service or CombatService(event_bus=event_bus)
        self.event_bus = event_bus

    def _publish(self, event: object) -> None:
        if self.event_bus is not None:
            self.event_bus.publish(event)

    def describe_inventory(self, player: Player) -> List[str]:
        inventory = player.inventory
        lines = [f"Inventory ({inventory.slots_used()}/{inventory.capacity} slots used)"]
        for row in inventory_slot_views(inventory):
            lines.append(f"  {row.index:2d}: {row.description if not row.empty else '(empty)'}")
        armor = inventory.armor_slot
        lines.append(f"Equipped armor: {armor.describe() if armor is not None else 'none'}")
        return lines

    def use_item(self, player: Player, index: int) -> ActionResult:
        item, ok = player.inventory.is_useable(index)
        if not ok or item is None:
            return ActionResult(messages=["The selected item is not a useable item"], turn_consumed=False)

        if item.item_type == ItemType.KEY:
            return self._use_key(player, item)
        if item.item_type == ItemType.HEALTH:
            return self._use_health(player, item)
        if item.item_type == ItemType.INSTANT_DAMAGE:
            return self._use_instant_damage(player, item)
        return ActionResult(messages=[f"{item.name} cannot be used."], turn_consumed=False)

    def _use_key(self, player: Player, key: Item) -> ActionResult:
        room = player.current_room
        locked = room.get_num_locked_chests()
        if locked <= 0:
            return ActionResult(
                messages=["There are no locked chests in this room, this item cannot be used."],
                turn_consumed=False,
            )

        budget = min(int(key.effect), locked)
        if budget <= 0:
            return ActionResult(
                messages=["This key is too worn to open a chest, this item cannot be used."],
                turn_consumed=False,
            )
        unlocked = room.unlock_chests(budget)
        key.effect -= unlocked
        messages = ["Unlocking all chests" if unlocked == locked else f"Unlocked {unlocked} of {locked} locked chests"]

        spent = key.effect <= 0
        if spent:
            player.inventory.remove_item(key)
            messages.append("The key has been used up.")
        else:
            plural = "s" if key.effect != 1 else ""
            messages.append(f"This key can unlock {key.effect:g} more locked chest{plural}")

        self._publish(ChestsUnlocked(room_id=room.id, count=unlocked, key_effect_remaining=max(key.effect, 0.0)))
        self._publish(ItemUsed(item_type=key.item_type.value, effect_applied=float(unlocked), consumed=spent))
        return ActionResult(messages=messages, turn_consumed=True)

    def _use_health(self, player: Player, potion: Item) -> ActionResult:
        missing = player.max_health - player.health
        if missing <= 0:
            return ActionResult(messages=["You are already at full health."], turn_consumed=False)

        healed = min(potion.effect, missing)
        player.health += healed
        player.inventory.remove_item(potion)
        self._publish(ItemUsed(item_type=potion.item_type.value, effect_applied=healed, consumed=True))
        return ActionResult(messages=[f"You recovered {healed:.2f} health."], turn_consumed=True)

    def _use_instant_damage(self, player: Player, bomb: Item) -> ActionResult:
        room = player.current_room
        enemy = room.get_current_enemy()
        if enemy is None:
            return ActionResult(
                messages=["There is nothing to use this on here, this item cannot be used."],
                turn_consumed=False,
            )

        enemy.take_damage(bomb.effect)
        player.inventory.remove_item(bomb)
        messages = [f"Your {bomb.name} did {bomb.effect:.2f} damage to the {enemy.name}."]
        self._publish(ItemUsed(item_type=bomb.item_type.value, effect_applied=bomb.effect, consumed=True))
        if enemy.is_defeated:
            messages.extend(self.combat_service.resolve_defeat(player, enemy, room.id))
        return ActionResult(messages=messages, turn_consumed=True)

    def equip(self, player: Player, index: int) -> ActionResult:
        inventory = player.inventory
        item, ok = inventory.is_equipable(index)
        if not ok or item is None:
            return ActionResult(messages=["The selected item is not an equipable item"], turn_consumed=False)

        previous = inventory.armor_slot
        if not inventory.equip_armor(index):
            return ActionResult(messages=["That item could not be equipped."], turn_consumed=False)

        messages = [f"Equipped item: {item.describe()}"]
        if previous is not None:
            messages.append(f"Unequipped item moved to slot {index}: {previous.describe()}")
        logger.debug("Armor equipped", extra={"slot": index, "effect": item.effect})
        return ActionResult(messages=messages, turn_consumed=True)

    def unequip(self, player: Player) -> ActionResult:
        inventory = player.inventory
        if inventory.armor_slot is None:
            return ActionResult(messages=["There is no equipped ARMOR item."], turn_consumed=False)
        armor = inventory.armor_slot
        if not inventory.unequip_armor():
            return ActionResult(
                messages=["Your inventory is full.", "Discard an item before unequipping your armor."],
                turn_consumed=False,
            )
        return ActionResult(messages=[f"Unequipped item: {armor.describe()}"], turn_consumed=True)

    def discard(self, player: Player, index: int) -> ActionResult:
        inventory = player.inventory
        if not inventory.is_valid_index(index) or inventory.item_at(index) is None:
            return ActionResult(messages=["There is no item in that slot"], turn_consumed=False)
        item = inventory.remove_at(index)
        logger.debug("Item discarded", extra={"slot": index, "item_type": item.item_type.value})
        return ActionResult(messages=["Discarded item"], turn_consumed=True)
