import sys
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from crawler.application.services.event_bus import EventBus
from crawler.application.services.inventory_service import InventoryService, inventory_slot_views
from crawler.domain.events import ChestsUnlocked, EnemyDefeated, ItemUsed
from crawler.domain.models.enemy import Enemy, EnemyType
from crawler.domain.models.inventory import Inventory
from crawler.domain.models.item import Item, ItemType
from crawler.domain.models.location import Location
from crawler.domain.models.player import Player, PlayerState
from crawler.domain.models.room import Chest, Room, RoomType


def _player(chests=None, enemies=None, capacity: int = 5) -> Player:
    room = Room(
        room_type=RoomType.CHAMBER,
        location=Location(0, 0),
        chests=list(chests or []),
        enemies=list(enemies or []),
    )
    return Player(location=Location(0, 0), current_room=room, inventory=Inventory(capacity=capacity))


class _Recorder:
    def __init__(self, bus: EventBus) -> None:
        self.events: list[object] = []
        for event_type in (ChestsUnlocked, ItemUsed, EnemyDefeated):
            bus.subscribe(event_type, self.events.append)

    def of_type(self, event_type):
        return [event for event in self.events if isinstance(event, event_type)]


class KeyUseTests(unittest.TestCase):
    def test_key_unlocks_up_to_effect_and_is_used_up(self) -> None:
        chests = [Chest(Item(ItemType.HEALTH, 5), locked=True) for _ in range(5)]
        player = _player(chests=chests)
        key = Item(ItemType.KEY, 3)
        player.inventory.add_item(key)
        bus = EventBus()
        recorder = _Recorder(bus)

        result = InventoryService(event_bus=bus).use_item(player, 0)

        self.assertTrue(result.turn_consumed)
        self.assertEqual(2, player.current_room.get_num_locked_chests())
        self.assertEqual([False, False, False, True, True], [chest.locked for chest in chests])
        self.assertIsNone(player.inventory.item_at(0))
        self.assertIn("The key has been used up.", result.messages)
        self.assertEqual(3, recorder.of_type(ChestsUnlocked)[0].count)
        self.assertTrue(recorder.of_type(ItemUsed)[0].consumed)

    def test_key_with_spare_uses_keeps_remaining_effect(self) -> None:
        player = _player(chests=[Chest(Item(ItemType.HEALTH, 5), locked=True) for _ in range(2)])
        key = Item(ItemType.KEY, 5)
        player.inventory.add_item(key)

        result = InventoryService().use_item(player, 0)

        self.assertTrue(result.turn_consumed)
        self.assertEqual(0, player.current_room.get_num_locked_chests())
        self.assertIs(key, player.inventory.item_at(0))
        self.assertEqual(3.0, key.effect)
        self.assertIn("Unlocking all chests", result.messages)

    def test_key_without_locked_chests_changes_nothing(self) -> None:
        player = _player(chests=[Chest(Item(ItemType.HEALTH, 5))])
        key = Item(ItemType.KEY, 2)
        player.inventory.add_item(key)

        result = InventoryService().use_item(player, 0)

        self.assertFalse(result.turn_consumed)
        self.assertIn("There are no locked chests in this room, this item cannot be used.", result.messages)
        self.assertIs(key, player.inventory.item_at(0))
        self.assertEqual(2.0, key.effect)

    def test_key_too_weak_to_unlock_keeps_turn_and_item(self) -> None:
        chest = Chest(Item(ItemType.HEALTH, 5), locked=True)
        player = _player(chests=[chest])
        key = Item(ItemType.KEY, 0.5)
        player.inventory.add_item(key)
        bus = EventBus()
        recorder = _Recorder(bus)

        result = InventoryService(event_bus=bus).use_item(player, 0)

        self.assertFalse(result.turn_consumed)
        self.assertTrue(chest.locked)
        self.assertIs(key, player.inventory.item_at(0))
        self.assertEqual(0.5, key.effect)
        self.assertEqual([], recorder.events)

    def test_non_useable_slot_is_rejected(self) -> None:
        player = _player()
        player.inventory.add_item(Item(ItemType.ARMOR, 2))

        self.assertFalse(InventoryService().use_item(player, 0).turn_consumed)
        self.assertFalse(InventoryService().use_item(player, 1).turn_consumed)


class ConsumableUseTests(unittest.TestCase):
    def test_health_potion_heals_up_to_max(self) -> None:
        player = _player()
        player.health = player.max_health - 4
        player.inventory.add_item(Item(ItemType.HEALTH, 10))

        result = InventoryService().use_item(player, 0)

        self.assertTrue(result.turn_consumed)
        self.assertEqual(player.max_health, player.health)
        self.assertIsNone(player.inventory.item_at(0))

    def test_health_potion_at_full_health_is_kept(self) -> None:
        player = _player()
        potion = Item(ItemType.HEALTH, 10)
        player.inventory.add_item(potion)

        result = InventoryService().use_item(player, 0)

        self.assertFalse(result.turn_consumed)
        self.assertIs(potion, player.inventory.item_at(0))

    def test_bomb_needs_an_enemy(self) -> None:
        player = _player()
        bomb = Item(ItemType.INSTANT_DAMAGE, 10)
        player.inventory.add_item(bomb)

        result = InventoryService().use_item(player, 0)

        self.assertFalse(result.turn_consumed)
        self.assertIs(bomb, player.inventory.item_at(0))

    def test_bomb_damages_current_enemy(self) -> None:
        enemy = Enemy(EnemyType.ORC, health=30)
        player = _player(enemies=[enemy])
        player.inventory.add_item(Item(ItemType.INSTANT_DAMAGE, 10))

        result = InventoryService().use_item(player, 0)

        self.assertTrue(result.turn_consumed)
        self.assertEqual(20.0, enemy.health)
        self.assertIsNone(player.inventory.item_at(0))

    def test_lethal_bomb_ends_the_fight(self) -> None:
        enemy = Enemy(EnemyType.RAT, health=3)
        player = _player(enemies=[enemy])
        player.state = PlayerState.FIGHTING
        player.moves = []
        player.inventory.add_item(Item(ItemType.INSTANT_DAMAGE, 10))
        bus = EventBus()
        recorder = _Recorder(bus)

        result = InventoryService(event_bus=bus).use_item(player, 0)

        self.assertTrue(enemy.is_defeated)
        self.assertEqual(PlayerState.EXPLORING, player.state)
        self.assertIn("You defeated the Rat", result.messages)
        self.assertEqual(1, len(recorder.of_type(EnemyDefeated)))


class EquipmentTests(unittest.TestCase):
    def test_equip_moves_armor_and_raises_defense(self) -> None:
        player = _player()
        player.inventory.add_item(Item(ItemType.ARMOR, 2))
        base = player.defense

        result = InventoryService().equip(player, 0)

        self.assertTrue(result.turn_consumed)
        self.assertEqual(base + 2, player.defense)
        self.assertIsNone(player.inventory.item_at(0))

    def test_equip_rejects_non_armor(self) -> None:
        player = _player()
        player.inventory.add_item(Item(ItemType.KEY, 1))

        result = InventoryService().equip(player, 0)

        self.assertFalse(result.turn_consumed)
        self.assertIsNone(player.inventory.armor_slot)

    def test_unequip_without_armor_is_a_no_op(self) -> None:
        self.assertFalse(InventoryService().unequip(_player()).turn_consumed)

    def test_unequip_with_full_inventory_keeps_armor(self) -> None:
        player = _player(capacity=1)
        player.inventory.add_item(Item(ItemType.KEY, 1))
        armor = Item(ItemType.ARMOR, 2)
        player.inventory.armor_slot = armor

        result = InventoryService().unequip(player)

        self.assertFalse(result.turn_consumed)
        self.assertIs(armor, player.inventory.armor_slot)
        self.assertIn("Your inventory is full.", result.messages)

    def test_discard_empties_slot(self) -> None:
        player = _player()
        player.inventory.add_item(Item(ItemType.KEY, 1))
        service = InventoryService()

        self.assertTrue(service.discard(player, 0).turn_consumed)
        self.assertIsNone(player.inventory.item_at(0))
        self.assertFalse(service.discard(player, 0).turn_consumed)
        self.assertFalse(service.discard(player, 99).turn_consumed)


class InventoryViewTests(unittest.TestCase):
    def test_slot_views_cover_every_slot(self) -> None:
        inventory = Inventory(capacity=3)
        inventory.add_item(Item(ItemType.ARMOR, 2))

        rows = inventory_slot_views(inventory)

        self.assertEqual([0, 1, 2], [row.index for row in rows])
        self.assertFalse(rows[0].empty)
        self.assertTrue(rows[0].equipable)
        self.assertTrue(rows[1].empty)

    def test_describe_inventory_lists_armor(self) -> None:
        player = _player(capacity=2)
        player.inventory.armor_slot = Item(ItemType.ARMOR, 3)

        lines = InventoryService().describe_inventory(player)

        self.assertEqual("Inventory (0/2 slots used)", lines[0])
        self.assertEqual("Equipped armor: Armor (+3 defense)", lines[-1])


if __name__ == "__main__":
    unittest.main()
