"""Per-turn resolution for the player.

``PlayerStateMachine.update`` is the single entry point the game loop calls.
It re-derives Exploring/Fighting from the current room, runs the matching
menu against the injected ``ChoiceSource`` and, when the player stays in a
fight, applies exactly one enemy attack after the player's action resolved.
Malformed or out-of-range selections never end a turn; they re-prompt.
"""

import logging
import random
from typing import List, Optional

from crawler.application.choices import ChoiceSource
from crawler.application.dtos import (
    CombatRoundView,
    InventorySlotView,
    MenuView,
    MoveView,
    PlayerStatsView,
    RoomView,
)
from crawler.application.services.combat_service import CombatService
from crawler.application.services.event_bus import EventBus
from crawler.application.services.inventory_service import InventoryService, inventory_slot_views
from crawler.application.services.navigation_service import NavigationService
from crawler.domain.balance_tables import CHEAT_INPUT_NUMBER
from crawler.domain.models.enemy import Enemy
from crawler.domain.models.grid import RoomGrid
from crawler.domain.models.item import Item, ItemType
from crawler.domain.models.location import Direction
from crawler.domain.models.player import Player, PlayerState, derive_state


logger = logging.getLogger(__name__)

CANCEL_SELECTION = -1
RUN_CANCEL_NUMBER = 5

EXPLORE_ROOM = 1
MOVE_ROOM = 2
OPEN_INVENTORY = 3
VIEW_STATS = 4
QUIT_GAME = 5

VIEW_INVENTORY = 1
USE_ITEM = 2
EQUIP_ITEM = 3
DISCARD_ITEM = 4
LEAVE_INVENTORY = 5

_INVALID = "Invalid Input, try again"
_NOT_CONSUMED = "Your turn was not consumed."


class PlayerStateMachine:
    def __init__(
        self,
        player: Player,
        grid: RoomGrid,
        choices: ChoiceSource,
        *,
        rng: Optional[random.Random] = None,
        event_bus: Optional[EventBus] = None,
        combat_service: Optional[CombatService] = None,
        navigation_service: Optional[NavigationService] = None,
        inventory_service: Optional[InventoryService] = None,
        cheats_enabled: bool = False,
        debug_mode: bool = False,
    ) -> None:
        self.player = player
        self.grid = grid
        self.choices = choices
        self.rng = rng or random.Random()
        self.event_bus = event_bus
        self.combat_service = combat_service or CombatService(rng=self.rng, event_bus=event_bus)
        self.navigation_service = navigation_service or NavigationService(grid, event_bus=event_bus, debug_mode=debug_mode)
        self.inventory_service = inventory_service or InventoryService(self.combat_service, event_bus=event_bus)
        self.cheats_enabled = cheats_enabled
        self.debug_mode = debug_mode

    def set_seed(self, seed: int) -> None:
        self.rng.seed(seed)

    # -- turn entry point -------------------------------------------------

    def update(self) -> bool:
        """Advance exactly one turn. ``False`` tells the driver to stop (death or quit)."""
        player = self.player
        player.moved_last = False
        player.state = derive_state(player)

        if player.state == PlayerState.EXPLORING:
            return self._exploration_turn()

        if player.state == PlayerState.FIGHTING:
            enemy_may_attack = self._fighting_turn()
            enemy = player.current_room.get_current_enemy()
            if enemy_may_attack and enemy is not None:
                result = self.combat_service.enemy_attack(player, enemy, player.current_room.id)
                self._notify(result.messages)
                if result.game_over:
                    return False
            return True

        logger.warning("Unknown player state %r; resetting to exploring", player.state)
        player.state = PlayerState.EXPLORING
        return True

    # -- input helpers ----------------------------------------------------

    def _notify(self, lines: List[str]) -> None:
        rows = [str(line) for line in lines if str(line).strip()]
        if rows:
            self.choices.notify(rows)

    def _choose(self, menu: MenuView) -> Optional[int]:
        while True:
            choice = self.choices.choose(menu)
            if self.cheats_enabled and choice == CHEAT_INPUT_NUMBER:
                self._cheat_loop()
                continue
            return choice

    def _choose_direction(self, title: str, allow_cancel: bool) -> Optional[Direction]:
        """Return the chosen valid direction, or ``None`` when the player cancels."""
        room = self.player.current_room
        options = [f"{direction.menu_number}. {direction.name}" for direction in room.exits()]
        if allow_cancel:
            options.append(f"{RUN_CANCEL_NUMBER}. Cancel")
        menu = MenuView(title=title, options=options)

        while True:
            choice = self._choose(menu)
            if allow_cancel and choice == RUN_CANCEL_NUMBER:
                return None
            direction = Direction.from_menu_number(choice)
            if direction is None or not room.can_leave_from(direction):
                self._notify([_INVALID])
                continue
            return direction

    def _choose_slot(self, title: str, verb: str) -> Optional[int]:
        """Prompt for an inventory index; ``None`` means the player cancelled."""
        inventory = self.player.inventory
        lines = self.inventory_service.describe_inventory(self.player)
        menu = MenuView(
            title=title,
            options=[f"Which item would you like to {verb}? (Select by number)"],
            hint=f"Enter {CANCEL_SELECTION} to cancel",
            lines=lines,
        )
        while True:
            choice = self._choose(menu)
            if choice is None:
                self._notify([_INVALID])
                continue
            if choice == CANCEL_SELECTION:
                return None
            if not inventory.is_valid_index(choice):
                self._notify(["Selected index does not exist.", f"Please pick from the range 0-{inventory.capacity - 1}"])
                continue
            return choice

    # -- exploring ----------------------------------------------------------

    def _exploration_menu(self) -> MenuView:
        return MenuView(
            title="What would you like to do?",
            options=[
                f"{EXPLORE_ROOM}. Explore current room",
                f"{MOVE_ROOM}. Move to another room",
                f"{OPEN_INVENTORY}. View Inventory Options",
                f"{VIEW_STATS}. View Player Stats",
                f"{QUIT_GAME}. Exit",
            ],
        )

    def _exploration_turn(self) -> bool:
        menu = self._exploration_menu()
        while True:
            choice = self._choose(menu)
            if choice == EXPLORE_ROOM:
                self._explore_room()
                return True
            if choice == MOVE_ROOM:
                direction = self._choose_direction("Where would you like to go?", allow_cancel=True)
                if direction is None:
                    continue
                result = self.navigation_service.move(self.player, direction)
                self._notify(result.messages)
                return True
            if choice == OPEN_INVENTORY:
                if self._inventory_menu():
                    return True
                continue
            if choice == VIEW_STATS:
                self._notify(self._stats_lines())
                continue
            if choice == QUIT_GAME:
                return False
            self._notify([_INVALID])

    def _explore_room(self) -> None:
        lines, offer_loot = self.navigation_service.describe_room(self.player)
        self._notify(lines)
        if not offer_loot:
            return

        choice = self._choose(MenuView(title="Loot the chests?", options=["  1: Yes", "Any: No"]))
        if choice != 1:
            self._notify(["You can come back to loot the chests at any time"])
            return
        result = self.navigation_service.loot_room(self.player)
        self._notify(result.messages)

    def _stats_lines(self) -> List[str]:
        view = self.player_stats_view()
        return [
            "Player Stats:",
            f"Health   = {view.health:.2f} / {view.max_health:.2f}",
            f"Defense  = {view.defense:.2f}",
            f"Strength = {view.strength:.2f}",
            f"Armor    = {view.armor or 'none'}",
            f"Location = ({view.x}, {view.y})",
        ]

    # -- fighting -----------------------------------------------------------

    def _combat_menu(self, enemy: Enemy) -> MenuView:
        moves = self.move_views()
        options = [f"{row.index:2d}: {row.label()}" for row in moves]
        options.append(f"{len(moves):2d}: Inventory")
        options.append(f"{len(moves) + 1:2d}: Run Away")
        return MenuView(
            title=f"It's turn {enemy.turn_counter}",
            options=options,
            lines=[
                f"Your Health : {self.player.health:6.2f}",
                f"Enemy Health: {enemy.health:6.2f}    Enemy type: {enemy.name}",
            ],
        )

    def _fighting_turn(self) -> bool:
        """Resolve the player's combat action; returns whether the enemy may still strike back."""
        player = self.player
        enemy = player.current_room.get_current_enemy()
        if enemy is None:
            player.state = PlayerState.EXPLORING
            return True

        enemy.next_turn()
        move_count = len(player.moves)
        while True:
            choice = self._choose(self._combat_menu(enemy))
            if choice is None:
                self._notify([_INVALID, _NOT_CONSUMED])
                continue

            if 0 <= choice < move_count:
                result = self.combat_service.use_move(player, enemy, choice, player.current_room.id)
                self._notify(result.messages)
                if not result.turn_consumed:
                    continue
                return True

            if choice == move_count:
                if self._inventory_menu():
                    return True
                continue

            if choice == move_count + 1:
                direction = self._choose_direction("Where would you like to run to?", allow_cancel=True)
                if direction is None:
                    continue
                escape = self.combat_service.attempt_escape(player, self.grid, direction)
                self._notify(escape.messages)
                if escape.succeeded:
                    self.navigation_service.relocate(player, direction, fled=True)
                    return False
                return True

            self._notify([_INVALID, _NOT_CONSUMED])

    # -- inventory ----------------------------------------------------------

    def _inventory_menu(self) -> bool:
        """Run the inventory menu until the player leaves or an action uses up the turn."""
        menu = MenuView(
            title="What inventory action would you like to do?",
            options=[
                f"{VIEW_INVENTORY}. View Inventory",
                f"{USE_ITEM}. Use Item",
                f"{EQUIP_ITEM}. Equip Item",
                f"{DISCARD_ITEM}. Discard Item",
                f"{LEAVE_INVENTORY}. Leave Inventory",
            ],
        )
        while True:
            choice = self._choose(menu)
            if choice == VIEW_INVENTORY:
                self._notify(self.inventory_service.describe_inventory(self.player))
            elif choice == USE_ITEM:
                if self._use_item_flow():
                    return True
            elif choice == EQUIP_ITEM:
                if self._equip_flow():
                    return True
            elif choice == DISCARD_ITEM:
                if self._discard_flow():
                    return True
            elif choice == LEAVE_INVENTORY:
                return False
            else:
                self._notify(["Invalid choice"])

    def _use_item_flow(self) -> bool:
        inventory = self.player.inventory
        if inventory.slots_used() == 0:
            self._notify(["There are no items in your inventory"])
            return False
        if inventory.num_useables() <= 0:
            self._notify(["There are no useable items in your inventory"])
            return False

        while True:
            index = self._choose_slot("Use Item", "use")
            if index is None:
                self._notify(["Canceling use process"])
                return False
            _, ok = inventory.is_useable(index)
            if not ok:
                self._notify(["The selected item is not a useable item"])
                continue
            result = self.inventory_service.use_item(self.player, index)
            self._notify(result.messages)
            return result.turn_consumed

    def _equip_flow(self) -> bool:
        inventory = self.player.inventory
        if inventory.slots_used() == 0:
            self._notify(["There are no items in your inventory"])
            return False
        if inventory.num_equipables() <= 0:
            self._notify(["There are no equipable items in your inventory"])
            return False

        if inventory.armor_slot is not None:
            choice = self._choose(
                MenuView(
                    title="There is already an equipped ARMOR item.",
                    options=["  1: Swap it for another item", "  2: Unequip it only", "Any: Keep it"],
                    lines=[f"Equipped: {inventory.armor_slot.describe()}"],
                )
            )
            if choice == 2:
                result = self.inventory_service.unequip(self.player)
                self._notify(result.messages)
                return result.turn_consumed
            if choice != 1:
                self._notify(["Canceling equip process"])
                return False

        while True:
            index = self._choose_slot("Equip Item", "equip")
            if index is None:
                self._notify(["Canceling equip process"])
                return False
            _, ok = inventory.is_equipable(index)
            if not ok:
                self._notify(["The selected item is not an equipable item"])
                continue
            result = self.inventory_service.equip(self.player, index)
            self._notify(result.messages)
            return result.turn_consumed

    def _discard_flow(self) -> bool:
        inventory = self.player.inventory
        if inventory.slots_used() == 0:
            self._notify(["There are no items in your inventory"])
            return False

        while True:
            index = self._choose_slot("Discard Item", "discard")
            if index is None:
                self._notify(["Canceling Discard Process"])
                return False
            item = inventory.item_at(index)
            if item is None:
                self._notify(["There is no item in that slot"])
                continue

            confirm = self._choose(
                MenuView(
                    title="Do you wish to continue?",
                    options=["  1: Yes, discard the item", "Any: No, keep the item"],
                    lines=["You are about to discard the following item:", f"  {index:2d}: {item.describe()}"],
                )
            )
            if confirm != 1:
                self._notify(["Item will not be discarded"])
                return False
            result = self.inventory_service.discard(self.player, index)
            self._notify(result.messages)
            return result.turn_consumed

    # -- development cheats -------------------------------------------------

    def _cheat_loop(self) -> None:
        menu = MenuView(title="Cheats", options=["  1: Give item", f"{CANCEL_SELECTION:3d}: Leave"])
        type_menu = MenuView(
            title="Item type",
            options=[f"{number:3d}: {item_type.name}" for number, item_type in enumerate(ItemType)],
        )
        effect_menu = MenuView(title="Item effect", options=["Enter the effect value"])
        while True:
            choice = self.choices.choose(menu)
            if choice == CANCEL_SELECTION:
                return
            if choice != 1:
                continue
            item_type = ItemType.from_number(self.choices.choose(type_menu))
            effect = self.choices.choose(effect_menu)
            if item_type is None or effect is None:
                self._notify(["failed to give item"])
                continue
            item = Item(item_type, effect)
            if self.player.inventory.add_item(item):
                logger.info("Cheat granted item", extra={"item_type": item_type.value, "effect": effect})
                self._notify([f"Given item {item.describe()}"])
            else:
                self._notify(["failed to give item"])

    # -- query accessors ----------------------------------------------------

    def player_stats_view(self) -> PlayerStatsView:
        player = self.player
        armor = player.inventory.armor_slot
        return PlayerStatsView(
            health=player.health,
            max_health=player.max_health,
            defense=player.defense,
            strength=player.strength,
            state=player.state.value,
            x=player.location.x,
            y=player.location.y,
            armor=armor.describe() if armor is not None else "",
        )

    def room_view(self) -> RoomView:
        return self.navigation_service.room_view(self.player)

    def move_views(self) -> List[MoveView]:
        return [
            MoveView(
                index=index,
                name=move.name,
                min_damage=move.min_damage,
                max_damage=move.max_damage,
                cooldown=move.cooldown,
                max_cooldown=move.max_cooldown,
            )
            for index, move in enumerate(self.player.moves)
        ]

    def inventory_views(self) -> List[InventorySlotView]:
        return inventory_slot_views(self.player.inventory)

    def combat_round_view(self) -> Optional[CombatRoundView]:
        enemy = self.player.current_room.get_current_enemy()
        if enemy is None:
            return None
        return CombatRoundView(
            turn=enemy.turn_counter,
            player_health=self.player.health,
            enemy_name=enemy.name,
            enemy_health=enemy.health,
            moves=self.move_views(),
        )
