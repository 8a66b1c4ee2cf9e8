import logging
from typing import List, Optional

from crawler.application.dtos import ActionResult, RoomView
from crawler.application.services.event_bus import EventBus
from crawler.domain.events import ChestsLooted, RoomEntered
from crawler.domain.models.grid import RoomGrid
from crawler.domain.models.location import Direction, Location
from crawler.domain.models.player import Player, PlayerState
from crawler.domain.models.room import Room


logger = logging.getLogger(__name__)


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


class NavigationService:
    def __init__(self, grid: RoomGrid, event_bus: Optional[EventBus] = None, debug_mode: bool = False) -> None:
        self.grid = grid
        self.event_bus = event_bus
        self.debug_mode = debug_mode

    def _publish(self, event: object) -> None:
        if self.event_bus is not None:
            self.event_bus.publish(event)

    def relocate(self, player: Player, direction: Direction, *, fled: bool = False) -> Room:
        destination = self.grid.neighbor(player.location, direction)
        if destination is None:
            raise ValueError(f"no room {direction.value} of {player.location.as_tuple()}")

        player.location.add(Location.unit(direction))
        player.current_room = destination
        player.moved_last = True
        player.state = PlayerState.EXPLORING
        logger.debug("Player moved", extra={"direction": direction.value, "room_id": destination.id, "fled": fled})
        self._publish(RoomEntered(room_id=destination.id, x=player.location.x, y=player.location.y, fled=fled))
        return destination

    def move(self, player: Player, direction: Optional[Direction]) -> ActionResult:
        if direction is None or not player.current_room.can_leave_from(direction):
            return ActionResult(messages=["Invalid Input, try again"], turn_consumed=False)

        self.relocate(player, direction)
        messages = ["You have entered a new room"]
        if self.debug_mode:
            messages.append(f"Player Loc: {player.location.x} {player.location.y}")
        return ActionResult(messages=messages, turn_consumed=True)

    def room_view(self, player: Player) -> RoomView:
        room = player.current_room
        return RoomView(
            room_id=room.id,
            room_name=room.name,
            x=player.location.x,
            y=player.location.y,
            total_chests=room.get_num_chests(),
            lootable_chests=room.get_num_lootable_chests(),
            locked_chests=room.get_num_locked_chests(),
            enemies_alive=room.get_num_enemies_alive(),
            exits=[direction.name for direction in room.exits()],
        )

    def describe_room(self, player: Player) -> tuple[List[str], bool]:
        """Chest summary for the current room and whether looting should be offered."""
        room = player.current_room
        lines: List[str] = []
        if self.debug_mode:
            lines.append(f"Player Location: {player.location.as_tuple()}")
            lines.append(f"Room Location: {room.location.as_tuple()}")
            lines.append(f"Room Type={room.name}")
            lines.append(f"Room ID {room.id}")

        lines.append(f"You are in a {room.name}, located at {player.location.as_tuple()}")
        total = room.get_num_chests()
        lootable = room.get_num_lootable_chests()
        locked = room.get_num_locked_chests()

        if total == 0:
            if any(chest is not None for chest in room.chests):
                lines.append("All chests in this room have been looted.")
            else:
                lines.append("There are no chests in this room.")
            return lines, False

        if locked == total:
            if total == 1:
                lines.append("There is 1 locked chest and no unlocked chests in the room")
                lines.append("To unlock the chest, use a key from the inventory menu")
            else:
                lines.append(f"There are {locked} locked chests and no unlocked chests in the room")
                lines.append("To unlock the chests, use a key or keys from the inventory menu")
            return lines, False

        if locked == 0:
            if lootable == 1:
                lines.append("There are no locked chests and 1 unlocked chest in the room")
                lines.append("Would you like to loot it?")
            else:
                lines.append(f"There are no locked chests and {lootable} unlocked chests in the room")
                lines.append("Would you like to loot them all?")
            return lines, True

        verb = "is" if locked == 1 else "are"
        lines.append(f"There {verb} {_plural(locked, 'locked chest')} and {_plural(lootable, 'unlocked chest')} in the room")
        lines.append(
            "To unlock the locked chest, use a key from the inventory menu"
            if locked == 1
            else "To unlock the locked chests, use a key from the inventory menu"
        )
        lines.append("Would you like to loot the unlocked chest?" if lootable == 1 else "Would you like to loot all the unlocked chests?")
        return lines, True

    def loot_room(self, player: Player) -> ActionResult:
        room = player.current_room
        inventory = player.inventory
        lootable = room.get_num_lootable_chests()

        if inventory.is_full():
            noun = "the chest" if lootable == 1 else "the chests"
            return ActionResult(
                messages=["Your inventory is full.", f"To loot {noun} in this room, discard an item to free up space"],
                turn_consumed=False,
            )

        messages: List[str] = []
        if lootable > inventory.slots_not_used():
            messages.append("There are more chests than your inventory has space for.")
            messages.append("Only some chests will be looted. To loot them all, discard items to free inventory space")

        count = room.loot_into(inventory)
        messages.append(f"Looted {_plural(count, 'chest')}")
        if count:
            self._publish(ChestsLooted(room_id=room.id, count=count))
        return ActionResult(messages=messages, turn_consumed=count > 0)
