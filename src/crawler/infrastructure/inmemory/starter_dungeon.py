from __future__ import annotations

from typing import List

from crawler.domain.balance_tables import CHESTS_PER_ROOM
from crawler.domain.models.enemy import Enemy, EnemyType
from crawler.domain.models.grid import RoomGrid
from crawler.domain.models.item import Item, ItemType
from crawler.domain.models.location import Location
from crawler.domain.models.room import Chest, Room, RoomType


def _chests(*chests: Chest) -> List[Chest | None]:
    slots: List[Chest | None] = list(chests)[:CHESTS_PER_ROOM]
    slots.extend([None] * (CHESTS_PER_ROOM - len(slots)))
    return slots


def _room(room_type: RoomType, chests: List[Chest | None] | None = None, enemies: List[Enemy] | None = None) -> Room:
    return Room(
        room_type=room_type,
        location=Location(0, 0),
        chests=chests if chests is not None else _chests(),
        enemies=list(enemies or []),
    )


def build_starter_dungeon() -> RoomGrid:
    """A fixed 3x3 dungeon; the entrance hallway sits at (0, 0)."""
    rows = [
        [
            _room(RoomType.HALLWAY, _chests(Chest(Item(ItemType.KEY, 2)))),
            _room(RoomType.CHAMBER, enemies=[Enemy(EnemyType.RAT)]),
            _room(
                RoomType.ARMORY,
                _chests(Chest(Item(ItemType.ARMOR, 2), locked=True), Chest(Item(ItemType.HEALTH, 25))),
            ),
        ],
        [
            _room(RoomType.CHAMBER, _chests(Chest(Item(ItemType.HEALTH, 20)))),
            _room(RoomType.CRYPT, enemies=[Enemy(EnemyType.SKELETON)]),
            _room(
                RoomType.TREASURY,
                _chests(
                    Chest(Item(ItemType.INSTANT_DAMAGE, 15), locked=True),
                    Chest(Item(ItemType.KEY, 1), locked=True),
                    Chest(Item(ItemType.ARMOR, 4)),
                ),
                enemies=[Enemy(EnemyType.GOBLIN)],
            ),
        ],
        [
            _room(RoomType.HALLWAY),
            _room(RoomType.CHAMBER, enemies=[Enemy(EnemyType.ORC)]),
            _room(
                RoomType.LAIR,
                _chests(Chest(Item(ItemType.HEALTH, 50), locked=True)),
                enemies=[Enemy(EnemyType.TROLL)],
            ),
        ],
    ]
    return RoomGrid(rows)


STARTING_LOCATION = (0, 0)
