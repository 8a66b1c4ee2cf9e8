from __future__ import annotations

from typing import Iterator, List, Optional, Sequence

from crawler.domain.models.location import Direction, Location
from crawler.domain.models.room import Room


class RoomGrid:
    """Rectangular grid of rooms addressed as ``rooms[y][x]``."""

    def __init__(self, rooms: Sequence[Sequence[Room]]) -> None:
        rows = [list(row) for row in rooms]
        if not rows or not rows[0]:
            raise ValueError("room grid needs at least one room")
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise ValueError("room grid rows must all have the same width")

        self._rooms: List[List[Room]] = rows
        self.width = width
        self.height = len(rows)

        next_id = 0
        for y, row in enumerate(rows):
            for x, room in enumerate(row):
                room.location = Location(x, y)
                room.grid = self
                if not room.id:
                    room.id = next_id
                next_id += 1

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def room_at(self, location: Location) -> Optional[Room]:
        if not self.contains(location.x, location.y):
            return None
        return self._rooms[location.y][location.x]

    def neighbor(self, location: Location, direction: Direction) -> Optional[Room]:
        return self.room_at(location.step(direction))

    def __iter__(self) -> Iterator[Room]:
        for row in self._rooms:
            yield from row
