import random
from dataclasses import dataclass
from typing import List, NamedTuple, Sequence, Tuple

from .cells import Grid, is_area_empty
from .config import DungeonConfig
from .tiles import ROOM


@dataclass(frozen=True)
class Room:
    x: int
    y: int
    w: int
    h: int

    def cells(self):
        for ix in range(self.x, self.x + self.w):
            for iy in range(self.y, self.y + self.h):
                yield ix, iy

    @property
    def center(self) -> Tuple[int, int]:
        return (self.x + self.w // 2, self.y + self.h // 2)

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x < self.x + self.w and self.y <= y < self.y + self.h

    def distance_to(self, x: int, y: int) -> int:
        """Chebyshev distance from (x, y) to the nearest cell of the room (0 inside)."""
        x2 = self.x + self.w - 1
        y2 = self.y + self.h - 1
        dx = self.x - x if x < self.x else x - x2 if x > x2 else 0
        dy = self.y - y if y < self.y else y - y2 if y > y2 else 0
        return max(dx, dy)

    def gap_to(self, other: "Room") -> int:
        """Chebyshev distance between the closest cells of two rooms."""
        dx = max(0, other.x - (self.x + self.w - 1), self.x - (other.x + other.w - 1))
        dy = max(0, other.y - (self.y + self.h - 1), self.y - (other.y + other.h - 1))
        return max(dx, dy)

    def to_dict(self):
        cx, cy = self.center
        return {"x": self.x, "y": self.y, "width": self.w, "height": self.h, "center": {"x": cx, "y": cy}}


class PlacementResult(NamedTuple):
    rooms: List[Room]
    target: int
    attempts: int


def room_index_at(rooms: Sequence[Room], x: int, y: int) -> int:
    for i, r in enumerate(rooms):
        if r.contains(x, y):
            return i
    return -1


def place_rooms(grid: Grid, config: DungeonConfig, rng=None) -> PlacementResult:
    """Rejection-sample non-overlapping rooms onto the grid.

    Each attempt draws a size and a top-left corner, then accepts the room only
    if its rectangle grown by ``room_separation`` on every side is still empty.
    Gives up after ``config.max_attempts`` tries whatever the count reached;
    callers read the shortfall from the result instead of an error.
    """
    if rng is None:
        rng = random
    sep = config.room_separation
    rooms: List[Room] = []
    attempts = 0
    while len(rooms) < config.max_rooms and attempts < config.max_attempts:
        attempts += 1
        w = rng.randint(config.min_room_width, config.max_room_width)
        h = rng.randint(config.min_room_height, config.max_room_height)
        x = rng.randrange(config.width - w)
        y = rng.randrange(config.height - h)
        if not is_area_empty(grid, x - sep, y - sep, w + sep * 2, h + sep * 2):
            continue
        room = Room(x, y, w, h)
        for ix, iy in room.cells():
            grid[ix][iy] = ROOM
        rooms.append(room)
    return PlacementResult(rooms, config.max_rooms, attempts)


__all__ = ["Room", "PlacementResult", "place_rooms", "room_index_at"]
