"""Corridor routing between connected rooms.

For every accepted edge, in list order:
    * Pick a connector (exit) cell on each room: walk from the room center
      toward the other room along the dominant axis until leaving the room.
    * Build a short list of axis-aligned polylines between the two connectors:
      straight (when aligned), the two L shapes, then a fan of Z shapes whose
      middle leg sits up to two cells either side of the midpoint.
    * Rasterize each polyline and run it through ``validate_path``; the first
      one that passes is carved. If none passes the edge is dropped and the
      rooms stay unconnected by it (they may still meet through other edges).

Invariants enforced here:
    * Corridors never enter a room and never overwrite a ROOM cell.
    * A corridor keeps ``room_corridor_gap`` (Chebyshev) from every room except
      at its own two connector cells.
    * A corridor keeps ``corridor_corridor_gap`` from previously carved
      corridors, except that running along the exact same cells (merging) is allowed.
    * No 2x2 window ends up with three or more corridor cells (keeps corridors one cell wide).

Edges are never revisited, so an early corridor can block a later one.
"""

from __future__ import annotations

from collections import Counter
from typing import Callable, Dict, List, NamedTuple, Optional, Sequence, Tuple

from .cells import Coord2D, Grid, grid_size, in_bounds
from .config import DungeonConfig
from .delaunay import Edge
from .rooms import Room, room_index_at
from .tiles import CORRIDOR, ROOM

Polyline = Tuple[Coord2D, ...]
CandidateFn = Callable[[Coord2D, Coord2D, int, int], List[Polyline]]

OUT_OF_BOUNDS = "out_of_bounds"
CROSSES_ROOM = "crosses_room"
ROOM_GAP = "room_gap"
CORRIDOR_GAP = "corridor_gap"
CORRIDOR_BLOB = "corridor_blob"

PIVOT_SPREAD = 2
MAX_POLYLINE_POINTS = 4


class RoutedCorridor(NamedTuple):
    edge: Edge
    start: Coord2D
    end: Coord2D
    polyline: Polyline
    path: Tuple[Coord2D, ...]


class RoutingResult(NamedTuple):
    routed: List[RoutedCorridor]
    dropped: List[Edge]
    rejections: Dict[str, int]


def _sign(v: int) -> int:
    return (v > 0) - (v < 0)


def exit_cell(grid: Grid, rooms: Sequence[Room], room_idx: int, target: Coord2D) -> Coord2D:
    """First cell outside ``rooms[room_idx]`` on the way from its center to ``target``."""
    width, height = grid_size(grid)
    room = rooms[room_idx]
    cx, cy = room.center
    dx = target[0] - cx
    dy = target[1] - cy
    step_x, step_y = _sign(dx), _sign(dy)
    along_x = abs(dx) >= abs(dy)
    x, y = cx, cy
    if (along_x and step_x) or (not along_x and step_y):
        while 0 <= x < width and 0 <= y < height:
            if not room.contains(x, y):
                return (x, y)
            if along_x:
                x += step_x
            else:
                y += step_y
    # Walk left the grid (or had no direction): take the first free cell of the perimeter ring
    for oy in range(room.y - 1, room.y + room.h + 1):
        for ox in range(room.x - 1, room.x + room.w + 1):
            if not (0 <= ox < width and 0 <= oy < height):
                continue
            if room_index_at(rooms, ox, oy) == -1:
                return (ox, oy)
    return (cx, cy)


def line_cells(x0: int, y0: int, x1: int, y1: int) -> List[Coord2D]:
    out = [(x0, y0)]
    x, y = x0, y0
    dx, dy = _sign(x1 - x0), _sign(y1 - y0)
    while x != x1 or y != y1:
        if x != x1:
            x += dx
        if y != y1:
            y += dy
        out.append((x, y))
    return out


def polyline_cells(polyline: Sequence[Coord2D]) -> List[Coord2D]:
    """Rasterize a polyline; corner cells appear once per segment touching them."""
    out: List[Coord2D] = []
    for a, b in zip(polyline, polyline[1:]):
        if a == b:
            continue
        out.extend(line_cells(a[0], a[1], b[0], b[1]))
    return out


def _clamp(v: int, lo: int, hi: int) -> int:
    return lo if v < lo else hi if v > hi else v


def candidate_polylines(start: Coord2D, end: Coord2D, width: int, height: int) -> List[Polyline]:
    """Straight, L and Z routes from ``start`` to ``end`` in priority order."""
    (sx, sy), (ex, ey) = start, end
    polys: List[Polyline] = []
    if sx == ex or sy == ey:
        polys.append((start, end))
    polys.append((start, (ex, sy), end))
    polys.append((start, (sx, ey), end))
    mid_x = (sx + ex) // 2
    mid_y = (sy + ey) // 2
    for off in range(-PIVOT_SPREAD, PIVOT_SPREAD + 1):
        px = _clamp(mid_x + off, 0, width - 1)
        polys.append((start, (px, sy), (px, ey), end))
    for off in range(-PIVOT_SPREAD, PIVOT_SPREAD + 1):
        py = _clamp(mid_y + off, 0, height - 1)
        polys.append((start, (sx, py), (ex, py), end))
    unique = list(dict.fromkeys(polys))
    return [p for p in unique if len(p) <= MAX_POLYLINE_POINTS]


def _too_close_to_rooms(rooms, cell, src, dst, start, end, gap) -> bool:
    is_start = cell == start
    is_end = cell == end
    for i, r in enumerate(rooms):
        if r.distance_to(cell[0], cell[1]) < gap:
            if (i == src and is_start) or (i == dst and is_end):
                continue
            return True
    return False


def _too_close_to_corridors(grid: Grid, cell: Coord2D, gap: int) -> bool:
    width, height = grid_size(grid)
    x, y = cell
    if grid[x][y] is CORRIDOR:
        return False
    for dy in range(-gap, gap + 1):
        for dx in range(-gap, gap + 1):
            if dx == 0 and dy == 0:
                continue
            nx, ny = x + dx, y + dy
            if 0 <= nx < width and 0 <= ny < height and grid[nx][ny] is CORRIDOR:
                return True
    return False


def _forms_corridor_block(grid: Grid, path: Sequence[Coord2D]) -> bool:
    width, height = grid_size(grid)
    for cx, cy in path:
        for oy in (-1, 0):
            for ox in (-1, 0):
                sx, sy = cx + ox, cy + oy
                if sx < 0 or sy < 0 or sx + 1 >= width or sy + 1 >= height:
                    continue
                filled = 0
                for xx in (sx, sx + 1):
                    for yy in (sy, sy + 1):
                        if (xx, yy) == (cx, cy) or grid[xx][yy] is CORRIDOR:
                            filled += 1
                if filled >= 3:
                    return True
    return False


def validate_path(
    grid: Grid,
    rooms: Sequence[Room],
    path: Sequence[Coord2D],
    src: int,
    dst: int,
    start: Coord2D,
    end: Coord2D,
    config: DungeonConfig,
) -> Optional[str]:
    """Return why ``path`` cannot be carved, or None when it can."""
    for cell in path:
        x, y = cell
        if not in_bounds(grid, x, y):
            return OUT_OF_BOUNDS
        if room_index_at(rooms, x, y) != -1:
            return CROSSES_ROOM
        if _too_close_to_rooms(rooms, cell, src, dst, start, end, config.room_corridor_gap):
            return ROOM_GAP
        if _too_close_to_corridors(grid, cell, config.corridor_corridor_gap):
            return CORRIDOR_GAP
    if _forms_corridor_block(grid, path):
        return CORRIDOR_BLOB
    return None


def first_valid_path(polylines, check, rejections: Optional[Counter] = None):
    """Return ``(polyline, path)`` for the first candidate ``check`` accepts, else None."""
    for poly in polylines:
        path = polyline_cells(poly)
        reason = check(path)
        if reason is None:
            return poly, path
        if rejections is not None:
            rejections[reason] += 1
    return None


def carve_path(grid: Grid, path: Sequence[Coord2D]) -> int:
    carved = 0
    for x, y in path:
        if not in_bounds(grid, x, y):
            continue
        if grid[x][y] is ROOM:
            continue
        if grid[x][y] is not CORRIDOR:
            carved += 1
        grid[x][y] = CORRIDOR
    return carved


def route_corridors(
    grid: Grid,
    rooms: Sequence[Room],
    edges: Sequence[Edge],
    config: DungeonConfig,
    candidates: CandidateFn = candidate_polylines,
) -> RoutingResult:
    width, height = grid_size(grid)
    routed: List[RoutedCorridor] = []
    dropped: List[Edge] = []
    rejections: Counter = Counter()
    for edge in edges:
        a, b = edge.a, edge.b
        start = exit_cell(grid, rooms, a, rooms[b].center)
        end = exit_cell(grid, rooms, b, rooms[a].center)

        def check(path, a=a, b=b, start=start, end=end):
            return validate_path(grid, rooms, path, a, b, start, end, config)

        found = first_valid_path(candidates(start, end, width, height), check, rejections)
        if found is None:
            dropped.append(edge)
            continue
        poly, path = found
        carve_path(grid, path)
        routed.append(RoutedCorridor(edge, start, end, tuple(poly), tuple(path)))
    return RoutingResult(routed, dropped, dict(rejections))


__all__ = [
    "Polyline",
    "RoutedCorridor",
    "RoutingResult",
    "exit_cell",
    "line_cells",
    "polyline_cells",
    "candidate_polylines",
    "validate_path",
    "first_valid_path",
    "carve_path",
    "route_corridors",
    "OUT_OF_BOUNDS",
    "CROSSES_ROOM",
    "ROOM_GAP",
    "CORRIDOR_GAP",
    "CORRIDOR_BLOB",
]
