from typing import List, NamedTuple, Tuple

from .tiles import CellType, EMPTY


class Cell(NamedTuple):
    """One finished grid position."""

    x: int
    y: int
    type: CellType

    def to_dict(self):
        return {"x": self.x, "y": self.y, "type": self.type.value}


# Working grid is column-major: grid[x][y]
Grid = List[List[CellType]]
Coord2D = Tuple[int, int]


def new_grid(width: int, height: int) -> Grid:
    return [[EMPTY for _ in range(height)] for _ in range(width)]


def grid_size(grid: Grid) -> Tuple[int, int]:
    width = len(grid)
    height = len(grid[0]) if width else 0
    return width, height


def in_bounds(grid: Grid, x: int, y: int) -> bool:
    width, height = grid_size(grid)
    return 0 <= x < width and 0 <= y < height


def is_area_empty(grid: Grid, x: int, y: int, w: int, h: int) -> bool:
    """True when every in-bounds cell of the rectangle is EMPTY.

    The rectangle is clipped to the grid first, so areas hanging over the edge
    only test their visible part.
    """
    width, height = grid_size(grid)
    for ix in range(max(0, x), min(width, x + w)):
        for iy in range(max(0, y), min(height, y + h)):
            if grid[ix][iy] is not EMPTY:
                return False
    return True


def count_cells(grid: Grid, cell_type: CellType) -> int:
    return sum(1 for column in grid for t in column if t is cell_type)


def freeze_cells(grid: Grid) -> Tuple[Tuple[Cell, ...], ...]:
    """Snapshot the working grid as immutable row-major rows (rows[y][x])."""
    width, height = grid_size(grid)
    return tuple(tuple(Cell(x, y, grid[x][y]) for x in range(width)) for y in range(height))


__all__ = ["Cell", "Grid", "Coord2D", "new_grid", "grid_size", "in_bounds", "is_area_empty", "count_cells", "freeze_cells"]
