"""Cell type variant and the glyphs used for plain-text dumps."""

from enum import Enum


class CellType(str, Enum):
    ROOM = "room"
    CORRIDOR = "corridor"
    EMPTY = "empty"


# Glyphs for text dumps ('.' floor, '#' corridor, ' ' nothing)
GLYPHS = {
    CellType.ROOM: ".",
    CellType.CORRIDOR: "#",
    CellType.EMPTY: " ",
}


def glyph_for(cell_type: CellType) -> str:
    if cell_type is CellType.ROOM:
        return GLYPHS[CellType.ROOM]
    if cell_type is CellType.CORRIDOR:
        return GLYPHS[CellType.CORRIDOR]
    if cell_type is CellType.EMPTY:
        return GLYPHS[CellType.EMPTY]
    raise ValueError(f"unknown cell type: {cell_type!r}")


ROOM = CellType.ROOM
CORRIDOR = CellType.CORRIDOR
EMPTY = CellType.EMPTY

__all__ = ["CellType", "GLYPHS", "glyph_for", "ROOM", "CORRIDOR", "EMPTY"]
