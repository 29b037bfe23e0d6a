"""Public dungeon package interface.

    from crawler.dungeon import DungeonConfig, generate_dungeon
    d = generate_dungeon(DungeonConfig(seed=42))
    d.to_dict()   # {"cells": ..., "rooms": ..., "roomGraph": ...}
    d.report      # GenerationReport
"""

from .config import DungeonConfig, DungeonConfigError
from .connectivity import add_loop_edges, prim_mst, room_components
from .delaunay import Edge, Graph, Point, Triangle, edge_key, triangulate
from .metrics import GenerationReport
from .pipeline import Dungeon, DungeonGenerator, generate_dungeon
from .rooms import Room, place_rooms
from .tiles import CORRIDOR, EMPTY, ROOM, CellType
from .tunnels import candidate_polylines, route_corridors

__all__ = [
    "Dungeon",
    "DungeonConfig",
    "DungeonConfigError",
    "DungeonGenerator",
    "GenerationReport",
    "generate_dungeon",
    "Room",
    "place_rooms",
    "Point",
    "Edge",
    "Triangle",
    "Graph",
    "edge_key",
    "triangulate",
    "prim_mst",
    "add_loop_edges",
    "room_components",
    "candidate_polylines",
    "route_corridors",
    "CellType",
    "ROOM",
    "CORRIDOR",
    "EMPTY",
]
