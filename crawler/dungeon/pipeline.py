"""Pipeline orchestration for dungeon generation.

``generate_dungeon`` runs the phases in order on a private working grid and
returns an immutable ``Dungeon``:

    place_rooms -> triangulate -> spanning_tree -> loop_edges -> route_corridors

The only randomness comes from one ``random.Random`` instance shared by room
placement and loop augmentation; pass ``seed`` (or ``config.seed``) for a
reproducible layout, or an ``rng`` of your own.
"""

from __future__ import annotations

import random
import time
from dataclasses import dataclass
from typing import Optional, Tuple

from ..logging_utils import get_logger
from .cells import Cell, count_cells, freeze_cells, new_grid
from .config import DungeonConfig
from .connectivity import add_loop_edges, prim_mst, room_components
from .delaunay import Edge, Graph, Point, triangulate, untriangulated_points
from .metrics import GenerationReport
from .rooms import Room, place_rooms
from .tiles import CORRIDOR, CellType, glyph_for
from .tunnels import RoutedCorridor, route_corridors

log = get_logger("crawler.dungeon")


@dataclass(frozen=True)
class Dungeon:
    cells: Tuple[Tuple[Cell, ...], ...]
    rooms: Tuple[Room, ...]
    room_graph: Graph
    edges: Tuple[Edge, ...]
    corridors: Tuple[RoutedCorridor, ...]
    config: DungeonConfig
    seed: Optional[int]
    report: GenerationReport

    @property
    def width(self) -> int:
        return len(self.cells[0]) if self.cells else 0

    @property
    def height(self) -> int:
        return len(self.cells)

    def cell(self, x: int, y: int) -> CellType:
        return self.cells[y][x].type

    def corridor_cells(self) -> int:
        return sum(1 for row in self.cells for c in row if c.type is CORRIDOR)

    def to_dict(self):
        return {
            "cells": [[c.to_dict() for c in row] for row in self.cells],
            "rooms": [r.to_dict() for r in self.rooms],
            "roomGraph": self.room_graph.to_dict(),
        }

    def to_ascii(self) -> str:
        return "\n".join("".join(glyph_for(c.type) for c in row) for row in self.cells)


class DungeonGenerator:
    def __init__(self, config: DungeonConfig, rng: random.Random, seed: Optional[int] = None):
        self.config = config
        self.rng = rng
        self.seed = seed
        self.phase_ms = {}

    def _phase(self, label, fn, *a, **k):
        ps = time.perf_counter()
        result = fn(*a, **k)
        self.phase_ms[label] = int((time.perf_counter() - ps) * 1000)
        return result

    def run(self) -> Dungeon:
        start = time.perf_counter()
        cfg = self.config
        grid = new_grid(cfg.width, cfg.height)

        placement = self._phase("place_rooms", place_rooms, grid, cfg, self.rng)
        rooms = placement.rooms
        points = [Point(*r.center) for r in rooms]
        graph = self._phase("triangulate", triangulate, points)
        mst = self._phase("spanning_tree", prim_mst, graph)
        edges = self._phase(
            "loop_edges", add_loop_edges, mst, graph, self.rng, cfg.extra_edge_chance, cfg.max_room_connections
        )
        routing = self._phase("route_corridors", route_corridors, grid, rooms, edges, cfg)
        groups = room_components(grid, rooms)

        missing = untriangulated_points(graph)
        report = GenerationReport(
            seed=self.seed,
            rooms_target=placement.target,
            rooms_placed=len(rooms),
            placement_attempts=placement.attempts,
            points_triangulated=len(points) - len(missing) if len(points) >= 3 else 0,
            points_untriangulated=len(missing),
            triangles=len(graph.triangles or []),
            candidate_edges=len(graph.edges),
            mst_edges=len(mst.edges),
            loop_edges=len(edges) - len(mst.edges),
            edges_routed=len(routing.routed),
            edges_dropped=len(routing.dropped),
            dropped_edges=[(e.a, e.b) for e in routing.dropped],
            candidate_rejections=routing.rejections,
            corridor_cells=count_cells(grid, CORRIDOR),
            room_groups=len(groups),
            phase_ms=dict(self.phase_ms),
        )
        report.runtime_ms = int((time.perf_counter() - start) * 1000)

        for e in routing.dropped:
            log.debug(event="edge_dropped", seed=self.seed, a=e.a, b=e.b)
        log.info(
            event="dungeon_generated",
            seed=self.seed,
            rooms=report.rooms_placed,
            edges=len(edges),
            routed=report.edges_routed,
            dropped=report.edges_dropped,
            corridors=report.corridor_cells,
            runtime_ms=report.runtime_ms,
        )
        if report.degraded:
            log.warn(event="rooms_disconnected", seed=self.seed, room_groups=report.room_groups)

        return Dungeon(
            cells=freeze_cells(grid),
            rooms=tuple(rooms),
            room_graph=graph,
            edges=tuple(edges),
            corridors=tuple(routing.routed),
            config=cfg,
            seed=self.seed,
            report=report,
        )


def generate_dungeon(
    config: Optional[DungeonConfig] = None,
    *,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> Dungeon:
    """Generate one dungeon layout.

    ``seed`` overrides ``config.seed``. Without either (and without ``rng``) a
    fresh seed is drawn and recorded on the result so the layout can be replayed.
    """
    config = (config or DungeonConfig()).with_overrides(seed=seed).validate()
    seed = config.seed
    if rng is None:
        if seed is None:
            seed = random.randint(0, 2**31 - 1)
            config = config.with_overrides(seed=seed)
        rng = random.Random(seed)
    return DungeonGenerator(config, rng, seed).run()


__all__ = ["Dungeon", "DungeonGenerator", "generate_dungeon"]
