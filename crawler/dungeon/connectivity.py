"""Spanning tree, loop augmentation, and grid-level connectivity checks."""

from __future__ import annotations

import math
from collections import deque
from typing import List, Optional, Sequence

from .cells import Grid, grid_size
from .delaunay import Edge, Graph
from .rooms import Room
from .tiles import CORRIDOR, ROOM


def _weight(points, a: int, b: int) -> float:
    return math.hypot(points[a].x - points[b].x, points[a].y - points[b].y)


def _nearest_crossing_pair(points, in_tree: List[bool]) -> Optional[Edge]:
    best: Optional[Edge] = None
    best_weight = math.inf
    n = len(points)
    for i in range(n):
        if not in_tree[i]:
            continue
        for j in range(n):
            if in_tree[j]:
                continue
            w = _weight(points, i, j)
            if w < best_weight:
                best_weight = w
                best = Edge(i, j)
    return best


def prim_mst(graph: Graph) -> Graph:
    """Minimum spanning tree over ``graph.edges`` (Prim, rooted at point 0).

    Each step scans every candidate edge and keeps the lightest one crossing the
    tree boundary; strict ``<`` means the first edge seen wins a tie. When no
    candidate crosses (disconnected candidates) the nearest tree/non-tree point
    pair is used instead so the result always spans. O(V*E), fine for tens of rooms.
    """
    pts = graph.points
    n = len(pts)
    if n <= 1:
        return Graph(points=list(pts), edges=[])
    in_tree = [False] * n
    in_tree[0] = True
    tree: List[Edge] = []
    while len(tree) < n - 1:
        best: Optional[Edge] = None
        best_weight = math.inf
        for e in graph.edges:
            if in_tree[e.a] != in_tree[e.b]:
                w = _weight(pts, e.a, e.b)
                if w < best_weight:
                    best_weight = w
                    best = e
        if best is None:
            best = _nearest_crossing_pair(pts, in_tree)
            if best is None:
                break
        tree.append(best)
        in_tree[best.a] = True
        in_tree[best.b] = True
    return Graph(points=list(pts), edges=tree)


def add_loop_edges(mst: Graph, candidates: Graph, rng, chance: float, max_connections: int) -> List[Edge]:
    """Extend the tree edges with some non-tree candidates to create loops.

    Every non-tree candidate costs one ``rng.random()`` draw, taken before the
    degree test. An edge is kept when the draw is within ``chance`` and neither
    endpoint already has more than ``max_connections`` edges. Degrees update as
    edges are accepted, so the outcome depends on candidate order as well as
    the draws.
    """
    tree_keys = mst.edge_keys()
    degree = mst.degrees()
    accepted = list(mst.edges)
    for e in candidates.edges:
        if e.key in tree_keys:
            continue
        if rng.random() > chance:
            continue
        if degree[e.a] > max_connections or degree[e.b] > max_connections:
            continue
        accepted.append(e)
        degree[e.a] += 1
        degree[e.b] += 1
    return accepted


def room_components(grid: Grid, rooms: Sequence[Room]) -> List[List[int]]:
    """Group room indices that are joined through room/corridor cells.

    Flood fills orthogonally from each not-yet-visited room; a fully connected
    layout yields one group.
    """
    width, height = grid_size(grid)
    owner = {}
    for idx, r in enumerate(rooms):
        for cell in r.cells():
            owner[cell] = idx
    visited = set()
    groups: List[List[int]] = []
    for idx, r in enumerate(rooms):
        start = (r.x, r.y)
        if start in visited:
            continue
        members = set()
        q = deque([start])
        visited.add(start)
        while q:
            cx, cy = q.popleft()
            if (cx, cy) in owner:
                members.add(owner[(cx, cy)])
            for nx, ny in ((cx + 1, cy), (cx - 1, cy), (cx, cy + 1), (cx, cy - 1)):
                if 0 <= nx < width and 0 <= ny < height and (nx, ny) not in visited:
                    if grid[nx][ny] in (ROOM, CORRIDOR):
                        visited.add((nx, ny))
                        q.append((nx, ny))
        groups.append(sorted(members))
    return groups


__all__ = ["prim_mst", "add_loop_edges", "room_components"]
