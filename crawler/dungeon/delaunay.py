"""Delaunay triangulation over room centers (incremental Bowyer–Watson).

Phases:
    * Enclose every input point in an oversized super-triangle.
    * Insert points one at a time in input order. Triangles whose circumcircle
      contains the new point are removed; the boundary of the removed region is
      found by XOR-ing their edges (shared edges cancel out) and each boundary
      edge is joined to the new point.
    * Drop every triangle that still touches a super-triangle vertex and collect
      the remaining edges, deduplicated by canonical pair.

Numerical policy: a circumcircle with ``|det| < COLINEAR_EPSILON`` counts as
degenerate and never contains anything, and the radius comparison allows
``CONTAINMENT_EPSILON`` of slack so points on the circle count as inside. An
exactly colinear input can therefore leave points out of the triangulation;
``untriangulated_points`` reports them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, NamedTuple, Optional, Sequence, Set, Tuple

COLINEAR_EPSILON = 1e-12
CONTAINMENT_EPSILON = 1e-8
SUPER_TRIANGLE_SCALE = 20


class Point(NamedTuple):
    x: float
    y: float


EdgeKey = Tuple[int, int]


class Edge(NamedTuple):
    a: int
    b: int

    @property
    def key(self) -> EdgeKey:
        return edge_key(self.a, self.b)


class Triangle(NamedTuple):
    a: int
    b: int
    c: int

    def edges(self) -> Tuple[Edge, Edge, Edge]:
        return (Edge(self.a, self.b), Edge(self.b, self.c), Edge(self.c, self.a))


def edge_key(a: int, b: int) -> EdgeKey:
    return (a, b) if a < b else (b, a)


@dataclass
class Graph:
    points: List[Point] = field(default_factory=list)
    edges: List[Edge] = field(default_factory=list)
    triangles: Optional[List[Triangle]] = None

    def edge_keys(self) -> Set[EdgeKey]:
        return {e.key for e in self.edges}

    def degrees(self) -> List[int]:
        deg = [0] * len(self.points)
        for e in self.edges:
            deg[e.a] += 1
            deg[e.b] += 1
        return deg

    def to_dict(self):
        data = {
            "points": [{"x": p.x, "y": p.y} for p in self.points],
            "edges": [{"a": e.a, "b": e.b} for e in self.edges],
        }
        if self.triangles is not None:
            data["triangles"] = [{"a": t.a, "b": t.b, "c": t.c} for t in self.triangles]
        return data


def circumcircle_contains(pa: Point, pb: Point, pc: Point, p: Point) -> bool:
    d = 2 * (pa.x * (pb.y - pc.y) + pb.x * (pc.y - pa.y) + pc.x * (pa.y - pb.y))
    if abs(d) < COLINEAR_EPSILON:
        return False
    sa = pa.x * pa.x + pa.y * pa.y
    sb = pb.x * pb.x + pb.y * pb.y
    sc = pc.x * pc.x + pc.y * pc.y
    ux = (sa * (pb.y - pc.y) + sb * (pc.y - pa.y) + sc * (pa.y - pb.y)) / d
    uy = (sa * (pc.x - pb.x) + sb * (pa.x - pc.x) + sc * (pb.x - pa.x)) / d
    r2 = (ux - pa.x) ** 2 + (uy - pa.y) ** 2
    dist2 = (ux - p.x) ** 2 + (uy - p.y) ** 2
    return dist2 <= r2 + CONTAINMENT_EPSILON


def super_triangle(points: Sequence[Point]) -> Tuple[Point, Point, Point]:
    min_x = min(p.x for p in points)
    max_x = max(p.x for p in points)
    min_y = min(p.y for p in points)
    max_y = max(p.y for p in points)
    # A zero-size box (single point) would collapse the triangle onto it
    dmax = max(max_x - min_x, max_y - min_y, 1)
    mid_x = (min_x + max_x) / 2
    mid_y = (min_y + max_y) / 2
    k = SUPER_TRIANGLE_SCALE
    return (
        Point(mid_x - k * dmax, mid_y - dmax),
        Point(mid_x, mid_y + k * dmax),
        Point(mid_x + k * dmax, mid_y - dmax),
    )


def _cavity_boundary(bad: Iterable[Triangle]) -> List[Edge]:
    boundary: Dict[EdgeKey, Edge] = {}
    for t in bad:
        for e in t.edges():
            if e.key in boundary:
                del boundary[e.key]
            else:
                boundary[e.key] = e
    return list(boundary.values())


def unique_edges(triangles: Iterable[Triangle]) -> List[Edge]:
    seen: Dict[EdgeKey, Edge] = {}
    for t in triangles:
        for e in t.edges():
            seen.setdefault(e.key, e)
    return list(seen.values())


def triangulate(points: Sequence[Tuple[float, float]]) -> Graph:
    """Return the Delaunay graph of ``points`` (indices follow input order).

    Coordinates are kept as given; only the super-triangle vertices are floats.
    """
    pts = [Point(p[0], p[1]) for p in points]
    n = len(pts)
    if n == 0:
        return Graph()
    work = pts + list(super_triangle(pts))
    triangles: List[Triangle] = [Triangle(n, n + 1, n + 2)]
    for i in range(n):
        point = work[i]
        bad: List[Triangle] = []
        keep: List[Triangle] = []
        for t in triangles:
            if circumcircle_contains(work[t.a], work[t.b], work[t.c], point):
                bad.append(t)
            else:
                keep.append(t)
        triangles = keep
        for e in _cavity_boundary(bad):
            triangles.append(Triangle(e.a, e.b, i))
    triangles = [t for t in triangles if t.a < n and t.b < n and t.c < n]
    return Graph(points=list(pts), edges=unique_edges(triangles), triangles=triangles)


def untriangulated_points(graph: Graph) -> List[int]:
    """Indices of points no triangle references (only meaningful for 3+ points)."""
    if len(graph.points) < 3:
        return []
    used = set()
    for t in graph.triangles or []:
        used.update(t)
    return [i for i in range(len(graph.points)) if i not in used]


__all__ = [
    "Point",
    "Edge",
    "EdgeKey",
    "Triangle",
    "Graph",
    "edge_key",
    "circumcircle_contains",
    "super_triangle",
    "unique_edges",
    "triangulate",
    "untriangulated_points",
]
