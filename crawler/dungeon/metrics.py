from dataclasses import asdict, dataclass, field
from typing import Dict, List, Optional, Tuple


@dataclass
class GenerationReport:
    """Counters describing one generation run.

    Degradations (short room count, untriangulated points, dropped edges) are
    normal outcomes; ``degraded`` tells whether the layout ended up with rooms
    the corridors do not join.
    """

    seed: Optional[int] = None
    rooms_target: int = 0
    rooms_placed: int = 0
    placement_attempts: int = 0
    points_triangulated: int = 0
    points_untriangulated: int = 0
    triangles: int = 0
    candidate_edges: int = 0
    mst_edges: int = 0
    loop_edges: int = 0
    edges_routed: int = 0
    edges_dropped: int = 0
    dropped_edges: List[Tuple[int, int]] = field(default_factory=list)
    candidate_rejections: Dict[str, int] = field(default_factory=dict)
    corridor_cells: int = 0
    room_groups: int = 0
    runtime_ms: int = 0
    phase_ms: Dict[str, int] = field(default_factory=dict)

    @property
    def rooms_unplaced(self) -> int:
        return max(0, self.rooms_target - self.rooms_placed)

    @property
    def degraded(self) -> bool:
        return self.room_groups > 1

    def to_dict(self, timings: bool = True):
        data = asdict(self)
        data["dropped_edges"] = [list(e) for e in self.dropped_edges]
        data["rooms_unplaced"] = self.rooms_unplaced
        data["degraded"] = self.degraded
        if not timings:
            data.pop("runtime_ms")
            data.pop("phase_ms")
        return data


__all__ = ["GenerationReport"]
