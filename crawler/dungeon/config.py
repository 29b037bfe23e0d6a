import os
from dataclasses import dataclass, fields, replace
from typing import Optional

ENV_PREFIX = "CRAWLER_"


class DungeonConfigError(ValueError):
    """Raised for configuration values generation cannot work with."""


@dataclass
class DungeonConfig:
    width: int = 30
    height: int = 30
    min_room_width: int = 3
    min_room_height: int = 3
    max_room_width: int = 7
    max_room_height: int = 7
    max_rooms: int = 7
    placement_attempts_per_room: int = 8
    room_separation: int = 5
    # Chebyshev gaps, in cells
    room_corridor_gap: int = 2
    corridor_corridor_gap: int = 1
    # Chance to re-add a non-tree triangulation edge as a loop
    extra_edge_chance: float = 0.3
    max_room_connections: int = 2
    seed: Optional[int] = None

    @property
    def max_attempts(self) -> int:
        return self.max_rooms * self.placement_attempts_per_room

    def validate(self) -> "DungeonConfig":
        if self.width <= 0 or self.height <= 0:
            raise DungeonConfigError(f"grid size must be positive, got {self.width}x{self.height}")
        if self.min_room_width <= 0 or self.min_room_height <= 0:
            raise DungeonConfigError("minimum room size must be positive")
        if self.min_room_width > self.max_room_width:
            raise DungeonConfigError(
                f"min_room_width ({self.min_room_width}) exceeds max_room_width ({self.max_room_width})"
            )
        if self.min_room_height > self.max_room_height:
            raise DungeonConfigError(
                f"min_room_height ({self.min_room_height}) exceeds max_room_height ({self.max_room_height})"
            )
        # Placement draws the left edge from [0, width - room_width)
        if self.max_room_width >= self.width or self.max_room_height >= self.height:
            raise DungeonConfigError("maximum room size must be smaller than the grid")
        if self.max_rooms < 0 or self.placement_attempts_per_room < 0:
            raise DungeonConfigError("room count and attempt budget cannot be negative")
        if self.room_separation < 0 or self.room_corridor_gap < 0 or self.corridor_corridor_gap < 0:
            raise DungeonConfigError("separation and gap distances cannot be negative")
        if not 0.0 <= self.extra_edge_chance <= 1.0:
            raise DungeonConfigError(f"extra_edge_chance must be within [0, 1], got {self.extra_edge_chance}")
        if self.max_room_connections < 0:
            raise DungeonConfigError("max_room_connections cannot be negative")
        return self

    @classmethod
    def from_env(cls, environ=None, prefix: str = ENV_PREFIX, **overrides) -> "DungeonConfig":
        """Build a config from ``CRAWLER_*`` variables; keyword overrides win.

        Each field maps to the upper-cased variable name, e.g. ``CRAWLER_MAX_ROOMS``.
        Empty values are ignored.
        """
        environ = os.environ if environ is None else environ
        values = {}
        for f in fields(cls):
            key = prefix + f.name.upper()
            raw = environ.get(key, "").strip()
            if not raw:
                continue
            try:
                values[f.name] = float(raw) if f.name == "extra_edge_chance" else int(raw)
            except ValueError:
                raise DungeonConfigError(f"{key} must be numeric, got {raw!r}") from None
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def with_overrides(self, **overrides) -> "DungeonConfig":
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


__all__ = ["DungeonConfig", "DungeonConfigError", "ENV_PREFIX"]
