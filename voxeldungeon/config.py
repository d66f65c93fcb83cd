from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from typing import Any, List, Mapping, Optional, Tuple

from dotenv import load_dotenv

from .spanning import DEFAULT_EXTRA_EDGE_CHANCE
from .tunnels import DEFAULT_ROOM_COST


class DungeonConfigError(ValueError):
    """Configuration shape is invalid; raised before any placement starts."""


@dataclass
class DungeonConfig:
    size: Tuple[int, int, int] = (50, 1, 50)
    seed: Optional[int] = 0
    main_room_asset: Any = None
    side_room_assets: List[Any] = field(default_factory=list)
    side_room_chance: float = 0.5
    side_room_max: int = 5
    corridor_assets: List[Any] = field(default_factory=list)
    extra_edge_chance: float = DEFAULT_EXTRA_EDGE_CHANCE
    room_cost: float = DEFAULT_ROOM_COST
    # cosmetic only, handed to host.apply_visual_style
    main_room_style: Any = None
    side_room_style: Any = None
    corridor_style: Any = None
    stairs_style: Any = None
    enable_metrics: bool = True

    def validate(self) -> "DungeonConfig":
        if len(self.size) != 3:
            raise DungeonConfigError(f"size must have three components, got {self.size!r}")
        for axis, value in zip("xyz", self.size):
            if not isinstance(value, int) or isinstance(value, bool):
                raise DungeonConfigError(f"size.{axis} must be an integer, got {value!r}")
            if value <= 0:
                raise DungeonConfigError(f"size.{axis} must be positive, got {value}")
        for name in ("side_room_chance", "extra_edge_chance"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise DungeonConfigError(f"{name} must be within [0, 1], got {value}")
        if self.side_room_max < 0:
            raise DungeonConfigError(f"side_room_max must not be negative, got {self.side_room_max}")
        if self.room_cost < 1.0:
            raise DungeonConfigError(f"room_cost must be at least 1, got {self.room_cost}")
        return self

    @classmethod
    def from_env(cls, base: Optional["DungeonConfig"] = None, env: Optional[Mapping[str, str]] = None) -> "DungeonConfig":
        """Apply ``DUNGEON_*`` overrides (a local .env is loaded first) on top of ``base``."""
        if env is None:
            load_dotenv()
            env = os.environ
        config = base if base is not None else cls()
        overrides = {}
        try:
            if "DUNGEON_SIZE" in env:
                parts = [int(p) for p in env["DUNGEON_SIZE"].replace("x", ",").split(",")]
                overrides["size"] = tuple(parts)
            if "DUNGEON_SEED" in env:
                raw = env["DUNGEON_SEED"].strip().lower()
                overrides["seed"] = None if raw in {"", "none", "random"} else int(raw)
            if "DUNGEON_SIDE_ROOM_CHANCE" in env:
                overrides["side_room_chance"] = float(env["DUNGEON_SIDE_ROOM_CHANCE"])
            if "DUNGEON_SIDE_ROOM_MAX" in env:
                overrides["side_room_max"] = int(env["DUNGEON_SIDE_ROOM_MAX"])
            if "DUNGEON_EXTRA_EDGE_CHANCE" in env:
                overrides["extra_edge_chance"] = float(env["DUNGEON_EXTRA_EDGE_CHANCE"])
            if "DUNGEON_ROOM_COST" in env:
                overrides["room_cost"] = float(env["DUNGEON_ROOM_COST"])
        except ValueError as exc:
            raise DungeonConfigError(f"Invalid DUNGEON_* environment value: {exc}") from exc
        if "DUNGEON_ENABLE_METRICS" in env:
            overrides["enable_metrics"] = env["DUNGEON_ENABLE_METRICS"].lower() not in {"0", "false", "no", ""}
        return replace(config, **overrides)


__all__ = ["DungeonConfig", "DungeonConfigError"]
