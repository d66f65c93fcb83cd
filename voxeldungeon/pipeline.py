"""Pipeline orchestration for dungeon generation.

Phases run strictly in order, each consuming the previous one's output:

    * place the main room, centered at floor level
    * scatter side rooms (single-shot, no retries)
    * triangulate room centers
    * pick a spanning tree plus random loop edges
    * pathfind and carve a corridor for every picked edge
    * hand corridor cells to the host as corridor assets

One ``random.Random(seed)`` feeds side room placement, loop edge selection and
corridor asset choice, in that order, so a seed reproduces the whole layout.
A phase with nothing to work on (no main room, no edges, unreachable pair)
is skipped and the rest of the pipeline carries on.
"""
from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

from .config import DungeonConfig
from .grid import Grid3D, Vec3
from .hosts import AssetHost, FootprintHost
from .metrics import init_metrics
from .pathfinding import Pathfinder3D
from .rooms import Room, place_main_room, place_side_rooms
from .spanning import select_edges
from .tiles import CellType
from .triangulation import Edge, Triangulation, make_vertices, triangulate
from .tunnels import CorridorPath, connect_rooms

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    seed: int
    grid: Grid3D
    rooms: List[Room]
    triangulation: Triangulation
    selected_edges: List[Edge]
    paths: List[CorridorPath]
    placements: List[Any] = field(default_factory=list)
    metrics: Dict[str, Any] = field(default_factory=dict)

    @property
    def main_room(self) -> Optional[Room]:
        return next((r for r in self.rooms if r.kind == CellType.MAIN_ROOM), None)


class DungeonGenerator:
    def __init__(self, config: DungeonConfig, host: Optional[AssetHost] = None):
        self.config = config.validate()
        self.host: AssetHost = host if host is not None else FootprintHost()
        self.seed: int = config.seed if config.seed is not None else random.randint(0, 2**31 - 1)
        self.rng = random.Random(self.seed)
        self.grid: Grid3D[CellType] = Grid3D(config.size, CellType.EMPTY)
        self.rooms: List[Room] = []
        self.triangulation = Triangulation([], [])
        self.selected_edges: List[Edge] = []
        self.paths: List[CorridorPath] = []
        self.placements: List[Any] = []
        self.metrics: Dict[str, Any] = init_metrics() if config.enable_metrics else {}

    # ------------------------------------------------------------------
    # Phases
    # ------------------------------------------------------------------
    def place_main_room(self) -> Optional[Room]:
        room = place_main_room(self.grid, self.host, self.config.main_room_asset)
        if room is not None:
            self.rooms.append(room)
            self._instantiate(room.asset, room.box.position, self.config.main_room_style)
        return room

    def place_side_rooms(self) -> List[Room]:
        placed = place_side_rooms(
            self.grid,
            self.host,
            self.config.side_room_assets,
            self.rooms,
            self.rng,
            self.config.side_room_chance,
            self.config.side_room_max,
            metrics=self.metrics or None,
        )
        for room in placed:
            self._instantiate(room.asset, room.box.position, self.config.side_room_style)
        return placed

    def triangulate(self) -> Triangulation:
        vertices = make_vertices((room.center, room) for room in self.rooms)
        self.triangulation = triangulate(vertices)
        return self.triangulation

    def select_edges(self) -> List[Edge]:
        edges = self.triangulation.edges
        if not edges:
            logger.warning("No edges in the triangulation; corridors skipped")
            self.selected_edges = []
            return self.selected_edges
        tree, extras = select_edges(edges, self.rng, self.config.extra_edge_chance)
        self.selected_edges = tree + extras
        if self.metrics:
            self.metrics["tree_edges"] = len(tree)
            self.metrics["extra_edges"] = len(extras)
        return self.selected_edges

    def carve_corridors(self) -> List[CorridorPath]:
        if not self.selected_edges:
            return []
        self.paths = connect_rooms(
            self.grid,
            self.selected_edges,
            Pathfinder3D.for_grid(self.grid),
            room_cost=self.config.room_cost,
            metrics=self.metrics or None,
        )
        return self.paths

    def furnish_corridors(self) -> int:
        """Place one random corridor asset per carved corridor/stairs cell."""
        assets = self.config.corridor_assets
        if not assets:
            return 0
        furnished: Set[Vec3] = set()
        for corridor in self.paths:
            for cell in corridor.path.cells + corridor.path.stairs:
                label = self.grid[cell]
                if cell in furnished or label not in (CellType.CORRIDOR, CellType.STAIRS):
                    continue
                furnished.add(cell)
                asset = assets[self.rng.randrange(len(assets))]
                if asset is None:
                    continue
                style = self.config.stairs_style if label == CellType.STAIRS else self.config.corridor_style
                self._instantiate(asset, cell, style)
        return len(furnished)

    def _instantiate(self, asset: Any, position: Vec3, style: Any) -> None:
        handle = self.host.place_asset(asset, position)
        if style is not None:
            self.host.apply_visual_style(handle, style)
        self.placements.append(handle)

    # ------------------------------------------------------------------
    def run(self) -> GenerationResult:
        """Execute ordered generation phases with per-phase timing."""
        if self.metrics:
            phase_times: Dict[str, int] = {}

            def _phase(label, fn):
                ps = time.perf_counter()
                r = fn()
                phase_times[label] = int((time.perf_counter() - ps) * 1000)
                return r
        else:
            def _phase(label, fn):
                return fn()

        start = time.perf_counter()
        _phase("main_room", self.place_main_room)
        _phase("side_rooms", self.place_side_rooms)
        _phase("triangulate", self.triangulate)
        _phase("select_edges", self.select_edges)
        _phase("carve_corridors", self.carve_corridors)
        _phase("furnish_corridors", self.furnish_corridors)

        if self.metrics:
            self.metrics["rooms_placed"] = len(self.rooms)
            self.metrics["triangulation_edges"] = len(self.triangulation.edges)
            self.metrics["phase_ms"] = phase_times
            self.metrics["runtime_ms"] = round((time.perf_counter() - start) * 1000, 2)
        logger.info(
            "Dungeon seed=%s size=%s rooms=%d edges=%d corridors=%d",
            self.seed,
            self.grid.size,
            len(self.rooms),
            len(self.selected_edges),
            len(self.paths),
        )
        return GenerationResult(
            seed=self.seed,
            grid=self.grid,
            rooms=list(self.rooms),
            triangulation=self.triangulation,
            selected_edges=list(self.selected_edges),
            paths=list(self.paths),
            placements=list(self.placements),
            metrics=self.metrics,
        )


def generate_dungeon(config: DungeonConfig, host: Optional[AssetHost] = None) -> GenerationResult:
    """Build a dungeon from ``config``. Raises DungeonConfigError on invalid shape only."""
    return DungeonGenerator(config, host).run()


__all__ = ["DungeonGenerator", "GenerationResult", "generate_dungeon"]
