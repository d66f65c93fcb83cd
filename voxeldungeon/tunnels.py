"""Corridor carving between connected rooms.

Each selected edge is pathfound on the live grid, in order, so later searches
see (and may reuse) corridors carved by earlier ones. Only EMPTY cells change
label; rooms crossed by a corridor keep their room label.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .grid import Grid3D, Vec3
from .pathfinding import CostFunction, Node, PathCost, PathResult, Pathfinder3D
from .tiles import ROOM_TYPES, CellType
from .triangulation import Edge

logger = logging.getLogger(__name__)

DEFAULT_ROOM_COST = 5.0


@dataclass
class CorridorPath:
    edge: Edge
    start: Vec3
    end: Vec3
    path: PathResult

    @property
    def cells(self) -> List[Vec3]:
        return self.path.cells


def corridor_cost(grid: Grid3D, room_cost: float = DEFAULT_ROOM_COST) -> CostFunction:
    """Step cost: Euclidean step length, multiplied by ``room_cost`` inside rooms.

    Steps never cost less than their length, keeping the straight-line
    heuristic admissible.
    """

    def cost(current: Node, neighbor: Node) -> PathCost:
        pos = neighbor.position
        if not grid.in_bounds(pos):
            return PathCost(False)
        length = math.dist(current.position, pos)
        weight = room_cost if grid[pos] in ROOM_TYPES else 1.0
        return PathCost(True, length * weight)

    return cost


def cell_of(point: Tuple[float, float, float]) -> Vec3:
    # half-to-even, so a center at 10.5 lands on 10
    return (int(round(point[0])), int(round(point[1])), int(round(point[2])))


def carve_path(grid: Grid3D, path: PathResult) -> Tuple[int, int]:
    """Label a found path. Returns (corridor cells added, stairs cells added)."""
    stairs = 0
    for cell in path.stairs:
        if grid[cell] == CellType.EMPTY:
            grid[cell] = CellType.STAIRS
            stairs += 1
    corridor = 0
    for cell in path.cells:
        if grid[cell] == CellType.EMPTY:
            grid[cell] = CellType.CORRIDOR
            corridor += 1
    return corridor, stairs


def connect_rooms(
    grid: Grid3D,
    edges: Iterable[Edge],
    pathfinder: Optional[Pathfinder3D] = None,
    room_cost: float = DEFAULT_ROOM_COST,
    metrics: Optional[dict] = None,
    cost_fn: Optional[CostFunction] = None,
) -> List[CorridorPath]:
    """Pathfind and carve every edge in order; unreachable pairs are skipped.

    ``cost_fn`` defaults to :func:`corridor_cost` over the live grid. A
    ``pathfinder`` must cover exactly the grid's bounds.
    """
    if pathfinder is None:
        pathfinder = Pathfinder3D.for_grid(grid)
    elif (pathfinder.size, pathfinder.origin) != (grid.size, grid.origin):
        raise ValueError(
            f"Pathfinder bounds {pathfinder.size} at {pathfinder.origin} "
            f"do not match grid {grid.size} at {grid.origin}"
        )
    cost = cost_fn if cost_fn is not None else corridor_cost(grid, room_cost)
    carved: List[CorridorPath] = []
    failed = 0
    for edge in edges:
        start = cell_of(edge.u.position)
        end = cell_of(edge.v.position)
        if not grid.in_bounds(start) or not grid.in_bounds(end):
            logger.debug("Edge %s endpoints %s -> %s outside grid; skipped", edge.key, start, end)
            failed += 1
            continue
        path = pathfinder.find_path(start, end, cost)
        if path is None:
            logger.debug("No path for edge %s (%s -> %s)", edge.key, start, end)
            failed += 1
            continue
        corridor, stairs = carve_path(grid, path)
        if metrics is not None:
            metrics["corridor_cells"] += corridor
            metrics["stairs_cells"] += stairs
        carved.append(CorridorPath(edge, start, end, path))
    if metrics is not None:
        metrics["paths_found"] += len(carved)
        metrics["paths_failed"] += failed
    return carved


__all__ = ["CorridorPath", "DEFAULT_ROOM_COST", "carve_path", "cell_of", "connect_rooms", "corridor_cost"]
