"""Grid A* with pluggable step costs and multi-cell (stair) moves.

Search states per cell: unvisited -> open -> closed. The open heap is keyed by
``(f, g, insertion counter)`` so two runs over the same grid and cost function
always expand cells in the same order.

A ``Move`` is an offset plus the relative cells it sweeps through on the way.
Unit moves sweep nothing; a stair move sweeps the stairwell cells, each of
which must be in bounds and traversable for the move to be taken. The swept
cells are priced as a walk through the stairwell and added to the landing
step, so a stair pays for every cell it occupies.
"""
from __future__ import annotations

import heapq
import itertools
import math
from dataclasses import dataclass, field
from typing import Callable, Dict, List, NamedTuple, Optional, Sequence, Set, Tuple

Vec3 = Tuple[int, int, int]


class PathCost(NamedTuple):
    traversable: bool
    cost: float = 0.0


@dataclass
class Node:
    position: Vec3
    previous: Optional["Node"] = None
    cost: float = 0.0


CostFunction = Callable[[Node, Node], PathCost]


@dataclass(frozen=True)
class Move:
    offset: Vec3
    via: Tuple[Vec3, ...] = ()

    @property
    def is_jump(self) -> bool:
        return bool(self.via)


AXIS_MOVES: Tuple[Move, ...] = tuple(
    Move(o) for o in ((1, 0, 0), (-1, 0, 0), (0, 1, 0), (0, -1, 0), (0, 0, 1), (0, 0, -1))
)


def stair_moves(run: int = 3, rise: int = 1) -> Tuple[Move, ...]:
    """Moves climbing or descending ``rise`` cells over ``run`` horizontal cells.

    The stairwell is every cell strictly between the two landings, on both the
    lower and upper level.
    """
    if run < 2 or rise < 1:
        raise ValueError("Stairs need run >= 2 and rise >= 1")
    moves = []
    for hx, hz in ((1, 0), (-1, 0), (0, 1), (0, -1)):
        for dy in (rise, -rise):
            via = []
            for step in range(1, run):
                for level in (0, dy):
                    via.append((hx * step, level, hz * step))
            moves.append(Move((hx * run, dy, hz * run), tuple(via)))
    return tuple(moves)


DEFAULT_MOVES: Tuple[Move, ...] = AXIS_MOVES + stair_moves()


@dataclass
class PathResult:
    cells: List[Vec3]
    stairs: List[Vec3] = field(default_factory=list)
    cost: float = 0.0

    def __len__(self) -> int:
        return len(self.cells)


def _add(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


class Pathfinder3D:
    """A* over a box of cells; bounds follow the same origin rule as ``Grid3D``."""

    def __init__(
        self,
        size: Sequence[int],
        moves: Sequence[Move] = DEFAULT_MOVES,
        origin: Sequence[int] = (0, 0, 0),
    ):
        self.size: Vec3 = (int(size[0]), int(size[1]), int(size[2]))
        self.origin: Vec3 = (int(origin[0]), int(origin[1]), int(origin[2]))
        self.moves: Tuple[Move, ...] = tuple(moves)

    @classmethod
    def for_grid(cls, grid, moves: Sequence[Move] = DEFAULT_MOVES) -> "Pathfinder3D":
        return cls(grid.size, moves, grid.origin)

    def in_bounds(self, pos: Vec3) -> bool:
        return all(0 <= pos[i] + self.origin[i] < self.size[i] for i in range(3))

    def find_path(self, start: Vec3, end: Vec3, cost_fn: CostFunction) -> Optional[PathResult]:
        """Cheapest path from ``start`` to ``end`` or None when unreachable."""
        start, end = tuple(start), tuple(end)
        if not (self.in_bounds(start) and self.in_bounds(end)):
            return None

        def heuristic(p: Vec3) -> float:
            return math.dist(p, end)

        nodes: Dict[Vec3, Node] = {start: Node(start)}
        jumps: Dict[Vec3, Move] = {}
        closed: Set[Vec3] = set()
        counter = itertools.count()
        open_heap: List[Tuple[float, float, int, Vec3]] = [(heuristic(start), 0.0, next(counter), start)]

        while open_heap:
            _, g, _, pos = heapq.heappop(open_heap)
            if pos in closed:
                continue
            if pos == end:
                return self._reconstruct(nodes[end], jumps)
            closed.add(pos)
            current = nodes[pos]
            for move in self.moves:
                target = _add(pos, move.offset)
                if target in closed or not self.in_bounds(target):
                    continue
                sweep = self._sweep_cost(current, move, cost_fn)
                if sweep is None:
                    continue
                step = cost_fn(current, Node(target, current))
                if not step.traversable:
                    continue
                if step.cost < 0:
                    raise ValueError(f"Negative step cost {step.cost} from {pos} to {target}")
                new_cost = g + sweep + step.cost
                known = nodes.get(target)
                if known is not None and known.cost <= new_cost:
                    continue
                nodes[target] = Node(target, current, new_cost)
                if move.is_jump:
                    jumps[target] = move
                else:
                    jumps.pop(target, None)
                heapq.heappush(open_heap, (new_cost + heuristic(target), new_cost, next(counter), target))
        return None

    def _sweep_cost(self, current: Node, move: Move, cost_fn: CostFunction) -> Optional[float]:
        """Cost of walking the swept cells of ``move`` in order, or None if one is blocked."""
        total = 0.0
        prev = current
        for rel in move.via:
            cell = _add(current.position, rel)
            if not self.in_bounds(cell):
                return None
            node = Node(cell, prev)
            step = cost_fn(prev, node)
            if not step.traversable:
                return None
            if step.cost < 0:
                raise ValueError(f"Negative step cost {step.cost} from {prev.position} to {cell}")
            total += step.cost
            prev = node
        return total

    @staticmethod
    def _reconstruct(node: Node, jumps: Dict[Vec3, Move]) -> PathResult:
        total = node.cost
        cells: List[Vec3] = []
        stairs: List[Vec3] = []
        while node is not None:
            cells.append(node.position)
            move = jumps.get(node.position)
            if move is not None and node.previous is not None:
                stairs.extend(_add(node.previous.position, rel) for rel in move.via)
            node = node.previous
        cells.reverse()
        return PathResult(cells, stairs, total)


__all__ = [
    "AXIS_MOVES",
    "DEFAULT_MOVES",
    "CostFunction",
    "Move",
    "Node",
    "PathCost",
    "PathResult",
    "Pathfinder3D",
    "stair_moves",
]
