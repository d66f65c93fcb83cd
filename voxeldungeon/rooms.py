from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Any, Iterator, List, Optional, Sequence, Tuple

from .grid import Grid3D, Vec3
from .hosts import AssetHost
from .tiles import CellType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Box:
    """Axis-aligned integer box with half-open extents."""

    position: Vec3
    size: Vec3

    @property
    def min(self) -> Vec3:
        return self.position

    @property
    def max(self) -> Vec3:
        return (
            self.position[0] + self.size[0],
            self.position[1] + self.size[1],
            self.position[2] + self.size[2],
        )

    @property
    def center(self) -> Tuple[float, float, float]:
        return (
            self.position[0] + self.size[0] / 2,
            self.position[1] + self.size[1] / 2,
            self.position[2] + self.size[2] / 2,
        )

    def cells(self) -> Iterator[Vec3]:
        x0, y0, z0 = self.min
        x1, y1, z1 = self.max
        for x in range(x0, x1):
            for y in range(y0, y1):
                for z in range(z0, z1):
                    yield (x, y, z)

    def buffered(self, margin: int = 1) -> "Box":
        # horizontal only; rooms stacked vertically are still rejected by the y overlap
        x, y, z = self.position
        w, h, d = self.size
        return Box((x - margin, y, z - margin), (w + 2 * margin, h, d + 2 * margin))

    def intersects(self, other: "Box") -> bool:
        a0, a1 = self.min, self.max
        b0, b1 = other.min, other.max
        for axis in range(3):
            if a1[axis] <= b0[axis] or a0[axis] >= b1[axis]:
                return False
        return True

    def fits(self, grid_size: Sequence[int]) -> bool:
        if any(s <= 0 for s in self.size):
            return False
        lo, hi = self.min, self.max
        return all(lo[i] >= 0 and hi[i] <= grid_size[i] for i in range(3))


@dataclass(frozen=True)
class Room:
    box: Box
    asset: Any
    kind: CellType = CellType.SIDE_ROOM

    @property
    def center(self) -> Tuple[float, float, float]:
        return self.box.center

    def cells(self) -> Iterator[Vec3]:
        return self.box.cells()

    def overlaps(self, other: "Room") -> bool:
        """True when the two rooms' buffered boxes intersect."""
        return self.box.buffered().intersects(other.box.buffered())


def measure(host: AssetHost, asset: Any) -> Vec3:
    w, h, d = host.measure_footprint(asset)
    return (int(round(w)), int(round(h)), int(round(d)))


def mark_room(grid: Grid3D, room: Room) -> None:
    for pos in room.cells():
        if grid.in_bounds(pos):
            grid[pos] = room.kind


def place_main_room(grid: Grid3D, host: AssetHost, asset: Any) -> Optional[Room]:
    """Place the main room horizontally centered at height 0.

    Returns None (after logging) when no asset is configured or the measured
    footprint does not fit inside the grid.
    """
    if asset is None:
        logger.warning("Main room asset not assigned; skipping main room placement")
        return None
    size = measure(host, asset)
    gx, _, gz = grid.size
    location = (gx // 2 - size[0] // 2, 0, gz // 2 - size[2] // 2)
    room = Room(Box(location, size), asset, CellType.MAIN_ROOM)
    if not room.box.fits(grid.size):
        logger.error("Main room of size %s cannot fit in grid %s", size, grid.size)
        return None
    mark_room(grid, room)
    return room


def place_side_rooms(
    grid: Grid3D,
    host: AssetHost,
    assets: Sequence[Any],
    rooms: List[Room],
    rng: random.Random,
    spawn_chance: float,
    max_count: int,
    metrics: Optional[dict] = None,
) -> List[Room]:
    """Single-shot Monte Carlo scatter of side rooms.

    Draw order per candidate is fixed: spawn roll, asset pick, x, z. A candidate
    that fails (no asset, oversized, out of bounds, overlapping) is dropped
    without retry. Accepted rooms are marked on the grid and appended to
    ``rooms`` in place; the newly placed ones are returned.
    """
    placed: List[Room] = []
    if not assets:
        logger.warning("No side room assets assigned; skipping side rooms")
        return placed
    gx, _, gz = grid.size
    attempted = skipped = rejected = 0
    for _ in range(max_count):
        if rng.random() > spawn_chance:
            skipped += 1
            continue
        attempted += 1
        asset = assets[rng.randrange(len(assets))]
        if asset is None:
            rejected += 1
            continue
        size = measure(host, asset)
        max_x = gx - size[0]
        max_z = gz - size[2]
        if max_x < 0 or max_z < 0:
            logger.debug("Side room %r of size %s larger than grid; rejected", asset, size)
            rejected += 1
            continue
        loc = (rng.randint(0, max_x), 0, rng.randint(0, max_z))
        candidate = Room(Box(loc, size), asset, CellType.SIDE_ROOM)
        if not candidate.box.fits(grid.size) or any(candidate.overlaps(r) for r in rooms):
            rejected += 1
            continue
        mark_room(grid, candidate)
        rooms.append(candidate)
        placed.append(candidate)
    if metrics is not None:
        metrics["side_rooms_attempted"] += attempted
        metrics["side_rooms_skipped"] += skipped
        metrics["side_rooms_rejected"] += rejected
    logger.info("Placed %d side room(s)", len(placed))
    return placed


__all__ = ["Box", "Room", "measure", "mark_room", "place_main_room", "place_side_rooms"]
