"""Dense 3D cell storage used by every generation phase."""
from __future__ import annotations

from typing import Generic, Iterator, List, Sequence, Tuple, TypeVar

import numpy as np

T = TypeVar("T")

Vec3 = Tuple[int, int, int]


class Grid3D(Generic[T]):
    """Fixed-size 3D array addressed relative to ``origin``.

    Storage is a flat list indexed x-fastest, then y, then z. Reads and writes
    outside the volume raise ``IndexError``; use :meth:`in_bounds` first when
    probing candidate cells.
    """

    __slots__ = ("size", "origin", "_cells")

    def __init__(self, size: Sequence[int], default: T, origin: Sequence[int] = (0, 0, 0)):
        if len(size) != 3 or len(origin) != 3:
            raise ValueError("Grid3D needs three dimensions")
        if any(int(s) <= 0 for s in size):
            raise ValueError(f"Grid dimensions must be positive, got {tuple(size)}")
        self.size: Vec3 = (int(size[0]), int(size[1]), int(size[2]))
        self.origin: Vec3 = (int(origin[0]), int(origin[1]), int(origin[2]))
        w, h, d = self.size
        self._cells: List[T] = [default] * (w * h * d)

    @property
    def width(self) -> int:
        return self.size[0]

    @property
    def height(self) -> int:
        return self.size[1]

    @property
    def depth(self) -> int:
        return self.size[2]

    def in_bounds(self, pos: Sequence[int]) -> bool:
        x = pos[0] + self.origin[0]
        y = pos[1] + self.origin[1]
        z = pos[2] + self.origin[2]
        w, h, d = self.size
        return 0 <= x < w and 0 <= y < h and 0 <= z < d

    def _index(self, pos: Sequence[int]) -> int:
        if not self.in_bounds(pos):
            raise IndexError(f"Position {tuple(pos)} outside grid of size {self.size}")
        w, h, _ = self.size
        x = pos[0] + self.origin[0]
        y = pos[1] + self.origin[1]
        z = pos[2] + self.origin[2]
        return x + y * w + z * w * h

    def __getitem__(self, pos: Sequence[int]) -> T:
        return self._cells[self._index(pos)]

    def __setitem__(self, pos: Sequence[int], value: T) -> None:
        self._cells[self._index(pos)] = value

    def positions(self) -> Iterator[Vec3]:
        """Yield every addressable position (in grid space, origin applied)."""
        w, h, d = self.size
        ox, oy, oz = self.origin
        for z in range(d):
            for y in range(h):
                for x in range(w):
                    yield (x - ox, y - oy, z - oz)

    def count(self, value: T) -> int:
        return sum(1 for c in self._cells if c == value)

    def to_array(self) -> np.ndarray:
        """Return a copy shaped (width, height, depth)."""
        w, h, d = self.size
        flat = np.array(self._cells)
        return flat.reshape((d, h, w)).transpose(2, 1, 0).copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid3D):
            return NotImplemented
        return self.size == other.size and self.origin == other.origin and self._cells == other._cells

    def __repr__(self) -> str:
        return f"Grid3D(size={self.size}, origin={self.origin})"


__all__ = ["Grid3D", "Vec3"]
