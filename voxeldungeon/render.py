"""ASCII dumps of a label grid, one horizontal layer at a time."""
from __future__ import annotations

from typing import List

from .grid import Grid3D
from .tiles import CHARS


def render_layer(grid: Grid3D, y: int = 0) -> List[str]:
    """Rows are z (top row z=0), columns are x."""
    w, h, d = grid.size
    if not 0 <= y < h:
        raise IndexError(f"Layer {y} outside grid height {h}")
    return ["".join(CHARS.get(grid[(x, y, z)], "?") for x in range(w)) for z in range(d)]


def render_layers(grid: Grid3D) -> str:
    blocks = []
    for y in range(grid.height):
        blocks.append(f"y={y}")
        blocks.extend(render_layer(grid, y))
    return "\n".join(blocks)


__all__ = ["render_layer", "render_layers"]
