"""Delaunay adjacency graph over room centers.

Qhull (through ``scipy.spatial.Delaunay``) does the heavy lifting; this module
turns its simplices into a deduplicated edge set and takes care of the inputs
Qhull refuses: too few points, coincident points, and point sets that are
flat in one or more axes (rooms that all sit on the same floor are coplanar).
Flat inputs are triangulated inside their affine hull instead of in 3D.
"""
from __future__ import annotations

import itertools
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, Iterable, List, Optional, Sequence, Set, Tuple, TypeVar

import numpy as np
from scipy.spatial import Delaunay, QhullError

logger = logging.getLogger(__name__)

P = TypeVar("P")

Point3 = Tuple[float, float, float]

# relative tolerance for the affine rank test
RANK_TOLERANCE = 1e-9


@dataclass(eq=False)
class Vertex(Generic[P]):
    position: Point3
    item: Optional[P] = None
    index: int = -1

    def distance(self, other: "Vertex") -> float:
        return math.dist(self.position, other.position)


@dataclass(frozen=True, init=False)
class Edge:
    """Unordered vertex pair, stored with ``u.index <= v.index``."""

    u: Vertex = field(compare=False)
    v: Vertex = field(compare=False)
    key: Tuple[int, int] = field(repr=False)

    def __init__(self, u: Vertex, v: Vertex):
        if v.index < u.index:
            u, v = v, u
        object.__setattr__(self, "u", u)
        object.__setattr__(self, "v", v)
        object.__setattr__(self, "key", (u.index, v.index))

    @property
    def weight(self) -> float:
        return self.u.distance(self.v)

    def other(self, vertex: Vertex) -> Vertex:
        return self.v if vertex is self.u else self.u


@dataclass
class Triangulation:
    vertices: List[Vertex]
    edges: List[Edge]

    def degree(self) -> Dict[int, int]:
        deg = {v.index: 0 for v in self.vertices}
        for e in self.edges:
            deg[e.u.index] += 1
            deg[e.v.index] += 1
        return deg

    def neighbors(self, vertex: Vertex) -> List[Vertex]:
        return [e.other(vertex) for e in self.edges if vertex is e.u or vertex is e.v]


def make_vertices(points: Iterable[Tuple[Point3, Any]]) -> List[Vertex]:
    """Build indexed vertices from ``(position, payload)`` pairs."""
    return [Vertex(tuple(float(c) for c in pos), item, i) for i, (pos, item) in enumerate(points)]


def _affine_frame(points: np.ndarray) -> Tuple[int, np.ndarray]:
    """Return (rank, coordinates of the points projected onto their affine hull)."""
    centered = points - points.mean(axis=0)
    _, s, vt = np.linalg.svd(centered, full_matrices=False)
    scale = s[0] if s.size else 0.0
    if scale == 0.0:
        return 0, centered[:, :0]
    rank = int(np.sum(s > scale * RANK_TOLERANCE))
    return rank, centered @ vt[:rank].T


def _simplices(coords: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Run Qhull, retrying with joggled input if the exact run fails."""
    try:
        tri = Delaunay(coords)
    except QhullError:
        logger.debug("Qhull failed on %d points; retrying with joggle", len(coords))
        tri = Delaunay(coords, qhull_options="QJ")
    return tri.simplices, tri.coplanar


def _skeleton(coords: np.ndarray) -> Set[Tuple[int, int]]:
    n, dim = coords.shape
    if dim == 1:
        order = np.argsort(coords[:, 0], kind="stable")
        return {tuple(sorted((int(a), int(b)))) for a, b in zip(order, order[1:])}
    if n <= dim + 1:
        return set(itertools.combinations(range(n), 2))
    simplices, coplanar = _simplices(coords)
    pairs: Set[Tuple[int, int]] = set()
    for simplex in simplices:
        for a, b in itertools.combinations(sorted(int(i) for i in simplex), 2):
            pairs.add((a, b))
    # points qhull dropped from every simplex hang off their nearest vertex
    for point, _, nearest in coplanar:
        a, b = int(point), int(nearest)
        if a != b:
            pairs.add((min(a, b), max(a, b)))
    return pairs


def triangulate(vertices: Sequence[Vertex]) -> Triangulation:
    """Delaunay 1-skeleton of ``vertices``.

    Vertices must carry distinct indices (see :func:`make_vertices`). Fewer than
    two vertices yield an empty edge set.
    """
    vertices = list(vertices)
    if len({v.index for v in vertices}) != len(vertices):
        raise ValueError("Vertex indices must be unique")
    if len(vertices) < 2:
        return Triangulation(vertices, [])

    # coincident positions collapse onto the first vertex seen
    representatives: List[Vertex] = []
    first_at: Dict[Point3, Vertex] = {}
    pairs: Set[Tuple[int, int]] = set()
    for v in vertices:
        rep = first_at.get(v.position)
        if rep is None:
            first_at[v.position] = v
            representatives.append(v)
        else:
            pairs.add(tuple(sorted((rep.index, v.index))))

    if len(representatives) > 1:
        rank, coords = _affine_frame(np.array([v.position for v in representatives], dtype=float))
        if rank > 0:
            for a, b in _skeleton(coords):
                i, j = representatives[a].index, representatives[b].index
                pairs.add((min(i, j), max(i, j)))

    by_index = {v.index: v for v in vertices}
    edges = [Edge(by_index[i], by_index[j]) for i, j in sorted(pairs)]
    logger.debug("Triangulated %d vertices into %d edges", len(vertices), len(edges))
    return Triangulation(vertices, edges)


__all__ = ["Vertex", "Edge", "Triangulation", "make_vertices", "triangulate"]
