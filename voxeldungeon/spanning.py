"""Minimum spanning tree (Prim) over triangulation edges plus random loop edges."""
from __future__ import annotations

import heapq
import random
from collections import defaultdict
from typing import Dict, List, Optional, Sequence, Set, Tuple

from .triangulation import Edge, Vertex

DEFAULT_EXTRA_EDGE_CHANCE = 0.2


def minimum_spanning_tree(edges: Sequence[Edge], start: Optional[Vertex] = None) -> List[Edge]:
    """Grow a minimum-weight tree from ``start`` (default: first edge's ``u``).

    Only the component containing ``start`` is spanned. The frontier heap is
    keyed by ``(weight, position in edges)`` so equal weights resolve in input
    order. Edges are returned in the order they joined the tree.
    """
    if not edges:
        return []
    if start is None:
        start = edges[0].u
    incident: Dict[int, List[Tuple[int, Edge]]] = defaultdict(list)
    for order, edge in enumerate(edges):
        incident[edge.u.index].append((order, edge))
        incident[edge.v.index].append((order, edge))

    in_tree: Set[int] = {start.index}
    frontier: List[Tuple[float, int, Edge]] = []
    for order, edge in incident[start.index]:
        heapq.heappush(frontier, (edge.weight, order, edge))

    tree: List[Edge] = []
    while frontier:
        _, _, edge = heapq.heappop(frontier)
        if edge.u.index in in_tree and edge.v.index in in_tree:
            continue
        far = edge.v if edge.u.index in in_tree else edge.u
        in_tree.add(far.index)
        tree.append(edge)
        for order, nxt in incident[far.index]:
            if nxt.other(far).index not in in_tree:
                heapq.heappush(frontier, (nxt.weight, order, nxt))
    return tree


def select_edges(
    edges: Sequence[Edge],
    rng: random.Random,
    extra_chance: float = DEFAULT_EXTRA_EDGE_CHANCE,
) -> Tuple[List[Edge], List[Edge]]:
    """Return ``(tree, extras)``.

    Every edge outside the tree gets exactly one ``rng.random()`` draw, in the
    order of ``edges``, and is kept when the draw is below ``extra_chance``.
    """
    tree = minimum_spanning_tree(edges)
    chosen = set(tree)
    extras = [e for e in edges if e not in chosen and rng.random() < extra_chance]
    return tree, extras


def total_weight(edges: Sequence[Edge]) -> float:
    return sum(e.weight for e in edges)


__all__ = ["DEFAULT_EXTRA_EDGE_CHANCE", "minimum_spanning_tree", "select_edges", "total_weight"]
