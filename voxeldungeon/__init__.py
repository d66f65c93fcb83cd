"""Public voxeldungeon package interface.

Seeded 3D dungeon layout: room placement, Delaunay room graph, spanning tree
with loop edges, and A* corridor carving through a voxel label grid.
"""

from .config import DungeonConfig, DungeonConfigError
from .grid import Grid3D
from .hosts import AssetHost, FootprintHost, Placement
from .pathfinding import DEFAULT_MOVES, Move, Node, PathCost, PathResult, Pathfinder3D
from .pipeline import DungeonGenerator, GenerationResult, generate_dungeon
from .rooms import Box, Room
from .spanning import minimum_spanning_tree, select_edges
from .tiles import CellType
from .triangulation import Edge, Triangulation, Vertex, make_vertices, triangulate

__all__ = [
    "AssetHost",
    "Box",
    "CellType",
    "DEFAULT_MOVES",
    "DungeonConfig",
    "DungeonConfigError",
    "DungeonGenerator",
    "Edge",
    "FootprintHost",
    "GenerationResult",
    "Grid3D",
    "Move",
    "Node",
    "PathCost",
    "PathResult",
    "Pathfinder3D",
    "Placement",
    "Room",
    "Triangulation",
    "Vertex",
    "generate_dungeon",
    "make_vertices",
    "minimum_spanning_tree",
    "select_edges",
    "triangulate",
]
