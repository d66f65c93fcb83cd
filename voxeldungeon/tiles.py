"""Cell labels centralized for modular imports."""
from enum import IntEnum


class CellType(IntEnum):
    EMPTY = 0
    MAIN_ROOM = 1
    SIDE_ROOM = 2
    CORRIDOR = 3
    STAIRS = 4


ROOM_TYPES = frozenset({CellType.MAIN_ROOM, CellType.SIDE_ROOM})

# ASCII mapping used by render.py and debug dumps
CHARS = {
    CellType.EMPTY: ".",
    CellType.MAIN_ROOM: "M",
    CellType.SIDE_ROOM: "S",
    CellType.CORRIDOR: "#",
    CellType.STAIRS: "^",
}

__all__ = ["CellType", "ROOM_TYPES", "CHARS"]
