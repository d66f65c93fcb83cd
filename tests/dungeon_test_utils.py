from collections import deque

from voxeldungeon.tiles import CellType

# Labels a walker can stand on once generation is done.
WALKABLE = {
    CellType.MAIN_ROOM,
    CellType.SIDE_ROOM,
    CellType.CORRIDOR,
    CellType.STAIRS,
}


def room_cell(room):
    """Grid cell a corridor starts from for this room."""
    cx, cy, cz = room.center
    return (int(round(cx)), int(round(cy)), int(round(cz)))


def bfs_reachable(grid, start):
    """Return set of walkable cells reachable from start over 6-neighborhood."""
    if not grid.in_bounds(start) or grid[start] not in WALKABLE:
        return set()
    q = deque([start])
    vis = {start}
    while q:
        x, y, z = q.popleft()
        for dx, dy, dz in ((1, 0, 0), (-1, 0, 0), (0, 1, 0), (0, -1, 0), (0, 0, 1), (0, 0, -1)):
            n = (x + dx, y + dy, z + dz)
            if n not in vis and grid.in_bounds(n) and grid[n] in WALKABLE:
                vis.add(n)
                q.append(n)
    return vis


def union_find_components(n, pairs):
    parent = list(range(n))

    def find(a):
        while parent[a] != a:
            parent[a] = parent[parent[a]]
            a = parent[a]
        return a

    for a, b in pairs:
        ra, rb = find(a), find(b)
        if ra != rb:
            parent[ra] = rb
    return len({find(i) for i in range(n)})
