import math

import pytest

from voxeldungeon import Move, PathCost, Pathfinder3D
from voxeldungeon.pathfinding import AXIS_MOVES, DEFAULT_MOVES, stair_moves


def open_cost(blocked=()):
    blocked = set(blocked)

    def cost(current, neighbor):
        if neighbor.position in blocked:
            return PathCost(False)
        return PathCost(True, math.dist(current.position, neighbor.position))

    return cost


FLAT_MOVES = [Move((1, 0, 0)), Move((-1, 0, 0))] + list(stair_moves())


def test_default_moves_include_stairs():
    assert len(AXIS_MOVES) == 6
    jumps = [m for m in DEFAULT_MOVES if m.is_jump]
    assert len(jumps) == 8
    assert all(len(m.via) == 4 for m in jumps)
    assert Move((3, 1, 0), ((1, 0, 0), (1, 1, 0), (2, 0, 0), (2, 1, 0))) in jumps


def test_stair_moves_validate_shape():
    with pytest.raises(ValueError):
        stair_moves(run=1)


def test_straight_corridor():
    pf = Pathfinder3D((6, 1, 1))
    result = pf.find_path((0, 0, 0), (5, 0, 0), open_cost())
    assert result.cells == [(i, 0, 0) for i in range(6)]
    assert result.stairs == []
    assert result.cost == pytest.approx(5.0)


def test_start_equals_end():
    pf = Pathfinder3D((3, 1, 3))
    assert pf.find_path((1, 0, 1), (1, 0, 1), open_cost()).cells == [(1, 0, 1)]


def test_out_of_bounds_endpoints():
    pf = Pathfinder3D((3, 1, 3))
    assert pf.find_path((0, 0, 0), (3, 0, 0), open_cost()) is None
    assert pf.find_path((-1, 0, 0), (1, 0, 0), open_cost()) is None


def test_detours_around_blocked_cells():
    pf = Pathfinder3D((5, 1, 5))
    wall = [(2, 0, z) for z in range(4)]
    result = pf.find_path((0, 0, 0), (4, 0, 0), open_cost(wall))
    assert result is not None
    assert not set(result.cells) & set(wall)
    assert (2, 0, 4) in result.cells


def test_fully_blocked_returns_none():
    pf = Pathfinder3D((5, 1, 5))
    wall = [(2, 0, z) for z in range(5)]
    assert pf.find_path((0, 0, 0), (4, 0, 0), open_cost(wall)) is None


def test_stairs_climb_between_levels():
    pf = Pathfinder3D((5, 2, 1), moves=FLAT_MOVES)
    result = pf.find_path((0, 0, 0), (4, 1, 0), open_cost())
    assert result is not None
    assert result.cells[0] == (0, 0, 0) and result.cells[-1] == (4, 1, 0)
    assert len(result.stairs) == 4
    assert all(c not in result.cells for c in result.stairs)
    # one flat step plus the stair: swept cells walked in order, then the landing
    assert result.cost == pytest.approx(4 + math.sqrt(2) + math.sqrt(10))


def test_jump_through_blocked_stairwell_rejected():
    pf = Pathfinder3D((5, 2, 1), moves=FLAT_MOVES)
    assert pf.find_path((0, 0, 0), (4, 1, 0), open_cost([(2, 1, 0)])) is None


def test_jump_leaving_grid_rejected():
    pf = Pathfinder3D((3, 2, 1), moves=FLAT_MOVES)
    assert pf.find_path((0, 0, 0), (2, 1, 0), open_cost()) is None


def test_identical_inputs_identical_paths():
    pf = Pathfinder3D((12, 3, 12))
    blocked = [(5, y, z) for y in range(3) for z in range(1, 12)]
    a = pf.find_path((0, 0, 0), (11, 2, 11), open_cost(blocked))
    b = pf.find_path((0, 0, 0), (11, 2, 11), open_cost(blocked))
    assert a is not None
    assert a.cells == b.cells
    assert a.stairs == b.stairs


def test_prefers_cheaper_cells():
    expensive = {(x, 0, 0) for x in range(1, 4)}

    def cost(current, neighbor):
        step = math.dist(current.position, neighbor.position)
        return PathCost(True, step * (10 if neighbor.position in expensive else 1))

    pf = Pathfinder3D((5, 1, 3), moves=AXIS_MOVES)
    result = pf.find_path((0, 0, 0), (4, 0, 0), cost)
    assert not expensive & set(result.cells)
    assert result.cost == pytest.approx(6.0)


def test_negative_cost_rejected():
    pf = Pathfinder3D((3, 1, 1))
    with pytest.raises(ValueError):
        pf.find_path((0, 0, 0), (2, 0, 0), lambda a, b: PathCost(True, -1.0))


def test_cost_function_sees_predecessor_chain():
    seen = []

    def cost(current, neighbor):
        assert neighbor.previous is current
        seen.append(neighbor.position)
        return PathCost(True, 1.0)

    Pathfinder3D((3, 1, 1), moves=AXIS_MOVES).find_path((0, 0, 0), (2, 0, 0), cost)
    assert seen


def test_bounds_follow_origin():
    pf = Pathfinder3D((4, 1, 4), moves=AXIS_MOVES, origin=(1, 0, 1))
    assert pf.in_bounds((-1, 0, -1))
    assert not pf.in_bounds((3, 0, 0))
    result = pf.find_path((-1, 0, -1), (2, 0, 2), open_cost())
    assert result.cells[0] == (-1, 0, -1)
    assert result.cost == pytest.approx(6.0)
