import pytest

from voxeldungeon import Box, CellType, Grid3D, Room
from voxeldungeon.render import render_layer, render_layers
from voxeldungeon.rooms import mark_room


def test_render_layer_chars():
    grid = Grid3D((4, 1, 3), CellType.EMPTY)
    mark_room(grid, Room(Box((0, 0, 0), (2, 1, 1)), "hall", CellType.MAIN_ROOM))
    grid[(3, 0, 2)] = CellType.CORRIDOR
    grid[(2, 0, 2)] = CellType.STAIRS
    grid[(1, 0, 1)] = CellType.SIDE_ROOM
    assert render_layer(grid) == ["MM..", ".S..", "..^#"]


def test_render_layers_headers():
    grid = Grid3D((2, 2, 1), CellType.EMPTY)
    assert render_layers(grid) == "y=0\n..\ny=1\n.."


def test_render_bad_layer():
    with pytest.raises(IndexError):
        render_layer(Grid3D((2, 1, 2), CellType.EMPTY), 1)
