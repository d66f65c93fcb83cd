import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from voxeldungeon import DungeonConfig, FootprintHost  # noqa: E402

FOOTPRINTS = {
    "hall": (5, 1, 5),
    "den": (3, 1, 3),
    "closet": (2, 1, 2),
    "vault": (4, 1, 6),
    "tower": (3, 3, 3),
    "corridor": (1, 1, 1),
}


@pytest.fixture()
def host():
    return FootprintHost(dict(FOOTPRINTS))


@pytest.fixture()
def small_config():
    return DungeonConfig(
        size=(30, 1, 30),
        seed=7,
        main_room_asset="hall",
        side_room_assets=["den", "closet", "vault"],
        side_room_chance=0.8,
        side_room_max=8,
        corridor_assets=["corridor"],
    )
