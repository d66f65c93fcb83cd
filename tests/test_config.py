import pytest

from voxeldungeon import DungeonConfig, DungeonConfigError


def test_defaults_are_valid():
    cfg = DungeonConfig().validate()
    assert cfg.size == (50, 1, 50)
    assert cfg.side_room_chance == 0.5
    assert cfg.side_room_max == 5
    assert cfg.extra_edge_chance == pytest.approx(0.2)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"size": (-5, 1, 5)},
        {"size": (5, 1, 0)},
        {"size": (5.5, 1, 5)},
        {"size": (True, 1, 5)},
        {"side_room_chance": 1.5},
        {"extra_edge_chance": -0.1},
        {"side_room_max": -1},
        {"room_cost": 0.5},
    ],
)
def test_invalid_shapes(kwargs):
    with pytest.raises(DungeonConfigError):
        DungeonConfig(**kwargs).validate()


def test_config_error_is_value_error():
    assert issubclass(DungeonConfigError, ValueError)


def test_env_overrides():
    env = {
        "DUNGEON_SIZE": "32x2x16",
        "DUNGEON_SEED": "99",
        "DUNGEON_SIDE_ROOM_CHANCE": "0.25",
        "DUNGEON_SIDE_ROOM_MAX": "12",
        "DUNGEON_EXTRA_EDGE_CHANCE": "0",
        "DUNGEON_ROOM_COST": "8",
        "DUNGEON_ENABLE_METRICS": "false",
    }
    base = DungeonConfig(main_room_asset="hall")
    cfg = DungeonConfig.from_env(base, env=env)
    assert cfg.size == (32, 2, 16)
    assert cfg.seed == 99
    assert cfg.side_room_chance == 0.25
    assert cfg.side_room_max == 12
    assert cfg.extra_edge_chance == 0.0
    assert cfg.room_cost == 8.0
    assert cfg.enable_metrics is False
    assert cfg.main_room_asset == "hall"
    assert base.seed == 0, "Base config must not be mutated"


def test_env_random_seed():
    assert DungeonConfig.from_env(env={"DUNGEON_SEED": "random"}).seed is None


def test_env_bad_value():
    with pytest.raises(DungeonConfigError):
        DungeonConfig.from_env(env={"DUNGEON_SIDE_ROOM_MAX": "lots"})


def test_env_reads_process_environment(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("DUNGEON_SEED", "1234")
    assert DungeonConfig.from_env().seed == 1234
