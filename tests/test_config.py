import unittest

import pytest

from crawler.dungeon import DungeonConfig, DungeonConfigError, generate_dungeon


class TestConfigDefaults(unittest.TestCase):
    def test_defaults(self):
        cfg = DungeonConfig()
        self.assertEqual((cfg.width, cfg.height), (30, 30))
        self.assertEqual((cfg.min_room_width, cfg.max_room_width), (3, 7))
        self.assertEqual((cfg.min_room_height, cfg.max_room_height), (3, 7))
        self.assertEqual(cfg.max_rooms, 7)
        self.assertEqual(cfg.room_separation, 5)
        self.assertEqual(cfg.room_corridor_gap, 2)
        self.assertEqual(cfg.corridor_corridor_gap, 1)
        self.assertAlmostEqual(cfg.extra_edge_chance, 0.3)
        self.assertEqual(cfg.max_room_connections, 2)
        self.assertIsNone(cfg.seed)

    def test_attempt_budget(self):
        self.assertEqual(DungeonConfig().max_attempts, 56)
        self.assertEqual(DungeonConfig(max_rooms=3, placement_attempts_per_room=10).max_attempts, 30)

    def test_validate_returns_self(self):
        cfg = DungeonConfig()
        self.assertIs(cfg.validate(), cfg)


@pytest.mark.parametrize(
    "overrides",
    [
        {"width": 0},
        {"height": -4},
        {"min_room_width": 0},
        {"min_room_width": 8},
        {"min_room_height": 9, "max_room_height": 8},
        {"max_room_width": 30},
        {"width": 7},
        {"max_rooms": -1},
        {"room_separation": -1},
        {"room_corridor_gap": -2},
        {"corridor_corridor_gap": -1},
        {"extra_edge_chance": 1.5},
        {"extra_edge_chance": -0.1},
        {"max_room_connections": -1},
    ],
)
def test_invalid_values_rejected(overrides):
    with pytest.raises(DungeonConfigError):
        DungeonConfig(**overrides).validate()


def test_config_error_is_value_error():
    assert issubclass(DungeonConfigError, ValueError)


def test_generate_validates_before_running():
    with pytest.raises(DungeonConfigError):
        generate_dungeon(DungeonConfig(extra_edge_chance=2.0), seed=1)


def test_boundary_values_allowed():
    DungeonConfig(extra_edge_chance=0.0, max_rooms=0, room_separation=0, max_room_connections=0).validate()
    DungeonConfig(extra_edge_chance=1.0, min_room_width=7, max_room_width=7).validate()


def test_from_env_reads_prefixed_fields():
    env = {
        "CRAWLER_WIDTH": "40",
        "CRAWLER_HEIGHT": " 35 ",
        "CRAWLER_MAX_ROOMS": "9",
        "CRAWLER_EXTRA_EDGE_CHANCE": "0.5",
        "CRAWLER_SEED": "77",
        "UNRELATED": "x",
    }
    cfg = DungeonConfig.from_env(env)
    assert (cfg.width, cfg.height, cfg.max_rooms) == (40, 35, 9)
    assert cfg.extra_edge_chance == 0.5
    assert cfg.seed == 77


def test_from_env_ignores_empty_values():
    cfg = DungeonConfig.from_env({"CRAWLER_WIDTH": "", "CRAWLER_SEED": "   "})
    assert cfg.width == 30 and cfg.seed is None


def test_from_env_overrides_win_unless_none():
    env = {"CRAWLER_WIDTH": "40", "CRAWLER_SEED": "5"}
    cfg = DungeonConfig.from_env(env, width=50, seed=None)
    assert cfg.width == 50
    assert cfg.seed == 5


def test_from_env_custom_prefix():
    cfg = DungeonConfig.from_env({"DUNGEON_MAX_ROOMS": "4"}, prefix="DUNGEON_")
    assert cfg.max_rooms == 4


def test_from_env_bad_value_names_variable():
    with pytest.raises(DungeonConfigError) as exc:
        DungeonConfig.from_env({"CRAWLER_HEIGHT": "tall"})
    assert "CRAWLER_HEIGHT" in str(exc.value)


def test_from_env_reads_process_environment(monkeypatch):
    monkeypatch.setenv("CRAWLER_ROOM_SEPARATION", "3")
    assert DungeonConfig.from_env().room_separation == 3


def test_with_overrides_skips_none_and_copies():
    base = DungeonConfig(seed=1)
    cfg = base.with_overrides(seed=None, width=40)
    assert cfg.seed == 1 and cfg.width == 40
    assert base.width == 30
    assert base.with_overrides(seed=0).seed == 0
