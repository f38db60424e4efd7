"""
Tests for arena geometry configuration.
"""

import json

import pytest

from spacewar.arena import DEFAULT_ARENA_PATH, ArenaConfig, load_arena_config


class TestArenaDefaults:
    """The default arena is the reference 500x500 layout."""

    def test_defaults(self):
        arena = ArenaConfig()
        assert (arena.width, arena.height) == (500.0, 500.0)
        assert arena.body_center == (250.0, 250.0)
        assert arena.spawn_positions == {1: (50.0, 50.0), 2: (450.0, 50.0)}
        assert arena.spawn_orientations == {1: 0.0, 2: 0.0}
        assert arena.craft_mass == 1.0
        assert (arena.craft_width, arena.craft_height) == (40.0, 40.0)

    def test_body_follows_world_center(self):
        arena = ArenaConfig(width=800.0, height=600.0, spawn_positions={1: (10, 10), 2: (700, 10)})
        assert arena.body_center == (400.0, 300.0)

    def test_explicit_body_position(self):
        arena = ArenaConfig(body_position=(100.0, 120.0))
        assert arena.body_center == (100.0, 120.0)

    def test_bundled_file_matches_defaults(self):
        assert DEFAULT_ARENA_PATH.exists()
        loaded = load_arena_config()
        assert loaded.to_dict() == ArenaConfig().to_dict()


class TestArenaValidation:
    """Bad geometry is rejected with ValueError."""

    @pytest.mark.parametrize("kwargs,message", [
        ({"width": 0.0}, "World size"),
        ({"height": -10.0}, "World size"),
        ({"craft_mass": 0.0}, "Craft mass"),
        ({"craft_width": 0.0}, "Craft size"),
        ({"body_radius": -1.0}, "Body radius"),
        ({"spawn_positions": {1: (50.0, 50.0)}}, "Missing spawn"),
        ({"spawn_positions": {1: (50.0, 50.0), 2: (600.0, 50.0)}}, "outside the world"),
    ])
    def test_invalid(self, kwargs, message):
        with pytest.raises(ValueError, match=message):
            ArenaConfig(**kwargs)


class TestArenaLoading:
    """JSON loading."""

    def test_partial_file_uses_defaults(self, tmp_path):
        path = tmp_path / "arena.json"
        path.write_text(json.dumps({
            "world": {"width": 800},
            "spawns": {"2": {"position": [700, 60], "orientation": 3.14}},
            "unknown_section": {"ignored": True},
        }))
        arena = load_arena_config(path)
        assert arena.width == 800.0
        assert arena.height == 500.0
        assert arena.body_center == (400.0, 250.0)
        assert arena.spawn_positions[1] == (50.0, 50.0)
        assert arena.spawn_positions[2] == (700.0, 60.0)
        assert arena.spawn_orientations[2] == pytest.approx(3.14)

    def test_invalid_file_geometry(self, tmp_path):
        path = tmp_path / "arena.json"
        path.write_text(json.dumps({"craft": {"mass": -1}}))
        with pytest.raises(ValueError):
            load_arena_config(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_arena_config(tmp_path / "nope.json")

    def test_to_dict_is_json_serializable(self):
        text = json.dumps(ArenaConfig().to_dict())
        assert ArenaConfig.from_dict(json.loads(text)).spawn_positions == ArenaConfig().spawn_positions
